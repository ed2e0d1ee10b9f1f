"""User-facing interfaces for paperx."""
