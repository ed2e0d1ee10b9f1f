"""Adapters wrapping external tools used by paperx."""
