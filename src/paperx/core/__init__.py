"""Core domain logic: configuration, errors, sections, scaffolding and watch state."""
