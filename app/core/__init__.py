"""Core module - configuration, auth helpers, errors and logging."""
