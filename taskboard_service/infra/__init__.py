"""Infrastructure integrations (logging, metrics)."""
