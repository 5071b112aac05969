"""Command-line interface for taskboard-service."""
