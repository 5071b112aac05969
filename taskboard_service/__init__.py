"""Task board due-date notification service."""

__version__ = "0.1.0"
