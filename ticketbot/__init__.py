"""Message command dispatcher for a ticket bot."""

__version__ = "1.0.0"
