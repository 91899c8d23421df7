"""Heritage Map Backend: map discovery, nearby hotels and shops, tour-guide mode."""

__version__ = "1.0.0"
