"""Settings, notification tracking, server selection, caching and backups for an Apollo-style configuration client."""

__version__ = "0.1.0"