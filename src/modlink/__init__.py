"""modlink: keep a project's dependency directory in a cache outside cloud sync."""

__version__ = "0.1.0"
