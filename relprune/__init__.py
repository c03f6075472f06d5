"""Prune old GitHub releases (and optionally their tags)."""

__version__ = "0.3.0"
