"""Scoped shell alias manager."""

__version__ = "0.3.0"
