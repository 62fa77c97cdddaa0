"""Posteditor - markdown post editor with unsaved-change tracking."""

__version__ = "0.1.0"
