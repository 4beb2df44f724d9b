"""Cursor, selection and undo/redo engine for text-editing widgets."""

__version__ = "0.1.0"
__all__ = ["buffer", "editor", "keys", "navigation", "undo"]