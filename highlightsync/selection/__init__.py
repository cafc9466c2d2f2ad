"""Selection state for linked chart views.

This package holds the single shared "selected series" cell that every
chart view renders from.
"""

from .selection_store import SelectionError, SeriesSelectionStore

__all__ = ["SelectionError", "SeriesSelectionStore"]
