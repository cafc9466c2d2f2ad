"""Click-to-highlight series selection for linked line charts."""

from .controller import ClickEvent, HighlightController, SelectEvent
from .data_loader import DataLoadError, simulate_dataset, to_long_format
from .plotting import ConfigurationError, FieldBinding, FieldBindingError, render, resolve
from .selection import SelectionError, SeriesSelectionStore

__all__ = [
    "ClickEvent",
    "HighlightController",
    "SelectEvent",
    "DataLoadError",
    "simulate_dataset",
    "to_long_format",
    "ConfigurationError",
    "FieldBinding",
    "FieldBindingError",
    "render",
    "resolve",
    "SelectionError",
    "SeriesSelectionStore",
]
