"""Plotting components for the highlight dashboard.

This package contains the chart-side pieces of click highlighting:
- resolver: Nearest data point lookup for clicks
- renderer: Highlight styling and matplotlib drawing
- linked_chart: Canvas click input and redraws for a controller view
"""

from .resolver import (
    ConfigurationError,
    FieldBinding,
    FieldBindingError,
    NearestPointResolver,
    resolve,
    validate_bindings,
)
from .renderer import HighlightPlotter, PlotOptions, RenderedView, SeriesStyle, render

__all__ = [
    "ConfigurationError",
    "FieldBinding",
    "FieldBindingError",
    "NearestPointResolver",
    "resolve",
    "validate_bindings",
    "HighlightPlotter",
    "PlotOptions",
    "RenderedView",
    "SeriesStyle",
    "render",
]
