"""Reusable control panels for the highlight dashboard.

This package contains modular UI control panels that can be composed
to build the application interface.
"""

from .selection_panel import SelectionPanel
from .plot_options_panel import PlotOptionsPanel

__all__ = [
    "SelectionPanel",
    "PlotOptionsPanel",
]
