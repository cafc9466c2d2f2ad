"""Event handling for linked highlight views.

- events: click/select event types and the selection reducer
- controller: event queue, selection updates and view re-rendering
"""

from .controller import ChartView, HighlightController
from .events import ClickEvent, SelectEvent, choice_to_selection, reduce

__all__ = [
    "ChartView",
    "HighlightController",
    "ClickEvent",
    "SelectEvent",
    "choice_to_selection",
    "reduce",
]
