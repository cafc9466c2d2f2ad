"""Input events and the selection reducer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from ..config import NONE_CHOICE


@dataclass(frozen=True)
class ClickEvent:
    """Pointer click on a view, in data coordinates."""

    view: str
    x: float
    y: float
    kind: str = field(default="click", init=False)


@dataclass(frozen=True)
class SelectEvent:
    """Explicit choice from the selection dropdown.

    ``choice`` is a series name, or ``"None"``/``None`` to clear.
    """

    choice: Optional[str]
    kind: str = field(default="select", init=False)


Event = Union[ClickEvent, SelectEvent]

# Resolves a click on its originating view to a series name (or None)
ClickResolver = Callable[[ClickEvent], Optional[str]]


def choice_to_selection(choice: Optional[str]) -> Optional[str]:
    """Map a dropdown label to a selection value."""
    if choice is None or choice == NONE_CHOICE:
        return None
    return choice


def reduce(state: Optional[str], event: Event, resolve_click: ClickResolver) -> Optional[str]:
    """Return the selection that follows ``state`` after ``event``.

    A click that resolves to nothing keeps the current selection.

    Raises:
        TypeError: For an event of unknown kind
    """
    kind = getattr(event, "kind", None)

    if kind == "click":
        resolved = resolve_click(event)
        return state if resolved is None else resolved

    if kind == "select":
        return choice_to_selection(event.choice)

    raise TypeError(f"Unsupported event: {event!r}")
