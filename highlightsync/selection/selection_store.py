"""Shared selection state for linked chart views.

Holds the single selected series identifier that every view renders from.
The value only changes on explicit ``set``/``clear`` calls, so redrawing a
view can never reset it.
"""

from __future__ import annotations

import traceback
from typing import Callable, Iterable, List, Optional


class SelectionError(Exception):
    """Raised when selecting a series identifier that is not known."""


SelectionCallback = Callable[[Optional[str], Optional[str]], None]


class SeriesSelectionStore:
    """Single-cell store for the currently highlighted series.

    The stored value is always either ``None`` or one of the known series
    names. Subscribers are called with ``(old, new)`` only when the value
    actually changes.
    """

    def __init__(self, known_series: Iterable[str] = ()):
        """Initialize the store with no selection.

        Args:
            known_series: Series names that may be selected
        """
        self.known_series: List[str] = []
        self._known_lookup: set = set()
        self._selected: Optional[str] = None
        self._subscribers: List[SelectionCallback] = []

        self._add_known(known_series)
        print(f"[Selection] Store initialized with {len(self.known_series)} series")

    def _add_known(self, names: Iterable[str]) -> None:
        for name in names:
            if name not in self._known_lookup:
                self.known_series.append(name)
                self._known_lookup.add(name)

    def get(self) -> Optional[str]:
        return self._selected

    def set(self, series_id: Optional[str]) -> bool:
        """Select a series (or clear with None).

        Args:
            series_id: Known series name, or None

        Returns:
            True if the stored value changed

        Raises:
            SelectionError: If the name is not a known series
        """
        if series_id is not None and series_id not in self._known_lookup:
            raise SelectionError(f"Unknown series '{series_id}'")

        old = self._selected
        if series_id == old:
            return False

        self._selected = series_id
        print(f"[Selection] {old!r} -> {series_id!r}")
        self._notify(old, series_id)
        return True

    def clear(self) -> bool:
        """Clear the selection. Returns True if something was selected."""
        return self.set(None)

    def is_known(self, series_id: str) -> bool:
        return series_id in self._known_lookup

    def register_series(self, names: Iterable[str]) -> None:
        """Add names to the known set, keeping the current selection."""
        before = len(self.known_series)
        self._add_known(names)
        print(f"[Selection] Registered {len(self.known_series) - before} new series "
              f"({len(self.known_series)} known)")

    def update_series(self, names: Iterable[str]) -> None:
        """Replace the known series (called when new data is loaded).

        A selection that is no longer known is cleared.
        """
        self.known_series = []
        self._known_lookup = set()
        self._add_known(names)

        if self._selected is not None and self._selected not in self._known_lookup:
            print(f"[Selection] {self._selected!r} no longer present, clearing")
            self.set(None)
        print(f"[Selection] Updated with {len(self.known_series)} series")

    def subscribe(self, callback: SelectionCallback) -> Callable[[], None]:
        """Register a change callback; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, old: Optional[str], new: Optional[str]) -> None:
        for callback in list(self._subscribers):
            try:
                callback(old, new)
            except Exception as e:
                print(f"[Selection] Subscriber {callback!r} failed: {e}")
                traceback.print_exc()
