"""Click-sync highlight controller.

Coordinates clicks and dropdown choices with the shared selection store and
re-renders every linked view when the selection changes. Views always render
from the store, never from the click that caused the change, so a redraw
cannot feed back into another selection change.
"""

from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, List, Optional

import pandas as pd

from ..config import NONE_CHOICE
from ..data_loader import series_names
from ..plotting.renderer import RenderedView, render
from ..plotting.resolver import ConfigurationError, FieldBinding, NearestPointResolver
from ..selection import SeriesSelectionStore
from .events import ClickEvent, Event, reduce

Renderer = Callable[..., RenderedView]
RenderCallback = Callable[[str, RenderedView], None]


class ChartView:
    """One chart panel bound to a dataset and the shared selection."""

    def __init__(self, name: str, dataset: pd.DataFrame, binding: FieldBinding, clickable: bool = True):
        self.name = name
        self.dataset = dataset
        self.binding = binding
        self.clickable = clickable
        self.resolver = NearestPointResolver(dataset, binding)
        self.series: List[str] = series_names(dataset, binding.series_field)
        self.last_rendered: Optional[RenderedView] = None

    def __repr__(self) -> str:
        return f"ChartView({self.name!r}, {len(self.series)} series)"


class HighlightController:
    """Routes input events through the selection store to every view."""

    def __init__(self, store: SeriesSelectionStore, renderer: Renderer = render):
        """Initialize the controller.

        Args:
            store: Shared selection store (owned by the caller)
            renderer: Pure function ``(dataset, selection, series_field=...)``
                returning a RenderedView
        """
        self.store = store
        self.renderer = renderer
        self.views: Dict[str, ChartView] = {}

        self._queue: Deque[Event] = deque()
        self._draining = False
        self._render_callbacks: List[RenderCallback] = []

        self.render_count = 0
        self.events_processed = 0

        self._unsubscribe = store.subscribe(self._on_selection_changed)

    def add_view(
        self,
        name: str,
        dataset: pd.DataFrame,
        binding: Optional[FieldBinding] = None,
        clickable: bool = True,
    ) -> ChartView:
        """Register a view; field bindings are checked here, not on first click.

        Raises:
            ConfigurationError: On a duplicate view name or a bad binding
        """
        if name in self.views:
            raise ConfigurationError(f"View '{name}' is already registered.")

        view = ChartView(name, dataset, binding or FieldBinding(), clickable=clickable)
        self.views[name] = view
        self.store.register_series(view.series)

        print(f"[Controller] Added view '{name}' ({len(view.series)} series, clickable={clickable})")
        return view

    def set_dataset(self, name: str, dataset: pd.DataFrame) -> ChartView:
        """Swap the dataset behind an existing view and re-render.

        The known series become the union over all views; a selection that
        no longer exists anywhere is cleared.

        Raises:
            ConfigurationError: On an unknown view or a bad binding
        """
        old = self.view(name)
        view = ChartView(name, dataset, old.binding, clickable=old.clickable)
        view.resolver.set_transform(old.resolver.transform)
        self.views[name] = view

        known: List[str] = []
        for each in self.views.values():
            known.extend(each.series)

        previous = self.store.get()
        self.store.update_series(known)
        # update_series already re-rendered if it cleared the selection
        if self.store.get() == previous:
            self.render_all()

        print(f"[Controller] View '{name}' now has {len(view.series)} series")
        return view

    def view(self, name: str) -> ChartView:
        try:
            return self.views[name]
        except KeyError:
            raise ConfigurationError(f"Unknown view '{name}'.") from None

    def add_render_callback(self, callback: RenderCallback) -> None:
        self._render_callbacks.append(callback)

    def choices(self) -> List[str]:
        """Dropdown options: "None" followed by every known series."""
        return [NONE_CHOICE, *self.store.known_series]

    def selection(self) -> Optional[str]:
        return self.store.get()

    def dispatch(self, event: Event) -> Optional[str]:
        """Queue an event and process the queue in order.

        Events dispatched from inside a render callback are queued behind the
        current one rather than handled recursively.

        Returns:
            The selection after the queue has drained
        """
        self._queue.append(event)
        if self._draining:
            return self.store.get()

        self._draining = True
        try:
            while self._queue:
                self._process(self._queue.popleft())
        except Exception:
            self._queue.clear()
            raise
        finally:
            self._draining = False

        return self.store.get()

    def _process(self, event: Event) -> None:
        self.events_processed += 1
        current = self.store.get()
        new = reduce(current, event, self._resolve_click)
        if new == current:
            print(f"[Controller] {event.kind} event kept selection {current!r}")
            return
        # Store notifies _on_selection_changed, which re-renders
        self.store.set(new)

    def _resolve_click(self, event: ClickEvent) -> Optional[str]:
        view = self.view(event.view)
        if not view.clickable:
            print(f"[Controller] Ignoring click on non-clickable view '{view.name}'")
            return None
        return view.resolver.resolve(event)

    def _on_selection_changed(self, old: Optional[str], new: Optional[str]) -> None:
        self.render_all()

    def render_all(self) -> Dict[str, RenderedView]:
        """Render every view from the current selection."""
        selection = self.store.get()
        results: Dict[str, RenderedView] = {}
        for view in self.views.values():
            results[view.name] = self._render_view(view, selection)
        return results

    def _render_view(self, view: ChartView, selection: Optional[str]) -> RenderedView:
        rendered = self.renderer(view.dataset, selection, series_field=view.binding.series_field)
        view.last_rendered = rendered
        self.render_count += 1
        for callback in self._render_callbacks:
            callback(view.name, rendered)
        return rendered

    def rendered(self, name: str) -> Optional[RenderedView]:
        return self.view(name).last_rendered

    def close(self) -> None:
        """Detach from the selection store."""
        self._unsubscribe()
