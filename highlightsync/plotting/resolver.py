"""Nearest data point resolution for chart clicks.

Maps a click position to the series of the closest observation, using
explicitly bound x/y columns and an optional distance threshold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

import numpy as np
import pandas as pd

from ..config import SERIES_FIELD, X_FIELD, Y_FIELD

if TYPE_CHECKING:
    from ..controller.events import ClickEvent


class ConfigurationError(Exception):
    """Raised when a view or controller is wired up incorrectly."""


class FieldBindingError(ConfigurationError):
    """Raised when x/y/series field names are missing or ambiguous."""


# Maps an (N, 2) array of data coordinates to display coordinates
Transform = Callable[[np.ndarray], np.ndarray]


def validate_bindings(dataset: pd.DataFrame, *fields: Optional[str]) -> None:
    """Check that every field is named, present and unambiguous in the dataset.

    Raises:
        FieldBindingError: If a field is missing, absent or duplicated
    """
    for field in fields:
        if not field:
            raise FieldBindingError("Field names must be given explicitly (got an empty name).")

        matches = int((dataset.columns == field).sum())
        if matches == 0:
            raise FieldBindingError(f"Field '{field}' is not a column of the dataset.")
        if matches > 1:
            raise FieldBindingError(f"Field '{field}' is ambiguous: {matches} columns share this name.")


def resolve(
    dataset: pd.DataFrame,
    click: Optional[ClickEvent],
    x_field: str,
    y_field: str,
    max_distance: Optional[float] = None,
    *,
    series_field: str = SERIES_FIELD,
    x_scale: float = 1.0,
    y_scale: float = 1.0,
    transform: Optional[Transform] = None,
) -> Optional[str]:
    """Find the series of the row closest to a click.

    Args:
        dataset: Long-format dataset
        click: Click position in data coordinates, or None before any click
        x_field: Column holding x coordinates
        y_field: Column holding y coordinates
        max_distance: Largest accepted distance (None accepts any distance)
        series_field: Column holding series identifiers
        x_scale: Divisor applied to x distances
        y_scale: Divisor applied to y distances
        transform: Optional data-to-display transform; distances and
            ``max_distance`` are then measured in display units (pixels)

    Returns:
        Series identifier of the nearest row, or None when nothing is in range
    """
    # A frame with no columns at all is an empty dataset, not a bad binding
    if len(dataset.columns) == 0:
        return None
    validate_bindings(dataset, x_field, y_field, series_field)

    if click is None or dataset.empty:
        return None
    if x_scale <= 0 or y_scale <= 0:
        raise ConfigurationError(f"Axis scales must be positive (got x={x_scale}, y={y_scale}).")

    points = np.column_stack([
        pd.to_numeric(dataset[x_field], errors="coerce").to_numpy(dtype=float),
        pd.to_numeric(dataset[y_field], errors="coerce").to_numpy(dtype=float),
    ])
    target = np.array([[float(click.x), float(click.y)]])

    if transform is not None:
        points = np.asarray(transform(points), dtype=float)
        target = np.asarray(transform(target), dtype=float)

    dx = (points[:, 0] - target[0, 0]) / x_scale
    dy = (points[:, 1] - target[0, 1]) / y_scale
    distances = np.hypot(dx, dy)
    distances[~np.isfinite(distances)] = np.inf

    # argmin returns the first index among equal minima
    idx = int(np.argmin(distances))
    best = distances[idx]

    if not np.isfinite(best):
        return None
    if max_distance is not None and best > max_distance:
        return None

    return str(dataset[series_field].iloc[idx])


@dataclass(frozen=True)
class FieldBinding:
    """Explicit column bindings and threshold used to resolve clicks on a view."""

    x_field: str = X_FIELD
    y_field: str = Y_FIELD
    series_field: str = SERIES_FIELD
    max_distance: Optional[float] = None
    x_scale: float = 1.0
    y_scale: float = 1.0


class NearestPointResolver:
    """Resolves clicks against one dataset with validated field bindings."""

    def __init__(self, dataset: pd.DataFrame, binding: FieldBinding):
        """Initialize the resolver.

        Args:
            dataset: Long-format dataset the view renders
            binding: Field names and threshold for this view

        Raises:
            FieldBindingError: If the binding does not match the dataset
        """
        # A frame with no columns resolves to nothing, like resolve()
        if len(dataset.columns) > 0:
            validate_bindings(dataset, binding.x_field, binding.y_field, binding.series_field)
        self.dataset = dataset
        self.binding = binding

        # Display transform, set once the view is drawn on real axes
        self.transform: Optional[Transform] = None

        self._resolve_call_count = 0

    def __call__(self, click: Optional[ClickEvent]) -> Optional[str]:
        return self.resolve(click)

    def resolve(self, click: Optional[ClickEvent]) -> Optional[str]:
        """Resolve a click to a series identifier (or None)."""
        self._resolve_call_count += 1
        b = self.binding
        result = resolve(
            self.dataset,
            click,
            b.x_field,
            b.y_field,
            b.max_distance,
            series_field=b.series_field,
            x_scale=b.x_scale,
            y_scale=b.y_scale,
            transform=self.transform,
        )

        if self._resolve_call_count % 50 == 1:
            print(f"[Resolver] Click #{self._resolve_call_count} resolved to {result!r}")
        return result

    def set_transform(self, transform: Optional[Transform]) -> None:
        self.transform = transform

    def use_axes(self, ax: Any) -> None:
        """Measure distances in the display (pixel) space of the given axes."""
        # Look transData up per call; limits change on every redraw
        self.transform = lambda points: ax.transData.transform(points)
