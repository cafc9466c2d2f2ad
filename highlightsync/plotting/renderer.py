"""Highlight rendering for multi-series line charts.

``render`` turns a dataset and the current selection into a plain
``RenderedView`` value (per-series and per-row opacity, legend flag).
``HighlightPlotter`` draws such a view onto matplotlib axes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Optional, Tuple

import matplotlib
import numpy as np
import pandas as pd

from ..config import (
    HIGHLIGHTED_ALPHA,
    LEGEND_TITLE,
    SERIES_FIELD,
    UNHIGHLIGHTED_ALPHA,
    X_LABEL,
    Y_LABEL,
)
from ..data_loader import series_names
from .resolver import FieldBinding

if TYPE_CHECKING:
    import matplotlib.axes


@dataclass(frozen=True)
class SeriesStyle:
    name: str
    alpha: float
    in_legend: bool
    highlighted: bool


@dataclass(frozen=True)
class RenderedView:
    """Styling decisions for one chart panel."""

    series: Tuple[SeriesStyle, ...]
    row_alpha: Tuple[float, ...]
    show_legend: bool
    highlight: Optional[str]

    def style_for(self, name: str) -> Optional[SeriesStyle]:
        for style in self.series:
            if style.name == name:
                return style
        return None

    def alpha_by_series(self) -> Dict[str, float]:
        return {style.name: style.alpha for style in self.series}


def render(
    dataset: pd.DataFrame,
    selection: Optional[str],
    *,
    series_field: str = SERIES_FIELD,
) -> RenderedView:
    """Decide the opacity of every series and row for the given selection.

    A selection that is not a series of this dataset renders the same as no
    selection. The result depends only on the arguments.

    Args:
        dataset: Long-format dataset
        selection: Selected series identifier, or None
        series_field: Column holding series identifiers

    Returns:
        RenderedView for the dataset
    """
    names = series_names(dataset, series_field)
    highlight = selection if selection is not None and selection in names else None

    if highlight is None:
        styles = tuple(
            SeriesStyle(name=name, alpha=HIGHLIGHTED_ALPHA, in_legend=False, highlighted=False)
            for name in names
        )
        row_alpha = tuple(HIGHLIGHTED_ALPHA for _ in range(len(dataset)))
        return RenderedView(series=styles, row_alpha=row_alpha, show_legend=False, highlight=None)

    styles = tuple(
        SeriesStyle(
            name=name,
            alpha=HIGHLIGHTED_ALPHA if name == highlight else UNHIGHLIGHTED_ALPHA,
            in_legend=name == highlight,
            highlighted=name == highlight,
        )
        for name in names
    )
    matches = dataset[series_field].astype(str).to_numpy() == highlight
    row_alpha = tuple(float(a) for a in np.where(matches, HIGHLIGHTED_ALPHA, UNHIGHLIGHTED_ALPHA))
    return RenderedView(series=styles, row_alpha=row_alpha, show_legend=True, highlight=highlight)


class PlotOptions:
    """Configuration options for plotting."""

    def __init__(
        self,
        *,
        graph_title: str = "",
        x_label: str = X_LABEL,
        y_label: str = Y_LABEL,
        legend_title: str = LEGEND_TITLE,
        legend_position: str = "Upper Left",
        legend_fontsize: int = 8,
        show_grid: bool = False,
        show_points: bool = True,
    ):
        """Initialize plot options.

        Args:
            graph_title: Axes title (empty for none)
            x_label: X-axis label
            y_label: Y-axis label
            legend_title: Title shown above the highlighted series entry
            legend_position: Legend position name
            legend_fontsize: Legend font size in points
            show_grid: Whether to show grid lines
            show_points: Whether to draw a marker at every observation
        """
        self.graph_title = graph_title
        self.x_label = x_label
        self.y_label = y_label
        self.legend_title = legend_title
        self.legend_position = legend_position
        self.legend_fontsize = legend_fontsize
        self.show_grid = show_grid
        self.show_points = show_points


class HighlightPlotter:
    """Draws rendered views onto matplotlib axes."""

    position_map = {
        "Upper Left": "upper left",
        "Upper Right": "upper right",
        "Lower Left": "lower left",
        "Lower Right": "lower right",
        "Best": "best",
    }

    def __init__(self, options: Optional[PlotOptions] = None):
        self.options = options or PlotOptions()

        # Last drawn Line2D per series, for introspection
        self.last_series_lines: Dict[str, object] = {}

    def draw(
        self,
        ax: matplotlib.axes.Axes,
        dataset: pd.DataFrame,
        view: RenderedView,
        binding: Optional[FieldBinding] = None,
    ) -> matplotlib.axes.Axes:
        """Clear the axes and draw every series with the view's styling.

        Args:
            ax: Matplotlib axes to draw on
            dataset: Long-format dataset the view was rendered from
            view: Result of ``render`` for this dataset
            binding: Column bindings of the view (default field names if None)

        Returns:
            The axes that were drawn on
        """
        options = self.options
        binding = binding or FieldBinding()
        ax.clear()
        self.last_series_lines = {}

        # Keep colours stable across highlight changes
        cmap = _series_colours(len(view.series))

        grouped = {}
        if binding.series_field in dataset.columns:
            grouped = {str(name): rows for name, rows in dataset.groupby(binding.series_field, sort=False)}

        # Draw faded series first so the highlight sits on top
        ordered = sorted(enumerate(view.series), key=lambda item: item[1].highlighted)
        for colour_idx, style in ordered:
            rows = grouped.get(style.name)
            if rows is None:
                continue
            x = pd.to_numeric(rows[binding.x_field], errors="coerce")
            y = pd.to_numeric(rows[binding.y_field], errors="coerce")

            line, = ax.plot(
                x,
                y,
                color=cmap[colour_idx],
                alpha=style.alpha,
                marker="o" if options.show_points else None,
                markersize=3,
                linewidth=1.8 if style.highlighted else 1.0,
                label=style.name if style.in_legend else f"_{style.name}",
                zorder=3 if style.highlighted else 2,
            )
            self.last_series_lines[style.name] = line

        ax.set_xlabel(options.x_label)
        ax.set_ylabel(options.y_label)
        if options.graph_title:
            ax.set_title(options.graph_title)
        if options.show_grid:
            ax.grid(True, which="both", linestyle=":")

        if view.show_legend:
            ax.legend(
                loc=self.position_map.get(options.legend_position, "upper left"),
                title=options.legend_title,
                fontsize=options.legend_fontsize,
            )

        print(f"[Render] Drew {len(self.last_series_lines)} series, highlight={view.highlight!r}")
        return ax


def _series_colours(count: int):
    if count == 0:
        return []
    cmap = matplotlib.colormaps["hsv"]
    return [cmap(i / count) for i in range(count)]
