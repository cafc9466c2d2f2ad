from types import SimpleNamespace

import pandas as pd
import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from highlightsync.controller import HighlightController, SelectEvent
from highlightsync.plotting.linked_chart import LinkedChartHandler
from highlightsync.plotting.resolver import FieldBinding
from highlightsync.selection import SeriesSelectionStore


@pytest.fixture
def dashboard(three_series, disjoint_series):
    fig = Figure()
    canvas = FigureCanvasAgg(fig)
    ax_top = fig.add_subplot(211)
    ax_bottom = fig.add_subplot(212)

    controller = HighlightController(SeriesSelectionStore())
    binding = FieldBinding(max_distance=20.0)
    controller.add_view("plot1", three_series, binding)
    controller.add_view("plot2", disjoint_series, binding, clickable=False)

    top = LinkedChartHandler(controller, "plot1", ax_top, canvas)
    bottom = LinkedChartHandler(controller, "plot2", ax_bottom, canvas)
    controller.render_all()
    canvas.draw()
    return SimpleNamespace(controller=controller, canvas=canvas, top=top, bottom=bottom)


def press(handler, x, y):
    return SimpleNamespace(inaxes=handler.ax, xdata=x, ydata=y)


def test_initial_render_draws_both_panels(dashboard):
    assert dashboard.top.draw_count == 1
    assert dashboard.bottom.draw_count == 1
    assert len(dashboard.top.ax.get_lines()) == 3


def test_click_on_point_highlights_and_redraws(dashboard):
    # Exactly on a V30 observation
    dashboard.top.on_graph_click(press(dashboard.top, 2, 5.0))

    assert dashboard.controller.selection() == "V30"
    lines = dashboard.top.plotter.last_series_lines
    assert lines["V30"].get_alpha() == 1.0
    assert lines["V1"].get_alpha() == 0.2
    assert dashboard.top.ax.get_legend() is not None

    # Bottom panel has no V30, so nothing is faded
    assert dashboard.bottom.draw_count == 2
    assert all(line.get_alpha() == 1.0 for line in dashboard.bottom.plotter.last_series_lines.values())
    assert dashboard.bottom.ax.get_legend() is None


def test_click_far_from_data_keeps_selection(dashboard):
    dashboard.controller.dispatch(SelectEvent("V2"))
    draws = dashboard.top.draw_count

    dashboard.top.on_graph_click(press(dashboard.top, 2, 1000.0))

    assert dashboard.controller.selection() == "V2"
    assert dashboard.top.draw_count == draws


def test_clicks_outside_axes_are_ignored(dashboard):
    dashboard.top.on_graph_click(SimpleNamespace(inaxes=None, xdata=None, ydata=None))
    dashboard.top.on_graph_click(press(dashboard.bottom, 2, 5.0))
    assert dashboard.controller.selection() is None


def test_only_clickable_views_listen(dashboard):
    assert dashboard.top._click_cid is not None
    assert dashboard.bottom._click_cid is None
    dashboard.top.disconnect()
    assert dashboard.top._click_cid is None


def test_redraw_uses_view_columns():
    dataset = pd.DataFrame({
        "t": [1, 2, 1, 2],
        "series": ["A", "A", "B", "B"],
        "y": [0.0, 0.0, 5.0, 5.0],
    })
    fig = Figure()
    canvas = FigureCanvasAgg(fig)
    ax = fig.add_subplot(111)

    controller = HighlightController(SeriesSelectionStore())
    binding = FieldBinding(x_field="t", y_field="y", series_field="series", max_distance=20.0)
    controller.add_view("custom", dataset, binding)
    handler = LinkedChartHandler(controller, "custom", ax, canvas)
    controller.render_all()
    canvas.draw()

    assert handler.draw_count == 1
    assert len(ax.get_lines()) == 2

    handler.on_graph_click(press(handler, 2, 5.0))
    assert controller.selection() == "B"
    assert handler.draw_count == 2
    assert handler.plotter.last_series_lines["B"].get_alpha() == 1.0
    assert ax.get_legend() is not None
