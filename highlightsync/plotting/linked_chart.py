"""Binds a matplotlib canvas to a highlight controller view.

Clicks on the canvas become ``ClickEvent``s for the controller, and every
render of the view is drawn back onto the canvas.
"""

from __future__ import annotations

import traceback
from typing import TYPE_CHECKING, Any, Optional

from ..controller.events import ClickEvent
from .renderer import HighlightPlotter, PlotOptions, RenderedView

if TYPE_CHECKING:
    import matplotlib.axes
    from matplotlib.backend_bases import FigureCanvasBase

    from ..controller.controller import ChartView, HighlightController


class LinkedChartHandler:
    """Manages click input and redraws for one linked chart."""

    def __init__(
        self,
        controller: HighlightController,
        view_name: str,
        ax: matplotlib.axes.Axes,
        canvas: FigureCanvasBase,
        options: Optional[PlotOptions] = None,
    ):
        """Initialize the handler.

        Args:
            controller: Controller the view is registered with
            view_name: Name of the controller view drawn on this canvas
            ax: Axes to draw on
            canvas: Canvas the axes belong to
            options: Plot options for drawing
        """
        self.controller = controller
        self.view_name = view_name
        self.ax = ax
        self.canvas = canvas
        self.plotter = HighlightPlotter(options)

        self._click_cid: Optional[int] = None
        self.draw_count = 0

        controller.add_render_callback(self._on_render)

        # Click threshold is in pixels of this axes
        self.view.resolver.use_axes(self.ax)

        if self.view.clickable:
            self._click_cid = self.canvas.mpl_connect('button_press_event', self.on_graph_click)

    @property
    def view(self) -> ChartView:
        # Looked up each time; set_dataset replaces the view object
        return self.controller.view(self.view_name)

    def on_graph_click(self, event: Any) -> None:
        """Handle mouse clicks on the graph.

        Args:
            event: Matplotlib mouse button press event
        """
        if event.inaxes is not self.ax:
            return
        if event.xdata is None or event.ydata is None:
            return

        click = ClickEvent(view=self.view.name, x=float(event.xdata), y=float(event.ydata))
        print(f"[Click] {self.view.name}: x={click.x:.3f}, y={click.y:.3f}")
        self.controller.dispatch(click)

    def _on_render(self, view_name: str, rendered: RenderedView) -> None:
        if view_name != self.view_name:
            return
        self.redraw(rendered)

    def redraw(self, rendered: Optional[RenderedView] = None) -> None:
        """Draw the view's latest render (or the given one) onto the canvas."""
        rendered = rendered or self.view.last_rendered
        if rendered is None:
            return

        try:
            view = self.view
            self.plotter.draw(self.ax, view.dataset, rendered, view.binding)
            self.draw_count += 1
            self.canvas.draw_idle()
        except Exception as e:
            print(f"[Click] Error redrawing '{self.view.name}': {e}")
            traceback.print_exc()

    def disconnect(self) -> None:
        """Stop listening for clicks on the canvas."""
        if self._click_cid is not None:
            self.canvas.mpl_disconnect(self._click_cid)
            self._click_cid = None
