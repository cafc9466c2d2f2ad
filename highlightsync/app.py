from __future__ import annotations

import traceback
from typing import Dict, Optional

import matplotlib

matplotlib.use("TkAgg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from .config import (
    CLICK_THRESHOLD_PX,
    MAX_WINDOW_HEIGHT,
    MAX_WINDOW_WIDTH,
    PRIMARY_OFFDIAG,
    SECONDARY_OFFDIAG,
    WINDOW_TITLE,
)
from .controller import HighlightController, SelectEvent
from .data_loader import DataLoadError, SeriesDataLoader, simulate_dataset
from .plotting import FieldBinding, PlotOptions
from .plotting.linked_chart import LinkedChartHandler
from .selection import SeriesSelectionStore
from .ui.controls import PlotOptionsPanel, SelectionPanel

PRIMARY_VIEW = "plot1"
SECONDARY_VIEW = "plot2"


class HighlightDashboardApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title(WINDOW_TITLE)

        self.update_idletasks()
        screen_width = self.winfo_screenwidth()
        screen_height = self.winfo_screenheight()

        # ~85% of screen, capped
        window_width = min(int(screen_width * 0.85), MAX_WINDOW_WIDTH)
        window_height = min(int(screen_height * 0.85), MAX_WINDOW_HEIGHT)
        position_x = (screen_width - window_width) // 2
        position_y = (screen_height - window_height) // 2
        self.geometry(f"{window_width}x{window_height}+{position_x}+{position_y}")
        self.minsize(800, 600)

        print(f"[Window Init] Window: {window_width}x{window_height}px at ({position_x}, {position_y})")

        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        # Shared selection and the controller that owns all writes to it
        self.store = SeriesSelectionStore()
        self.controller = HighlightController(self.store)
        self.data_loader = SeriesDataLoader()

        binding = FieldBinding(max_distance=CLICK_THRESHOLD_PX)
        self.controller.add_view(PRIMARY_VIEW, simulate_dataset(offdiag=PRIMARY_OFFDIAG), binding)
        self.controller.add_view(
            SECONDARY_VIEW, simulate_dataset(offdiag=SECONDARY_OFFDIAG), binding, clickable=False
        )

        # === Main container ===
        main_container = ttk.Frame(self)
        main_container.grid(row=0, column=0, sticky="nsew")
        main_container.rowconfigure(1, weight=1)
        main_container.columnconfigure(1, weight=1)

        # === Top controls ===
        top = ttk.Frame(main_container)
        top.grid(row=0, column=0, columnspan=2, sticky="ew", padx=6, pady=4)
        ttk.Button(top, text="Open Data File...", command=self.open_csv).pack(side=tk.LEFT)
        self.status = tk.StringVar(value="Simulated data loaded")
        ttk.Label(top, textvariable=self.status).pack(side=tk.LEFT, padx=10)

        # === Sidebar ===
        sidebar = ttk.Frame(main_container)
        sidebar.grid(row=1, column=0, sticky="ns", padx=6, pady=6)

        self.selection_panel = SelectionPanel(
            sidebar,
            self.controller.choices(),
            on_choice=self.on_choice,
        )
        self.selection_panel.pack(side=tk.TOP, fill=tk.X, pady=4)

        self.plot_options = PlotOptionsPanel(
            sidebar,
            on_options_changed=self.redraw_all,
            on_resimulate=self.resimulate,
        )
        self.plot_options.pack(side=tk.TOP, fill=tk.X, pady=4)

        # === Figure area: two stacked panels ===
        self.fig = plt.Figure(figsize=(9, 7), dpi=100)
        self.ax_top = self.fig.add_subplot(211)
        self.ax_bottom = self.fig.add_subplot(212)
        self.canvas = FigureCanvasTkAgg(self.fig, master=main_container)
        self.canvas.get_tk_widget().grid(row=1, column=1, sticky="nsew", padx=6, pady=6)

        self.handlers: Dict[str, LinkedChartHandler] = {
            PRIMARY_VIEW: LinkedChartHandler(self.controller, PRIMARY_VIEW, self.ax_top, self.canvas),
            SECONDARY_VIEW: LinkedChartHandler(self.controller, SECONDARY_VIEW, self.ax_bottom, self.canvas),
        }

        # Dropdown follows clicks (the store only notifies on real changes)
        self.store.subscribe(self._on_selection_changed)

        self.controller.render_all()
        self.fig.tight_layout()

    def on_choice(self, choice: str) -> None:
        """Dispatch an explicit dropdown choice."""
        try:
            self.controller.dispatch(SelectEvent(choice))
        except Exception as e:
            messagebox.showerror("Selection Error", str(e))
            traceback.print_exc()

    def _on_selection_changed(self, old: Optional[str], new: Optional[str]) -> None:
        self.selection_panel.show_selection(new)
        self.status.set(f"Selected: {new}" if new is not None else "No series selected")

    def _plot_options(self) -> PlotOptions:
        return PlotOptions(
            show_grid=self.plot_options.grid_var.get(),
            show_points=self.plot_options.points_var.get(),
        )

    def redraw_all(self) -> None:
        """Redraw both panels with the current plot options."""
        options = self._plot_options()
        for handler in self.handlers.values():
            handler.plotter.options = options
            handler.redraw()

    def resimulate(self) -> None:
        """Simulate fresh data for both panels using the entered correlations."""
        try:
            primary = float(self.plot_options.primary_entry.get())
            secondary = float(self.plot_options.secondary_entry.get())
            self.controller.set_dataset(PRIMARY_VIEW, simulate_dataset(offdiag=primary))
            self.controller.set_dataset(SECONDARY_VIEW, simulate_dataset(offdiag=secondary))
        except ValueError as e:
            messagebox.showerror("Invalid correlation", f"Correlation must be a number between 0 and 1:\n{e}")
            return
        except DataLoadError as e:
            messagebox.showerror("Simulation Error", str(e))
            return

        self._refresh_choices()
        self.status.set(f"Resimulated (top={primary}, bottom={secondary})")

    def open_csv(self):
        """Open a CSV or tab-delimited TXT file of series as the bottom panel's data."""
        path = filedialog.askopenfilename(
            title="Select data file (CSV or TXT)",
            filetypes=[("Data files", "*.csv *.txt"), ("CSV files", "*.csv"), ("TXT files", "*.txt"), ("All files", "*.*")]
        )
        if not path:
            return

        try:
            result = self.data_loader.load(path)
            self.controller.set_dataset(SECONDARY_VIEW, result.dataset)
        except DataLoadError as exc:
            messagebox.showerror("Error loading file", f"Failed to load file:\n{exc}")
            return

        self._refresh_choices()
        self.status.set(f"Loaded: {result.source_path.name} ({len(result.wide)} rows, {len(result.series)} series)")

    def _refresh_choices(self) -> None:
        self.selection_panel.set_choices(self.controller.choices())
        self.selection_panel.show_selection(self.store.get())


def main() -> None:
    app = HighlightDashboardApp()
    app.mainloop()


if __name__ == "__main__":
    main()
