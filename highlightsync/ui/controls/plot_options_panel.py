"""Plot options control panel.

Contains controls for grid lines, observation markers and data simulation.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable

from ...config import PRIMARY_OFFDIAG, SECONDARY_OFFDIAG


class PlotOptionsPanel:
    """Panel for plot display options and resimulation."""

    def __init__(
        self,
        parent: ttk.Frame,
        on_options_changed: Callable[[], None] = None,
        on_resimulate: Callable[[], None] = None,
    ):
        """Initialize the plot options panel.

        Args:
            parent: Parent frame to place this panel in
            on_options_changed: Callback when a display option is toggled
            on_resimulate: Callback for the resimulate button
        """
        self.on_options_changed = on_options_changed
        self.on_resimulate = on_resimulate
        self.frame = ttk.LabelFrame(parent, text="Plot Options")

        # Grid checkbox
        self.grid_var = tk.BooleanVar(value=False)
        ttk.Checkbutton(
            self.frame, text="Show grid",
            variable=self.grid_var,
            command=self._on_toggle
        ).grid(row=0, column=0, columnspan=2, sticky="w", padx=4, pady=2)

        # Points checkbox
        self.points_var = tk.BooleanVar(value=True)
        ttk.Checkbutton(
            self.frame, text="Show points",
            variable=self.points_var,
            command=self._on_toggle
        ).grid(row=1, column=0, columnspan=2, sticky="w", padx=4, pady=2)

        # Correlation entries for the two simulated panels
        ttk.Label(self.frame, text="Top correlation:").grid(row=2, column=0, sticky="w", padx=4, pady=2)
        self.primary_entry = ttk.Entry(self.frame, width=8)
        self.primary_entry.insert(0, str(PRIMARY_OFFDIAG))
        self.primary_entry.grid(row=2, column=1, sticky="w", padx=4, pady=2)

        ttk.Label(self.frame, text="Bottom correlation:").grid(row=3, column=0, sticky="w", padx=4, pady=2)
        self.secondary_entry = ttk.Entry(self.frame, width=8)
        self.secondary_entry.insert(0, str(SECONDARY_OFFDIAG))
        self.secondary_entry.grid(row=3, column=1, sticky="w", padx=4, pady=2)

        ttk.Button(
            self.frame, text="Resimulate",
            command=self._on_resimulate_clicked
        ).grid(row=4, column=0, columnspan=2, sticky="w", padx=4, pady=2)

    def _on_toggle(self) -> None:
        if self.on_options_changed:
            self.on_options_changed()

    def _on_resimulate_clicked(self) -> None:
        if self.on_resimulate:
            self.on_resimulate()

    def pack(self, **kwargs) -> None:
        """Pack the frame with given options."""
        self.frame.pack(**kwargs)

    def grid(self, **kwargs) -> None:
        """Grid the frame with given options."""
        self.frame.grid(**kwargs)
