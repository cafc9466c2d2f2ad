"""Selection dropdown control panel.

Contains the "Selected" dropdown ("None" plus every series) and a clear
button. The dropdown follows the shared selection when a click changes it.
"""

from __future__ import annotations

from tkinter import ttk
from typing import Callable, List, Optional

from ...config import NONE_CHOICE


class SelectionPanel:
    """Panel for choosing the highlighted series directly."""

    def __init__(
        self,
        parent: ttk.Frame,
        choices: List[str],
        on_choice: Callable[[str], None] = None,
        combo_width: int = 12,
    ):
        """Initialize the selection panel.

        Args:
            parent: Parent frame to place this panel in
            choices: Dropdown values, starting with "None"
            on_choice: Callback with the chosen label when the user picks one
            combo_width: Width of the dropdown in characters
        """
        self.on_choice = on_choice
        self.frame = ttk.LabelFrame(parent, text="Highlight")

        ttk.Label(self.frame, text="Selected").grid(row=0, column=0, sticky="w", padx=4, pady=2)

        self.dropdown = ttk.Combobox(self.frame, width=combo_width, state="readonly")
        self.dropdown.grid(row=1, column=0, sticky="ew", padx=4, pady=2)
        self.dropdown.bind("<<ComboboxSelected>>", lambda e: self._on_selected())
        self.set_choices(choices)

        ttk.Button(
            self.frame, text="Clear",
            command=self._on_clear_clicked,
            width=10
        ).grid(row=2, column=0, sticky="w", padx=4, pady=2)

        ttk.Label(
            self.frame,
            text="(or click a line in the top plot)",
            font=("TkDefaultFont", 7),
            foreground="gray"
        ).grid(row=3, column=0, sticky="w", padx=4, pady=2)

    def set_choices(self, choices: List[str]) -> None:
        """Replace the dropdown values, keeping the shown value if still valid."""
        current = self.dropdown.get() or NONE_CHOICE
        self.dropdown['values'] = list(choices)
        self.dropdown.set(current if current in choices else NONE_CHOICE)

    def show_selection(self, selection: Optional[str]) -> None:
        """Reflect the store's selection without raising a choice event."""
        # Combobox.set does not fire <<ComboboxSelected>>
        self.dropdown.set(NONE_CHOICE if selection is None else selection)

    def _on_selected(self) -> None:
        if self.on_choice:
            self.on_choice(self.dropdown.get())

    def _on_clear_clicked(self) -> None:
        self.dropdown.set(NONE_CHOICE)
        if self.on_choice:
            self.on_choice(NONE_CHOICE)

    def pack(self, **kwargs) -> None:
        """Pack the frame with given options."""
        self.frame.pack(**kwargs)

    def grid(self, **kwargs) -> None:
        """Grid the frame with given options."""
        self.frame.grid(**kwargs)
