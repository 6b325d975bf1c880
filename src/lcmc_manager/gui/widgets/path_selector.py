"""Reusable path selection widget"""

from pathlib import Path
from typing import Callable, Optional

import customtkinter as ctk

from ..dialogs import choose_directory


class PathSelector(ctk.CTkFrame):
    """A widget for selecting a directory path.

    Combines a text entry field with a browse button that opens
    a directory dialog, and a status marker showing whether the path
    passes the supplied check.
    """

    def __init__(
        self,
        master,
        label: str = "Path:",
        initial_path: Optional[Path] = None,
        on_change: Optional[Callable[[Path], None]] = None,
        check: Optional[Callable[[Path], bool]] = None,
        **kwargs
    ):
        """Initialize the path selector widget.

        Args:
            master: Parent widget
            label: Label text to display
            initial_path: Initial path value
            on_change: Callback function when path changes
            check: Predicate deciding the OK marker (defaults to existence)
            **kwargs: Additional arguments for CTkFrame
        """
        super().__init__(master, **kwargs)

        self.on_change = on_change
        self.check = check or (lambda p: p.exists())

        # Configure grid
        self.grid_columnconfigure(1, weight=1)

        # Label
        self.label = ctk.CTkLabel(self, text=label)
        self.label.grid(row=0, column=0, padx=(0, 10), sticky="w")

        # Path entry
        self.path_var = ctk.StringVar(value=str(initial_path) if initial_path else "")
        self.entry = ctk.CTkEntry(
            self,
            textvariable=self.path_var,
            width=350,
        )
        self.entry.grid(row=0, column=1, padx=(0, 10), sticky="ew")

        # Bind entry changes
        self.path_var.trace_add("write", self._on_entry_change)

        # Browse button
        self.browse_btn = ctk.CTkButton(
            self,
            text="Browse",
            width=80,
            command=self._browse,
        )
        self.browse_btn.grid(row=0, column=2, sticky="e")

        # Status indicator
        self.status_label = ctk.CTkLabel(self, text="", width=20)
        self.status_label.grid(row=0, column=3, padx=(5, 0))

        # Update status for initial path
        self._update_status()

    def _browse(self):
        """Open directory dialog to select path."""
        current_path = self.get_path()
        initial_dir = current_path if current_path and current_path.is_dir() else None

        selected = choose_directory(parent=self, initial_dir=initial_dir)
        if selected:
            self.set_path(selected)

    def _on_entry_change(self, *args):
        """Handle entry text changes."""
        self._update_status()
        if self.on_change:
            path = self.get_path()
            if path:
                self.on_change(path)

    def _update_status(self):
        """Update the status indicator based on path validity."""
        path = self.get_path()
        if path and self.check(path):
            self.status_label.configure(text="OK", text_color="green")
        elif path:
            self.status_label.configure(text="?", text_color="orange")
        else:
            self.status_label.configure(text="", text_color="gray")

    def get_path(self) -> Optional[Path]:
        """Get the current path value.

        Returns:
            Path object or None if empty
        """
        value = self.path_var.get().strip()
        return Path(value) if value else None

    def set_path(self, path: Optional[Path]):
        """Set the path value.

        Args:
            path: Path to set, or None to clear
        """
        self.path_var.set(str(path) if path else "")
        self._update_status()
