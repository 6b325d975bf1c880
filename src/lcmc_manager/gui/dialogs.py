"""File pickers and message boxes used by the GUI.

The three choosers are the only way the core receives paths from the user:
    choose_directory: Minecraft install root
    choose_save_destination: where to write an exported archive
    choose_open_file: archive to import
Each returns a Path, or None if the user cancelled.
"""

from pathlib import Path
from tkinter import filedialog, messagebox
from typing import Optional

from ..config.paths import AppPaths

ARCHIVE_FILETYPES = [
    ("Launch Copy MC Files", f"*{AppPaths.ARCHIVE_SUFFIX}"),
    ("All Files", "*.*"),
]


def choose_directory(parent=None, initial_dir: Optional[Path] = None) -> Optional[Path]:
    selected = filedialog.askdirectory(
        parent=parent,
        initialdir=str(initial_dir) if initial_dir else None,
        title="Select Minecraft Directory",
        mustexist=True,
    )
    return Path(selected) if selected else None


def choose_save_destination(
    suggested_name: str,
    parent=None,
    initial_dir: Optional[Path] = None,
) -> Optional[Path]:
    """Ask where to save an archive.

    Args:
        suggested_name: Initial file name, e.g. "My Pack.lcmc"
        parent: Parent window
        initial_dir: Folder the dialog opens in

    Returns:
        Chosen path (.lcmc is appended when no extension was typed),
        or None if cancelled
    """
    selected = filedialog.asksaveasfilename(
        parent=parent,
        initialdir=str(initial_dir) if initial_dir else None,
        initialfile=suggested_name,
        defaultextension=AppPaths.ARCHIVE_SUFFIX,
        filetypes=ARCHIVE_FILETYPES,
        title="Export Profile",
    )
    if not selected:
        return None
    return Path(selected)


def choose_open_file(parent=None, initial_dir: Optional[Path] = None) -> Optional[Path]:
    selected = filedialog.askopenfilename(
        parent=parent,
        initialdir=str(initial_dir) if initial_dir else None,
        filetypes=ARCHIVE_FILETYPES,
        title="Import Profile",
    )
    return Path(selected) if selected else None


def show_error(parent, title: str, message: str) -> None:
    messagebox.showerror(title, message, parent=parent)


def show_info(parent, title: str, message: str) -> None:
    messagebox.showinfo(title, message, parent=parent)
