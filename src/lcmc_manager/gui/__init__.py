"""GUI module using CustomTkinter.

Components:
    MainWindow: Profile list, profile details, export and import
    ConfigDialog: Settings dialog for first-run setup and configuration
    ImportDialog: Archive preview with install options

Submodules:
    styles: Theme constants (colors, fonts, padding, window sizes)
    dialogs: File pickers and message boxes
    widgets: Reusable widget components (PathSelector)
"""

from .main_window import MainWindow
from .config_dialog import ConfigDialog
from .import_dialog import ImportDialog

__all__ = [
    "MainWindow",
    "ConfigDialog",
    "ImportDialog",
]
