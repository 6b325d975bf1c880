"""Main application entry point and orchestrator"""

import sys

import customtkinter as ctk

from .config.manager import ConfigurationManager
from .core.install_detector import InstallDetector
from .core.service import ProfileTransferService
from .gui.config_dialog import ConfigDialog
from .gui.main_window import MainWindow
from .logging_config import setup_logging, get_logger
from . import __app_name__, __version__

logger = get_logger("app")


class LcmcManagerApp:
    """Main application orchestrator.

    Handles initialization, first-run detection, and application lifecycle.
    """

    def __init__(self):
        self.config_manager = ConfigurationManager()
        self.main_window: MainWindow | None = None

    def run(self):
        """Run the application."""
        # Set appearance mode to follow system
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        # Handle first run or load existing config
        is_first_run = self.config_manager.is_first_run()

        if is_first_run:
            self._handle_first_run()
        else:
            self.config_manager.load()

        # Build the service and clear imports abandoned by earlier sessions
        settings = self.config_manager.config.settings
        service = ProfileTransferService.from_settings(settings)

        removed = service.purge_stale_staging(settings.staging_max_age_hours)
        if removed:
            logger.info(f"Removed {len(removed)} stale staging directories")

        # Create main window
        self.main_window = MainWindow(self.config_manager, service)

        # If first run, show config dialog immediately after main window renders
        if is_first_run:
            self.main_window.after(100, self._show_first_run_config)

        # Start the main loop
        self.main_window.mainloop()

    def _handle_first_run(self):
        """Handle first-run setup."""
        # Auto-detect the Minecraft installation
        install_root = InstallDetector().detect()
        if install_root:
            logger.info(f"Detected Minecraft installation at {install_root}")
        else:
            logger.info("No Minecraft installation found at the default location")

        # Create default configuration with the detected install root
        self.config_manager.create_default(install_root)

    def _show_first_run_config(self):
        """Show the configuration dialog for first-run setup."""
        if self.main_window is None:
            return

        dialog = ConfigDialog(
            self.main_window,
            self.config_manager,
            first_run=True
        )

        # Wait for dialog to close
        self.main_window.wait_window(dialog)

        # Closing the window instead of pressing "Get Started" still counts
        if not self.config_manager.config.settings.first_run_complete:
            self.config_manager.config.settings.first_run_complete = True
            self.config_manager.save()

        # Refresh main window to show the configured profiles
        self.main_window._refresh_ui()


def main():
    """Application entry point."""
    # Initialize logging first
    logger = setup_logging(debug="--debug" in sys.argv)
    logger.info(f"Starting {__app_name__} v{__version__}")

    try:
        app = LcmcManagerApp()
        app.run()
    except Exception as e:
        logger.exception("Fatal error during startup")
        # Show error dialog if something goes wrong during startup
        import tkinter as tk
        from tkinter import messagebox

        root = tk.Tk()
        root.withdraw()
        messagebox.showerror(
            "Startup Error",
            f"Failed to start {__app_name__}:\n\n{e}"
        )
        root.destroy()
        sys.exit(1)
    finally:
        logger.info(f"{__app_name__} shutting down")


if __name__ == "__main__":
    main()
