"""Configuration/Settings dialog"""

import customtkinter as ctk

from ..config.manager import ConfigurationManager
from ..config.path_validator import validate_install_root
from ..config.paths import AppPaths
from .styles import FONTS, PADDING, WINDOW_SIZES
from .widgets.path_selector import PathSelector


class ConfigDialog(ctk.CTkToplevel):
    """Settings dialog for the Minecraft directory and export/staging folders.

    This dialog is shown automatically on first run and can be accessed
    anytime via the Settings button in the main window.
    """

    def __init__(
        self,
        parent,
        config_manager: ConfigurationManager,
        first_run: bool = False,
    ):
        """Initialize the configuration dialog.

        Args:
            parent: Parent window
            config_manager: Configuration manager instance
            first_run: If True, shows first-run specific messaging
        """
        super().__init__(parent)

        self.config_manager = config_manager
        self.config_changed = False
        self.first_run = first_run

        self.title("Initial Setup" if first_run else "Settings")
        width, height = WINDOW_SIZES["config_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, False)

        self.transient(parent)
        self.grab_set()

        self._create_ui()

        self.focus_force()

    def _create_ui(self):
        """Create the dialog UI."""
        settings = self.config_manager.config.settings

        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["large"], pady=PADDING["large"])

        if self.first_run:
            title_text = "Welcome to LCMC Manager"
            subtitle_text = "Let's find your Minecraft installation"
        else:
            title_text = "Settings"
            subtitle_text = "Configure your Minecraft directory and export preferences"

        title = ctk.CTkLabel(container, text=title_text, font=FONTS["title"])
        title.pack(anchor="w", pady=(0, 5))

        subtitle = ctk.CTkLabel(container, text=subtitle_text, font=FONTS["body"], text_color="gray")
        subtitle.pack(anchor="w", pady=(0, PADDING["medium"]))

        self.install_root_selector = PathSelector(
            container,
            label="Minecraft Folder:",
            initial_path=settings.install_root,
            check=lambda p: validate_install_root(p)[0],
        )
        self.install_root_selector.pack(fill="x", pady=(0, PADDING["small"]))

        self.export_dir_selector = PathSelector(
            container,
            label="Export Folder:",
            initial_path=settings.export_dir,
        )
        self.export_dir_selector.pack(fill="x", pady=(0, PADDING["small"]))

        self.staging_selector = PathSelector(
            container,
            label="Temporary Folder:",
            initial_path=settings.staging_root or AppPaths.STAGING_DIR,
        )
        self.staging_selector.pack(fill="x", pady=(0, PADDING["small"]))

        age_frame = ctk.CTkFrame(container, fg_color="transparent")
        age_frame.pack(fill="x", pady=PADDING["small"])

        age_label = ctk.CTkLabel(age_frame, text="Discard unused imports after (hours):", font=FONTS["body"])
        age_label.pack(side="left")

        self.max_age_var = ctk.IntVar(value=settings.staging_max_age_hours)
        self.max_age_label = ctk.CTkLabel(age_frame, text=str(self.max_age_var.get()), width=30)
        self.max_age_label.pack(side="right", padx=(10, 0))

        self.max_age_slider = ctk.CTkSlider(
            age_frame,
            from_=1,
            to=168,
            number_of_steps=167,
            variable=self.max_age_var,
            command=self._on_slider_change,
        )
        self.max_age_slider.pack(side="right", padx=10)

        self._create_buttons(container)

    def _on_slider_change(self, value):
        """Update the max age label when slider changes."""
        self.max_age_label.configure(text=str(int(value)))

    def _create_buttons(self, parent):
        """Create the dialog buttons."""
        button_frame = ctk.CTkFrame(parent, fg_color="transparent")
        button_frame.pack(fill="x", side="bottom", pady=(PADDING["medium"], 0))

        # Cancel button (not shown on first run)
        if not self.first_run:
            cancel_btn = ctk.CTkButton(
                button_frame,
                text="Cancel",
                width=100,
                fg_color="transparent",
                border_width=1,
                text_color=("gray10", "gray90"),
                command=self.destroy,
            )
            cancel_btn.pack(side="left")

        save_text = "Get Started" if self.first_run else "Save"
        save_btn = ctk.CTkButton(
            button_frame,
            text=save_text,
            width=120,
            command=self._save_and_close,
        )
        save_btn.pack(side="right")

    def _save_and_close(self):
        """Save configuration and close dialog."""
        settings = self.config_manager.config.settings

        settings.install_root = self.install_root_selector.get_path()
        settings.export_dir = self.export_dir_selector.get_path()

        staging_root = self.staging_selector.get_path()
        settings.staging_root = None if staging_root == AppPaths.STAGING_DIR else staging_root
        settings.staging_max_age_hours = int(self.max_age_var.get())

        settings.first_run_complete = True
        self.config_manager.save()

        self.config_changed = True
        self.destroy()
