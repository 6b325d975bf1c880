"""Main application window: profile list, profile details, export and import."""

import threading
from pathlib import Path
from typing import Callable, Optional

import customtkinter as ctk

from .. import __app_name__, __version__
from ..config.manager import ConfigurationManager
from ..config.path_validator import validate_output_path
from ..config.paths import AppPaths
from ..core.errors import LcmcError, RegistryMissingError
from ..core.installer import ImportPreview, InstallResult
from ..core.models import DirectoryStatus, PackageMetadata, Profile
from ..core.packager import detect_mod_loader
from ..core.registry import find_profile
from ..core.service import ProfileTransferService
from ..core.sizing import format_bytes
from ..logging_config import get_logger
from .config_dialog import ConfigDialog
from .dialogs import choose_directory, choose_open_file, choose_save_destination, show_error, show_info
from .import_dialog import ImportDialog
from .styles import COLORS, FONTS, LOADER_COLORS, PADDING, WINDOW_SIZES

logger = get_logger("main_window")


class MainWindow(ctk.CTk):
    """Main application window.

    Layout:
    - Top: toolbar with Minecraft folder, refresh, import and settings buttons
    - Left pane: launcher profiles (name, version, mod count)
    - Right pane: details of the selected profile with an Export button
    - Bottom: status bar
    """

    def __init__(self, config_manager: ConfigurationManager, service: ProfileTransferService):
        super().__init__()

        self.config_manager = config_manager
        self.service = service

        self.profiles: list[Profile] = []
        self.selected_profile: Optional[Profile] = None
        self.profile_rows: dict[str, ctk.CTkFrame] = {}
        self._busy = False

        self.title(f"{__app_name__} v{__version__}")
        width, height = WINDOW_SIZES["main"]
        min_width, min_height = WINDOW_SIZES["min_main"]
        self.geometry(f"{width}x{height}")
        self.minsize(min_width, min_height)

        self._create_ui()

        self.protocol("WM_DELETE_WINDOW", self._on_close)

        self.after(100, self._load_profiles)

    @property
    def install_root(self) -> Optional[Path]:
        return self.config_manager.config.settings.install_root

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _create_ui(self):
        """Create the main UI layout."""
        self._create_toolbar()

        self.main_container = ctk.CTkFrame(self, fg_color="transparent")
        self.main_container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=(0, PADDING["medium"]))

        self.main_container.grid_columnconfigure(0, weight=1, minsize=260)
        self.main_container.grid_columnconfigure(1, weight=2)
        self.main_container.grid_rowconfigure(0, weight=1)

        self._create_profile_list_pane()
        self._create_details_pane()
        self._create_status_bar()

    def _create_toolbar(self):
        toolbar = ctk.CTkFrame(self, height=50, fg_color=COLORS["panel"])
        toolbar.pack(fill="x", padx=PADDING["medium"], pady=PADDING["medium"])
        toolbar.pack_propagate(False)

        title = ctk.CTkLabel(toolbar, text=__app_name__, font=FONTS["title"])
        title.pack(side="left", padx=PADDING["medium"], pady=PADDING["small"])

        version = ctk.CTkLabel(toolbar, text=f"v{__version__}", font=FONTS["small"], text_color="gray")
        version.pack(side="left", pady=PADDING["small"])

        self.settings_btn = ctk.CTkButton(
            toolbar, text="Settings", width=80, command=self._open_settings,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
        )
        self.settings_btn.pack(side="right", padx=PADDING["small"])

        self.import_btn = ctk.CTkButton(toolbar, text="Import", width=80, command=self._import_archive)
        self.import_btn.pack(side="right", padx=(PADDING["small"], 0))

        self.refresh_btn = ctk.CTkButton(toolbar, text="Refresh", width=80, command=self._load_profiles)
        self.refresh_btn.pack(side="right", padx=(PADDING["small"], 0))

        self.folder_btn = ctk.CTkButton(
            toolbar, text="Minecraft Folder", width=130, command=self._choose_install_root
        )
        self.folder_btn.pack(side="right", padx=(PADDING["small"], 0))

    def _create_profile_list_pane(self):
        self.list_pane = ctk.CTkFrame(self.main_container, fg_color=COLORS["panel"])
        self.list_pane.grid(row=0, column=0, sticky="nsew", padx=(0, PADDING["medium"]))

        header = ctk.CTkLabel(self.list_pane, text="Profiles", font=FONTS["heading"])
        header.pack(anchor="w", padx=PADDING["small"], pady=(PADDING["small"], 0))

        self.root_label = ctk.CTkLabel(
            self.list_pane, text="", font=FONTS["small"], text_color="gray", wraplength=240, justify="left"
        )
        self.root_label.pack(anchor="w", padx=PADDING["small"])

        self.profile_list = ctk.CTkScrollableFrame(self.list_pane, fg_color="transparent")
        self.profile_list.pack(fill="both", expand=True, padx=PADDING["small"], pady=PADDING["small"])

    def _create_details_pane(self):
        self.details_pane = ctk.CTkFrame(self.main_container, fg_color=COLORS["panel"])
        self.details_pane.grid(row=0, column=1, sticky="nsew")

        self.details_content = ctk.CTkScrollableFrame(self.details_pane, fg_color="transparent")
        self.details_content.pack(fill="both", expand=True, padx=PADDING["small"], pady=PADDING["small"])

        button_frame = ctk.CTkFrame(self.details_pane, fg_color="transparent")
        button_frame.pack(fill="x", padx=PADDING["small"], pady=(0, PADDING["small"]))

        self.export_btn = ctk.CTkButton(
            button_frame,
            text="Export Profile",
            width=140,
            fg_color=COLORS["success"],
            hover_color=COLORS["success_hover"],
            command=self._export_selected,
            state="disabled",
        )
        self.export_btn.pack(side="right")

        self._show_details_placeholder("Select a profile to see its details.")

    def _create_status_bar(self):
        self.status_bar = ctk.CTkFrame(self, height=30, fg_color=COLORS["panel"])
        self.status_bar.pack(fill="x", side="bottom")
        self.status_bar.pack_propagate(False)

        self.status_label = ctk.CTkLabel(
            self.status_bar, text="Ready", font=FONTS["small"], text_color=("#cccccc", "#999999")
        )
        self.status_label.pack(side="left", padx=PADDING["medium"], pady=2)

    def _set_status(self, message: str):
        """Update the status bar message."""
        self.status_label.configure(text=message)

    # ------------------------------------------------------------------
    # Background work
    # ------------------------------------------------------------------

    def _run_in_background(
        self,
        task: Callable[[], object],
        on_success: Callable[[object], None],
        busy_message: str,
        error_title: str,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        """Run a blocking core operation on a worker thread.

        Results and errors are handed back to the Tk thread with after(0).
        """
        self._set_busy(True, busy_message)

        def _worker():
            try:
                result = task()
            except Exception as e:
                logger.exception(f"{error_title}: {e}")
                self.after(0, lambda err=e: _failed(err))
            else:
                self.after(0, lambda: _done(result))

        def _done(result):
            self._set_busy(False)
            on_success(result)

        def _failed(error: Exception):
            self._set_busy(False, f"{error_title}: {error}")
            if on_error:
                on_error(error)
            if isinstance(error, (LcmcError, OSError)):
                show_error(self, error_title, str(error))
            else:
                show_error(self, error_title, f"Unexpected error: {error}\n\nSee the log file for details.")

        threading.Thread(target=_worker, daemon=True).start()

    def _set_busy(self, busy: bool, message: Optional[str] = None):
        self._busy = busy
        state = "disabled" if busy else "normal"
        for btn in (self.folder_btn, self.refresh_btn, self.import_btn, self.settings_btn):
            btn.configure(state=state)
        self.export_btn.configure(state="disabled" if busy or not self.selected_profile else "normal")
        self.configure(cursor="watch" if busy else "")
        if message:
            self._set_status(message)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def _choose_install_root(self):
        selected = choose_directory(parent=self, initial_dir=self.install_root)
        if not selected:
            return

        self.config_manager.config.settings.install_root = selected
        self.config_manager.save()
        self._load_profiles()

    def _load_profiles(self):
        """Reload the profile list from the configured Minecraft folder."""
        if self._busy:
            return

        install_root = self.install_root
        if install_root is None:
            self.root_label.configure(text="No Minecraft folder selected")
            self._set_status("Choose your Minecraft folder to get started")
            return

        self.root_label.configure(text=str(install_root))
        selected_id = self.selected_profile.id if self.selected_profile else None

        def on_loaded(profiles):
            self.profiles = profiles
            self._refresh_profile_list()
            previous = find_profile(profiles, selected_id) if selected_id else None
            if previous:
                self._on_profile_selected(previous)
            else:
                self.selected_profile = None
                self.export_btn.configure(state="disabled")
                self._show_details_placeholder("Select a profile to see its details.")
            self._set_status(f"Loaded {len(profiles)} profiles")

        def on_error(error):
            self.profiles = []
            self._refresh_profile_list()
            if isinstance(error, RegistryMissingError):
                self._show_details_placeholder("No launcher profiles found.\nChoose a different Minecraft folder.")

        self._run_in_background(
            lambda: self.service.list_profiles(install_root),
            on_loaded,
            busy_message="Loading profiles...",
            error_title="Could not load profiles",
            on_error=on_error,
        )

    def _refresh_profile_list(self):
        for widget in self.profile_list.winfo_children():
            widget.destroy()
        self.profile_rows.clear()

        if not self.profiles:
            ctk.CTkLabel(
                self.profile_list, text="No profiles", font=FONTS["body"], text_color="gray"
            ).pack(pady=PADDING["large"])
            return

        for profile in self.profiles:
            self._create_profile_row(profile)

    def _create_profile_row(self, profile: Profile):
        row = ctk.CTkFrame(self.profile_list, fg_color="transparent", cursor="hand2")
        row.pack(fill="x", pady=2)

        name_label = ctk.CTkLabel(row, text=profile.display_name, font=FONTS["body"], anchor="w")
        name_label.pack(fill="x", padx=PADDING["small"])

        info = f"{profile.last_version_id or 'unknown version'} - {profile.mod_count} mods"
        info_label = ctk.CTkLabel(row, text=info, font=FONTS["small"], text_color="gray", anchor="w")
        info_label.pack(fill="x", padx=PADDING["small"])

        for widget in (row, name_label, info_label):
            widget.bind("<Button-1>", lambda event, p=profile: self._on_profile_selected(p))

        self.profile_rows[profile.id] = row

    def _on_profile_selected(self, profile: Profile):
        self.selected_profile = profile

        for profile_id, row in self.profile_rows.items():
            row.configure(fg_color=("gray75", "gray35") if profile_id == profile.id else "transparent")

        if not self._busy:
            self.export_btn.configure(state="normal")
        self._show_profile_details(profile)

        # Directory sizes walk the whole tree, so they load separately
        threading.Thread(target=self._load_directory_sizes, args=(profile,), daemon=True).start()

    def _load_directory_sizes(self, profile: Profile):
        try:
            statuses = self.service.registry.get_profile_directories(profile)
        except OSError as e:
            logger.warning(f"Could not size directories of {profile.game_dir}: {e}")
            return
        self.after(0, lambda: self._show_directory_sizes(profile, statuses))

    # ------------------------------------------------------------------
    # Details pane
    # ------------------------------------------------------------------

    def _clear_details(self):
        for widget in self.details_content.winfo_children():
            widget.destroy()

    def _show_details_placeholder(self, message: str):
        self._clear_details()
        ctk.CTkLabel(
            self.details_content, text=message, font=FONTS["body"], text_color="gray", justify="center"
        ).pack(pady=PADDING["large"])

    def _show_profile_details(self, profile: Profile):
        self._clear_details()
        loader = detect_mod_loader(profile.mods).value

        title = ctk.CTkLabel(self.details_content, text=profile.display_name, font=FONTS["title"], anchor="w")
        title.pack(fill="x")

        grid = ctk.CTkFrame(self.details_content, fg_color="transparent")
        grid.pack(fill="x", pady=PADDING["small"])
        grid.grid_columnconfigure(1, weight=1)

        rows = [
            ("Version", profile.last_version_id or "Unknown"),
            ("Mods", str(profile.mod_count)),
            ("Game directory", str(profile.game_dir)),
            ("Last used", profile.last_used or "Never"),
        ]
        for row, (label, value) in enumerate(rows):
            ctk.CTkLabel(grid, text=f"{label}:", font=FONTS["body"]).grid(row=row, column=0, sticky="nw", padx=(0, 10))
            ctk.CTkLabel(grid, text=value, font=FONTS["body"], wraplength=380, justify="left").grid(
                row=row, column=1, sticky="w"
            )

        loader_row = len(rows)
        ctk.CTkLabel(grid, text="Mod loader:", font=FONTS["body"]).grid(row=loader_row, column=0, sticky="w", padx=(0, 10))
        ctk.CTkLabel(
            grid, text=loader, font=FONTS["body"], text_color=LOADER_COLORS.get(loader, COLORS["muted"])
        ).grid(row=loader_row, column=1, sticky="w")

        self.directories_frame = ctk.CTkFrame(self.details_content, fg_color="transparent")
        self.directories_frame.pack(fill="x", pady=(PADDING["small"], 0))
        ctk.CTkLabel(self.directories_frame, text="Directories", font=FONTS["heading"]).pack(anchor="w")
        ctk.CTkLabel(
            self.directories_frame, text="Calculating sizes...", font=FONTS["small"], text_color="gray"
        ).pack(anchor="w")

        mods_header = ctk.CTkLabel(self.details_content, text="Mods", font=FONTS["heading"])
        mods_header.pack(anchor="w", pady=(PADDING["small"], 0))

        if not profile.mods:
            ctk.CTkLabel(self.details_content, text="No mods installed", font=FONTS["small"], text_color="gray").pack(anchor="w")
        for mod in profile.mods:
            row = ctk.CTkFrame(self.details_content, fg_color="transparent")
            row.pack(fill="x")
            ctk.CTkLabel(row, text=mod.name, font=FONTS["small"], anchor="w").pack(side="left")
            ctk.CTkLabel(row, text=format_bytes(mod.size), font=FONTS["small"], text_color="gray").pack(side="right")

    def _show_directory_sizes(self, profile: Profile, statuses: dict[str, DirectoryStatus]):
        # Selection may have changed while sizes were computed
        if self.selected_profile is not profile or not self.directories_frame.winfo_exists():
            return

        for widget in self.directories_frame.winfo_children()[1:]:
            widget.destroy()

        for name, status in statuses.items():
            row = ctk.CTkFrame(self.directories_frame, fg_color="transparent")
            row.pack(fill="x")
            ctk.CTkLabel(row, text=f"{name}/", font=FONTS["small"]).pack(side="left")
            if status.exists:
                text = f"{status.file_count} files, {format_bytes(status.size)}"
                color = "gray"
            else:
                text = "Not present"
                color = COLORS["muted"]
            ctk.CTkLabel(row, text=text, font=FONTS["small"], text_color=color).pack(side="right")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _export_selected(self):
        profile = self.selected_profile
        if profile is None:
            return

        settings = self.config_manager.config.settings
        suggested = f"{profile.display_name}{AppPaths.ARCHIVE_SUFFIX}"
        output_path = choose_save_destination(suggested, parent=self, initial_dir=settings.export_dir)
        if not output_path:
            self._set_status("Export cancelled")
            return

        is_valid, error = validate_output_path(output_path)
        if not is_valid:
            show_error(self, "Export Error", error)
            return

        def on_packaged(metadata: PackageMetadata):
            self.config_manager.config.remember_archive(output_path)
            self.config_manager.save()
            self._set_status(f"Exported {profile.display_name} to {output_path}")
            show_info(
                self,
                "Export Complete",
                f"Profile '{profile.display_name}' was saved to\n{output_path}\n\n"
                f"{metadata.mod_count} mods, {format_bytes(metadata.total_size)}",
            )

        self._run_in_background(
            lambda: self.service.package_profile(profile, output_path),
            on_packaged,
            busy_message=f"Packaging {profile.display_name}...",
            error_title="Export Error",
        )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def _import_archive(self):
        if self.install_root is None:
            show_error(self, "Import Error", "Choose your Minecraft folder before importing a profile.")
            return

        archive_path = choose_open_file(parent=self, initial_dir=self.config_manager.config.settings.export_dir)
        if not archive_path:
            return

        self._run_in_background(
            lambda: self.service.preview_import(archive_path),
            lambda preview: self._confirm_import(archive_path, preview),
            busy_message=f"Reading {archive_path.name}...",
            error_title="Import Error",
        )

    def _confirm_import(self, archive_path: Path, preview: ImportPreview):
        dialog = ImportDialog(self, preview)
        self.wait_window(dialog)

        options = dialog.result
        if options is None:
            self.service.discard_import(preview.handle)
            self._set_status("Import cancelled")
            return

        install_root = self.install_root

        def on_installed(result: InstallResult):
            self.config_manager.config.remember_archive(archive_path)
            self.config_manager.save()
            show_info(
                self,
                "Import Complete",
                f"Profile '{preview.profile.name}' was installed to\n{result.game_dir}\n\n"
                "Restart the Minecraft launcher to see it.",
            )
            self._load_profiles()

        self._run_in_background(
            lambda: self.service.install_profile(preview.handle, install_root, options),
            on_installed,
            busy_message=f"Installing {preview.profile.name}...",
            error_title="Install Error",
        )

    # ------------------------------------------------------------------
    # Settings / lifecycle
    # ------------------------------------------------------------------

    def _open_settings(self):
        """Open the settings dialog."""
        dialog = ConfigDialog(self, self.config_manager, first_run=False)
        self.wait_window(dialog)

        if dialog.config_changed:
            self._refresh_ui()

    def _refresh_ui(self):
        """Refresh after configuration changes."""
        self.service = ProfileTransferService.from_settings(self.config_manager.config.settings)
        self._load_profiles()

    def _on_close(self):
        """Handle window close event."""
        self.destroy()
