"""Import preview dialog with install options"""

from typing import Optional

import customtkinter as ctk

from ..core.installer import ImportPreview
from ..core.models import InstallOptions
from ..core.sizing import format_bytes
from .styles import COLORS, FONTS, LOADER_COLORS, PADDING, WINDOW_SIZES


class ImportDialog(ctk.CTkToplevel):
    """Shows what an archive contains and asks which parts to install.

    After the dialog closes, `result` holds the chosen InstallOptions, or None
    if the user cancelled.
    """

    def __init__(self, parent, preview: ImportPreview):
        super().__init__(parent)

        self.preview = preview
        self.result: Optional[InstallOptions] = None

        self.title("Import Profile")
        width, height = WINDOW_SIZES["import_dialog"]
        self.geometry(f"{width}x{height}")
        self.resizable(False, True)
        self.transient(parent)
        self.grab_set()

        # Center on parent
        self.update_idletasks()
        x = parent.winfo_x() + (parent.winfo_width() - width) // 2
        y = parent.winfo_y() + (parent.winfo_height() - height) // 2
        self.geometry(f"+{x}+{y}")

        defaults = InstallOptions()
        self.mods_var = ctk.BooleanVar(value=defaults.install_mods)
        self.configs_var = ctk.BooleanVar(value=defaults.install_configs)
        self.resources_var = ctk.BooleanVar(value=defaults.install_resources)
        self.saves_var = ctk.BooleanVar(value=defaults.install_saves)

        self._create_ui()

        self.protocol("WM_DELETE_WINDOW", self._on_cancel)
        self.focus_force()

    def _create_ui(self):
        metadata = self.preview.metadata
        loader = metadata.compatibility.mod_loader.value

        container = ctk.CTkFrame(self)
        container.pack(fill="both", expand=True, padx=PADDING["medium"], pady=PADDING["medium"])

        title = ctk.CTkLabel(container, text=metadata.name or self.preview.profile.name, font=FONTS["title"])
        title.pack(anchor="w")

        if metadata.description:
            desc = ctk.CTkLabel(container, text=metadata.description, font=FONTS["small"], text_color="gray")
            desc.pack(anchor="w", pady=(0, PADDING["small"]))

        details = ctk.CTkFrame(container, fg_color="transparent")
        details.pack(fill="x", pady=(0, PADDING["small"]))
        details.grid_columnconfigure(1, weight=1)

        rows = [
            ("Created by", metadata.creator or "Unknown"),
            ("Minecraft", metadata.mc_version or "Unknown"),
            ("Mods", str(metadata.mod_count)),
            ("Total size", format_bytes(metadata.total_size)),
        ]
        if metadata.compatibility.required_mods:
            rows.append(("Required", ", ".join(metadata.compatibility.required_mods)))

        for row, (label, value) in enumerate(rows):
            ctk.CTkLabel(details, text=f"{label}:", font=FONTS["body"]).grid(row=row, column=0, sticky="w", padx=(0, 10))
            ctk.CTkLabel(details, text=value, font=FONTS["body"], wraplength=320, justify="left").grid(
                row=row, column=1, sticky="w"
            )

        loader_row = len(rows)
        ctk.CTkLabel(details, text="Mod loader:", font=FONTS["body"]).grid(row=loader_row, column=0, sticky="w", padx=(0, 10))
        ctk.CTkLabel(
            details, text=loader, font=FONTS["body"], text_color=LOADER_COLORS.get(loader, COLORS["muted"])
        ).grid(row=loader_row, column=1, sticky="w")

        # Directory breakdown
        dir_header = ctk.CTkLabel(container, text="Contents", font=FONTS["heading"])
        dir_header.pack(anchor="w", pady=(PADDING["small"], 0))

        dir_list = ctk.CTkScrollableFrame(container, height=110)
        dir_list.pack(fill="x", pady=(0, PADDING["small"]))

        if not metadata.directories:
            ctk.CTkLabel(dir_list, text="No content directories", font=FONTS["small"], text_color="gray").pack(anchor="w")
        for name in metadata.directories:
            info = metadata.directory_info.get(name)
            summary = f"{info.file_count} files, {info.size_formatted}" if info else ""
            row = ctk.CTkFrame(dir_list, fg_color="transparent")
            row.pack(fill="x")
            ctk.CTkLabel(row, text=f"{name}/", font=FONTS["body"]).pack(side="left")
            ctk.CTkLabel(row, text=summary, font=FONTS["small"], text_color="gray").pack(side="right")

        # Install options
        options_header = ctk.CTkLabel(container, text="Install", font=FONTS["heading"])
        options_header.pack(anchor="w", pady=(PADDING["small"], 0))

        for text, var in (
            ("Mods", self.mods_var),
            ("Configs", self.configs_var),
            ("Resource packs and shader packs", self.resources_var),
            ("Saves (worlds)", self.saves_var),
        ):
            ctk.CTkCheckBox(container, text=text, variable=var, font=FONTS["body"]).pack(anchor="w", pady=2)

        # Buttons
        button_frame = ctk.CTkFrame(container, fg_color="transparent")
        button_frame.pack(fill="x", side="bottom", pady=(PADDING["small"], 0))

        cancel_btn = ctk.CTkButton(
            button_frame,
            text="Cancel",
            width=100,
            fg_color=COLORS["danger"],
            hover_color=COLORS["danger_hover"],
            command=self._on_cancel,
        )
        cancel_btn.pack(side="left")

        install_btn = ctk.CTkButton(
            button_frame,
            text="Install",
            width=120,
            fg_color=COLORS["success"],
            hover_color=COLORS["success_hover"],
            command=self._on_install,
        )
        install_btn.pack(side="right")

    def _on_install(self):
        self.result = InstallOptions(
            install_mods=self.mods_var.get(),
            install_configs=self.configs_var.get(),
            install_resources=self.resources_var.get(),
            install_saves=self.saves_var.get(),
        )
        self.destroy()

    def _on_cancel(self):
        self.result = None
        self.destroy()
