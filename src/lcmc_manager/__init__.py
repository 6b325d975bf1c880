"""LCMC Manager - Package and share Minecraft launcher profiles.

This application provides:
    - Listing of launcher profiles with their installed mods
    - Export of a profile (mods, configs, resource packs, saves, shader packs)
      into a single portable .lcmc archive with embedded metadata
    - Import of an .lcmc archive with a metadata preview, selective install
      into a new profile directory, and launcher registration

The application uses CustomTkinter for the GUI and stores configuration in
a per-user application data directory.

Package Structure:
    app: Main application entry point and orchestrator
    config: Configuration management, paths, schemas, and path validation
    core: Profile registry, archive codec, packaging and install pipeline
    gui: User interface components (main window, dialogs, widgets)

Quick Start:
    Run from command line::

        python -m lcmc_manager

    Or programmatically::

        from lcmc_manager.core import ProfileTransferService
        service = ProfileTransferService()
        profiles = service.list_profiles(service.default_install_root())

Configuration:
    - Config file: <config dir>/configuration.xml
    - Log file: <config dir>/lcmc_manager.log
    - Staging: <temp dir>/lcmc/
"""

__version__ = "1.0.0"
__app_name__ = "LCMC Manager"
