"""Default paths for Minecraft installations, archives and app data"""

import os
import sys
import tempfile
from pathlib import Path
from typing import Mapping, Optional


def _app_data_root() -> Path:
    """Resolve the per-user directory holding configuration and logs.

    LCMC_MANAGER_HOME overrides the platform default.
    """
    override = os.environ.get("LCMC_MANAGER_HOME")
    if override:
        return Path(override)
    if sys.platform == "win32":
        return Path(os.path.expandvars(r"%APPDATA%\LCMCManager"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "LCMCManager"
    return Path.home() / ".config" / "lcmc-manager"


def default_install_root(
    platform: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return the conventional Minecraft install root for a platform.

    Existence of the returned path is not checked.

    Args:
        platform: Platform identifier as reported by sys.platform
            (defaults to the running platform)
        environ: Environment mapping used to look up APPDATA
        home: User home directory

    Returns:
        Path to the platform's default .minecraft directory
    """
    platform = platform if platform is not None else sys.platform
    environ = environ if environ is not None else os.environ
    home = home if home is not None else Path.home()

    if platform == "win32":
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / ".minecraft"
    if platform == "darwin":
        return home / "Library" / "Application Support" / "minecraft"
    return home / ".minecraft"


class AppPaths:
    """File names and default locations used by the application."""

    # Configuration and logs
    CONFIG_DIR = _app_data_root()
    CONFIG_FILE = CONFIG_DIR / "configuration.xml"
    LOG_FILE_NAME = "lcmc_manager.log"

    # Scratch space for packaging and import previews
    STAGING_DIR = Path(tempfile.gettempdir()) / "lcmc"

    # Launcher layout under an install root
    PROFILE_INDEX_NAME = "launcher_profiles.json"
    PROFILES_SUBDIR = "profiles"

    # Archive layout
    ARCHIVE_SUFFIX = ".lcmc"
    METADATA_FILE = "lcmc.json"
    PROFILE_FILE = "profile.json"

    # Content directories, in packaging order
    TRACKED_DIRECTORIES = ("mods", "config", "resourcepacks", "saves", "shaderpacks")
    # Recognized but never installed
    EXCLUDED_DIRECTORIES = ("screenshots",)

    @classmethod
    def profile_index(cls, install_root: Path) -> Path:
        """Path of the launcher profile index under an install root."""
        return Path(install_root) / cls.PROFILE_INDEX_NAME

    @classmethod
    def ensure_config_dir(cls) -> Path:
        """Ensure the configuration directory exists.

        Returns:
            Path to the configuration directory
        """
        cls.CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        return cls.CONFIG_DIR

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and ~ in a path string."""
        return Path(os.path.expanduser(os.path.expandvars(path_str)))
