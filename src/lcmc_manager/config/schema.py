"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """Application settings"""
    first_run_complete: bool = False
    install_root: Optional[Path] = None  # .minecraft directory
    export_dir: Optional[Path] = None  # Default folder for saved archives
    staging_root: Optional[Path] = None  # None means the system temp dir
    staging_max_age_hours: int = 24


@dataclass
class AppConfiguration:
    """Complete application configuration"""
    settings: Settings = field(default_factory=Settings)
    recent_archives: list[Path] = field(default_factory=list)

    def remember_archive(self, archive_path: Path, limit: int = 10) -> None:
        """Record an archive as most recently used.

        Args:
            archive_path: Archive that was exported or imported
            limit: Maximum number of entries kept
        """
        self.recent_archives = [p for p in self.recent_archives if p != archive_path]
        self.recent_archives.insert(0, archive_path)
        del self.recent_archives[limit:]
