"""Auto-detect the Minecraft installation"""

from pathlib import Path
from typing import Optional

from ..config.paths import AppPaths, default_install_root


class InstallDetector:
    """Detect a Minecraft launcher installation at the platform default location."""

    def __init__(self, candidate: Optional[Path] = None):
        self.candidate = candidate or default_install_root()

    def detect(self) -> Optional[Path]:
        """Return the default install root if it holds a launcher profile index.

        Returns:
            Path to the install root if found, None otherwise
        """
        if AppPaths.profile_index(self.candidate).exists():
            return self.candidate
        return None
