"""Configuration management - load/save XML configuration"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional
from xml.dom import minidom

from .paths import AppPaths
from .schema import AppConfiguration, Settings
from ..logging_config import get_logger

logger = get_logger("config_manager")


class ConfigurationManager:
    """Manages application configuration persistence.

    Handles loading and saving configuration to XML format,
    including first-run detection and default configuration creation.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or AppPaths.CONFIG_FILE
        self.config: Optional[AppConfiguration] = None

    def is_first_run(self) -> bool:
        """Check if this is the first run of the application.

        First run is detected if:
        - Configuration file does not exist, OR
        - Configuration exists but FirstRunComplete is False

        Returns:
            True if this is the first run
        """
        if not self.config_path.exists():
            return True

        try:
            self.load()
            return not self.config.settings.first_run_complete
        except (ET.ParseError, FileNotFoundError, ValueError) as e:
            # Corrupted config = treat as first run
            logger.warning(f"Could not load config, treating as first run: {e}")
            return True

    def load(self) -> AppConfiguration:
        """Load configuration from XML file.

        Returns:
            AppConfiguration object with loaded settings

        Raises:
            FileNotFoundError: If config file doesn't exist
            ET.ParseError: If XML is malformed
            ValueError: If a numeric setting is malformed
        """
        logger.debug(f"Loading configuration from {self.config_path}")
        tree = ET.parse(self.config_path)
        root = tree.getroot()

        settings_elem = root.find("Settings")
        if settings_elem is not None:
            settings = Settings(
                first_run_complete=self._parse_bool(settings_elem, "FirstRunComplete", False),
                install_root=self._parse_path(settings_elem, "InstallRoot"),
                export_dir=self._parse_path(settings_elem, "ExportDirectory"),
                staging_root=self._parse_path(settings_elem, "StagingRoot"),
                staging_max_age_hours=int(self._get_text(settings_elem, "StagingMaxAgeHours", "24")),
            )
        else:
            # Missing Settings element - use all defaults
            settings = Settings()

        recent = []
        recent_elem = root.find("RecentArchives")
        if recent_elem is not None:
            for archive_elem in recent_elem.findall("Archive"):
                if archive_elem.text and archive_elem.text.strip():
                    recent.append(Path(archive_elem.text.strip()))

        self.config = AppConfiguration(settings=settings, recent_archives=recent)
        logger.debug(f"Configuration loaded: install root {settings.install_root}")
        return self.config

    def save(self) -> None:
        """Save current configuration to XML file.

        Creates the configuration directory if it doesn't exist.
        """
        if self.config is None:
            raise ValueError("No configuration to save")

        logger.debug(f"Saving configuration to {self.config_path}")
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        settings = self.config.settings
        root = ET.Element("LCMCManager", version="1.0")

        settings_elem = ET.SubElement(root, "Settings")
        ET.SubElement(settings_elem, "FirstRunComplete").text = str(settings.first_run_complete).lower()
        ET.SubElement(settings_elem, "InstallRoot").text = str(settings.install_root) if settings.install_root else ""
        ET.SubElement(settings_elem, "ExportDirectory").text = str(settings.export_dir) if settings.export_dir else ""
        ET.SubElement(settings_elem, "StagingRoot").text = str(settings.staging_root) if settings.staging_root else ""
        ET.SubElement(settings_elem, "StagingMaxAgeHours").text = str(settings.staging_max_age_hours)

        recent_elem = ET.SubElement(root, "RecentArchives")
        for archive_path in self.config.recent_archives:
            ET.SubElement(recent_elem, "Archive").text = str(archive_path)

        # Write pretty-printed XML
        xml_str = minidom.parseString(ET.tostring(root, encoding="unicode")).toprettyxml(indent="  ")
        # Remove extra blank lines that minidom adds
        lines = [line for line in xml_str.split('\n') if line.strip()]
        xml_str = '\n'.join(lines)

        self.config_path.write_text(xml_str, encoding="utf-8")

    def create_default(self, install_root: Optional[Path] = None) -> AppConfiguration:
        """Create a default configuration.

        Args:
            install_root: Optional pre-detected Minecraft directory

        Returns:
            New AppConfiguration with default values
        """
        self.config = AppConfiguration(
            settings=Settings(
                first_run_complete=False,
                install_root=install_root,
            ),
        )
        return self.config

    # Helper methods for XML parsing
    @staticmethod
    def _get_text(parent: ET.Element, tag: str, default: str = "") -> str:
        """Get text content of a child element."""
        elem = parent.find(tag)
        return elem.text if elem is not None and elem.text else default

    @staticmethod
    def _parse_bool(parent: ET.Element, tag: str, default: bool = False) -> bool:
        """Parse a boolean value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text:
            return elem.text.lower() == "true"
        return default

    @staticmethod
    def _parse_path(parent: ET.Element, tag: str) -> Optional[Path]:
        """Parse a path value from child element."""
        elem = parent.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return AppPaths.expand_path(elem.text.strip())
        return None
