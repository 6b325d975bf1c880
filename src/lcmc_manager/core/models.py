"""Data models for profiles, mods and .lcmc package documents.

JSON documents (launcher_profiles.json, profile.json, lcmc.json) use the
launcher's camelCase keys; the dataclasses below use snake_case attributes
and convert at the to_dict/from_dict boundary.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from ..config.paths import AppPaths

FORMAT_VERSION = "1.0.0"


class ModLoader(Enum):
    """Mod loader label inferred from mod file names"""
    FORGE = "Forge"
    FABRIC = "Fabric"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Any) -> "ModLoader":
        for loader in cls:
            if loader.value == value:
                return loader
        return cls.UNKNOWN


def utc_now_iso() -> str:
    """Current time as an ISO-8601 string in UTC, millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _timestamp_iso(timestamp: float) -> str:
    moment = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class ModEntry:
    """A mod artifact (.jar) found directly inside a profile's mods directory"""
    name: str
    file_name: str
    size: int  # Bytes
    modified: str  # ISO-8601 modification time
    path: Path

    @classmethod
    def from_file(cls, path: Path) -> "ModEntry":
        stat = path.stat()
        return cls(
            name=path.name,
            file_name=path.name,
            size=stat.st_size,
            modified=_timestamp_iso(stat.st_mtime),
            path=path,
        )

    def to_summary(self) -> "ModSummary":
        return ModSummary(
            name=self.name,
            file_name=self.file_name,
            size=self.size,
            modified=self.modified,
        )


@dataclass
class ModSummary:
    """Mod entry as recorded in package metadata (no local path)"""
    name: str
    file_name: str
    size: int = 0
    modified: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fileName": self.file_name,
            "size": self.size,
            "modified": self.modified,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModSummary":
        name = str(data.get("name") or data.get("fileName") or "")
        return cls(
            name=name,
            file_name=str(data.get("fileName") or name),
            size=int(data.get("size") or 0),
            modified=data.get("modified"),
        )


@dataclass
class Profile:
    """A launcher profile cross-referenced with a live scan of its mods.

    Re-derived on every registry read, never mutated in place.
    """
    id: str
    name: str
    game_dir: Path
    last_version_id: Optional[str] = None
    created: Optional[str] = None
    last_used: Optional[str] = None
    icon: Optional[str] = None
    type: str = "custom"
    mods: list[ModEntry] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        """Name shown to the user; unnamed launcher profiles fall back to their type."""
        return self.name or self.type or self.id

    @property
    def mod_count(self) -> int:
        return len(self.mods)

    def to_record(self) -> "ProfileRecord":
        """Subset of the profile needed to recreate a registry entry."""
        return ProfileRecord(
            name=self.name,
            version=self.last_version_id,
            id=self.id,
            created=self.created,
            last_used=self.last_used,
            type=self.type,
            game_dir=str(self.game_dir),
        )


@dataclass
class ProfileRecord:
    """Contents of profile.json inside an archive"""
    name: str
    version: Optional[str] = None
    id: Optional[str] = None
    created: Optional[str] = None
    last_used: Optional[str] = None
    type: Optional[str] = None
    game_dir: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "id": self.id,
            "created": self.created,
            "lastUsed": self.last_used,
            "type": self.type,
            "gameDir": self.game_dir,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProfileRecord":
        return cls(
            name=str(data.get("name") or ""),
            version=data.get("version"),
            id=data.get("id"),
            created=data.get("created"),
            last_used=data.get("lastUsed"),
            type=data.get("type"),
            game_dir=data.get("gameDir"),
        )


@dataclass
class DirectoryInfo:
    """Size summary of one tracked directory"""
    file_count: int
    size: int
    size_formatted: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "fileCount": self.file_count,
            "size": self.size,
            "sizeFormatted": self.size_formatted,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DirectoryInfo":
        return cls(
            file_count=int(data.get("fileCount") or 0),
            size=int(data.get("size") or 0),
            size_formatted=str(data.get("sizeFormatted") or ""),
        )


@dataclass
class DirectoryStatus:
    """Presence and size of a content directory inside a game directory"""
    path: Path
    exists: bool
    file_count: int = 0
    size: int = 0


@dataclass
class Compatibility:
    """Heuristic compatibility labels for a package"""
    minecraft_versions: list[str] = field(default_factory=list)
    mod_loader: ModLoader = ModLoader.UNKNOWN
    required_mods: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "minecraftVersions": list(self.minecraft_versions),
            "modLoader": self.mod_loader.value,
            "requiredMods": list(self.required_mods),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Compatibility":
        return cls(
            minecraft_versions=[v for v in data.get("minecraftVersions") or [] if v],
            mod_loader=ModLoader.parse(data.get("modLoader")),
            required_mods=list(data.get("requiredMods") or []),
        )


@dataclass
class PackageMetadata:
    """Contents of lcmc.json inside an archive. Written once per package."""
    name: str
    creator: str
    created: str
    mc_version: Optional[str]
    mod_count: int
    description: str
    total_size: int
    format_version: str = FORMAT_VERSION
    mods: list[ModSummary] = field(default_factory=list)
    directories: list[str] = field(default_factory=list)
    directory_info: dict[str, DirectoryInfo] = field(default_factory=dict)
    compatibility: Compatibility = field(default_factory=Compatibility)

    def to_dict(self) -> dict[str, Any]:
        return {
            "formatVersion": self.format_version,
            "name": self.name,
            "creator": self.creator,
            "created": self.created,
            "mcVersion": self.mc_version,
            "modCount": self.mod_count,
            "description": self.description,
            "totalSize": self.total_size,
            "mods": [mod.to_dict() for mod in self.mods],
            "directories": list(self.directories),
            "directoryInfo": {name: info.to_dict() for name, info in self.directory_info.items()},
            "compatibility": self.compatibility.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PackageMetadata":
        # Archives written by older tools carry the format under "version"
        format_version = data.get("formatVersion") or data.get("version") or FORMAT_VERSION
        return cls(
            format_version=str(format_version),
            name=str(data.get("name") or ""),
            creator=str(data.get("creator") or ""),
            created=str(data.get("created") or ""),
            mc_version=data.get("mcVersion"),
            mod_count=int(data.get("modCount") or 0),
            description=str(data.get("description") or ""),
            total_size=int(data.get("totalSize") or 0),
            mods=[ModSummary.from_dict(m) for m in data.get("mods") or [] if isinstance(m, dict)],
            directories=[d for d in data.get("directories") or [] if isinstance(d, str)],
            directory_info={
                name: DirectoryInfo.from_dict(info)
                for name, info in (data.get("directoryInfo") or {}).items()
                if isinstance(info, dict)
            },
            compatibility=Compatibility.from_dict(data.get("compatibility") or {}),
        )


@dataclass
class InstallOptions:
    """Which archive directories to install into the new profile.

    Mods and configs install unless turned off; resource packs, shader packs
    and saves only when requested. Screenshots are never installed.
    """
    install_mods: bool = True
    install_configs: bool = True
    install_resources: bool = False
    install_saves: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InstallOptions":
        return cls(
            install_mods=data.get("installMods") is not False,
            install_configs=data.get("installConfigs") is not False,
            install_resources=data.get("installResources") is True,
            install_saves=data.get("installSaves") is True,
        )

    def directory_selection(self) -> dict[str, bool]:
        """Inclusion decision for every recognized directory, in tracked order."""
        selection = {
            "mods": self.install_mods,
            "config": self.install_configs,
            "resourcepacks": self.install_resources,
            "saves": self.install_saves,
            "shaderpacks": self.install_resources,
        }
        for name in AppPaths.EXCLUDED_DIRECTORIES:
            selection[name] = False
        return selection
