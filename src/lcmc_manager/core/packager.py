"""Packaging of a launcher profile into an .lcmc archive.

Archive layout:

    profile.lcmc (zip)
        lcmc.json          PackageMetadata
        profile.json       ProfileRecord
        mods/              copied wholesale when present in the game directory
        config/
        resourcepacks/
        saves/
        shaderpacks/
"""

import getpass
import json
import shutil
from pathlib import Path
from typing import Iterable, Optional

from ..config.paths import AppPaths
from ..logging_config import get_logger
from .archive import ArchiveCodec
from .errors import PackagingError
from .models import (
    Compatibility,
    DirectoryInfo,
    ModEntry,
    ModLoader,
    PackageMetadata,
    Profile,
    utc_now_iso,
)
from .sizing import directory_size, format_bytes
from .staging import StagingArea

logger = get_logger("packager")

FORGE_INDICATORS = ("forge", "fml", "minecraftforge")
FABRIC_INDICATORS = ("fabric", "fabricloader", "quilt")

# Substrings of well-known library/dependency mods
REQUIRED_MOD_INDICATORS = (
    "forge", "fabric", "quilt", "architectury", "cloth-config",
    "jei", "rei", "emi", "optifine", "sodium", "iris",
)


def detect_mod_loader(mods: Iterable[ModEntry]) -> ModLoader:
    """Guess the mod loader from mod file names.

    The first mod whose name contains any indicator decides; Forge indicators
    are checked before Fabric ones for each mod.
    """
    for mod in mods:
        mod_name = mod.name.lower()
        if any(indicator in mod_name for indicator in FORGE_INDICATORS):
            return ModLoader.FORGE
        if any(indicator in mod_name for indicator in FABRIC_INDICATORS):
            return ModLoader.FABRIC
    return ModLoader.UNKNOWN


def infer_required_mods(mods: Iterable[ModEntry]) -> list[str]:
    """List dependency indicators found in mod names, once each, first-seen order."""
    required: list[str] = []
    for mod in mods:
        mod_name = mod.name.lower()
        for indicator in REQUIRED_MOD_INDICATORS:
            if indicator in mod_name and indicator not in required:
                required.append(indicator)
    return required


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


class PackageBuilder:
    """Builds .lcmc archives from launcher profiles."""

    def __init__(self, staging: Optional[StagingArea] = None, codec: Optional[ArchiveCodec] = None):
        self.staging = staging or StagingArea()
        self.codec = codec or ArchiveCodec()

    def package(self, profile: Profile, output_path: Path) -> PackageMetadata:
        """Package a profile's content directories into an archive.

        Args:
            profile: Profile to package (its mods list is used as given)
            output_path: Archive file to create

        Returns:
            The metadata written into the archive

        Raises:
            PackagingError: If any step fails; the cause is chained
        """
        output_path = Path(output_path)
        logger.info(f"Packaging profile '{profile.name}' from {profile.game_dir} to {output_path}")

        writing = False
        try:
            with self.staging.scoped("package") as staging_dir:
                metadata = self._stage(profile, staging_dir)
                writing = True
                self.codec.build(staging_dir, output_path)
        except Exception as e:
            logger.error(f"Error packaging profile '{profile.name}': {e}")
            if writing:
                self._remove_partial_output(output_path)
            raise PackagingError(f"Failed to package profile '{profile.name}': {e}") from e

        logger.info(
            f"Packaged '{profile.name}': {metadata.mod_count} mods, "
            f"{format_bytes(metadata.total_size)} in {len(metadata.directories)} directories"
        )
        return metadata

    def _stage(self, profile: Profile, staging_dir: Path) -> PackageMetadata:
        """Copy content and write both documents into staging_dir."""
        game_dir = Path(profile.game_dir)
        present = [name for name in AppPaths.TRACKED_DIRECTORIES if (game_dir / name).is_dir()]

        directory_info = {}
        total_size = 0
        for name in present:
            sized = directory_size(game_dir / name)
            directory_info[name] = DirectoryInfo(
                file_count=sized.file_count,
                size=sized.total_bytes,
                size_formatted=format_bytes(sized.total_bytes),
            )
            total_size += sized.total_bytes

        directories = []
        for name in present:
            shutil.copytree(game_dir / name, staging_dir / name)
            directories.append(name)

        metadata = PackageMetadata(
            name=profile.name,
            creator=_current_user(),
            created=utc_now_iso(),
            mc_version=profile.last_version_id,
            mod_count=len(profile.mods),
            description=f"Minecraft profile: {profile.name}",
            total_size=total_size,
            mods=[mod.to_summary() for mod in profile.mods],
            directories=directories,
            directory_info=directory_info,
            compatibility=Compatibility(
                minecraft_versions=[profile.last_version_id] if profile.last_version_id else [],
                mod_loader=detect_mod_loader(profile.mods),
                required_mods=infer_required_mods(profile.mods),
            ),
        )

        self._write_json(staging_dir / AppPaths.PROFILE_FILE, profile.to_record().to_dict())
        self._write_json(staging_dir / AppPaths.METADATA_FILE, metadata.to_dict())
        return metadata

    @staticmethod
    def _write_json(path: Path, data: dict) -> None:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    @staticmethod
    def _remove_partial_output(output_path: Path) -> None:
        try:
            if output_path.is_file():
                output_path.unlink()
        except OSError as e:
            logger.warning(f"Could not remove partial archive {output_path}: {e}")
