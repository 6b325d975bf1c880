"""Import of .lcmc archives: preview, selective install, discard.

An import is a two-step operation. preview() extracts the archive into a
staging directory and returns an ImportPreview owning that directory; the
caller then either installs it or discards it. Installing consumes the
preview, so the staging directory is gone afterwards either way.

    with merger.preview(archive) as preview:
        show(preview.metadata)
        if confirmed:
            merger.install(preview.handle, install_root, options)
"""

import json
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..config.path_validator import sanitize_filename
from ..config.paths import AppPaths
from ..logging_config import get_logger
from .archive import ArchiveCodec
from .errors import InvalidPackageError
from .models import InstallOptions, PackageMetadata, ProfileRecord
from .registry import ProfileRegistry
from .staging import StagingArea, StagingHandle

logger = get_logger("installer")


@dataclass
class ImportPreview:
    """Metadata of an extracted archive plus the staging handle holding it"""
    metadata: PackageMetadata
    profile: ProfileRecord
    handle: StagingHandle

    def __enter__(self) -> "ImportPreview":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.handle.release()


@dataclass
class InstallResult:
    """Outcome of installing a previewed archive"""
    profile_id: str
    game_dir: Path
    installed: list[str] = field(default_factory=list)


class InstallMerger:
    """Extracts archives and merges their content into a Minecraft installation."""

    def __init__(
        self,
        staging: Optional[StagingArea] = None,
        codec: Optional[ArchiveCodec] = None,
        registry: Optional[ProfileRegistry] = None,
    ):
        self.staging = staging or StagingArea()
        self.codec = codec or ArchiveCodec()
        self.registry = registry or ProfileRegistry()

    def preview(self, archive_path: Path) -> ImportPreview:
        """Extract an archive and read its documents.

        Args:
            archive_path: .lcmc file to import

        Returns:
            ImportPreview whose handle the caller must install or discard

        Raises:
            InvalidPackageError: If lcmc.json or profile.json is missing or malformed
            ArchiveReadError, ArchiveFormatError: If the archive cannot be extracted
        """
        logger.info(f"Previewing archive {archive_path}")
        handle = self.staging.create("import")
        try:
            self.codec.extract(archive_path, handle.path)
            metadata, record = self._load_documents(handle.path)
        except Exception:
            handle.release()
            raise

        logger.info(f"Archive contains profile '{record.name}' ({metadata.mod_count} mods)")
        return ImportPreview(metadata=metadata, profile=record, handle=handle)

    def install(self, handle: StagingHandle, install_root: Path, options: InstallOptions) -> InstallResult:
        """Install a previewed archive as a new launcher profile.

        The handle is released when this returns or raises.

        Args:
            handle: Staging handle returned by preview()
            install_root: Minecraft directory to install into
            options: Which content directories to install

        Returns:
            InstallResult with the new profile id and game directory

        Raises:
            StagingReleasedError: If the handle was already installed or discarded
            InvalidPackageError: If the profile document cannot be read
            RegistryError: If the launcher index cannot be updated
            OSError: On filesystem failures while copying
        """
        with handle:
            staging_dir = handle.path
            record = ProfileRecord.from_dict(
                self._read_document(staging_dir / AppPaths.PROFILE_FILE, "profile data")
            )
            target_dir = self._allocate_profile_dir(Path(install_root), record.name)
            logger.info(f"Installing profile '{record.name}' into {target_dir}")

            installed = []
            try:
                for name, include in options.directory_selection().items():
                    source_dir = staging_dir / name
                    if include and source_dir.is_dir():
                        shutil.copytree(source_dir, target_dir / name, dirs_exist_ok=True)
                        installed.append(name)

                profile_id = self.registry.register_profile(install_root, record, target_dir)
            except Exception:
                logger.error(f"Install of '{record.name}' failed, removing {target_dir}")
                shutil.rmtree(target_dir, ignore_errors=True)
                raise

        logger.info(f"Installed '{record.name}' with {', '.join(installed) or 'no content directories'}")
        return InstallResult(profile_id=profile_id, game_dir=target_dir, installed=installed)

    def discard(self, handle: StagingHandle) -> None:
        """Release a previewed archive that will not be installed."""
        handle.release()

    @staticmethod
    def _allocate_profile_dir(install_root: Path, profile_name: str) -> Path:
        """Create a new profile directory, suffixing the name if it is taken."""
        profiles_dir = install_root / AppPaths.PROFILES_SUBDIR
        safe_name = sanitize_filename(profile_name)

        target_dir = profiles_dir / safe_name
        counter = 1
        while target_dir.exists():
            target_dir = profiles_dir / f"{safe_name}_{counter}"
            counter += 1

        target_dir.mkdir(parents=True)
        return target_dir

    def _load_documents(self, staging_dir: Path) -> tuple[PackageMetadata, ProfileRecord]:
        metadata_data = self._read_document(staging_dir / AppPaths.METADATA_FILE, "metadata")
        profile_data = self._read_document(staging_dir / AppPaths.PROFILE_FILE, "profile data")
        try:
            return PackageMetadata.from_dict(metadata_data), ProfileRecord.from_dict(profile_data)
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidPackageError(f"Invalid LCMC file: malformed metadata ({e})") from e

    @staticmethod
    def _read_document(path: Path, label: str) -> dict[str, Any]:
        if not path.is_file():
            raise InvalidPackageError(f"Invalid LCMC file: missing {label}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidPackageError(f"Invalid LCMC file: unreadable {label}") from e
        if not isinstance(data, dict):
            raise InvalidPackageError(f"Invalid LCMC file: malformed {label}")
        return data
