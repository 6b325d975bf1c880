"""Operations exposed to the user interface.

ProfileTransferService wires the registry, packager and installer to one
shared staging area and is the only core object the GUI talks to. Every
method blocks on disk I/O; the GUI calls them from worker threads.
"""

from pathlib import Path
from typing import Optional

from ..config.paths import AppPaths, default_install_root
from ..config.schema import Settings
from ..logging_config import get_logger
from .archive import ArchiveCodec
from .errors import LcmcError
from .installer import ImportPreview, InstallMerger, InstallResult
from .models import InstallOptions, PackageMetadata, Profile
from .packager import PackageBuilder
from .registry import ProfileRegistry
from .staging import StagingArea, StagingHandle

logger = get_logger("service")


class ProfileTransferService:
    """Facade over listing, packaging, previewing and installing profiles."""

    def __init__(self, staging_root: Optional[Path] = None, registry: Optional[ProfileRegistry] = None):
        self.staging = StagingArea(staging_root)
        self.codec = ArchiveCodec()
        self.registry = registry or ProfileRegistry()
        self.builder = PackageBuilder(self.staging, self.codec)
        self.merger = InstallMerger(self.staging, self.codec, self.registry)

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProfileTransferService":
        return cls(staging_root=settings.staging_root)

    def default_install_root(self) -> Path:
        return default_install_root()

    def list_profiles(self, install_root: Path) -> list[Profile]:
        return self.registry.list_profiles(install_root)

    def package_profile(self, profile: Profile, output_path: Path) -> PackageMetadata:
        return self.builder.package(profile, output_path)

    def preview_import(self, archive_path: Path) -> ImportPreview:
        return self.merger.preview(archive_path)

    def install_profile(
        self,
        handle: StagingHandle,
        install_root: Path,
        options: Optional[InstallOptions] = None,
    ) -> InstallResult:
        return self.merger.install(handle, install_root, options or InstallOptions())

    def discard_import(self, handle: StagingHandle) -> None:
        self.merger.discard(handle)

    def validate_package(self, archive_path: Path) -> bool:
        """Check that an archive extracts and carries both documents.

        Leaves no staging directory behind. Archives without both documents
        are rejected from the member list without extracting anything.
        """
        try:
            members = self.codec.list_members(archive_path)
            missing = [name for name in (AppPaths.METADATA_FILE, AppPaths.PROFILE_FILE) if name not in members]
            if missing:
                logger.info(f"Archive {archive_path} failed validation: missing {', '.join(missing)}")
                return False

            with self.merger.preview(archive_path):
                return True
        except LcmcError as e:
            logger.info(f"Archive {archive_path} failed validation: {e}")
            return False

    def purge_stale_staging(self, max_age_hours: float) -> list[Path]:
        """Remove staging directories abandoned by earlier sessions."""
        return self.staging.purge_stale(max_age_hours * 3600)
