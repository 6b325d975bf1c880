"""Core business logic module.

This module contains the packaging and import pipeline for launcher profiles.

Submodules:
    registry: ProfileRegistry for reading/writing launcher_profiles.json
    sizing: Recursive directory size accounting and byte formatting
    archive: ArchiveCodec for building/extracting the zip container
    packager: PackageBuilder producing .lcmc archives with metadata
    installer: InstallMerger for previewing and installing archives
    staging: StagingArea allocating scoped scratch directories
    service: ProfileTransferService, the facade used by the GUI
    install_detector: InstallDetector for finding the default .minecraft folder

An .lcmc file is a zip archive holding the profile's content directories
plus two JSON documents, lcmc.json (package metadata) and profile.json
(the launcher profile record).
"""

from .errors import (
    ArchiveFormatError,
    ArchiveReadError,
    ArchiveWriteError,
    InvalidPackageError,
    LcmcError,
    PackagingError,
    RegistryError,
    RegistryLockError,
    RegistryMissingError,
    StagingReleasedError,
)
from .install_detector import InstallDetector
from .installer import ImportPreview, InstallMerger, InstallResult
from .models import InstallOptions, ModEntry, ModLoader, PackageMetadata, Profile, ProfileRecord
from .packager import PackageBuilder
from .registry import ProfileRegistry
from .service import ProfileTransferService

__all__ = [
    "ArchiveFormatError",
    "ArchiveReadError",
    "ArchiveWriteError",
    "InvalidPackageError",
    "LcmcError",
    "PackagingError",
    "RegistryError",
    "RegistryLockError",
    "RegistryMissingError",
    "StagingReleasedError",
    "InstallDetector",
    "ImportPreview",
    "InstallMerger",
    "InstallResult",
    "InstallOptions",
    "ModEntry",
    "ModLoader",
    "PackageMetadata",
    "Profile",
    "ProfileRecord",
    "PackageBuilder",
    "ProfileRegistry",
    "ProfileTransferService",
]
