"""Exceptions raised by the packaging and install pipeline"""

from pathlib import Path


class LcmcError(Exception):
    """Base class for all LCMC Manager errors"""
    pass


class RegistryError(LcmcError):
    """Exception raised when the launcher profile index cannot be used"""
    pass


class RegistryMissingError(RegistryError):
    """No launcher profile index exists at the given install root"""

    def __init__(self, install_root: Path):
        self.install_root = install_root
        super().__init__(
            "Minecraft launcher profiles not found. "
            f"Please select the correct Minecraft directory (looked in {install_root})."
        )


class RegistryLockError(RegistryError):
    """The profile index is locked by another writer"""
    pass


class ArchiveError(LcmcError):
    """Exception raised for archive container errors"""
    pass


class ArchiveReadError(ArchiveError):
    """The archive could not be read or its contents are corrupt"""
    pass


class ArchiveWriteError(ArchiveError):
    """The archive could not be written"""
    pass


class ArchiveFormatError(ArchiveError):
    """The file is not a usable archive container"""
    pass


class InvalidPackageError(LcmcError):
    """The archive lacks the metadata or profile document"""
    pass


class PackagingError(LcmcError):
    """Exception raised when packaging a profile fails"""
    pass


class StagingReleasedError(LcmcError):
    """A staging handle was used after it was released"""
    pass
