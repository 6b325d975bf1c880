"""Zip container codec for .lcmc archives"""

import zipfile
import zlib
from pathlib import Path

from ..config.path_validator import is_path_under_root
from ..logging_config import get_logger
from .errors import ArchiveFormatError, ArchiveReadError, ArchiveWriteError

logger = get_logger("archive")


class ArchiveCodec:
    """Build and extract the zip container behind an .lcmc file.

    Archives are rooted at the staging directory's contents, so an archive
    built from staging/{mods,lcmc.json} holds mods/... and lcmc.json at its
    root.
    """

    def __init__(self, compresslevel: int = 9):
        self.compresslevel = compresslevel

    def build(self, staging_dir: Path, output_path: Path) -> None:
        """Write every file and directory under staging_dir into a zip archive.

        A failed build may leave a partial file at output_path; removing it is
        the caller's responsibility.

        Args:
            staging_dir: Directory whose contents become the archive root
            output_path: Archive file to create (overwritten if present)

        Raises:
            ArchiveWriteError: On any I/O or encoding failure
        """
        staging_dir = Path(staging_dir)
        logger.info(f"Building archive {output_path} from {staging_dir}")
        entry_count = 0
        try:
            with zipfile.ZipFile(
                output_path,
                "w",
                zipfile.ZIP_DEFLATED,
                compresslevel=self.compresslevel,
                strict_timestamps=False,
            ) as zf:
                for item in sorted(staging_dir.rglob("*")):
                    arcname = item.relative_to(staging_dir).as_posix()
                    if item.is_dir():
                        # Keep empty directories so they survive a round trip
                        zf.write(item, arcname + "/")
                    else:
                        zf.write(item, arcname)
                        entry_count += 1
        except (OSError, ValueError, zipfile.LargeZipFile) as e:
            logger.error(f"Failed to build archive {output_path}: {e}")
            raise ArchiveWriteError(f"Failed to write archive {output_path}: {e}") from e

        logger.info(f"Archive created: {entry_count} files archived")

    def extract(self, archive_path: Path, destination_dir: Path) -> None:
        """Fully extract an archive into destination_dir.

        Args:
            archive_path: Archive to read
            destination_dir: Directory to extract into (created if missing)

        Raises:
            ArchiveReadError: If the file cannot be read or member data is corrupt
            ArchiveFormatError: If the file is not a zip archive or a member
                would land outside destination_dir
        """
        destination_dir = Path(destination_dir)
        logger.info(f"Extracting archive {archive_path} to {destination_dir}")
        try:
            zf = zipfile.ZipFile(archive_path, "r")
        except zipfile.BadZipFile as e:
            logger.error(f"Not a valid archive: {archive_path}")
            raise ArchiveFormatError(f"Not a valid LCMC archive: {archive_path}") from e
        except OSError as e:
            logger.error(f"Could not open archive {archive_path}: {e}")
            raise ArchiveReadError(f"Could not read archive {archive_path}: {e}") from e

        with zf:
            for member in zf.namelist():
                if not is_path_under_root(destination_dir / member, destination_dir):
                    raise ArchiveFormatError(f"Archive member escapes the extraction directory: {member}")

            try:
                destination_dir.mkdir(parents=True, exist_ok=True)
                zf.extractall(destination_dir)
            except (zipfile.BadZipFile, zlib.error, EOFError) as e:
                logger.error(f"Archive is corrupted: {archive_path} ({e})")
                raise ArchiveReadError(f"Archive is corrupted: {archive_path}") from e
            except OSError as e:
                logger.error(f"Failed to extract archive {archive_path}: {e}")
                raise ArchiveReadError(f"Failed to extract archive {archive_path}: {e}") from e

    def list_members(self, archive_path: Path) -> list[str]:
        """List the member names of an archive.

        Raises:
            ArchiveReadError: If the file cannot be read
            ArchiveFormatError: If the file is not a zip archive
        """
        try:
            with zipfile.ZipFile(archive_path, "r") as zf:
                return zf.namelist()
        except zipfile.BadZipFile as e:
            raise ArchiveFormatError(f"Not a valid LCMC archive: {archive_path}") from e
        except OSError as e:
            raise ArchiveReadError(f"Could not read archive {archive_path}: {e}") from e
