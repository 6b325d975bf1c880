"""Recursive size and file-count accounting for profile directories.

Entries are stat'ed (symlinks are followed) and there is no cycle detection:
a directory tree containing a symlink loop may not terminate. Read failures
on individual entries never abort the walk; the failing entry contributes
zero and is recorded in SizeResult.skipped.
"""

import stat
from dataclasses import dataclass, field
from pathlib import Path

from ..logging_config import get_logger

logger = get_logger("sizing")

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


@dataclass
class SizeResult:
    """Outcome of a directory size walk."""
    total_bytes: int = 0
    file_count: int = 0
    skipped: list[Path] = field(default_factory=list)


def directory_size(path: Path) -> SizeResult:
    """Compute total size and file count of a directory tree.

    Args:
        path: Root of the tree to measure

    Returns:
        SizeResult with the aggregate size, number of non-directory entries,
        and the paths that could not be read
    """
    result = SizeResult()
    _accumulate(Path(path), result)
    return result


def _accumulate(directory: Path, result: SizeResult) -> None:
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        logger.warning(f"Could not access directory: {directory} ({e})")
        result.skipped.append(directory)
        return

    for entry in entries:
        try:
            entry_stat = entry.stat()
        except OSError as e:
            logger.warning(f"Could not stat {entry} ({e})")
            result.skipped.append(entry)
            continue

        if stat.S_ISDIR(entry_stat.st_mode):
            _accumulate(entry, result)
        else:
            result.total_bytes += entry_stat.st_size
            result.file_count += 1


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Format a byte count for display.

    Examples:
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(1048576)
        '1 MB'
    """
    if num_bytes <= 0:
        return "0 Bytes"

    decimals = max(decimals, 0)
    unit = 0
    while unit < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (unit + 1):
        unit += 1

    text = f"{num_bytes / 1024 ** unit:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"
