"""Path validation utilities to prevent dangerous file operations.

Provides validation for paths used in file operations to prevent:
- Archive members or profile names escaping their target directory
- Installing into a folder that is not a Minecraft install root
- Exporting to a destination that cannot be written
"""

from pathlib import Path

from .paths import AppPaths
from ..logging_config import get_logger

logger = get_logger("path_validator")


def is_path_under_root(path: Path, root: Path) -> bool:
    """Check if a path is under a given root directory.

    Args:
        path: The path to check
        root: The root directory

    Returns:
        True if path is under root (or is root), False otherwise
    """
    try:
        path_resolved = path.resolve()
        root_resolved = root.resolve()
        return path_resolved == root_resolved or root_resolved in path_resolved.parents
    except (OSError, ValueError) as e:
        logger.warning("Failed to check path relationship: %s", e)
        return False


def validate_install_root(install_root: Path) -> tuple[bool, str]:
    """Validate a Minecraft install root before listing its profiles.

    Args:
        install_root: The directory to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not install_root:
        return False, "Minecraft directory is empty"

    try:
        resolved = install_root.resolve()
    except (OSError, ValueError) as e:
        return False, f"Invalid path: {e}"

    if not resolved.exists():
        return False, "Minecraft directory does not exist"

    if not resolved.is_dir():
        return False, "Minecraft directory is not a directory"

    if not AppPaths.profile_index(resolved).exists():
        return False, f"No {AppPaths.PROFILE_INDEX_NAME} found in this directory"

    return True, ""


def validate_output_path(output_path: Path) -> tuple[bool, str]:
    """Validate an archive destination before packaging.

    Args:
        output_path: Destination archive file

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not output_path or not output_path.name:
        return False, "Output path is empty"

    if output_path.exists() and output_path.is_dir():
        return False, "Output path is a directory"

    if not output_path.parent.exists():
        return False, f"Folder does not exist: {output_path.parent}"

    return True, ""


def sanitize_filename(filename: str) -> str:
    """Sanitize a filename by removing dangerous characters.

    Args:
        filename: The filename to sanitize

    Returns:
        Sanitized filename safe for use in file operations
    """
    dangerous_chars = ['<', '>', ':', '"', '/', '\\', '|', '?', '*', '\0']
    result = filename

    for char in dangerous_chars:
        result = result.replace(char, '_')

    # Remove leading/trailing dots and spaces
    result = result.strip('. ')

    if len(result) > 200:
        result = result[:200]

    if not result:
        result = "unnamed"

    return result
