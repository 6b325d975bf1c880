"""Scratch directories for packaging and import previews.

Every operation gets its own uniquely named directory under a configurable
staging root:

    <staging root>/
        package-3f2a.../     (removed when packaging finishes)
        import-9c41.../      (kept until the preview is installed or discarded)

Directories left behind by a crash are removed by purge_stale() at startup.
"""

import shutil
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..config.paths import AppPaths
from ..logging_config import get_logger
from .errors import StagingReleasedError

logger = get_logger("staging")


class StagingHandle:
    """Owner of one staging directory.

    The directory is deleted by release(), which is idempotent. Any other use
    after release raises StagingReleasedError.
    """

    def __init__(self, path: Path):
        self._path = path
        self._released = False

    @property
    def path(self) -> Path:
        self.ensure_active()
        return self._path

    @property
    def released(self) -> bool:
        return self._released

    def ensure_active(self) -> None:
        if self._released:
            raise StagingReleasedError(f"Staging directory already released: {self._path}")

    def release(self) -> None:
        """Delete the staging directory."""
        if self._released:
            return
        self._released = True
        try:
            shutil.rmtree(self._path)
            logger.debug(f"Released staging directory {self._path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove staging directory {self._path}: {e}")

    def __enter__(self) -> "StagingHandle":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "active"
        return f"StagingHandle({str(self._path)!r}, {state})"


class StagingArea:
    """Allocates staging directories under a single root."""

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root else AppPaths.STAGING_DIR

    def create(self, purpose: str) -> StagingHandle:
        """Allocate a fresh, uniquely named staging directory.

        Args:
            purpose: Short label used as the directory name prefix

        Returns:
            Handle owning the new directory; the caller must release it
        """
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / f"{purpose}-{uuid.uuid4().hex}"
        path.mkdir()
        logger.debug(f"Created staging directory {path}")
        return StagingHandle(path)

    @contextmanager
    def scoped(self, purpose: str) -> Iterator[Path]:
        """Staging directory that is released on every exit path."""
        handle = self.create(purpose)
        try:
            yield handle.path
        finally:
            handle.release()

    def list_entries(self) -> list[Path]:
        """Staging directories currently present under the root."""
        if not self.root.exists():
            return []
        return sorted(p for p in self.root.iterdir() if p.is_dir())

    def purge_stale(self, max_age_seconds: float) -> list[Path]:
        """Remove staging directories older than max_age_seconds.

        Args:
            max_age_seconds: Minimum age (by modification time) to remove

        Returns:
            List of removed directories
        """
        cutoff = time.time() - max_age_seconds
        removed = []
        for entry in self.list_entries():
            try:
                if entry.stat().st_mtime > cutoff:
                    continue
                shutil.rmtree(entry)
                removed.append(entry)
            except OSError as e:
                logger.warning(f"Could not purge stale staging directory {entry}: {e}")

        if removed:
            logger.info(f"Purged {len(removed)} stale staging directories from {self.root}")
        return removed
