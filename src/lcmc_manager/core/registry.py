"""Launcher profile index access (launcher_profiles.json).

The index lives at the root of a Minecraft installation:

    .minecraft/
        launcher_profiles.json     {"profiles": {"<id>": {...}}, ...}
        launcher_profiles.json.lock  (present only while a write is in progress)
        mods/ config/ ...          (default game directory)
        profiles/<name>/           (game directories created by imports)

Profiles are materialized on every read by cross-referencing the index with a
live scan of each profile's mods directory.
"""

import json
import os
import threading
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from ..config.paths import AppPaths
from ..logging_config import get_logger
from .errors import RegistryError, RegistryLockError, RegistryMissingError
from .models import DirectoryStatus, ModEntry, Profile, ProfileRecord, utc_now_iso
from .sizing import directory_size

logger = get_logger("registry")

# Serializes writers inside this process; the lock file covers other processes
_process_lock = threading.Lock()


class ProfileRegistry:
    """Reads and writes the launcher's profile index."""

    def __init__(self, lock_timeout: float = 10.0, stale_lock_seconds: float = 60.0):
        """Initialize the registry.

        Args:
            lock_timeout: Seconds to wait for another writer before giving up
            stale_lock_seconds: Age after which a leftover lock file is taken over
        """
        self.lock_timeout = lock_timeout
        self.stale_lock_seconds = stale_lock_seconds

    def list_profiles(self, install_root: Path) -> list[Profile]:
        """List all launcher profiles with their installed mods.

        Args:
            install_root: Minecraft directory holding launcher_profiles.json

        Returns:
            One Profile per index entry, in index order

        Raises:
            RegistryMissingError: If the index file does not exist
            RegistryError: If the index file cannot be parsed
        """
        install_root = Path(install_root)
        index_path = AppPaths.profile_index(install_root)
        if not index_path.exists():
            raise RegistryMissingError(install_root)

        data = self._read_index(index_path)
        entries = data.get("profiles") or {}
        if not isinstance(entries, dict):
            logger.error(f"Malformed profile index {index_path}: profiles is not an object")
            raise RegistryError(f"Launcher profiles file is corrupted: {index_path}")

        profiles = []
        for profile_id, entry in entries.items():
            if not isinstance(entry, dict):
                logger.warning(f"Skipping malformed profile entry: {profile_id}")
                continue

            game_dir = Path(entry["gameDir"]) if entry.get("gameDir") else install_root
            profiles.append(Profile(
                id=profile_id,
                name=entry.get("name") or "",
                game_dir=game_dir,
                last_version_id=entry.get("lastVersionId"),
                created=entry.get("created"),
                last_used=entry.get("lastUsed"),
                icon=entry.get("icon"),
                type=entry.get("type") or "custom",
                mods=self.scan_mods(game_dir),
            ))

        logger.debug(f"Loaded {len(profiles)} profiles from {index_path}")
        return profiles

    def scan_mods(self, game_dir: Path) -> list[ModEntry]:
        """Find the .jar files directly inside game_dir/mods.

        Args:
            game_dir: Profile game directory

        Returns:
            ModEntry list sorted by file name, empty if there is no mods directory
        """
        mods_dir = Path(game_dir) / "mods"
        if not mods_dir.is_dir():
            return []

        mods = []
        for mod_file in sorted(mods_dir.iterdir(), key=lambda p: p.name.lower()):
            if mod_file.suffix.lower() == ".jar" and mod_file.is_file():
                mods.append(ModEntry.from_file(mod_file))
        return mods

    def get_profile_directories(self, profile: Profile) -> dict[str, DirectoryStatus]:
        """Report presence and size of each content directory of a profile.

        Args:
            profile: Profile to inspect

        Returns:
            Mapping of directory name to DirectoryStatus, covering the tracked
            directories and screenshots
        """
        statuses = {}
        for name in AppPaths.TRACKED_DIRECTORIES + AppPaths.EXCLUDED_DIRECTORIES:
            dir_path = profile.game_dir / name
            if dir_path.is_dir():
                sized = directory_size(dir_path)
                statuses[name] = DirectoryStatus(
                    path=dir_path,
                    exists=True,
                    file_count=sized.file_count,
                    size=sized.total_bytes,
                )
            else:
                statuses[name] = DirectoryStatus(path=dir_path, exists=False)
        return statuses

    def register_profile(self, install_root: Path, record: ProfileRecord, game_dir: Path) -> str:
        """Add a new custom profile entry to the launcher index.

        A missing index is treated as empty. All other keys already in the
        index are preserved.

        Args:
            install_root: Minecraft directory holding launcher_profiles.json
            record: Profile record read from an archive
            game_dir: Game directory of the new profile

        Returns:
            Identifier of the new profile entry

        Raises:
            RegistryLockError: If another writer holds the index too long
            RegistryError: If an existing index cannot be parsed
        """
        index_path = AppPaths.profile_index(install_root)

        with self._locked(index_path):
            data = self._read_index(index_path) if index_path.exists() else {}
            profiles = data.get("profiles")
            if not isinstance(profiles, dict):
                profiles = {}
                data["profiles"] = profiles

            profile_id = self._new_profile_id(profiles)
            now = utc_now_iso()
            profiles[profile_id] = {
                "name": record.name,
                "gameDir": str(game_dir),
                "lastVersionId": record.version,
                "created": now,
                "lastUsed": now,
                "type": "custom",
            }
            self._write_index(index_path, data)

        logger.info(f"Registered profile '{record.name}' as {profile_id} in {index_path}")
        return profile_id

    @staticmethod
    def _new_profile_id(existing: dict[str, Any]) -> str:
        stamp = int(time.time() * 1000)
        while f"lcmc_{stamp}" in existing:
            stamp += 1
        return f"lcmc_{stamp}"

    @staticmethod
    def _read_index(index_path: Path) -> dict[str, Any]:
        try:
            data = json.loads(index_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.error(f"Malformed profile index {index_path}: {e}")
            raise RegistryError(f"Launcher profiles file is corrupted: {index_path}") from e
        except OSError as e:
            logger.error(f"Could not read profile index {index_path}: {e}")
            raise RegistryError(f"Could not read launcher profiles: {e}") from e

        if not isinstance(data, dict):
            raise RegistryError(f"Launcher profiles file is corrupted: {index_path}")
        return data

    @staticmethod
    def _write_index(index_path: Path, data: dict[str, Any]) -> None:
        index_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = index_path.with_name(index_path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, index_path)

    @contextmanager
    def _locked(self, index_path: Path) -> Iterator[None]:
        """Hold the in-process lock and an exclusive lock file next to the index."""
        lock_path = index_path.with_name(index_path.name + ".lock")
        index_path.parent.mkdir(parents=True, exist_ok=True)

        with _process_lock:
            fd = self._acquire_lock_file(lock_path)
            try:
                yield
            finally:
                os.close(fd)
                try:
                    lock_path.unlink()
                except FileNotFoundError:
                    pass

    def _acquire_lock_file(self, lock_path: Path) -> int:
        deadline = time.monotonic() + self.lock_timeout
        while True:
            try:
                fd = os.open(lock_path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
                os.write(fd, str(os.getpid()).encode("ascii"))
                return fd
            except FileExistsError:
                stale = self._stale_lock_stat(lock_path)
                if stale is not None:
                    self._break_stale_lock(lock_path, stale)
                    continue
                if time.monotonic() >= deadline:
                    raise RegistryLockError(
                        f"Launcher profiles are locked by another process: {lock_path}"
                    )
                time.sleep(0.05)

    def _stale_lock_stat(self, lock_path: Path) -> Optional[os.stat_result]:
        """Stat of the lock file if it is older than stale_lock_seconds."""
        try:
            lock_stat = lock_path.stat()
        except FileNotFoundError:
            return None
        if time.time() - lock_stat.st_mtime > self.stale_lock_seconds:
            return lock_stat
        return None

    def _break_stale_lock(self, lock_path: Path, stale: os.stat_result) -> None:
        """Move a stale lock file aside under a unique name.

        If the file claimed is not the one judged stale, another waiter has
        already taken over and the claimed lock is put back.
        """
        claimed = lock_path.with_name(f"{lock_path.name}.stale-{uuid.uuid4().hex}")
        try:
            os.rename(lock_path, claimed)
        except FileNotFoundError:
            # Another waiter took it over first
            return

        if os.stat(claimed).st_ino != stale.st_ino:
            try:
                os.link(claimed, lock_path)
            except FileExistsError:
                logger.warning(f"Registry lock {lock_path} was replaced during takeover")
            os.unlink(claimed)
            return

        logger.warning(f"Removed stale registry lock {lock_path}")
        os.unlink(claimed)


def find_profile(profiles: list[Profile], profile_id: str) -> Optional[Profile]:
    """Look up a profile by identifier."""
    for profile in profiles:
        if profile.id == profile_id:
            return profile
    return None
