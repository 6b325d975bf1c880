"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Callable, Union

import pytest

from lcmc_manager.core.service import ProfileTransferService

FileTree = dict[str, Union[bytes, str]]


def write_tree(root: Path, files: FileTree) -> None:
    """Create files below root; keys are POSIX-style relative paths."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture
def make_tree() -> Callable[[Path, FileTree], None]:
    """Expose write_tree to tests."""
    return write_tree


@pytest.fixture
def install_root(tmp_path: Path) -> Path:
    """Minecraft directory with one modded profile and one vanilla profile.

    The modded profile lives in profiles/Fabric Pack and holds two mods
    (plus a non-jar file), a config, an empty resourcepacks folder, a save
    and a screenshot. The vanilla profile has no gameDir and therefore uses
    the install root, which has no mods folder.
    """
    root = tmp_path / ".minecraft"
    root.mkdir()

    game_dir = root / "profiles" / "Fabric Pack"
    write_tree(game_dir, {
        "mods/sodium-fabric-0.5.jar": b"s" * 100,
        "mods/jei-1.jar": b"j" * 50,
        "mods/readme.txt": "not a mod",
        "config/sodium.json": "{}",
        "saves/World/level.dat": b"w" * 10,
        "screenshots/shot.png": b"p" * 20,
    })
    (game_dir / "resourcepacks").mkdir()

    index = {
        "profiles": {
            "abc123": {
                "name": "Fabric Pack",
                "gameDir": str(game_dir),
                "lastVersionId": "fabric-loader-0.15.0-1.20.1",
                "type": "custom",
                "created": "2024-01-01T00:00:00.000Z",
                "lastUsed": "2024-02-01T00:00:00.000Z",
            },
            "vanilla": {
                "name": "",
                "type": "latest-release",
                "lastVersionId": "latest-release",
            },
        },
        "settings": {"enableSnapshots": False},
        "version": 3,
    }
    (root / "launcher_profiles.json").write_text(json.dumps(index, indent=2), encoding="utf-8")
    return root


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    return tmp_path / "staging"


@pytest.fixture
def service(staging_root: Path) -> ProfileTransferService:
    return ProfileTransferService(staging_root=staging_root)


def read_index(install_root: Path) -> dict:
    return json.loads((install_root / "launcher_profiles.json").read_text(encoding="utf-8"))


@pytest.fixture
def load_index() -> Callable[[Path], dict]:
    """Read launcher_profiles.json of an install root."""
    return read_index
