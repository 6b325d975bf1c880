"""Tests for default install root resolution."""

from pathlib import Path

from lcmc_manager.config.paths import AppPaths, default_install_root


def test_windows_uses_appdata() -> None:
    appdata = r"C:\Users\steve\AppData\Roaming"

    root = default_install_root(platform="win32", environ={"APPDATA": appdata}, home=Path("/home/steve"))

    assert root == Path(appdata) / ".minecraft"


def test_windows_without_appdata_falls_back_to_home() -> None:
    home = Path("/users/steve")

    root = default_install_root(platform="win32", environ={}, home=home)

    assert root == home / "AppData" / "Roaming" / ".minecraft"


def test_macos_uses_application_support() -> None:
    home = Path("/Users/steve")

    root = default_install_root(platform="darwin", environ={}, home=home)

    assert root == home / "Library" / "Application Support" / "minecraft"


def test_other_platforms_use_dot_minecraft() -> None:
    home = Path("/home/steve")

    assert default_install_root(platform="linux", environ={}, home=home) == home / ".minecraft"
    assert default_install_root(platform="freebsd13", environ={}, home=home) == home / ".minecraft"


def test_profile_index_location(tmp_path: Path) -> None:
    assert AppPaths.profile_index(tmp_path) == tmp_path / "launcher_profiles.json"


def test_expand_path_expands_home(monkeypatch) -> None:
    monkeypatch.setenv("HOME", "/home/steve")

    assert AppPaths.expand_path("~/exports") == Path("/home/steve/exports")
