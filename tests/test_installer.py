"""Tests for previewing, installing and discarding archives."""

import json
from pathlib import Path

import pytest

from lcmc_manager.core.archive import ArchiveCodec
from lcmc_manager.core.errors import (
    ArchiveFormatError,
    InvalidPackageError,
    RegistryError,
    StagingReleasedError,
)
from lcmc_manager.core.installer import InstallMerger
from lcmc_manager.core.models import InstallOptions
from lcmc_manager.core.packager import PackageBuilder
from lcmc_manager.core.registry import ProfileRegistry, find_profile
from lcmc_manager.core.staging import StagingArea

METADATA = {
    "formatVersion": "1.0.0",
    "name": "Everything Pack",
    "creator": "alex",
    "created": "2024-03-01T12:00:00.000Z",
    "mcVersion": "1.20.1",
    "modCount": 1,
    "description": "Minecraft profile: Everything Pack",
    "totalSize": 6,
    "mods": [{"name": "a.jar", "fileName": "a.jar", "size": 1, "modified": None}],
    "directories": ["mods", "config", "resourcepacks", "saves", "shaderpacks"],
    "directoryInfo": {},
    "compatibility": {"minecraftVersions": ["1.20.1"], "modLoader": "Unknown", "requiredMods": []},
}

PROFILE = {"name": "Everything Pack", "version": "1.20.1", "id": "orig", "type": "custom"}

CONTENT = {
    "mods/a.jar": b"1",
    "config/c.toml": "2",
    "resourcepacks/r.zip": b"3",
    "saves/World/level.dat": b"4",
    "shaderpacks/s.zip": b"5",
    "screenshots/p.png": b"6",
}


@pytest.fixture
def merger(staging_root: Path) -> InstallMerger:
    return InstallMerger(StagingArea(staging_root), ArchiveCodec(), ProfileRegistry())


@pytest.fixture
def build_archive(tmp_path: Path, make_tree):
    """Build an archive from documents and content files."""

    def build(name: str = "pack.lcmc", metadata=METADATA, profile=PROFILE, content=CONTENT) -> Path:
        source = tmp_path / f"src-{name}"
        files = dict(content)
        if metadata is not None:
            files["lcmc.json"] = metadata if isinstance(metadata, str) else json.dumps(metadata)
        if profile is not None:
            files["profile.json"] = profile if isinstance(profile, str) else json.dumps(profile)
        make_tree(source, files)
        archive = tmp_path / name
        ArchiveCodec().build(source, archive)
        return archive

    return build


class TestPreview:
    """Tests for InstallMerger.preview."""

    def test_preview_reads_both_documents(self, merger: InstallMerger, build_archive) -> None:
        with merger.preview(build_archive()) as preview:
            assert preview.metadata.name == "Everything Pack"
            assert preview.metadata.mod_count == 1
            assert preview.metadata.creator == "alex"
            assert preview.profile.version == "1.20.1"
            staged = preview.handle.path
            assert (staged / "mods" / "a.jar").exists()

        assert not staged.exists()

    def test_round_trip_preserves_name_and_mod_count(
        self, merger: InstallMerger, install_root: Path, tmp_path: Path
    ) -> None:
        profile = find_profile(ProfileRegistry().list_profiles(install_root), "abc123")
        archive = tmp_path / "round.lcmc"
        PackageBuilder(merger.staging, merger.codec).package(profile, archive)

        with merger.preview(archive) as preview:
            assert preview.metadata.name == profile.name
            assert preview.metadata.mod_count == profile.mod_count
            assert preview.profile.name == profile.name

    def test_missing_metadata_raises_and_leaves_no_staging(
        self, merger: InstallMerger, build_archive
    ) -> None:
        archive = build_archive(metadata=None)

        with pytest.raises(InvalidPackageError, match="missing metadata"):
            merger.preview(archive)

        assert merger.staging.list_entries() == []

    def test_missing_profile_document_raises(self, merger: InstallMerger, build_archive) -> None:
        with pytest.raises(InvalidPackageError, match="missing profile data"):
            merger.preview(build_archive(profile=None))

        assert merger.staging.list_entries() == []

    def test_malformed_metadata_raises(self, merger: InstallMerger, build_archive) -> None:
        with pytest.raises(InvalidPackageError):
            merger.preview(build_archive(metadata="[1, 2, 3]"))
        with pytest.raises(InvalidPackageError):
            merger.preview(build_archive(name="b.lcmc", metadata="{oops"))
        with pytest.raises(InvalidPackageError):
            merger.preview(build_archive(name="c.lcmc", metadata=json.dumps({"modCount": "many"})))

        assert merger.staging.list_entries() == []

    def test_legacy_version_key_is_accepted(self, merger: InstallMerger, build_archive) -> None:
        legacy = {key: value for key, value in METADATA.items() if key != "formatVersion"}
        legacy["version"] = "0.9.0"

        with merger.preview(build_archive(metadata=legacy)) as preview:
            assert preview.metadata.format_version == "0.9.0"

    def test_non_zip_leaves_no_staging(self, merger: InstallMerger, tmp_path: Path) -> None:
        bogus = tmp_path / "bogus.lcmc"
        bogus.write_text("nope")

        with pytest.raises(ArchiveFormatError):
            merger.preview(bogus)

        assert merger.staging.list_entries() == []


class TestInstall:
    """Tests for InstallMerger.install."""

    def test_default_options_install_mods_and_config(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        preview = merger.preview(build_archive())

        result = merger.install(preview.handle, install_root, InstallOptions())

        assert result.game_dir == install_root / "profiles" / "Everything Pack"
        assert result.installed == ["mods", "config"]
        assert sorted(p.name for p in result.game_dir.iterdir()) == ["config", "mods"]

    def test_selected_options_install_exactly_matching_directories(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        options = InstallOptions.from_dict({
            "installMods": False,
            "installConfigs": True,
            "installResources": True,
            "installSaves": False,
        })
        preview = merger.preview(build_archive())

        result = merger.install(preview.handle, install_root, options)

        assert sorted(p.name for p in result.game_dir.iterdir()) == ["config", "resourcepacks", "shaderpacks"]

    def test_screenshots_are_never_installed(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        everything = InstallOptions(install_mods=True, install_configs=True, install_resources=True, install_saves=True)
        preview = merger.preview(build_archive())

        result = merger.install(preview.handle, install_root, everything)

        assert result.installed == ["mods", "config", "resourcepacks", "saves", "shaderpacks"]
        assert not (result.game_dir / "screenshots").exists()
        assert (result.game_dir / "saves" / "World" / "level.dat").read_bytes() == b"4"

    def test_install_registers_profile(
        self, merger: InstallMerger, build_archive, install_root: Path, load_index
    ) -> None:
        preview = merger.preview(build_archive())

        result = merger.install(preview.handle, install_root, InstallOptions())

        entry = load_index(install_root)["profiles"][result.profile_id]
        assert entry["name"] == "Everything Pack"
        assert entry["gameDir"] == str(result.game_dir)
        assert entry["lastVersionId"] == "1.20.1"
        assert entry["type"] == "custom"

    def test_name_collision_gets_suffix(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        (install_root / "profiles" / "Everything Pack").mkdir(parents=True)
        (install_root / "profiles" / "Everything Pack" / "keep.txt").write_text("mine")

        first = merger.install(merger.preview(build_archive()).handle, install_root, InstallOptions())
        second = merger.install(merger.preview(build_archive()).handle, install_root, InstallOptions())

        assert first.game_dir.name == "Everything Pack_1"
        assert second.game_dir.name == "Everything Pack_2"
        assert (install_root / "profiles" / "Everything Pack" / "keep.txt").read_text() == "mine"

    def test_unsafe_profile_name_is_sanitized(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        profile = dict(PROFILE, name="../../Evil: Pack")
        preview = merger.preview(build_archive(profile=profile))

        result = merger.install(preview.handle, install_root, InstallOptions())

        assert result.game_dir.parent == install_root / "profiles"
        assert result.game_dir.name == "_.._Evil_ Pack"

    def test_install_consumes_handle(
        self, merger: InstallMerger, build_archive, install_root: Path
    ) -> None:
        preview = merger.preview(build_archive())
        staged = preview.handle.path

        merger.install(preview.handle, install_root, InstallOptions())

        assert not staged.exists()
        with pytest.raises(StagingReleasedError):
            merger.install(preview.handle, install_root, InstallOptions())

    def test_failed_registration_rolls_back(
        self, merger: InstallMerger, build_archive, install_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fail(*args, **kwargs):
            raise RegistryError("index is read-only")

        monkeypatch.setattr(merger.registry, "register_profile", fail)
        preview = merger.preview(build_archive())

        with pytest.raises(RegistryError):
            merger.install(preview.handle, install_root, InstallOptions())

        assert not (install_root / "profiles" / "Everything Pack").exists()
        assert preview.handle.released
        assert merger.staging.list_entries() == []

    def test_discard_removes_staging(self, merger: InstallMerger, build_archive) -> None:
        preview = merger.preview(build_archive())

        merger.discard(preview.handle)

        assert merger.staging.list_entries() == []


class TestInstallOptions:
    """Tests for InstallOptions parsing."""

    def test_defaults_when_keys_are_absent(self) -> None:
        options = InstallOptions.from_dict({})

        assert options.install_mods
        assert options.install_configs
        assert not options.install_resources
        assert not options.install_saves

    def test_only_explicit_false_disables_and_only_true_enables(self) -> None:
        options = InstallOptions.from_dict({
            "installMods": None,
            "installConfigs": 0,
            "installResources": "yes",
            "installSaves": True,
        })

        assert options.install_mods
        assert options.install_configs
        assert not options.install_resources
        assert options.install_saves

    def test_resources_cover_shaderpacks(self) -> None:
        selection = InstallOptions(install_resources=True).directory_selection()

        assert selection["resourcepacks"] and selection["shaderpacks"]
        assert selection["screenshots"] is False
