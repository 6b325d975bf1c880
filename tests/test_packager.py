"""Tests for packaging profiles into archives."""

import json
import os
import zipfile
from pathlib import Path

import pytest

from lcmc_manager.core.archive import ArchiveCodec
from lcmc_manager.core.errors import ArchiveWriteError, PackagingError
from lcmc_manager.core.models import ModEntry, ModLoader, Profile
from lcmc_manager.core.packager import PackageBuilder, detect_mod_loader, infer_required_mods
from lcmc_manager.core.registry import ProfileRegistry, find_profile
from lcmc_manager.core.staging import StagingArea


def mod(name: str) -> ModEntry:
    return ModEntry(name=name, file_name=name, size=0, modified="2024-01-01T00:00:00.000Z", path=Path(name))


class TestHeuristics:
    """Tests for mod loader detection and required mod inference."""

    def test_fabric_mod_detects_fabric(self) -> None:
        assert detect_mod_loader([mod("sodium-fabric-0.5.jar")]) == ModLoader.FABRIC

    def test_first_matching_mod_decides(self) -> None:
        assert detect_mod_loader([mod("forge-47.2.jar"), mod("sodium-fabric.jar")]) == ModLoader.FORGE
        assert detect_mod_loader([mod("sodium-fabric.jar"), mod("forge-47.2.jar")]) == ModLoader.FABRIC

    def test_forge_wins_within_a_single_name(self) -> None:
        assert detect_mod_loader([mod("fabric-forge-bridge.jar")]) == ModLoader.FORGE

    def test_detection_is_case_insensitive(self) -> None:
        assert detect_mod_loader([mod("QuiltedStuff.JAR")]) == ModLoader.FABRIC

    def test_no_indicator_is_unknown(self) -> None:
        assert detect_mod_loader([mod("journeymap.jar")]) == ModLoader.UNKNOWN
        assert detect_mod_loader([]) == ModLoader.UNKNOWN

    def test_required_mods_are_deduplicated_in_first_seen_order(self) -> None:
        assert infer_required_mods([mod("jei-1.jar"), mod("rei-2.jar"), mod("jei-3.jar")]) == ["jei", "rei"]

    def test_required_mods_empty_without_matches(self) -> None:
        assert infer_required_mods([mod("journeymap.jar")]) == []


class TestPackageBuilder:
    """Tests for PackageBuilder.package."""

    @pytest.fixture
    def builder(self, staging_root: Path) -> PackageBuilder:
        return PackageBuilder(StagingArea(staging_root), ArchiveCodec())

    @pytest.fixture
    def profile(self, install_root: Path) -> Profile:
        return find_profile(ProfileRegistry().list_profiles(install_root), "abc123")

    def test_archive_holds_documents_and_present_directories(
        self, builder: PackageBuilder, profile: Profile, tmp_path: Path
    ) -> None:
        output = tmp_path / "Fabric Pack.lcmc"

        builder.package(profile, output)

        with zipfile.ZipFile(output) as zf:
            names = set(zf.namelist())
            metadata = json.loads(zf.read("lcmc.json"))
            record = json.loads(zf.read("profile.json"))

        assert {"lcmc.json", "profile.json", "mods/jei-1.jar", "mods/sodium-fabric-0.5.jar",
                "mods/readme.txt", "config/sodium.json", "saves/World/level.dat", "resourcepacks/"} <= names
        assert not any(name.startswith("screenshots") for name in names)
        assert not any(name.startswith("shaderpacks") for name in names)

        assert metadata["formatVersion"] == "1.0.0"
        assert metadata["name"] == "Fabric Pack"
        assert metadata["mcVersion"] == "fabric-loader-0.15.0-1.20.1"
        assert metadata["modCount"] == 2
        assert metadata["description"] == "Minecraft profile: Fabric Pack"
        assert [m["name"] for m in metadata["mods"]] == ["jei-1.jar", "sodium-fabric-0.5.jar"]

        assert record["name"] == "Fabric Pack"
        assert record["version"] == "fabric-loader-0.15.0-1.20.1"
        assert record["id"] == "abc123"
        assert record["lastUsed"] == "2024-02-01T00:00:00.000Z"

    def test_metadata_sizes_and_compatibility(self, builder: PackageBuilder, profile: Profile, tmp_path: Path) -> None:
        metadata = builder.package(profile, tmp_path / "out.lcmc")

        assert metadata.directories == ["mods", "config", "resourcepacks", "saves"]
        assert metadata.directory_info["mods"].file_count == 3
        assert metadata.directory_info["mods"].size == 159
        assert metadata.directory_info["resourcepacks"].file_count == 0
        assert metadata.total_size == 159 + 2 + 10
        assert metadata.directory_info["config"].size_formatted == "2 Bytes"

        assert metadata.compatibility.mod_loader == ModLoader.FABRIC
        assert metadata.compatibility.minecraft_versions == ["fabric-loader-0.15.0-1.20.1"]
        assert metadata.compatibility.required_mods == ["jei", "fabric", "sodium"]

    def test_empty_game_dir_yields_only_documents(
        self, builder: PackageBuilder, tmp_path: Path
    ) -> None:
        game_dir = tmp_path / "empty-game"
        game_dir.mkdir()
        profile = Profile(id="p1", name="Empty", game_dir=game_dir)
        output = tmp_path / "empty.lcmc"

        metadata = builder.package(profile, output)

        with zipfile.ZipFile(output) as zf:
            assert sorted(zf.namelist()) == ["lcmc.json", "profile.json"]
        assert metadata.directories == []
        assert metadata.total_size == 0
        assert metadata.mod_count == 0
        assert metadata.compatibility.minecraft_versions == []
        assert metadata.compatibility.mod_loader == ModLoader.UNKNOWN

    def test_staging_is_released_after_success(
        self, builder: PackageBuilder, profile: Profile, tmp_path: Path
    ) -> None:
        builder.package(profile, tmp_path / "out.lcmc")

        assert builder.staging.list_entries() == []

    def test_unwritable_destination_raises_packaging_error(
        self, builder: PackageBuilder, profile: Profile, tmp_path: Path
    ) -> None:
        output = tmp_path / "missing-folder" / "out.lcmc"

        with pytest.raises(PackagingError) as exc_info:
            builder.package(profile, output)

        assert exc_info.value.__cause__ is not None
        assert not output.exists()
        assert builder.staging.list_entries() == []

    def test_existing_file_survives_failure_before_writing(
        self, builder: PackageBuilder, profile: Profile, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        output = tmp_path / "keep.lcmc"
        output.write_text("previous export")

        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("lcmc_manager.core.packager.shutil.copytree", fail)

        with pytest.raises(PackagingError):
            builder.package(profile, output)

        assert output.read_text() == "previous export"
        assert builder.staging.list_entries() == []

    def test_files_older_than_1980_are_packaged(
        self, builder: PackageBuilder, tmp_path: Path, make_tree
    ) -> None:
        """Zip cannot store pre-1980 timestamps; such files still go into the archive."""
        game_dir = tmp_path / "old-game"
        make_tree(game_dir, {"config/old.cfg": "legacy = true", "mods/ancient.jar": b"jar"})
        for path in (game_dir / "config" / "old.cfg", game_dir / "mods" / "ancient.jar"):
            os.utime(path, (0, 0))
        profile = Profile(id="old", name="Old", game_dir=game_dir)
        output = tmp_path / "old.lcmc"

        builder.package(profile, output)

        with zipfile.ZipFile(output) as zf:
            assert zf.read("config/old.cfg") == b"legacy = true"
            assert zf.read("mods/ancient.jar") == b"jar"

    def test_partial_archive_is_removed_when_build_fails(
        self, builder: PackageBuilder, profile: Profile, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        output = tmp_path / "partial.lcmc"

        def build_then_fail(staging_dir: Path, output_path: Path) -> None:
            output_path.write_bytes(b"PK\x03\x04 half written")
            raise ArchiveWriteError(f"Failed to write archive {output_path}: disk full")

        monkeypatch.setattr(builder.codec, "build", build_then_fail)

        with pytest.raises(PackagingError) as exc_info:
            builder.package(profile, output)

        assert isinstance(exc_info.value.__cause__, ArchiveWriteError)
        assert not output.exists()
        assert builder.staging.list_entries() == []
