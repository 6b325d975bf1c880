"""Tests for directory size accounting and byte formatting."""

from pathlib import Path

import pytest

from lcmc_manager.core.sizing import directory_size, format_bytes


@pytest.mark.parametrize(
    ("num_bytes", "expected"),
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (1234567, "1.18 MB"),
        (5 * 1024 ** 3, "5 GB"),
        (2 * 1024 ** 4, "2 TB"),
    ],
)
def test_format_bytes(num_bytes: int, expected: str) -> None:
    assert format_bytes(num_bytes) == expected


def test_format_bytes_respects_decimals() -> None:
    assert format_bytes(1234567, decimals=0) == "1 MB"
    assert format_bytes(1234567, decimals=3) == "1.177 MB"


def test_format_bytes_stays_in_terabytes_for_huge_values() -> None:
    assert format_bytes(3 * 1024 ** 5) == "3072 TB"


def test_directory_size_counts_files_at_any_depth(tmp_path: Path, make_tree) -> None:
    """Files in nested folders count toward both size and file count."""
    make_tree(tmp_path, {
        "top.txt": b"a" * 5,
        "one/file.bin": b"b" * 10,
        "one/two/three/deep.bin": b"c" * 20,
    })
    (tmp_path / "empty").mkdir()

    result = directory_size(tmp_path)

    assert result.total_bytes == 35
    assert result.file_count == 3
    assert result.skipped == []


def test_directory_size_of_empty_directory(tmp_path: Path) -> None:
    result = directory_size(tmp_path)

    assert result.total_bytes == 0
    assert result.file_count == 0


def test_directory_size_skips_unreadable_subdirectory(
    tmp_path: Path, make_tree, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An unreadable folder contributes nothing and is reported, the walk continues."""
    make_tree(tmp_path, {
        "ok/file.bin": b"x" * 7,
        "locked/secret.bin": b"y" * 100,
    })

    original_iterdir = Path.iterdir

    def fake_iterdir(self):
        if self.name == "locked":
            raise PermissionError("access denied")
        return original_iterdir(self)

    monkeypatch.setattr(Path, "iterdir", fake_iterdir)

    result = directory_size(tmp_path)

    assert result.total_bytes == 7
    assert result.file_count == 1
    assert result.skipped == [tmp_path / "locked"]
