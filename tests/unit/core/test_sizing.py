"""Unit tests for size aggregation."""

import os
from pathlib import Path

import pytest
from build_cleaner.core.sizing import directory_size, file_size


class TestFileSize:
    """Tests for file_size."""

    def test_returns_length(self, tmp_path: Path) -> None:
        """The metadata length is returned."""
        target = tmp_path / "a.bin"
        target.write_bytes(b"x" * 42)
        assert file_size(target) == 42

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file raises OSError."""
        with pytest.raises(OSError):
            file_size(tmp_path / "missing")


class TestDirectorySize:
    """Tests for directory_size."""

    def test_sums_nested_files(self, tmp_path: Path) -> None:
        """Files at any depth are counted, empty directories add nothing."""
        root = tmp_path / "node_modules"
        (root / "a" / "empty").mkdir(parents=True)
        (root / "a" / "b" / "c").mkdir(parents=True)
        (root / "one.txt").write_bytes(b"x" * 12)
        (root / "a" / "b" / "c" / "two.txt").write_bytes(b"y" * 14)

        assert directory_size(root) >= 26
        assert directory_size(root) == 26

    def test_empty_directory(self, tmp_path: Path) -> None:
        """An empty directory has size zero."""
        assert directory_size(tmp_path) == 0

    def test_missing_directory_is_zero(self, tmp_path: Path) -> None:
        """An unreadable root yields zero instead of raising."""
        assert directory_size(tmp_path / "missing") == 0

    def test_symlinks_not_followed(self, tmp_path: Path) -> None:
        """Symbolic links contribute nothing."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"x" * 1000)
        root = tmp_path / "root"
        root.mkdir()
        (root / "small.bin").write_bytes(b"x" * 5)
        os.symlink(outside, root / "link_dir")
        os.symlink(outside / "big.bin", root / "link_file")

        assert directory_size(root) == 5

    def test_linked_directory_is_zero(self, tmp_path: Path) -> None:
        """A link to a directory measures nothing of its target."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"x" * 1000)
        link = tmp_path / "node_modules"
        os.symlink(outside, link)

        assert directory_size(link) == 0
