"""Tests for the directory scanner and the directory helpers built on it."""

import errno
import os
from pathlib import Path

import pytest

from treeshift.adapters.file_adapter import LocalFileSystemAdapter
from treeshift.core.errors import (
    ScanError,
    SourceNotADirectoryError,
    SourceNotFoundError,
    SymlinkCycleError,
    create_file_error,
)
from treeshift.models.enums import EntryKind
from treeshift.models.options import ScanOptions
from treeshift.tree.scanner import (
    DirectoryScan,
    directory_size_in_bytes,
    is_directory_empty,
    scan_directory,
)


@pytest.fixture
def nested_tree(tmp_path: Path, make_tree) -> Path:
    return make_tree(
        tmp_path / "root",
        {
            "z.txt": b"zz",
            "a.bin": b"a" * 10,
            "foo": {"b.bin": b"b" * 20, "bar": {"c.bin": b"c" * 5}},
        },
    )


def relative_paths(entries) -> list[str]:
    return [entry.relative_path.as_posix() for entry in entries]


class UnreadableDirectoryAdapter(LocalFileSystemAdapter):
    """Adapter that cannot list directories with a given name."""

    def __init__(self, unreadable_name: str) -> None:
        self.unreadable_name = unreadable_name

    def list_directory(self, path: Path) -> list[Path]:
        if path.name == self.unreadable_name:
            raise create_file_error(
                path, "list_directory", PermissionError(errno.EACCES, "Permission denied")
            )
        return super().list_directory(path)


class TestScanDirectory:
    """Test ordering, depth handling and error reporting of scan_directory."""

    def test_pre_order_by_name(self, adapter, nested_tree: Path):
        """Test directories come before their children, siblings by name."""
        entries = list(scan_directory(nested_tree, adapter=adapter))

        assert relative_paths(entries) == [
            "a.bin",
            "foo",
            "foo/b.bin",
            "foo/bar",
            "foo/bar/c.bin",
            "z.txt",
        ]

    def test_depths_kinds_and_sizes(self, adapter, nested_tree: Path):
        entries = {
            entry.relative_path.as_posix(): entry
            for entry in scan_directory(nested_tree, adapter=adapter)
        }

        assert entries["a.bin"].depth == 0
        assert entries["a.bin"].kind is EntryKind.FILE
        assert entries["a.bin"].size_bytes == 10
        assert entries["foo"].depth == 0
        assert entries["foo"].kind is EntryKind.DIRECTORY
        assert entries["foo"].size_bytes == 0
        assert entries["foo/bar"].depth == 1
        assert entries["foo/bar/c.bin"].depth == 2
        assert entries["foo/bar/c.bin"].path == nested_tree / "foo" / "bar" / "c.bin"

    def test_depth_limit_zero_lists_only_children(self, adapter, nested_tree: Path):
        entries = scan_directory(nested_tree, ScanOptions(depth_limit=0), adapter)

        assert relative_paths(entries) == ["a.bin", "foo", "z.txt"]

    def test_depth_limit_one(self, adapter, nested_tree: Path):
        """Test directories at the limit are listed but not descended into."""
        entries = scan_directory(nested_tree, ScanOptions(depth_limit=1), adapter)

        assert relative_paths(entries) == ["a.bin", "foo", "foo/b.bin", "foo/bar", "z.txt"]

    def test_yield_root(self, adapter, nested_tree: Path):
        entries = list(scan_directory(nested_tree, ScanOptions(yield_root=True), adapter))

        root = entries[0]
        assert root.path == nested_tree
        assert root.relative_path == Path()
        assert root.depth is None
        assert root.kind is EntryKind.DIRECTORY
        assert len(entries) == 7

    def test_relative_root_is_made_absolute(self, adapter, nested_tree: Path, monkeypatch):
        monkeypatch.chdir(nested_tree.parent)

        entries = list(scan_directory(Path("root"), adapter=adapter))

        assert all(entry.path.is_absolute() for entry in entries)

    def test_missing_root_fails_eagerly(self, adapter, tmp_path: Path):
        """Test the root is checked before any iteration happens."""
        with pytest.raises(ScanError, match="does not exist"):
            scan_directory(tmp_path / "missing", adapter=adapter)

    def test_file_root_fails_eagerly(self, adapter, nested_tree: Path):
        with pytest.raises(ScanError, match="not a directory"):
            scan_directory(nested_tree / "a.bin", adapter=adapter)

    def test_unreadable_directory_mid_scan(self, nested_tree: Path):
        """Test a failure deep in the tree keeps entries already yielded."""
        yielded = []
        entries = scan_directory(nested_tree, adapter=UnreadableDirectoryAdapter("bar"))

        with pytest.raises(ScanError) as exc_info:
            for entry in entries:
                yielded.append(entry)

        assert relative_paths(yielded) == ["a.bin", "foo", "foo/b.bin", "foo/bar"]
        assert exc_info.value.path == nested_tree / "foo" / "bar"
        assert exc_info.value.errno == errno.EACCES
        assert "Permission denied" in str(exc_info.value)

    def test_empty_directory(self, adapter, tmp_path: Path):
        (tmp_path / "empty").mkdir()

        assert list(scan_directory(tmp_path / "empty", adapter=adapter)) == []


@pytest.mark.symlinks
class TestScanDirectorySymlinks:
    """Test link classification and following."""

    @pytest.fixture
    def linked_tree(self, nested_tree: Path) -> Path:
        os.symlink(nested_tree / "a.bin", nested_tree / "link_file")
        os.symlink(nested_tree / "foo", nested_tree / "link_dir", target_is_directory=True)
        os.symlink(nested_tree / "missing", nested_tree / "link_broken")
        return nested_tree

    def test_links_are_not_followed_by_default(self, adapter, linked_tree: Path):
        entries = {
            entry.relative_path.as_posix(): entry
            for entry in scan_directory(linked_tree, ScanOptions(depth_limit=0), adapter)
        }

        assert entries["link_file"].kind is EntryKind.SYMLINK_TO_FILE
        assert entries["link_file"].size_bytes == 10
        assert entries["link_dir"].kind is EntryKind.SYMLINK_TO_DIRECTORY
        assert entries["link_broken"].kind is EntryKind.BROKEN_SYMLINK
        assert entries["link_broken"].size_bytes == 0

    def test_linked_directory_not_descended_by_default(self, adapter, linked_tree: Path):
        paths = relative_paths(scan_directory(linked_tree, adapter=adapter))

        assert "link_dir" in paths
        assert not any(path.startswith("link_dir/") for path in paths)

    def test_following_links(self, adapter, linked_tree: Path):
        entries = {
            entry.relative_path.as_posix(): entry
            for entry in scan_directory(
                linked_tree, ScanOptions(follow_symlinks=True), adapter
            )
        }

        assert entries["link_file"].kind is EntryKind.FILE
        assert entries["link_dir"].kind is EntryKind.DIRECTORY
        assert entries["link_dir/bar/c.bin"].depth == 2
        assert entries["link_broken"].kind is EntryKind.BROKEN_SYMLINK

    def test_cycle_detected_when_following(self, adapter, nested_tree: Path):
        os.symlink(nested_tree, nested_tree / "foo" / "loop", target_is_directory=True)

        with pytest.raises(SymlinkCycleError) as exc_info:
            list(scan_directory(nested_tree, ScanOptions(follow_symlinks=True), adapter))

        assert exc_info.value.path == nested_tree / "foo" / "loop"

    def test_cycle_ignored_when_not_following(self, adapter, nested_tree: Path):
        os.symlink(nested_tree, nested_tree / "foo" / "loop", target_is_directory=True)

        paths = relative_paths(scan_directory(nested_tree, adapter=adapter))

        assert "foo/loop" in paths

    def test_root_link_is_scanned(self, adapter, nested_tree: Path, tmp_path: Path):
        os.symlink(nested_tree, tmp_path / "root_link", target_is_directory=True)

        entries = list(
            scan_directory(tmp_path / "root_link", ScanOptions(yield_root=True), adapter)
        )

        assert entries[0].kind is EntryKind.SYMLINK_TO_DIRECTORY
        assert entries[1].path == tmp_path / "root_link" / "a.bin"


class TestDirectoryScan:
    """Test the collected scan and its totals."""

    def test_collect(self, adapter, nested_tree: Path):
        scan = DirectoryScan.collect(nested_tree, adapter=adapter)

        assert relative_paths(scan.files) == ["a.bin", "foo/b.bin", "foo/bar/c.bin", "z.txt"]
        assert relative_paths(scan.directories) == ["foo", "foo/bar"]
        assert scan.symlinks == []
        assert scan.total_size_in_bytes() == 37

    def test_collect_never_includes_root(self, adapter, nested_tree: Path):
        scan = DirectoryScan.collect(nested_tree, ScanOptions(yield_root=True), adapter)

        assert nested_tree not in [entry.path for entry in scan.entries]

    def test_collect_with_depth_limit(self, adapter, nested_tree: Path):
        scan = DirectoryScan.collect(nested_tree, ScanOptions(depth_limit=0), adapter)

        assert scan.total_size_in_bytes() == 12


class TestDirectoryHelpers:
    """Test is_directory_empty and directory_size_in_bytes."""

    def test_is_directory_empty(self, adapter, tmp_path: Path, source_tree: Path):
        (tmp_path / "empty").mkdir()

        assert is_directory_empty(tmp_path / "empty", adapter)
        assert not is_directory_empty(source_tree, adapter)

    def test_is_directory_empty_missing(self, adapter, tmp_path: Path):
        with pytest.raises(SourceNotFoundError):
            is_directory_empty(tmp_path / "missing", adapter)

    def test_is_directory_empty_on_file(self, adapter, source_tree: Path):
        with pytest.raises(SourceNotADirectoryError):
            is_directory_empty(source_tree / "a.bin", adapter)

    def test_directory_size(self, adapter, source_tree: Path):
        assert directory_size_in_bytes(source_tree, adapter=adapter) == 30

    def test_directory_size_of_file(self, adapter, source_tree: Path):
        with pytest.raises(SourceNotADirectoryError):
            directory_size_in_bytes(source_tree / "a.bin", adapter=adapter)

    @pytest.mark.symlinks
    def test_directory_size_follow_symlinks(self, adapter, source_tree: Path, tmp_path: Path):
        """Test linked directories only count when links are followed."""
        other = tmp_path / "other"
        other.mkdir()
        (other / "big.bin").write_bytes(b"x" * 100)
        os.symlink(other, source_tree / "linked", target_is_directory=True)

        assert directory_size_in_bytes(source_tree, adapter=adapter) == 30
        assert directory_size_in_bytes(source_tree, follow_symlinks=True, adapter=adapter) == 130
