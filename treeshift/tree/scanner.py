"""Lazy, depth-bounded directory tree scanning."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from treeshift.adapters.file_adapter import create_file_adapter
from treeshift.core.errors import (
    FileSystemError,
    ScanError,
    SourceNotADirectoryError,
    SourceNotFoundError,
    SymlinkCycleError,
    create_scan_error,
)
from treeshift.core.logging import get_logger
from treeshift.core.paths import PathInfo, absolute_path, inspect_path
from treeshift.models.enums import EntryKind
from treeshift.models.options import ScanOptions
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


logger = get_logger(__name__)


@dataclass(frozen=True)
class Entry:
    """A filesystem node discovered during a scan.

    ``depth`` is None for the scan root and 0 for its direct children.
    ``size_bytes`` is the file size for files and links to files (measured
    through the link), and 0 for everything else.
    """

    path: Path
    relative_path: Path
    depth: int | None
    kind: EntryKind
    size_bytes: int = 0


@dataclass
class _Frame:
    """One open directory on the scan stack."""

    path: Path
    child_depth: int
    children: Iterator[Path]
    ancestors: frozenset[tuple[int, int]]


def _followed_kind(kind: EntryKind) -> EntryKind:
    if kind is EntryKind.SYMLINK_TO_FILE:
        return EntryKind.FILE
    if kind is EntryKind.SYMLINK_TO_DIRECTORY:
        return EntryKind.DIRECTORY
    return kind


def _inspect_for_scan(path: Path, adapter: FileAdapterProtocol) -> PathInfo | None:
    try:
        return inspect_path(path, adapter)
    except FileSystemError as e:
        raise create_scan_error(path, e.__cause__ or e) from e


def _list_for_scan(path: Path, adapter: FileAdapterProtocol) -> Iterator[Path]:
    try:
        return iter(adapter.list_directory(path))
    except FileSystemError as e:
        raise create_scan_error(path, e.__cause__ or e) from e


def scan_directory(
    root: Path,
    options: ScanOptions | None = None,
    adapter: FileAdapterProtocol | None = None,
) -> Iterator[Entry]:
    """Lazily enumerate the tree below ``root`` in pre-order.

    Children are visited in name order and every directory is yielded
    before its children. Depth limiting stops descent, not enumeration:
    directories at the limit are still yielded.

    The root itself is validated eagerly; I/O failures further down are
    raised from the iterator as ``ScanError`` and do not invalidate entries
    already yielded.

    Raises:
        ScanError: If the root does not exist or is not a directory
    """
    options = options or ScanOptions()
    adapter = adapter or create_file_adapter()
    root = absolute_path(root)

    root_info = _inspect_for_scan(root, adapter)
    if root_info is None:
        raise ScanError(
            f"Scan root does not exist: {root}", path=root, operation="scan"
        )
    if not root_info.kind.is_directory_like:
        raise ScanError(
            f"Scan root is not a directory: {root}", path=root, operation="scan"
        )

    return _walk(root, root_info, options, adapter)


def _walk(
    root: Path,
    root_info: PathInfo,
    options: ScanOptions,
    adapter: FileAdapterProtocol,
) -> Iterator[Entry]:
    if options.yield_root:
        root_kind = (
            _followed_kind(root_info.kind) if options.follow_symlinks else root_info.kind
        )
        yield Entry(root, Path(), None, root_kind, 0)

    stack = [
        _Frame(
            path=root,
            child_depth=0,
            children=_list_for_scan(root, adapter),
            ancestors=frozenset({root_info.identity}),
        )
    ]

    while stack:
        frame = stack[-1]
        child = next(frame.children, None)
        if child is None:
            stack.pop()
            continue

        info = _inspect_for_scan(child, adapter)
        if info is None:
            logger.debug("scan_entry_vanished", path=str(child))
            continue

        kind = _followed_kind(info.kind) if options.follow_symlinks else info.kind
        yield Entry(
            path=child,
            relative_path=child.relative_to(root),
            depth=frame.child_depth,
            kind=kind,
            size_bytes=info.size_bytes,
        )

        if kind is not EntryKind.DIRECTORY:
            continue
        if not options.allows_descent_from(frame.child_depth):
            continue

        if info.identity in frame.ancestors:
            raise SymlinkCycleError(
                f"Symbolic link cycle detected at '{child}'",
                path=child,
                operation="scan",
                context={"path": str(child)},
            )

        stack.append(
            _Frame(
                path=child,
                child_depth=frame.child_depth + 1,
                children=_list_for_scan(child, adapter),
                ancestors=frame.ancestors | {info.identity},
            )
        )


@dataclass
class DirectoryScan:
    """Eagerly collected result of a directory scan."""

    root: Path
    files: list[Entry] = field(default_factory=list)
    directories: list[Entry] = field(default_factory=list)
    symlinks: list[Entry] = field(default_factory=list)
    broken_symlinks: list[Entry] = field(default_factory=list)

    @classmethod
    def collect(
        cls,
        root: Path,
        options: ScanOptions | None = None,
        adapter: FileAdapterProtocol | None = None,
    ) -> "DirectoryScan":
        """Scan ``root`` completely and sort the entries by kind.

        The root itself is never part of the result.
        """
        options = (options or ScanOptions()).model_copy(update={"yield_root": False})
        scan = cls(root=absolute_path(root))
        for entry in scan_directory(root, options, adapter):
            match entry.kind:
                case EntryKind.FILE:
                    scan.files.append(entry)
                case EntryKind.DIRECTORY:
                    scan.directories.append(entry)
                case EntryKind.SYMLINK_TO_FILE | EntryKind.SYMLINK_TO_DIRECTORY:
                    scan.symlinks.append(entry)
                case EntryKind.BROKEN_SYMLINK:
                    scan.broken_symlinks.append(entry)
        return scan

    @property
    def entries(self) -> list[Entry]:
        return [
            *self.directories,
            *self.files,
            *self.symlinks,
            *self.broken_symlinks,
        ]

    def total_size_in_bytes(self) -> int:
        """Sum of file sizes, links to files measured through the link."""
        return sum(entry.size_bytes for entry in self.entries)


def _require_directory(path: Path, adapter: FileAdapterProtocol) -> None:
    info = _inspect_for_scan(path, adapter)
    if info is None:
        raise SourceNotFoundError(
            f"Directory does not exist: {path}", {"path": str(path)}
        )
    if not info.kind.is_directory_like:
        raise SourceNotADirectoryError(
            f"Path is not a directory: {path}", {"path": str(path)}
        )


def is_directory_empty(path: Path, adapter: FileAdapterProtocol | None = None) -> bool:
    """Check whether a directory has no entries at all.

    Raises:
        SourceNotFoundError: If the directory does not exist
        SourceNotADirectoryError: If the path is not a directory
    """
    adapter = adapter or create_file_adapter()
    path = absolute_path(path)
    _require_directory(path, adapter)
    return not adapter.list_directory(path)


def directory_size_in_bytes(
    path: Path,
    follow_symlinks: bool = False,
    adapter: FileAdapterProtocol | None = None,
) -> int:
    """Total size of every file below ``path``, at unlimited depth."""
    adapter = adapter or create_file_adapter()
    path = absolute_path(path)
    _require_directory(path, adapter)
    scan = DirectoryScan.collect(
        path, ScanOptions(follow_symlinks=follow_symlinks), adapter
    )
    return scan.total_size_in_bytes()
