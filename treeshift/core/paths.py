"""Path inspection helpers shared by file and tree operations."""

import errno
import os
import stat
from pathlib import Path
from typing import NamedTuple

from treeshift.core.errors import FileSystemError
from treeshift.models.enums import EntryKind
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


# errno values that mean "nothing lives at this path"
MISSING_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR})


class PathInfo(NamedTuple):
    """Classification of a single path.

    ``stat`` is the target's metadata when the path resolves, and the link's
    own metadata for broken links.
    """

    kind: EntryKind
    stat: os.stat_result

    @property
    def size_bytes(self) -> int:
        if self.kind in (EntryKind.FILE, EntryKind.SYMLINK_TO_FILE):
            return self.stat.st_size
        return 0

    @property
    def identity(self) -> tuple[int, int]:
        return (self.stat.st_dev, self.stat.st_ino)


def inspect_path(path: Path, adapter: FileAdapterProtocol) -> PathInfo | None:
    """Classify ``path`` without following it, or return None if it is absent.

    Raises:
        FileSystemError: If the path exists but cannot be inspected
    """
    try:
        link_stat = adapter.metadata(path, follow_symlinks=False)
    except FileSystemError as e:
        if e.errno in MISSING_ERRNOS:
            return None
        raise

    if not stat.S_ISLNK(link_stat.st_mode):
        kind = EntryKind.DIRECTORY if stat.S_ISDIR(link_stat.st_mode) else EntryKind.FILE
        return PathInfo(kind, link_stat)

    try:
        target_stat = adapter.metadata(path, follow_symlinks=True)
    except FileSystemError:
        return PathInfo(EntryKind.BROKEN_SYMLINK, link_stat)

    if stat.S_ISDIR(target_stat.st_mode):
        return PathInfo(EntryKind.SYMLINK_TO_DIRECTORY, target_stat)
    return PathInfo(EntryKind.SYMLINK_TO_FILE, target_stat)


def entry_kind_at(path: Path, adapter: FileAdapterProtocol) -> EntryKind | None:
    """Return the kind of whatever occupies ``path``, or None."""
    info = inspect_path(path, adapter)
    return info.kind if info is not None else None


def absolute_path(path: Path | str) -> Path:
    """Make ``path`` absolute lexically, without touching the filesystem."""
    return Path(os.path.abspath(path))


def is_same_or_inside(path: Path, ancestor: Path) -> bool:
    """Check whether ``path`` equals ``ancestor`` or lies below it."""
    return path == ancestor or ancestor in path.parents
