"""Enums shared by the scanner, the collision resolver and the engines."""

from enum import Enum


class EntryKind(str, Enum):
    """Kind of a filesystem node discovered during a scan."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK_TO_FILE = "symlink_to_file"
    SYMLINK_TO_DIRECTORY = "symlink_to_directory"
    BROKEN_SYMLINK = "broken_symlink"

    @property
    def is_symlink(self) -> bool:
        return self in (
            EntryKind.SYMLINK_TO_FILE,
            EntryKind.SYMLINK_TO_DIRECTORY,
            EntryKind.BROKEN_SYMLINK,
        )

    @property
    def is_directory_like(self) -> bool:
        """True for directories and for links that resolve to one."""
        return self in (EntryKind.DIRECTORY, EntryKind.SYMLINK_TO_DIRECTORY)


class DestinationDirectoryRule(str, Enum):
    """Whether the destination root may exist before a copy or move."""

    DISALLOW_EXISTING = "disallow_existing"
    ALLOW_EMPTY = "allow_empty"
    ALLOW_NON_EMPTY = "allow_non_empty"


class CollidingFileBehaviour(str, Enum):
    """What to do when a file (or link) already occupies its destination."""

    ABORT = "abort"
    SKIP = "skip"
    OVERWRITE = "overwrite"


class CollidingSubdirectoryBehaviour(str, Enum):
    """What to do when a directory already exists at its destination."""

    ABORT = "abort"
    MERGE = "merge"


class SymlinkBehaviour(str, Enum):
    """How valid symbolic links inside a source tree are handled."""

    PRESERVE = "preserve"
    FOLLOW = "follow"


class BrokenSymlinkBehaviour(str, Enum):
    """How broken symbolic links inside a source tree are handled."""

    PRESERVE = "preserve"
    FAIL = "fail"


class Resolution(str, Enum):
    """Outcome of a collision decision."""

    PROCEED = "proceed"
    SKIP = "skip"
    ABORT = "abort"


class SymlinkAction(str, Enum):
    """Action an engine takes for a symbolic link entry."""

    PRESERVE = "preserve"
    FOLLOW = "follow"


class MoveStrategy(str, Enum):
    """Mechanism selection for directory moves."""

    RENAME_ONLY = "rename_only"
    COPY_AND_DELETE_ONLY = "copy_and_delete_only"
    RENAME_WITH_FALLBACK = "rename_with_fallback"


class MoveMethod(str, Enum):
    """Mechanism that actually realized a move."""

    RENAME = "rename"
    COPY_AND_DELETE = "copy_and_delete"


class OperationKind(str, Enum):
    """Kind of the operation currently reported by a progress snapshot."""

    CREATING_DIRECTORY = "creating_directory"
    COPYING_FILE = "copying_file"
    CREATING_SYMLINK = "creating_symlink"
    RENAMING = "renaming"
    REMOVING_SOURCE = "removing_source"
