"""Models package for treeshift options, progress and results."""

from .base import TreeshiftBaseModel
from .enums import (
    BrokenSymlinkBehaviour,
    CollidingFileBehaviour,
    CollidingSubdirectoryBehaviour,
    DestinationDirectoryRule,
    EntryKind,
    MoveMethod,
    MoveStrategy,
    OperationKind,
    Resolution,
    SymlinkAction,
    SymlinkBehaviour,
)
from .options import (
    DEFAULT_BUFFER_SIZE,
    DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL,
    CopyOptions,
    FileCopyOptions,
    MoveOptions,
    ScanOptions,
)
from .results import (
    CopyFinished,
    FileProgress,
    FileProgressCallback,
    MoveFinished,
    ProgressState,
    TreeOperation,
    TreeProgress,
    TreeProgressCallback,
    TreeSummary,
)


__all__ = [
    "TreeshiftBaseModel",
    "BrokenSymlinkBehaviour",
    "CollidingFileBehaviour",
    "CollidingSubdirectoryBehaviour",
    "DestinationDirectoryRule",
    "EntryKind",
    "MoveMethod",
    "MoveStrategy",
    "OperationKind",
    "Resolution",
    "SymlinkAction",
    "SymlinkBehaviour",
    "DEFAULT_BUFFER_SIZE",
    "DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL",
    "CopyOptions",
    "FileCopyOptions",
    "MoveOptions",
    "ScanOptions",
    "CopyFinished",
    "FileProgress",
    "FileProgressCallback",
    "MoveFinished",
    "ProgressState",
    "TreeOperation",
    "TreeProgress",
    "TreeProgressCallback",
    "TreeSummary",
]
