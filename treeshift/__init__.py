"""treeshift - recursive directory copy and move with progress reporting."""

from importlib.metadata import distribution

from .config import TreeshiftSettings
from .core.errors import (
    BrokenSymlinkError,
    CollisionAbortError,
    CrossDeviceRenameError,
    DestinationExistsError,
    DestinationNotEmptyError,
    FileSystemError,
    InvalidDestinationError,
    RenameCollisionError,
    RenameUnsupportedError,
    ScanError,
    SourceNotADirectoryError,
    SourceNotAFileError,
    SourceNotFoundError,
    SymlinkCycleError,
    TreeshiftError,
)
from .file_operations import file_size_in_bytes, remove_file
from .models import (
    BrokenSymlinkBehaviour,
    CollidingFileBehaviour,
    CollidingSubdirectoryBehaviour,
    CopyFinished,
    CopyOptions,
    DestinationDirectoryRule,
    EntryKind,
    FileCopyOptions,
    FileProgress,
    MoveFinished,
    MoveMethod,
    MoveOptions,
    MoveStrategy,
    OperationKind,
    ScanOptions,
    SymlinkBehaviour,
    TreeOperation,
    TreeProgress,
)
from .tree import DirectoryScan, Entry, TreeOperationsService, create_tree_service
from .tree.service import (
    copy_directory,
    copy_directory_with_progress,
    copy_file,
    copy_file_with_progress,
    directory_size_in_bytes,
    is_directory_empty,
    move_directory,
    move_directory_with_progress,
    move_file,
    move_file_with_progress,
    scan_directory,
)


__version__ = distribution(__package__ or "treeshift").version

__all__ = [
    "__version__",
    # Operations
    "scan_directory",
    "copy_file",
    "copy_file_with_progress",
    "move_file",
    "move_file_with_progress",
    "remove_file",
    "file_size_in_bytes",
    "copy_directory",
    "copy_directory_with_progress",
    "move_directory",
    "move_directory_with_progress",
    "is_directory_empty",
    "directory_size_in_bytes",
    "DirectoryScan",
    "Entry",
    "TreeOperationsService",
    "create_tree_service",
    "TreeshiftSettings",
    # Options and results
    "ScanOptions",
    "FileCopyOptions",
    "CopyOptions",
    "MoveOptions",
    "CopyFinished",
    "MoveFinished",
    "FileProgress",
    "TreeProgress",
    "TreeOperation",
    "EntryKind",
    "DestinationDirectoryRule",
    "CollidingFileBehaviour",
    "CollidingSubdirectoryBehaviour",
    "SymlinkBehaviour",
    "BrokenSymlinkBehaviour",
    "MoveStrategy",
    "MoveMethod",
    "OperationKind",
    # Errors
    "TreeshiftError",
    "SourceNotFoundError",
    "SourceNotADirectoryError",
    "SourceNotAFileError",
    "InvalidDestinationError",
    "DestinationExistsError",
    "DestinationNotEmptyError",
    "CollisionAbortError",
    "BrokenSymlinkError",
    "RenameUnsupportedError",
    "CrossDeviceRenameError",
    "RenameCollisionError",
    "FileSystemError",
    "ScanError",
    "SymlinkCycleError",
]
