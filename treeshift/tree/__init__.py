"""Directory tree scanning, copying and moving."""

from .collision import (
    DestinationState,
    check_destination_rule,
    resolve_directory_collision,
    resolve_file_collision,
    resolve_symlink_action,
)
from .copy_engine import DirectoryCopyEngine, PreparedCopy
from .move_engine import DirectoryMoveEngine
from .rename import AtomicRename, UnsupportedRename, select_rename_capability
from .scanner import (
    DirectoryScan,
    Entry,
    directory_size_in_bytes,
    is_directory_empty,
    scan_directory,
)
from .service import TreeOperationsService, create_tree_service, get_default_service


__all__ = [
    "DestinationState",
    "check_destination_rule",
    "resolve_directory_collision",
    "resolve_file_collision",
    "resolve_symlink_action",
    "DirectoryCopyEngine",
    "PreparedCopy",
    "DirectoryMoveEngine",
    "AtomicRename",
    "UnsupportedRename",
    "select_rename_capability",
    "DirectoryScan",
    "Entry",
    "directory_size_in_bytes",
    "is_directory_empty",
    "scan_directory",
    "TreeOperationsService",
    "create_tree_service",
    "get_default_service",
]
