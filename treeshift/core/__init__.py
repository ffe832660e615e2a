from .errors import (
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
from .logging import get_logger, setup_logging, setup_logging_from_settings


__all__ = [
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
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
