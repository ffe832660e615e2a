"""Exception hierarchy for treeshift operations."""

import errno
from pathlib import Path
from typing import Any


class TreeshiftError(Exception):
    """Base exception for all treeshift errors.

    Attributes:
        message: Human readable description of the failure
        context: Additional structured details about the failure
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class SourceNotFoundError(TreeshiftError):
    """The source path does not exist."""


class SourceNotADirectoryError(TreeshiftError):
    """The source path exists but is not a directory."""


class SourceNotAFileError(TreeshiftError):
    """The source path exists but is not a file."""


class InvalidDestinationError(TreeshiftError):
    """The destination points to an unusable location.

    Raised when the destination is the source itself, lies inside the
    source tree, or exists with the wrong kind.
    """


class DestinationExistsError(TreeshiftError):
    """The destination already exists and the configured rule forbids it."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.path = path


class DestinationNotEmptyError(DestinationExistsError):
    """The destination directory exists, is not empty and must be."""


class CollisionAbortError(TreeshiftError):
    """A per-entry collision policy resolved to abort mid-traversal."""

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context)
        self.path = path


class BrokenSymlinkError(CollisionAbortError):
    """A broken symbolic link was found and the policy is to fail on it."""


class RenameUnsupportedError(TreeshiftError):
    """A rename cannot apply to this source/destination pair.

    Only the rename-with-fallback move strategy recovers from this error by
    switching to copy-and-delete.
    """

    reason = "unsupported"


class CrossDeviceRenameError(RenameUnsupportedError):
    """Source and destination live on different volumes."""

    reason = "cross_device"


class RenameCollisionError(RenameUnsupportedError):
    """The destination is occupied in a way rename cannot arbitrate."""

    reason = "destination_collision"


class FileSystemError(TreeshiftError):
    """An underlying filesystem primitive failed.

    Attributes:
        path: Path the failing operation was applied to
        operation: Name of the failing operation
        errno: OS error number, when the failure came from the OS
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        operation: str | None = None,
        context: dict[str, Any] | None = None,
        error_number: int | None = None,
    ):
        super().__init__(message, context)
        self.path = path
        self.operation = operation
        self.errno = error_number


class ScanError(FileSystemError):
    """A directory scan could not start or could not continue."""


class SymlinkCycleError(ScanError):
    """A followed symbolic link leads back to one of its ancestors."""


# Error numbers for which a rename failure means "rename cannot apply here".
CROSS_DEVICE_ERRNOS = frozenset({errno.EXDEV})
RENAME_COLLISION_ERRNOS = frozenset(
    {errno.EEXIST, errno.ENOTEMPTY, errno.EISDIR, errno.ENOTDIR}
)


def create_file_error(
    path: Path | str,
    operation: str,
    error: BaseException,
    details: dict[str, Any] | None = None,
) -> FileSystemError:
    """Build a FileSystemError describing a failed primitive.

    Args:
        path: Path the operation was applied to
        operation: Name of the failing operation
        error: The original exception
        details: Extra context stored on the error

    Returns:
        FileSystemError with a uniform message
    """
    reason = error.strerror if isinstance(error, OSError) and error.strerror else str(error)
    context = {"operation": operation, "path": str(path), **(details or {})}
    return FileSystemError(
        f"File operation '{operation}' failed on '{path}': {reason}",
        path=Path(path),
        operation=operation,
        context=context,
        error_number=error.errno if isinstance(error, OSError) else None,
    )


def create_scan_error(
    path: Path | str, error: BaseException, details: dict[str, Any] | None = None
) -> ScanError:
    """Build a ScanError wrapping an I/O failure met during a scan."""
    if isinstance(error, OSError) and error.strerror:
        reason = error.strerror
    elif isinstance(error, TreeshiftError):
        reason = error.message
    else:
        reason = str(error)
    return ScanError(
        f"Unable to scan '{path}': {reason}",
        path=Path(path),
        operation="scan",
        context={"path": str(path), **(details or {})},
        error_number=getattr(error, "errno", None),
    )
