"""Source and destination checks for single-file operations."""

from pathlib import Path

from treeshift.core.errors import (
    DestinationExistsError,
    FileSystemError,
    InvalidDestinationError,
    SourceNotAFileError,
    SourceNotFoundError,
)
from treeshift.core.paths import PathInfo, inspect_path
from treeshift.models.enums import CollidingFileBehaviour, EntryKind
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


def validate_source_file(source: Path, adapter: FileAdapterProtocol) -> PathInfo:
    """Check that ``source`` is a file or a link to one.

    Raises:
        SourceNotFoundError: If nothing usable exists at ``source``
        SourceNotAFileError: If ``source`` is a directory or links to one
    """
    info = inspect_path(source, adapter)
    if info is None or info.kind is EntryKind.BROKEN_SYMLINK:
        raise SourceNotFoundError(
            f"Source file does not exist: {source}", {"path": str(source)}
        )
    if info.kind.is_directory_like:
        raise SourceNotAFileError(
            f"Source path is not a file: {source}", {"path": str(source)}
        )
    return info


def check_destination_file(
    source: Path,
    destination: Path,
    behaviour: CollidingFileBehaviour,
    adapter: FileAdapterProtocol,
) -> bool:
    """Apply the collision behaviour to an existing destination file.

    Returns:
        False if the operation should be skipped, True otherwise

    Raises:
        InvalidDestinationError: If the destination is a directory or the
            source file itself
        DestinationExistsError: If the destination exists and the behaviour
            is to abort
    """
    existing = inspect_path(destination, adapter)
    if existing is None:
        return True

    if existing.kind.is_directory_like:
        raise InvalidDestinationError(
            f"Destination path is a directory: {destination}",
            {"path": str(destination)},
        )

    if existing.kind is not EntryKind.BROKEN_SYMLINK and _same_file(
        source, destination, adapter
    ):
        raise InvalidDestinationError(
            f"Source and destination are the same file: {source}",
            {"source": str(source), "destination": str(destination)},
        )

    match behaviour:
        case CollidingFileBehaviour.ABORT:
            raise DestinationExistsError(
                f"Destination file already exists: {destination}", path=destination
            )
        case CollidingFileBehaviour.SKIP:
            return False
        case CollidingFileBehaviour.OVERWRITE:
            return True


def _same_file(source: Path, destination: Path, adapter: FileAdapterProtocol) -> bool:
    try:
        return adapter.canonicalize(source) == adapter.canonicalize(destination)
    except FileSystemError:
        return False
