"""Single-file move: rename when possible, copy and delete otherwise."""

import logging
from pathlib import Path

from treeshift.adapters.file_adapter import create_file_adapter
from treeshift.core.errors import FileSystemError
from treeshift.core.logging import get_logger
from treeshift.models.enums import EntryKind
from treeshift.models.options import FileCopyOptions
from treeshift.models.results import FileProgress, FileProgressCallback
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol

from .copy import copy_file_contents
from .validation import check_destination_file, validate_source_file


logger = get_logger(__name__)


def move_file_with_progress(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    progress_callback: FileProgressCallback | None = None,
    adapter: FileAdapterProtocol | None = None,
) -> int:
    """Move a single file, reporting progress.

    A rename is tried first. If it fails for any reason the file is copied
    and the source removed, reporting byte progress along the way. A
    successful rename sends a single completed progress report.

    A source that is a symbolic link to a file is never renamed: the content
    behind the link is copied to ``destination`` and the link is removed.

    Returns:
        Number of bytes moved, 0 when skipped because the destination exists

    Raises:
        SourceNotFoundError: If the source does not exist
        SourceNotAFileError: If the source is a directory
        InvalidDestinationError: If the destination is a directory or the
            source itself
        DestinationExistsError: If the destination exists and the behaviour
            is to abort
        FileSystemError: If the copy or the removal fails
    """
    options = options or FileCopyOptions()
    adapter = adapter or create_file_adapter()
    source = Path(source)
    destination = Path(destination)

    source_info = validate_source_file(source, adapter)
    if not check_destination_file(
        source, destination, options.colliding_file_behaviour, adapter
    ):
        logger.debug(
            "skipping_existing_file", source=str(source), destination=str(destination)
        )
        return 0

    size_bytes = source_info.size_bytes

    if source_info.kind is EntryKind.FILE:
        try:
            adapter.rename(source, destination)
        except FileSystemError as e:
            logger.debug(
                "file_rename_failed_copying_instead",
                source=str(source),
                destination=str(destination),
                error=str(e),
            )
        else:
            if progress_callback is not None:
                progress_callback(
                    FileProgress(bytes_finished=size_bytes, bytes_total=size_bytes)
                )
            logger.debug(
                "file_renamed", source=str(source), destination=str(destination)
            )
            return size_bytes

    try:
        bytes_copied = copy_file_contents(
            source, destination, options, adapter, progress_callback
        )
        adapter.remove_file(source)
    except Exception as e:
        exc_info = logger.isEnabledFor(logging.DEBUG)
        logger.error(
            "file_move_failed",
            source=str(source),
            destination=str(destination),
            error=str(e),
            exc_info=exc_info,
        )
        raise

    logger.debug(
        "file_moved_by_copy",
        source=str(source),
        destination=str(destination),
        bytes_copied=bytes_copied,
    )
    return bytes_copied


def move_file(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    adapter: FileAdapterProtocol | None = None,
) -> int:
    """Move a single file. See :func:`move_file_with_progress`."""
    return move_file_with_progress(source, destination, options, None, adapter)
