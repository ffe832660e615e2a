"""Single-file copy with buffered I/O and throttled progress."""

import logging
from pathlib import Path

from treeshift.adapters.file_adapter import create_file_adapter
from treeshift.core.errors import create_file_error
from treeshift.core.logging import get_logger
from treeshift.core.paths import inspect_path
from treeshift.models.options import FileCopyOptions
from treeshift.models.results import FileProgressCallback
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol

from .progress import ThrottledFileProgress
from .validation import check_destination_file, validate_source_file


logger = get_logger(__name__)


def copy_file_contents(
    source: Path,
    destination: Path,
    options: FileCopyOptions,
    adapter: FileAdapterProtocol,
    progress_callback: FileProgressCallback | None = None,
) -> int:
    """Copy the bytes of ``source`` to ``destination`` without any checks.

    Symbolic links at the source are followed. A link occupying the
    destination is removed first so content is never written through it.

    Returns:
        Number of bytes copied
    """
    bytes_total = adapter.metadata(source, follow_symlinks=True).st_size

    existing = inspect_path(destination, adapter)
    if existing is not None and existing.kind.is_symlink:
        adapter.remove_file(destination)

    progress = ThrottledFileProgress(
        bytes_total=bytes_total,
        update_byte_interval=options.progress_update_byte_interval,
        callback=progress_callback,
    )

    with (
        adapter.open_read(source, buffer_size=options.read_buffer_size) as reader,
        adapter.open_write(destination, buffer_size=options.write_buffer_size) as writer,
    ):
        try:
            while chunk := reader.read(options.read_buffer_size):
                writer.write(chunk)
                progress.advance(len(chunk))
            writer.flush()
        except OSError as e:
            raise create_file_error(
                destination, "copy_file", e, {"source": str(source)}
            ) from e

    final = progress.finish()
    return final.bytes_finished


def copy_file_with_progress(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    progress_callback: FileProgressCallback | None = None,
    adapter: FileAdapterProtocol | None = None,
) -> int:
    """Copy a single file, reporting progress while bytes are written.

    The destination must be the full path of the new file, not a directory.
    A symbolic link source is copied through: the content it points to ends
    up in ``destination``.

    Args:
        source: File to copy
        destination: Path of the new file
        options: Collision behaviour, buffer sizes and progress interval
        progress_callback: Receives a FileProgress at most every
            ``progress_update_byte_interval`` bytes and once at the end
        adapter: Filesystem adapter, the local filesystem by default

    Returns:
        Number of bytes copied, 0 when skipped because the destination exists

    Raises:
        SourceNotFoundError: If the source does not exist
        SourceNotAFileError: If the source is a directory
        InvalidDestinationError: If the destination is a directory or the
            source itself
        DestinationExistsError: If the destination exists and the behaviour
            is to abort
        FileSystemError: If reading or writing fails
    """
    options = options or FileCopyOptions()
    adapter = adapter or create_file_adapter()
    source = Path(source)
    destination = Path(destination)

    validate_source_file(source, adapter)
    if not check_destination_file(
        source, destination, options.colliding_file_behaviour, adapter
    ):
        logger.debug(
            "skipping_existing_file", source=str(source), destination=str(destination)
        )
        return 0

    try:
        bytes_copied = copy_file_contents(
            source, destination, options, adapter, progress_callback
        )
    except Exception as e:
        exc_info = logger.isEnabledFor(logging.DEBUG)
        logger.error(
            "file_copy_failed",
            source=str(source),
            destination=str(destination),
            error=str(e),
            exc_info=exc_info,
        )
        raise

    logger.debug(
        "file_copied",
        source=str(source),
        destination=str(destination),
        bytes_copied=bytes_copied,
    )
    return bytes_copied


def copy_file(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    adapter: FileAdapterProtocol | None = None,
) -> int:
    """Copy a single file. See :func:`copy_file_with_progress`."""
    return copy_file_with_progress(source, destination, options, None, adapter)
