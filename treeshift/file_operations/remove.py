"""File removal and size queries."""

from pathlib import Path

from treeshift.adapters.file_adapter import create_file_adapter
from treeshift.core.logging import get_logger
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol

from .validation import validate_source_file


logger = get_logger(__name__)


def remove_file(path: Path, adapter: FileAdapterProtocol | None = None) -> None:
    """Remove a file, or a symbolic link to one.

    Raises:
        SourceNotFoundError: If the file does not exist
        SourceNotAFileError: If the path is a directory
        FileSystemError: If the file cannot be removed
    """
    adapter = adapter or create_file_adapter()
    path = Path(path)
    validate_source_file(path, adapter)
    adapter.remove_file(path)
    logger.debug("file_removed", path=str(path))


def file_size_in_bytes(path: Path, adapter: FileAdapterProtocol | None = None) -> int:
    """Return the size of a file, following a symbolic link to it."""
    adapter = adapter or create_file_adapter()
    return validate_source_file(Path(path), adapter).size_bytes
