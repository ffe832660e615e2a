"""Protocol for the single-entry filesystem primitives used by tree operations."""

import os
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable


@runtime_checkable
class FileAdapterProtocol(Protocol):
    """Protocol for filesystem primitives.

    Every method acts on exactly one filesystem entry. Implementations raise
    treeshift errors (``FileSystemError`` and friends), never a raw ``OSError``.
    """

    def open_read(self, path: Path, buffer_size: int = -1) -> BinaryIO:
        """Open a file for binary reading.

        Args:
            path: File to open, symbolic links are followed
            buffer_size: Read buffer size, -1 for the platform default

        Returns:
            Binary file object

        Raises:
            FileSystemError: If the file cannot be opened
        """
        ...

    def open_write(self, path: Path, buffer_size: int = -1) -> BinaryIO:
        """Open a file for binary writing, truncating existing content.

        Args:
            path: File to open
            buffer_size: Write buffer size, -1 for the platform default

        Returns:
            Binary file object

        Raises:
            FileSystemError: If the file cannot be opened
        """
        ...

    def create_directory(self, path: Path) -> None:
        """Create a single directory whose parent must exist.

        Raises:
            FileSystemError: If the directory cannot be created
        """
        ...

    def remove_directory_recursive(self, path: Path) -> None:
        """Remove a directory and everything below it.

        Symbolic links inside the tree are removed, never followed.

        Raises:
            FileSystemError: If any part of the tree cannot be removed
        """
        ...

    def remove_file(self, path: Path) -> None:
        """Remove a file or a symbolic link.

        Raises:
            FileSystemError: If the entry cannot be removed
        """
        ...

    def rename(self, source: Path, destination: Path) -> None:
        """Atomically rename ``source`` to ``destination``.

        Raises:
            FileSystemError: If the rename fails, ``errno`` is preserved
        """
        ...

    def create_symlink(
        self, target: Path, path: Path, target_is_directory: bool = False
    ) -> None:
        """Create a symbolic link at ``path`` pointing to ``target``.

        Args:
            target: Link target, stored verbatim (may be relative)
            path: Location of the new link
            target_is_directory: Hint for platforms with typed links

        Raises:
            FileSystemError: If the link cannot be created
        """
        ...

    def read_link(self, path: Path) -> Path:
        """Return the target stored in a symbolic link."""
        ...

    def exists_without_dereferencing(self, path: Path) -> bool:
        """Check if anything, including a broken link, occupies ``path``."""
        ...

    def metadata(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        """Return stat information for ``path``.

        Raises:
            FileSystemError: If the entry cannot be inspected
        """
        ...

    def list_directory(self, path: Path) -> list[Path]:
        """List the entries of a directory, sorted by name.

        Raises:
            FileSystemError: If the directory cannot be listed
        """
        ...

    def canonicalize(self, path: Path) -> Path:
        """Return the absolute path with every symbolic link resolved.

        Raises:
            FileSystemError: If the path does not exist
        """
        ...
