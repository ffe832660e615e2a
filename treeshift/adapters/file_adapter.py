"""Local filesystem adapter for single-entry primitives."""

import logging
import os
import shutil
from pathlib import Path
from typing import BinaryIO, cast

from treeshift.core.errors import create_file_error
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


logger = logging.getLogger(__name__)


class LocalFileSystemAdapter:
    """File system adapter backed by ``os`` and ``shutil``."""

    def open_read(self, path: Path, buffer_size: int = -1) -> BinaryIO:
        try:
            logger.debug("Opening file for reading: %s", path)
            return cast(BinaryIO, path.open(mode="rb", buffering=buffer_size))
        except PermissionError as e:
            logger.error("Permission denied reading file: %s", path)
            raise create_file_error(path, "open_read", e, {}) from e
        except OSError as e:
            logger.error("Error opening file %s: %s", path, e)
            raise create_file_error(path, "open_read", e, {}) from e

    def open_write(self, path: Path, buffer_size: int = -1) -> BinaryIO:
        try:
            logger.debug("Opening file for writing: %s", path)
            return cast(BinaryIO, path.open(mode="wb", buffering=buffer_size))
        except PermissionError as e:
            logger.error("Permission denied writing file: %s", path)
            raise create_file_error(path, "open_write", e, {}) from e
        except OSError as e:
            logger.error("Error opening file %s for writing: %s", path, e)
            raise create_file_error(path, "open_write", e, {}) from e

    def create_directory(self, path: Path) -> None:
        try:
            logger.debug("Creating directory: %s", path)
            path.mkdir()
        except OSError as e:
            logger.error("Error creating directory %s: %s", path, e)
            raise create_file_error(path, "create_directory", e, {}) from e

    def remove_directory_recursive(self, path: Path) -> None:
        try:
            logger.debug("Removing directory tree: %s", path)
            if path.is_symlink():
                # rmtree refuses links; the link itself is what gets removed
                path.unlink()
            else:
                shutil.rmtree(path)
            logger.debug("Successfully removed directory tree: %s", path)
        except OSError as e:
            logger.error("Error removing directory %s: %s", path, e)
            raise create_file_error(path, "remove_directory_recursive", e, {}) from e

    def remove_file(self, path: Path) -> None:
        try:
            logger.debug("Removing file: %s", path)
            path.unlink()
        except PermissionError as e:
            logger.error("Permission denied removing file: %s", path)
            raise create_file_error(path, "remove_file", e, {}) from e
        except OSError as e:
            logger.error("Error removing file %s: %s", path, e)
            raise create_file_error(path, "remove_file", e, {}) from e

    def rename(self, source: Path, destination: Path) -> None:
        try:
            logger.debug("Renaming: %s -> %s", source, destination)
            os.rename(source, destination)
        except OSError as e:
            # Callers decide on fallbacks from errno, so log quietly
            logger.debug("Rename %s -> %s failed: %s", source, destination, e)
            raise create_file_error(
                source, "rename", e, {"destination": str(destination)}
            ) from e

    def create_symlink(
        self, target: Path, path: Path, target_is_directory: bool = False
    ) -> None:
        try:
            logger.debug("Creating symlink: %s -> %s", path, target)
            os.symlink(target, path, target_is_directory=target_is_directory)
        except OSError as e:
            logger.error("Error creating symlink %s: %s", path, e)
            raise create_file_error(
                path,
                "create_symlink",
                e,
                {"target": str(target), "target_is_directory": target_is_directory},
            ) from e

    def read_link(self, path: Path) -> Path:
        try:
            return Path(os.readlink(path))
        except OSError as e:
            logger.error("Error reading symlink %s: %s", path, e)
            raise create_file_error(path, "read_link", e, {}) from e

    def exists_without_dereferencing(self, path: Path) -> bool:
        return os.path.lexists(path)

    def metadata(self, path: Path, follow_symlinks: bool = True) -> os.stat_result:
        try:
            return os.stat(path, follow_symlinks=follow_symlinks)
        except OSError as e:
            raise create_file_error(
                path, "metadata", e, {"follow_symlinks": follow_symlinks}
            ) from e

    def list_directory(self, path: Path) -> list[Path]:
        try:
            logger.debug("Listing directory contents: %s", path)
            with os.scandir(path) as it:
                names = sorted(entry.name for entry in it)
            logger.debug("Found %d items in %s", len(names), path)
            return [path / name for name in names]
        except OSError as e:
            logger.error("Error listing directory %s: %s", path, e)
            raise create_file_error(path, "list_directory", e, {}) from e

    def canonicalize(self, path: Path) -> Path:
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise create_file_error(path, "canonicalize", e, {}) from e


def create_file_adapter() -> FileAdapterProtocol:
    """Create a file adapter with default implementation."""
    return LocalFileSystemAdapter()
