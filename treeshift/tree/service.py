"""Tree operations service and the module-level convenience API."""

from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from treeshift.adapters.file_adapter import create_file_adapter
from treeshift.config.settings import TreeshiftSettings
from treeshift.core.logging import get_logger
from treeshift.file_operations import copy as file_copy
from treeshift.file_operations import move as file_move
from treeshift.models.options import CopyOptions, FileCopyOptions, MoveOptions, ScanOptions
from treeshift.models.results import (
    CopyFinished,
    FileProgressCallback,
    MoveFinished,
    TreeProgressCallback,
)
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol
from treeshift.protocols.rename_protocol import RenameCapabilityProtocol

from . import scanner
from .copy_engine import DirectoryCopyEngine
from .move_engine import DirectoryMoveEngine
from .scanner import Entry


class TreeOperationsService:
    """Binds settings, a file adapter and the copy/move engines together.

    Options omitted by a caller are seeded from the service settings.
    """

    def __init__(
        self,
        settings: TreeshiftSettings,
        adapter: FileAdapterProtocol,
        rename_capability: RenameCapabilityProtocol | None = None,
    ):
        """Initialize the tree operations service.

        Args:
            settings: Buffer sizes, progress interval and default move strategy
            adapter: Filesystem adapter used for every primitive
            rename_capability: Fixed rename capability for moves, selected
                per call when omitted
        """
        self.settings = settings
        self.adapter = adapter
        self.copy_engine = DirectoryCopyEngine(adapter)
        self.move_engine = DirectoryMoveEngine(
            adapter, self.copy_engine, rename_capability
        )
        self.logger = get_logger(__name__)

    def scan_directory(
        self, root: Path, options: ScanOptions | None = None
    ) -> Iterator[Entry]:
        return scanner.scan_directory(root, options, self.adapter)

    def is_directory_empty(self, path: Path) -> bool:
        return scanner.is_directory_empty(path, self.adapter)

    def directory_size_in_bytes(self, path: Path, follow_symlinks: bool = False) -> int:
        return scanner.directory_size_in_bytes(path, follow_symlinks, self.adapter)

    def copy_file(
        self,
        source: Path,
        destination: Path,
        options: FileCopyOptions | None = None,
        progress_callback: FileProgressCallback | None = None,
    ) -> int:
        options = options or FileCopyOptions.from_settings(self.settings)
        return file_copy.copy_file_with_progress(
            source, destination, options, progress_callback, self.adapter
        )

    def move_file(
        self,
        source: Path,
        destination: Path,
        options: FileCopyOptions | None = None,
        progress_callback: FileProgressCallback | None = None,
    ) -> int:
        options = options or FileCopyOptions.from_settings(self.settings)
        return file_move.move_file_with_progress(
            source, destination, options, progress_callback, self.adapter
        )

    def copy_directory(
        self,
        source: Path,
        destination: Path,
        options: CopyOptions | None = None,
        progress_callback: TreeProgressCallback | None = None,
    ) -> CopyFinished:
        options = options or CopyOptions.from_settings(self.settings)
        self.logger.debug(
            "copying_directory", source=str(source), destination=str(destination)
        )
        return self.copy_engine.copy_directory(
            Path(source), Path(destination), options, progress_callback
        )

    def move_directory(
        self,
        source: Path,
        destination: Path,
        options: MoveOptions | None = None,
        progress_callback: TreeProgressCallback | None = None,
    ) -> MoveFinished:
        options = options or MoveOptions.from_settings(self.settings)
        self.logger.debug(
            "moving_directory",
            source=str(source),
            destination=str(destination),
            strategy=options.move_strategy.value,
        )
        return self.move_engine.move_directory(
            Path(source), Path(destination), options, progress_callback
        )


def create_tree_service(
    settings: TreeshiftSettings | None = None,
    adapter: FileAdapterProtocol | None = None,
    rename_capability: RenameCapabilityProtocol | None = None,
) -> TreeOperationsService:
    """Create a tree operations service.

    Args:
        settings: Settings to use, read from the environment when omitted
        adapter: Filesystem adapter, the local filesystem by default
        rename_capability: Fixed rename capability for moves

    Returns:
        Configured TreeOperationsService
    """
    return TreeOperationsService(
        settings=settings or TreeshiftSettings(),
        adapter=adapter or create_file_adapter(),
        rename_capability=rename_capability,
    )


@lru_cache(maxsize=1)
def get_default_service() -> TreeOperationsService:
    """Return the shared service, built from the environment on first use."""
    return create_tree_service()


def scan_directory(root: Path, options: ScanOptions | None = None) -> Iterator[Entry]:
    """Lazily enumerate a directory tree. See :func:`treeshift.tree.scanner.scan_directory`."""
    return get_default_service().scan_directory(root, options)


def is_directory_empty(path: Path) -> bool:
    return get_default_service().is_directory_empty(path)


def directory_size_in_bytes(path: Path, follow_symlinks: bool = False) -> int:
    return get_default_service().directory_size_in_bytes(path, follow_symlinks)


def copy_file(
    source: Path, destination: Path, options: FileCopyOptions | None = None
) -> int:
    return get_default_service().copy_file(source, destination, options)


def copy_file_with_progress(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    progress_callback: FileProgressCallback | None = None,
) -> int:
    return get_default_service().copy_file(
        source, destination, options, progress_callback
    )


def move_file(
    source: Path, destination: Path, options: FileCopyOptions | None = None
) -> int:
    return get_default_service().move_file(source, destination, options)


def move_file_with_progress(
    source: Path,
    destination: Path,
    options: FileCopyOptions | None = None,
    progress_callback: FileProgressCallback | None = None,
) -> int:
    return get_default_service().move_file(
        source, destination, options, progress_callback
    )


def copy_directory(
    source: Path, destination: Path, options: CopyOptions | None = None
) -> CopyFinished:
    """Copy a directory tree with the default service."""
    return get_default_service().copy_directory(source, destination, options)


def copy_directory_with_progress(
    source: Path,
    destination: Path,
    options: CopyOptions | None = None,
    progress_callback: TreeProgressCallback | None = None,
) -> CopyFinished:
    """Copy a directory tree, reporting TreeProgress snapshots to the callback."""
    return get_default_service().copy_directory(
        source, destination, options, progress_callback
    )


def move_directory(
    source: Path, destination: Path, options: MoveOptions | None = None
) -> MoveFinished:
    """Move a directory tree with the default service."""
    return get_default_service().move_directory(source, destination, options)


def move_directory_with_progress(
    source: Path,
    destination: Path,
    options: MoveOptions | None = None,
    progress_callback: TreeProgressCallback | None = None,
) -> MoveFinished:
    """Move a directory tree, reporting TreeProgress snapshots to the callback."""
    return get_default_service().move_directory(
        source, destination, options, progress_callback
    )
