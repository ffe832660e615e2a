"""Rename capabilities used by directory moves."""

from pathlib import Path

from treeshift.core.errors import (
    CROSS_DEVICE_ERRNOS,
    RENAME_COLLISION_ERRNOS,
    CrossDeviceRenameError,
    FileSystemError,
    RenameCollisionError,
)
from treeshift.core.logging import get_logger
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol
from treeshift.protocols.rename_protocol import RenameCapabilityProtocol


class AtomicRename:
    """Renames through the adapter, classifying failures by errno."""

    def __init__(self, adapter: FileAdapterProtocol) -> None:
        self.adapter = adapter
        self.logger = get_logger(__name__)

    @property
    def name(self) -> str:
        return "atomic_rename"

    def try_rename(self, source: Path, destination: Path) -> None:
        try:
            self.adapter.rename(source, destination)
        except FileSystemError as e:
            context = {
                "source": str(source),
                "destination": str(destination),
                "errno": e.errno,
            }
            if e.errno in CROSS_DEVICE_ERRNOS:
                raise CrossDeviceRenameError(
                    f"Cannot rename '{source}' to '{destination}' across devices",
                    context,
                ) from e
            if e.errno in RENAME_COLLISION_ERRNOS:
                raise RenameCollisionError(
                    f"Cannot rename '{source}' to '{destination}': destination is occupied",
                    context,
                ) from e
            raise
        self.logger.debug(
            "renamed", source=str(source), destination=str(destination)
        )


class UnsupportedRename:
    """Capability for paths known to live on different volumes."""

    @property
    def name(self) -> str:
        return "unsupported_rename"

    def try_rename(self, source: Path, destination: Path) -> None:
        raise CrossDeviceRenameError(
            f"Cannot rename '{source}' to '{destination}' across devices",
            {"source": str(source), "destination": str(destination)},
        )


def _nearest_existing_ancestor(path: Path, adapter: FileAdapterProtocol) -> Path:
    for candidate in (path, *path.parents):
        if adapter.exists_without_dereferencing(candidate):
            return candidate
    return Path(path.anchor)


def select_rename_capability(
    source: Path, destination: Path, adapter: FileAdapterProtocol
) -> RenameCapabilityProtocol:
    """Pick a rename capability for a source/destination pair.

    Returns AtomicRename when the source and the destination's nearest
    existing ancestor share a device, UnsupportedRename otherwise.
    """
    source_device = adapter.metadata(source, follow_symlinks=False).st_dev
    ancestor = _nearest_existing_ancestor(destination, adapter)
    destination_device = adapter.metadata(ancestor, follow_symlinks=True).st_dev
    if source_device == destination_device:
        return AtomicRename(adapter)
    return UnsupportedRename()
