"""Protocol for the atomic rename capability used by directory moves."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class RenameCapabilityProtocol(Protocol):
    """Ability to move a path with a single atomic rename."""

    @property
    def name(self) -> str:
        """Short name used in logs."""
        ...

    def try_rename(self, source: Path, destination: Path) -> None:
        """Rename ``source`` to ``destination`` in one step.

        Raises:
            CrossDeviceRenameError: If the paths are on different volumes
            RenameCollisionError: If the destination is occupied
            FileSystemError: For any other failure
        """
        ...
