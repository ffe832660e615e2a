"""Option models for scans, file copies and directory copies/moves."""

from typing import Any

from pydantic import Field

from .base import TreeshiftBaseModel
from .enums import (
    BrokenSymlinkBehaviour,
    CollidingFileBehaviour,
    CollidingSubdirectoryBehaviour,
    DestinationDirectoryRule,
    MoveStrategy,
    SymlinkBehaviour,
)


DEFAULT_BUFFER_SIZE = 64 * 1024
DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL = 64 * 1024

# Option fields that can be seeded from TreeshiftSettings
_SETTINGS_FIELDS = (
    "read_buffer_size",
    "write_buffer_size",
    "progress_update_byte_interval",
)


class ScanOptions(TreeshiftBaseModel):
    """Options for a directory scan.

    ``depth_limit`` of ``None`` means unlimited. Depth 0 is the direct
    children of the scan root: with ``depth_limit=0`` the root's children are
    listed, but no subdirectory is descended into.
    """

    depth_limit: int | None = Field(
        default=None, ge=0, description="Maximum depth of listed entries"
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Classify links by their targets and descend into linked directories",
    )
    yield_root: bool = Field(
        default=False, description="Yield the scan root as the first entry"
    )

    def allows_descent_from(self, depth: int | None) -> bool:
        """Return True if a directory at ``depth`` may have its children listed.

        ``None`` stands for the scan root, which is always listed.
        """
        if depth is None or self.depth_limit is None:
            return True
        return depth < self.depth_limit


class _BufferedOptions(TreeshiftBaseModel):
    read_buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    write_buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)
    progress_update_byte_interval: int = Field(
        default=DEFAULT_PROGRESS_UPDATE_BYTE_INTERVAL,
        gt=0,
        description="Minimum number of bytes written between two progress reports",
    )

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> Any:
        """Build options seeded with buffer and interval values from settings.

        Args:
            settings: A TreeshiftSettings instance
            **overrides: Explicit option values, which win over settings

        Returns:
            A new options instance
        """
        values = {name: getattr(settings, name) for name in _SETTINGS_FIELDS}
        values.update(overrides)
        return cls(**values)


class FileCopyOptions(_BufferedOptions):
    """Options for copying or moving a single file."""

    colliding_file_behaviour: CollidingFileBehaviour = CollidingFileBehaviour.ABORT


class CopyOptions(_BufferedOptions):
    """Options for copying a directory tree."""

    destination_directory_rule: DestinationDirectoryRule = (
        DestinationDirectoryRule.ALLOW_EMPTY
    )
    colliding_file_behaviour: CollidingFileBehaviour = CollidingFileBehaviour.ABORT
    colliding_subdirectory_behaviour: CollidingSubdirectoryBehaviour = (
        CollidingSubdirectoryBehaviour.ABORT
    )
    symlink_behaviour: SymlinkBehaviour = SymlinkBehaviour.PRESERVE
    broken_symlink_behaviour: BrokenSymlinkBehaviour = BrokenSymlinkBehaviour.PRESERVE
    depth_limit: int | None = Field(default=None, ge=0)

    def scan_options(self) -> ScanOptions:
        """Scan options used by both passes of a copy."""
        return ScanOptions(
            depth_limit=self.depth_limit,
            follow_symlinks=self.symlink_behaviour is SymlinkBehaviour.FOLLOW,
            yield_root=False,
        )

    def file_copy_options(self) -> FileCopyOptions:
        return FileCopyOptions(
            colliding_file_behaviour=self.colliding_file_behaviour,
            read_buffer_size=self.read_buffer_size,
            write_buffer_size=self.write_buffer_size,
            progress_update_byte_interval=self.progress_update_byte_interval,
        )


class MoveOptions(_BufferedOptions):
    """Options for moving a directory tree.

    Moves always cover the whole tree, so there is no depth limit.
    """

    destination_directory_rule: DestinationDirectoryRule = (
        DestinationDirectoryRule.ALLOW_EMPTY
    )
    colliding_file_behaviour: CollidingFileBehaviour = CollidingFileBehaviour.ABORT
    colliding_subdirectory_behaviour: CollidingSubdirectoryBehaviour = (
        CollidingSubdirectoryBehaviour.ABORT
    )
    symlink_behaviour: SymlinkBehaviour = SymlinkBehaviour.PRESERVE
    broken_symlink_behaviour: BrokenSymlinkBehaviour = BrokenSymlinkBehaviour.PRESERVE
    move_strategy: MoveStrategy = MoveStrategy.RENAME_WITH_FALLBACK

    @classmethod
    def from_settings(cls, settings: Any, **overrides: Any) -> "MoveOptions":
        overrides.setdefault("move_strategy", settings.move_strategy)
        return super().from_settings(settings, **overrides)  # type: ignore[no-any-return]

    def to_copy_options(self) -> CopyOptions:
        """Copy options used by the copy-and-delete strategy.

        A destination allowed to be non-empty is always merged into.
        """
        subdirectory_behaviour = self.colliding_subdirectory_behaviour
        if self.destination_directory_rule is DestinationDirectoryRule.ALLOW_NON_EMPTY:
            subdirectory_behaviour = CollidingSubdirectoryBehaviour.MERGE
        return CopyOptions(
            destination_directory_rule=self.destination_directory_rule,
            colliding_file_behaviour=self.colliding_file_behaviour,
            colliding_subdirectory_behaviour=subdirectory_behaviour,
            symlink_behaviour=self.symlink_behaviour,
            broken_symlink_behaviour=self.broken_symlink_behaviour,
            depth_limit=None,
            read_buffer_size=self.read_buffer_size,
            write_buffer_size=self.write_buffer_size,
            progress_update_byte_interval=self.progress_update_byte_interval,
        )
