"""Progress and result models for file and directory operations."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path

from .enums import MoveMethod, OperationKind


@dataclass(frozen=True)
class FileProgress:
    """Progress of a single file copy."""

    bytes_finished: int
    bytes_total: int

    @property
    def progress_percent(self) -> float:
        if self.bytes_total > 0:
            return (self.bytes_finished / self.bytes_total) * 100
        return 100.0


FileProgressCallback = Callable[[FileProgress], None]


@dataclass(frozen=True)
class TreeOperation:
    """The operation a tree copy or move is currently performing."""

    kind: OperationKind
    path: Path
    file_progress: FileProgress | None = None


@dataclass(frozen=True)
class TreeProgress:
    """Immutable progress snapshot handed to progress callbacks."""

    bytes_total: int
    bytes_finished: int
    files_copied: int
    directories_created: int
    symlinks_created: int
    files_skipped: int
    current_operation: TreeOperation | None
    current_operation_index: int
    total_operations: int

    @property
    def bytes_progress_percent(self) -> float:
        """Calculate bytes progress percentage."""
        if self.bytes_total > 0:
            return (self.bytes_finished / self.bytes_total) * 100
        return 100.0

    @property
    def is_finished(self) -> bool:
        return self.bytes_finished >= self.bytes_total and (
            self.current_operation_index >= self.total_operations - 1
        )


TreeProgressCallback = Callable[[TreeProgress], None]


@dataclass
class ProgressState:
    """Mutable progress accumulator owned by one engine call.

    Updated before every callback invocation; callers only ever see
    :class:`TreeProgress` snapshots.
    """

    bytes_total: int
    total_operations: int
    bytes_finished: int = 0
    files_copied: int = 0
    directories_created: int = 0
    symlinks_created: int = 0
    files_skipped: int = 0
    current_operation: TreeOperation | None = None
    current_operation_index: int = -1
    callback: TreeProgressCallback | None = field(default=None, repr=False)

    def snapshot(self) -> TreeProgress:
        return TreeProgress(
            bytes_total=self.bytes_total,
            bytes_finished=self.bytes_finished,
            files_copied=self.files_copied,
            directories_created=self.directories_created,
            symlinks_created=self.symlinks_created,
            files_skipped=self.files_skipped,
            current_operation=self.current_operation,
            current_operation_index=self.current_operation_index,
            total_operations=self.total_operations,
        )

    def emit(self) -> None:
        if self.callback is not None:
            self.callback(self.snapshot())

    def start_operation(
        self, kind: OperationKind, path: Path, file_progress: FileProgress | None = None
    ) -> None:
        """Advance to the next operation and report it."""
        self.current_operation_index += 1
        self.current_operation = TreeOperation(kind, path, file_progress)
        self.emit()

    def skip_operation(self, size_bytes: int = 0) -> None:
        """Account for an operation that will not run."""
        self.total_operations -= 1
        self.bytes_total -= size_bytes

    def update_file_progress(self, file_progress: FileProgress, bytes_before: int) -> None:
        """Fold a single-file progress report into the aggregate and report it."""
        if self.current_operation is not None:
            self.current_operation = replace(
                self.current_operation, file_progress=file_progress
            )
        self.bytes_finished = bytes_before + file_progress.bytes_finished
        self.emit()


@dataclass(frozen=True)
class TreeSummary:
    """Totals computed by the metadata-only pre-pass over a source tree."""

    total_bytes: int = 0
    total_files: int = 0
    total_directories: int = 0
    total_symlinks: int = 0
    broken_symlinks: int = 0

    @property
    def total_operations(self) -> int:
        return self.total_files + self.total_directories + self.total_symlinks


@dataclass(frozen=True)
class CopyFinished:
    """Result of a completed directory copy."""

    total_bytes_copied: int
    files_copied: int
    directories_created: int
    symlinks_created: int = 0
    files_skipped: int = 0


@dataclass(frozen=True)
class MoveFinished:
    """Result of a completed directory move."""

    total_bytes_moved: int
    files_moved: int
    directories_moved: int
    strategy_used: MoveMethod
