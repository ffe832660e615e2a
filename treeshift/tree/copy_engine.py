"""Directory tree copy engine with progress aggregation."""

import logging
from dataclasses import dataclass
from pathlib import Path

from treeshift.core.logging import get_logger
from treeshift.core.paths import absolute_path, entry_kind_at
from treeshift.file_operations.copy import copy_file_contents
from treeshift.models.enums import EntryKind, OperationKind, Resolution, SymlinkAction
from treeshift.models.options import CopyOptions
from treeshift.models.results import (
    CopyFinished,
    FileProgress,
    ProgressState,
    TreeProgressCallback,
    TreeSummary,
)
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol

from .collision import (
    DestinationState,
    check_destination_rule,
    collision_error,
    resolve_directory_collision,
    resolve_file_collision,
    resolve_symlink_action,
)
from .scanner import Entry, scan_directory
from .validation import validate_destination, validate_source_directory


@dataclass(frozen=True)
class PreparedCopy:
    """A validated copy, ready to run.

    Produced once every check passed and the pre-pass finished; nothing has
    been written yet.
    """

    source: Path
    destination: Path
    options: CopyOptions
    destination_state: DestinationState
    summary: TreeSummary


class DirectoryCopyEngine:
    """Copies directory trees entry by entry through a file adapter."""

    def __init__(self, adapter: FileAdapterProtocol) -> None:
        self.adapter = adapter
        self.logger = get_logger(__name__)

    def copy_directory(
        self,
        source: Path,
        destination: Path,
        options: CopyOptions | None = None,
        progress_callback: TreeProgressCallback | None = None,
    ) -> CopyFinished:
        """Copy the tree at ``source`` to ``destination``.

        Args:
            source: Directory to copy, a link to a directory is resolved
            destination: Directory that receives the source's contents
            options: Collision, symlink and depth policies
            progress_callback: Receives a TreeProgress at the start of every
                operation, during file copies, and once when done

        Returns:
            CopyFinished with the final counters

        Raises:
            SourceNotFoundError: If the source does not exist
            SourceNotADirectoryError: If the source is not a directory
            InvalidDestinationError: If the destination is inside the source
                or is not a directory
            DestinationExistsError: If the destination root rule is violated
            CollisionAbortError: If an entry collision resolves to abort
            BrokenSymlinkError: If a broken link is found and must fail
            FileSystemError: If a filesystem primitive fails
        """
        prepared = self.prepare(source, destination, options or CopyOptions())
        state = self.create_progress_state(prepared, progress_callback)
        self.execute(prepared, state)
        state.emit()

        result = CopyFinished(
            total_bytes_copied=state.bytes_finished,
            files_copied=state.files_copied,
            directories_created=state.directories_created,
            symlinks_created=state.symlinks_created,
            files_skipped=state.files_skipped,
        )
        self.logger.info(
            "directory_copy_completed",
            source=str(prepared.source),
            destination=str(prepared.destination),
            bytes_copied=result.total_bytes_copied,
            files_copied=result.files_copied,
            directories_created=result.directories_created,
            symlinks_created=result.symlinks_created,
            files_skipped=result.files_skipped,
        )
        return result

    def prepare(
        self, source: Path, destination: Path, options: CopyOptions
    ) -> PreparedCopy:
        """Run every check and the metadata pre-pass without writing."""
        source = absolute_path(source)
        validate_source_directory(source, options.broken_symlink_behaviour, self.adapter)
        canonical_source = self.adapter.canonicalize(source)
        destination = validate_destination(source, canonical_source, destination)
        destination_state = check_destination_rule(
            destination, options.destination_directory_rule, self.adapter
        )
        summary = self.summarize(canonical_source, options)

        self.logger.debug(
            "directory_copy_prepared",
            source=str(canonical_source),
            destination=str(destination),
            destination_state=destination_state.value,
            total_bytes=summary.total_bytes,
            total_files=summary.total_files,
            total_directories=summary.total_directories,
            total_symlinks=summary.total_symlinks,
        )
        return PreparedCopy(
            source=canonical_source,
            destination=destination,
            options=options,
            destination_state=destination_state,
            summary=summary,
        )

    def summarize(self, source: Path, options: CopyOptions) -> TreeSummary:
        """Metadata-only pre-pass over ``source``.

        Broken links count towards ``total_symlinks`` as well as
        ``broken_symlinks``, since preserving one creates a link.

        Raises:
            BrokenSymlinkError: If a broken link is found and must fail
        """
        total_bytes = total_files = total_directories = 0
        total_symlinks = broken_symlinks = 0

        for entry in scan_directory(source, options.scan_options(), self.adapter):
            match entry.kind:
                case EntryKind.FILE:
                    total_files += 1
                    total_bytes += entry.size_bytes
                case EntryKind.DIRECTORY:
                    total_directories += 1
                case EntryKind.SYMLINK_TO_FILE | EntryKind.SYMLINK_TO_DIRECTORY:
                    total_symlinks += 1
                case EntryKind.BROKEN_SYMLINK:
                    resolve_symlink_action(
                        entry.kind,
                        options.symlink_behaviour,
                        options.broken_symlink_behaviour,
                        entry.path,
                    )
                    total_symlinks += 1
                    broken_symlinks += 1

        return TreeSummary(
            total_bytes=total_bytes,
            total_files=total_files,
            total_directories=total_directories,
            total_symlinks=total_symlinks,
            broken_symlinks=broken_symlinks,
        )

    def create_progress_state(
        self,
        prepared: PreparedCopy,
        progress_callback: TreeProgressCallback | None,
        extra_operations: int = 0,
    ) -> ProgressState:
        total_operations = prepared.summary.total_operations + extra_operations
        if prepared.destination_state is DestinationState.ABSENT:
            total_operations += 1
        return ProgressState(
            bytes_total=prepared.summary.total_bytes,
            total_operations=total_operations,
            callback=progress_callback,
        )

    def execute(self, prepared: PreparedCopy, state: ProgressState) -> None:
        """Perform a prepared copy, updating ``state`` as entries are written.

        Entries written before a failure stay on disk.
        """
        try:
            if prepared.destination_state is DestinationState.ABSENT:
                state.start_operation(
                    OperationKind.CREATING_DIRECTORY, prepared.destination
                )
                create_directory_with_parents(prepared.destination, self.adapter)
                state.directories_created += 1

            for entry in scan_directory(
                prepared.source, prepared.options.scan_options(), self.adapter
            ):
                target = prepared.destination / entry.relative_path
                self._copy_entry(entry, target, prepared.options, state)
        except Exception as e:
            exc_info = self.logger.isEnabledFor(logging.DEBUG)
            self.logger.error(
                "directory_copy_failed",
                source=str(prepared.source),
                destination=str(prepared.destination),
                error=str(e),
                exc_info=exc_info,
            )
            raise

    def _copy_entry(
        self, entry: Entry, target: Path, options: CopyOptions, state: ProgressState
    ) -> None:
        match entry.kind:
            case EntryKind.DIRECTORY:
                self._copy_directory_entry(entry, target, options, state)
            case EntryKind.FILE:
                self._copy_file_entry(entry, target, options, state)
            case (
                EntryKind.SYMLINK_TO_FILE
                | EntryKind.SYMLINK_TO_DIRECTORY
                | EntryKind.BROKEN_SYMLINK
            ):
                action = resolve_symlink_action(
                    entry.kind,
                    options.symlink_behaviour,
                    options.broken_symlink_behaviour,
                    entry.path,
                )
                if action is SymlinkAction.FOLLOW and entry.kind is EntryKind.SYMLINK_TO_FILE:
                    self._copy_file_entry(entry, target, options, state)
                else:
                    self._copy_symlink_entry(entry, target, options, state)

    def _copy_directory_entry(
        self, entry: Entry, target: Path, options: CopyOptions, state: ProgressState
    ) -> None:
        existing_kind = entry_kind_at(target, self.adapter)
        resolution = resolve_directory_collision(
            existing_kind, options.colliding_subdirectory_behaviour
        )
        if resolution is Resolution.ABORT:
            raise collision_error(target, existing_kind, entry.kind)

        if existing_kind is not None:
            self.logger.debug("merging_into_directory", path=str(target))
            state.skip_operation()
            return

        state.start_operation(OperationKind.CREATING_DIRECTORY, target)
        self.adapter.create_directory(target)
        state.directories_created += 1

    def _copy_file_entry(
        self, entry: Entry, target: Path, options: CopyOptions, state: ProgressState
    ) -> None:
        existing_kind = entry_kind_at(target, self.adapter)
        resolution = resolve_file_collision(
            existing_kind, options.colliding_file_behaviour
        )
        match resolution:
            case Resolution.ABORT:
                raise collision_error(target, existing_kind, entry.kind)
            case Resolution.SKIP:
                self.logger.debug("skipping_existing_file", path=str(target))
                state.skip_operation(entry.size_bytes)
                state.files_skipped += 1
                return
            case Resolution.PROCEED:
                pass

        bytes_before = state.bytes_finished
        state.start_operation(
            OperationKind.COPYING_FILE,
            target,
            FileProgress(bytes_finished=0, bytes_total=entry.size_bytes),
        )
        bytes_copied = copy_file_contents(
            entry.path,
            target,
            options.file_copy_options(),
            self.adapter,
            lambda progress: state.update_file_progress(progress, bytes_before),
        )
        state.bytes_finished = bytes_before + bytes_copied
        state.files_copied += 1

    def _copy_symlink_entry(
        self, entry: Entry, target: Path, options: CopyOptions, state: ProgressState
    ) -> None:
        existing_kind = entry_kind_at(target, self.adapter)
        resolution = resolve_file_collision(
            existing_kind, options.colliding_file_behaviour
        )
        match resolution:
            case Resolution.ABORT:
                raise collision_error(target, existing_kind, entry.kind)
            case Resolution.SKIP:
                self.logger.debug("skipping_existing_symlink", path=str(target))
                state.skip_operation()
                state.files_skipped += 1
                return
            case Resolution.PROCEED:
                pass

        state.start_operation(OperationKind.CREATING_SYMLINK, target)
        if existing_kind is not None:
            self.adapter.remove_file(target)
        link_target = self.adapter.read_link(entry.path)
        self.adapter.create_symlink(
            link_target,
            target,
            target_is_directory=entry.kind is EntryKind.SYMLINK_TO_DIRECTORY,
        )
        state.symlinks_created += 1


def create_directory_with_parents(
    path: Path, adapter: FileAdapterProtocol
) -> list[Path]:
    """Create ``path`` and any missing ancestors, outermost first.

    Returns:
        The directories that were created, outermost first
    """
    missing = []
    current = path
    while entry_kind_at(current, adapter) is None:
        missing.append(current)
        if current.parent == current:
            break
        current = current.parent
    created = list(reversed(missing))
    for directory in created:
        adapter.create_directory(directory)
    return created
