"""Directory tree move engine: rename, copy-and-delete, or rename with fallback."""

import logging
from pathlib import Path

from treeshift.core.errors import (
    DestinationExistsError,
    InvalidDestinationError,
    RenameCollisionError,
    RenameUnsupportedError,
    TreeshiftError,
)
from treeshift.core.logging import get_logger
from treeshift.core.paths import absolute_path
from treeshift.models.enums import (
    EntryKind,
    MoveMethod,
    MoveStrategy,
    OperationKind,
    SymlinkBehaviour,
)
from treeshift.models.options import CopyOptions, MoveOptions
from treeshift.models.results import (
    MoveFinished,
    ProgressState,
    TreeProgressCallback,
    TreeSummary,
)
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol
from treeshift.protocols.rename_protocol import RenameCapabilityProtocol

from .collision import DestinationState, check_destination_rule
from .copy_engine import (
    DirectoryCopyEngine,
    PreparedCopy,
    create_directory_with_parents,
)
from .rename import select_rename_capability
from .validation import validate_destination, validate_source_directory


class DirectoryMoveEngine:
    """Moves directory trees using the configured strategy.

    A rename capability may be injected; otherwise one is selected per call
    by comparing the devices of the source and the destination.
    """

    def __init__(
        self,
        adapter: FileAdapterProtocol,
        copy_engine: DirectoryCopyEngine | None = None,
        rename_capability: RenameCapabilityProtocol | None = None,
    ) -> None:
        self.adapter = adapter
        self.copy_engine = copy_engine or DirectoryCopyEngine(adapter)
        self.rename_capability = rename_capability
        self.logger = get_logger(__name__)

    def move_directory(
        self,
        source: Path,
        destination: Path,
        options: MoveOptions | None = None,
        progress_callback: TreeProgressCallback | None = None,
    ) -> MoveFinished:
        """Move the tree at ``source`` to ``destination``.

        Moves always cover the whole tree. A source that is itself a link to
        a directory is moved as a link; ``destination_directory_rule`` does
        not apply to it, since a link cannot be placed onto an existing
        directory, and any existing destination raises
        ``DestinationExistsError``.

        Returns:
            MoveFinished naming the mechanism that was used

        Raises:
            SourceNotFoundError: If the source does not exist
            SourceNotADirectoryError: If the source is not a directory
            InvalidDestinationError: If the destination is inside the source
            DestinationExistsError: If the destination root rule is violated
            RenameCollisionError: If a rename-only move finds the
                destination occupied
            CrossDeviceRenameError: If a rename-only move crosses devices
            CollisionAbortError: If a copy-and-delete entry collision aborts
            FileSystemError: If a filesystem primitive fails
        """
        options = options or MoveOptions()
        source = absolute_path(source)
        source_info = validate_source_directory(
            source, options.broken_symlink_behaviour, self.adapter
        )

        try:
            if source_info.kind is EntryKind.SYMLINK_TO_DIRECTORY:
                result = self._move_symlink_root(
                    source, destination, options, progress_callback
                )
            else:
                result = self._move_tree(
                    source, destination, options, progress_callback
                )
        except Exception as e:
            exc_info = self.logger.isEnabledFor(logging.DEBUG)
            self.logger.error(
                "directory_move_failed",
                source=str(source),
                destination=str(destination),
                strategy=options.move_strategy.value,
                error=str(e),
                exc_info=exc_info,
            )
            raise

        self.logger.info(
            "directory_move_completed",
            source=str(source),
            destination=str(destination),
            strategy_used=result.strategy_used.value,
            bytes_moved=result.total_bytes_moved,
            files_moved=result.files_moved,
            directories_moved=result.directories_moved,
        )
        return result

    def _move_tree(
        self,
        source: Path,
        destination: Path,
        options: MoveOptions,
        progress_callback: TreeProgressCallback | None,
    ) -> MoveFinished:
        canonical_source = self.adapter.canonicalize(source)
        destination = validate_destination(source, canonical_source, destination)
        destination_state = check_destination_rule(
            destination, options.destination_directory_rule, self.adapter
        )
        copy_options = options.to_copy_options()
        # A rename moves links as links, so its totals never follow them
        rename_options = copy_options.model_copy(
            update={"symlink_behaviour": SymlinkBehaviour.PRESERVE}
        )

        match options.move_strategy:
            case MoveStrategy.RENAME_ONLY:
                return self._rename_tree(
                    canonical_source,
                    destination,
                    destination_state,
                    rename_options,
                    progress_callback,
                )
            case MoveStrategy.COPY_AND_DELETE_ONLY:
                prepared = self._prepare_copy(
                    canonical_source, destination, destination_state, copy_options
                )
                return self._copy_and_delete_tree(source, prepared, progress_callback)
            case MoveStrategy.RENAME_WITH_FALLBACK:
                summary = None
                try:
                    if destination_state is not DestinationState.NON_EMPTY:
                        summary = self.copy_engine.summarize(
                            canonical_source, rename_options
                        )
                    return self._rename_tree(
                        canonical_source,
                        destination,
                        destination_state,
                        rename_options,
                        progress_callback,
                        summary,
                    )
                except RenameUnsupportedError as e:
                    self.logger.info(
                        "rename_unsupported_falling_back_to_copy",
                        source=str(source),
                        destination=str(destination),
                        reason=e.reason,
                    )
                if copy_options.symlink_behaviour is not SymlinkBehaviour.PRESERVE:
                    summary = None
                prepared = self._prepare_copy(
                    canonical_source,
                    destination,
                    destination_state,
                    copy_options,
                    summary,
                )
                return self._copy_and_delete_tree(source, prepared, progress_callback)

    def _capability_for(self, source: Path, destination: Path) -> RenameCapabilityProtocol:
        if self.rename_capability is not None:
            return self.rename_capability
        return select_rename_capability(source, destination, self.adapter)

    def _rename_into_place(self, source: Path, destination: Path) -> str:
        """Rename ``source`` to ``destination``, creating missing parents.

        Parents created here are removed again if the rename fails.

        Returns:
            Name of the rename capability that was used
        """
        capability = self._capability_for(source, destination)
        created = create_directory_with_parents(destination.parent, self.adapter)
        try:
            capability.try_rename(source, destination)
        except TreeshiftError:
            if created:
                self.adapter.remove_directory_recursive(created[0])
            raise
        return capability.name

    def _rename_tree(
        self,
        source: Path,
        destination: Path,
        destination_state: DestinationState,
        rename_options: CopyOptions,
        progress_callback: TreeProgressCallback | None,
        summary: TreeSummary | None = None,
    ) -> MoveFinished:
        if destination_state is DestinationState.NON_EMPTY:
            raise RenameCollisionError(
                f"Cannot rename '{source}' onto non-empty directory '{destination}'",
                {"source": str(source), "destination": str(destination)},
            )
        if summary is None:
            summary = self.copy_engine.summarize(source, rename_options)

        state = ProgressState(
            bytes_total=summary.total_bytes,
            total_operations=1,
            callback=progress_callback,
        )
        state.start_operation(OperationKind.RENAMING, source)

        capability_name = self._rename_into_place(source, destination)

        state.bytes_finished = summary.total_bytes
        state.emit()
        self.logger.debug(
            "directory_renamed",
            source=str(source),
            destination=str(destination),
            capability=capability_name,
        )
        return MoveFinished(
            total_bytes_moved=summary.total_bytes,
            files_moved=summary.total_files,
            directories_moved=summary.total_directories,
            strategy_used=MoveMethod.RENAME,
        )

    def _prepare_copy(
        self,
        canonical_source: Path,
        destination: Path,
        destination_state: DestinationState,
        copy_options: CopyOptions,
        summary: TreeSummary | None = None,
    ) -> PreparedCopy:
        """Build the copy half of a move from checks already made."""
        if summary is None:
            summary = self.copy_engine.summarize(canonical_source, copy_options)
        return PreparedCopy(
            source=canonical_source,
            destination=destination,
            options=copy_options,
            destination_state=destination_state,
            summary=summary,
        )

    def _copy_and_delete_tree(
        self,
        source: Path,
        prepared: PreparedCopy,
        progress_callback: TreeProgressCallback | None,
    ) -> MoveFinished:
        state = self.copy_engine.create_progress_state(
            prepared, progress_callback, extra_operations=1
        )
        self.copy_engine.execute(prepared, state)

        state.start_operation(OperationKind.REMOVING_SOURCE, source)
        self.adapter.remove_directory_recursive(source)
        state.emit()

        return MoveFinished(
            total_bytes_moved=state.bytes_finished,
            files_moved=state.files_copied,
            directories_moved=prepared.summary.total_directories,
            strategy_used=MoveMethod.COPY_AND_DELETE,
        )

    def _move_symlink_root(
        self,
        source: Path,
        destination: Path,
        options: MoveOptions,
        progress_callback: TreeProgressCallback | None,
    ) -> MoveFinished:
        destination = absolute_path(destination)
        if destination == source:
            raise InvalidDestinationError(
                f"Destination '{destination}' is the source link itself",
                {"source": str(source), "destination": str(destination)},
            )
        if self.adapter.exists_without_dereferencing(destination):
            raise DestinationExistsError(
                f"Destination already exists: {destination}",
                path=destination,
                context={"source": str(source), "source_kind": "symlink"},
            )

        if options.move_strategy is not MoveStrategy.COPY_AND_DELETE_ONLY:
            try:
                state = ProgressState(
                    bytes_total=0, total_operations=1, callback=progress_callback
                )
                state.start_operation(OperationKind.RENAMING, source)
                self._rename_into_place(source, destination)
                state.emit()
                return MoveFinished(0, 0, 0, MoveMethod.RENAME)
            except RenameUnsupportedError:
                if options.move_strategy is MoveStrategy.RENAME_ONLY:
                    raise
                self.logger.info(
                    "symlink_rename_unsupported_recreating",
                    source=str(source),
                    destination=str(destination),
                )

        create_directory_with_parents(destination.parent, self.adapter)
        state = ProgressState(
            bytes_total=0, total_operations=2, callback=progress_callback
        )
        state.start_operation(OperationKind.CREATING_SYMLINK, destination)
        link_target = self.adapter.read_link(source)
        self.adapter.create_symlink(link_target, destination, target_is_directory=True)
        state.symlinks_created += 1

        state.start_operation(OperationKind.REMOVING_SOURCE, source)
        self.adapter.remove_file(source)
        state.emit()
        return MoveFinished(0, 0, 0, MoveMethod.COPY_AND_DELETE)
