"""Collision decisions for tree copies and moves.

All ``resolve_*`` functions are pure: they look only at the kind of the
entry already occupying a destination path and at the configured policy.
The filesystem may change between a decision and the action that follows
it; that race is accepted, not guarded.
"""

from enum import Enum
from pathlib import Path

from treeshift.core.errors import (
    BrokenSymlinkError,
    CollisionAbortError,
    DestinationExistsError,
    DestinationNotEmptyError,
    InvalidDestinationError,
)
from treeshift.core.paths import entry_kind_at
from treeshift.models.enums import (
    BrokenSymlinkBehaviour,
    CollidingFileBehaviour,
    CollidingSubdirectoryBehaviour,
    DestinationDirectoryRule,
    EntryKind,
    Resolution,
    SymlinkAction,
    SymlinkBehaviour,
)
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


class DestinationState(str, Enum):
    """State of the destination root before a copy or move starts."""

    ABSENT = "absent"
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


def resolve_file_collision(
    existing_kind: EntryKind | None, behaviour: CollidingFileBehaviour
) -> Resolution:
    """Decide what happens to a file (or link) whose destination is taken.

    A file never replaces a directory: an existing directory at the
    destination either skips the file or aborts.
    """
    if existing_kind is None:
        return Resolution.PROCEED

    if existing_kind is EntryKind.DIRECTORY:
        if behaviour is CollidingFileBehaviour.SKIP:
            return Resolution.SKIP
        return Resolution.ABORT

    match behaviour:
        case CollidingFileBehaviour.OVERWRITE:
            return Resolution.PROCEED
        case CollidingFileBehaviour.SKIP:
            return Resolution.SKIP
        case CollidingFileBehaviour.ABORT:
            return Resolution.ABORT


def resolve_directory_collision(
    existing_kind: EntryKind | None, behaviour: CollidingSubdirectoryBehaviour
) -> Resolution:
    """Decide what happens to a directory whose destination is taken.

    Only a real directory can be merged into; files and links of any kind
    always abort.
    """
    if existing_kind is None:
        return Resolution.PROCEED
    if existing_kind is not EntryKind.DIRECTORY:
        return Resolution.ABORT
    if behaviour is CollidingSubdirectoryBehaviour.MERGE:
        return Resolution.PROCEED
    return Resolution.ABORT


def resolve_symlink_action(
    kind: EntryKind,
    symlink_behaviour: SymlinkBehaviour,
    broken_symlink_behaviour: BrokenSymlinkBehaviour,
    path: Path | None = None,
) -> SymlinkAction:
    """Decide whether a link is recreated as a link or followed.

    Broken links can never be followed, so they are preserved or fail.

    Raises:
        BrokenSymlinkError: If ``kind`` is a broken link and the policy is
            to fail on those
    """
    if kind is EntryKind.BROKEN_SYMLINK:
        if broken_symlink_behaviour is BrokenSymlinkBehaviour.FAIL:
            raise BrokenSymlinkError(
                f"Broken symbolic link found: {path}",
                path=path,
                context={"path": str(path)},
            )
        return SymlinkAction.PRESERVE

    if symlink_behaviour is SymlinkBehaviour.FOLLOW:
        return SymlinkAction.FOLLOW
    return SymlinkAction.PRESERVE


def check_destination_rule(
    destination: Path, rule: DestinationDirectoryRule, adapter: FileAdapterProtocol
) -> DestinationState:
    """Check the destination root against the rule, once per call.

    Nothing is written before this check passes.

    Raises:
        InvalidDestinationError: If the destination exists and is not a
            directory
        DestinationExistsError: If the destination exists and the rule
            forbids that
        DestinationNotEmptyError: If the destination must be empty but is not
    """
    existing_kind = entry_kind_at(destination, adapter)
    if existing_kind is None:
        return DestinationState.ABSENT

    if not existing_kind.is_directory_like:
        raise InvalidDestinationError(
            f"Destination exists and is not a directory: {destination}",
            {"path": str(destination), "kind": existing_kind.value},
        )

    if rule is DestinationDirectoryRule.DISALLOW_EXISTING:
        raise DestinationExistsError(
            f"Destination directory already exists: {destination}",
            path=destination,
            context={"rule": rule.value},
        )

    state = (
        DestinationState.EMPTY
        if not adapter.list_directory(destination)
        else DestinationState.NON_EMPTY
    )
    if state is DestinationState.NON_EMPTY and rule is DestinationDirectoryRule.ALLOW_EMPTY:
        raise DestinationNotEmptyError(
            f"Destination directory is not empty: {destination}",
            path=destination,
            context={"rule": rule.value},
        )
    return state


def collision_error(
    path: Path, existing_kind: EntryKind | None, entry_kind: EntryKind
) -> CollisionAbortError:
    """Build the error raised when a per-entry collision resolves to abort."""
    existing = existing_kind.value if existing_kind is not None else "unknown"
    return CollisionAbortError(
        f"Destination path already exists: {path}",
        path=path,
        context={
            "path": str(path),
            "existing_kind": existing,
            "entry_kind": entry_kind.value,
        },
    )
