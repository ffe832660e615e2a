"""Source and destination validation shared by directory copies and moves."""

import os
from pathlib import Path

from treeshift.core.errors import (
    BrokenSymlinkError,
    InvalidDestinationError,
    SourceNotADirectoryError,
    SourceNotFoundError,
)
from treeshift.core.paths import PathInfo, absolute_path, inspect_path, is_same_or_inside
from treeshift.models.enums import BrokenSymlinkBehaviour, EntryKind
from treeshift.protocols.file_adapter_protocol import FileAdapterProtocol


def validate_source_directory(
    source: Path,
    broken_symlink_behaviour: BrokenSymlinkBehaviour,
    adapter: FileAdapterProtocol,
) -> PathInfo:
    """Check that ``source`` is a directory or a link to one.

    Raises:
        SourceNotFoundError: If nothing exists at ``source``, or it is a
            broken link that is not configured to fail
        BrokenSymlinkError: If ``source`` is a broken link and the policy is
            to fail on those
        SourceNotADirectoryError: If ``source`` is a file or links to one
    """
    info = inspect_path(source, adapter)
    if info is None:
        raise SourceNotFoundError(
            f"Source directory does not exist: {source}", {"path": str(source)}
        )
    if info.kind is EntryKind.BROKEN_SYMLINK:
        if broken_symlink_behaviour is BrokenSymlinkBehaviour.FAIL:
            raise BrokenSymlinkError(
                f"Source is a broken symbolic link: {source}",
                path=source,
                context={"path": str(source)},
            )
        raise SourceNotFoundError(
            f"Source is a broken symbolic link: {source}", {"path": str(source)}
        )
    if not info.kind.is_directory_like:
        raise SourceNotADirectoryError(
            f"Source path is not a directory: {source}", {"path": str(source)}
        )
    return info


def validate_destination(
    source: Path, canonical_source: Path, destination: Path
) -> Path:
    """Make ``destination`` absolute and reject it if it lies in the source.

    Both the lexical and the resolved form of each path are compared, so a
    destination reached through a link into the source is rejected too.

    Returns:
        The lexically absolute destination

    Raises:
        InvalidDestinationError: If the destination equals the source or is
            inside it
    """
    destination = absolute_path(destination)
    resolved_destination = Path(os.path.realpath(destination))
    sources = {absolute_path(source), canonical_source}

    for candidate in (destination, resolved_destination):
        for ancestor in sources:
            if is_same_or_inside(candidate, ancestor):
                raise InvalidDestinationError(
                    f"Destination '{destination}' is the source directory or inside it",
                    {"source": str(source), "destination": str(destination)},
                )
    return destination
