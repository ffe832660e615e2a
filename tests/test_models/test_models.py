"""Tests for option models and progress bookkeeping."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from treeshift.models.enums import (
    CollidingSubdirectoryBehaviour,
    DestinationDirectoryRule,
    EntryKind,
    OperationKind,
    SymlinkBehaviour,
)
from treeshift.models.options import CopyOptions, MoveOptions, ScanOptions
from treeshift.models.results import FileProgress, ProgressState, TreeSummary


class TestScanOptions:
    """Test ScanOptions depth handling and validation."""

    def test_unlimited_depth_always_descends(self):
        options = ScanOptions()

        assert options.allows_descent_from(None)
        assert options.allows_descent_from(100)

    def test_depth_limit(self):
        """Test directories at the limit are not descended into."""
        options = ScanOptions(depth_limit=1)

        assert options.allows_descent_from(None)
        assert options.allows_descent_from(0)
        assert not options.allows_descent_from(1)

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            ScanOptions(depth_limit=-1)

    def test_options_are_frozen(self):
        options = ScanOptions()

        with pytest.raises(ValidationError):
            options.follow_symlinks = True  # type: ignore[misc]

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            ScanOptions(max_depth=3)  # type: ignore[call-arg]


class TestCopyAndMoveOptions:
    """Test derived option sets."""

    def test_copy_scan_options_follow_links(self):
        options = CopyOptions(symlink_behaviour=SymlinkBehaviour.FOLLOW, depth_limit=2)

        scan_options = options.scan_options()

        assert scan_options.follow_symlinks is True
        assert scan_options.depth_limit == 2
        assert scan_options.yield_root is False

    def test_enum_values_accepted_as_strings(self):
        options = CopyOptions(colliding_file_behaviour="skip")

        assert options.colliding_file_behaviour.value == "skip"

    def test_move_to_copy_options_has_no_depth_limit(self):
        copy_options = MoveOptions().to_copy_options()

        assert copy_options.depth_limit is None
        assert (
            copy_options.colliding_subdirectory_behaviour
            is CollidingSubdirectoryBehaviour.ABORT
        )

    def test_move_into_non_empty_destination_merges(self):
        options = MoveOptions(
            destination_directory_rule=DestinationDirectoryRule.ALLOW_NON_EMPTY
        )

        assert (
            options.to_copy_options().colliding_subdirectory_behaviour
            is CollidingSubdirectoryBehaviour.MERGE
        )

    def test_to_dict_full(self):
        data = CopyOptions().to_dict_full()

        assert data["destination_directory_rule"] == "allow_empty"
        assert data["depth_limit"] is None


class TestEntryKind:
    @pytest.mark.parametrize(
        ("kind", "is_symlink", "is_directory_like"),
        [
            (EntryKind.FILE, False, False),
            (EntryKind.DIRECTORY, False, True),
            (EntryKind.SYMLINK_TO_FILE, True, False),
            (EntryKind.SYMLINK_TO_DIRECTORY, True, True),
            (EntryKind.BROKEN_SYMLINK, True, False),
        ],
    )
    def test_properties(self, kind, is_symlink, is_directory_like):
        assert kind.is_symlink is is_symlink
        assert kind.is_directory_like is is_directory_like


class TestProgressState:
    """Test the mutable progress accumulator and its snapshots."""

    def test_snapshots_are_independent(self):
        """Test a snapshot does not change when the state moves on."""
        received = []
        state = ProgressState(bytes_total=30, total_operations=2, callback=received.append)

        state.start_operation(OperationKind.COPYING_FILE, Path("/d/a.bin"))
        state.bytes_finished = 10
        state.files_copied = 1
        state.emit()

        assert received[0].bytes_finished == 0
        assert received[0].files_copied == 0
        assert received[0].current_operation_index == 0
        assert received[1].bytes_finished == 10
        assert received[1].files_copied == 1

    def test_skip_operation_shrinks_totals(self):
        state = ProgressState(bytes_total=30, total_operations=3)

        state.skip_operation(10)

        assert state.bytes_total == 20
        assert state.total_operations == 2

    def test_update_file_progress(self):
        received = []
        state = ProgressState(bytes_total=30, total_operations=2, callback=received.append)
        state.bytes_finished = 10
        state.start_operation(
            OperationKind.COPYING_FILE, Path("/d/b.bin"), FileProgress(0, 20)
        )

        state.update_file_progress(FileProgress(8, 20), bytes_before=10)

        assert state.bytes_finished == 18
        assert received[-1].current_operation.file_progress == FileProgress(8, 20)
        assert received[-1].bytes_progress_percent == pytest.approx(60.0)

    def test_progress_percent_of_empty_tree(self):
        state = ProgressState(bytes_total=0, total_operations=0)

        assert state.snapshot().bytes_progress_percent == 100.0

    def test_no_callback_is_fine(self):
        state = ProgressState(bytes_total=0, total_operations=1)

        state.start_operation(OperationKind.CREATING_DIRECTORY, Path("/d"))

        assert state.current_operation_index == 0


class TestTreeSummary:
    def test_total_operations(self):
        summary = TreeSummary(
            total_bytes=30, total_files=2, total_directories=1, total_symlinks=3
        )

        assert summary.total_operations == 6
