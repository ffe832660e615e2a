"""Tests for TreeOperationsService and the module-level API."""

from pathlib import Path

import pytest

import treeshift
from treeshift.config import TreeshiftSettings
from treeshift.models.enums import MoveMethod, MoveStrategy
from treeshift.models.options import CopyOptions, MoveOptions
from treeshift.models.results import CopyFinished, FileProgress
from treeshift.tree.rename import UnsupportedRename
from treeshift.tree.service import (
    TreeOperationsService,
    create_tree_service,
    get_default_service,
)


class TestTreeOperationsService:
    """Test that services seed omitted options from their settings."""

    def test_create_tree_service(self, settings, adapter):
        service = create_tree_service(settings, adapter)

        assert isinstance(service, TreeOperationsService)
        assert service.settings is settings
        assert service.adapter is adapter
        assert service.move_engine.copy_engine is service.copy_engine

    def test_move_strategy_from_settings(self, clean_environment, adapter, source_tree, tmp_path):
        settings = TreeshiftSettings(
            move_strategy=MoveStrategy.COPY_AND_DELETE_ONLY, _env_file=None
        )
        service = create_tree_service(settings, adapter)

        result = service.move_directory(source_tree, tmp_path / "destination")

        assert result.strategy_used is MoveMethod.COPY_AND_DELETE
        assert not source_tree.exists()

    def test_explicit_options_win_over_settings(
        self, clean_environment, adapter, source_tree, tmp_path
    ):
        settings = TreeshiftSettings(
            move_strategy=MoveStrategy.COPY_AND_DELETE_ONLY, _env_file=None
        )
        service = create_tree_service(settings, adapter)

        result = service.move_directory(
            source_tree,
            tmp_path / "destination",
            MoveOptions(move_strategy=MoveStrategy.RENAME_ONLY),
        )

        assert result.strategy_used is MoveMethod.RENAME

    def test_injected_rename_capability(self, settings, adapter, source_tree, tmp_path):
        service = create_tree_service(settings, adapter, UnsupportedRename())

        result = service.move_directory(source_tree, tmp_path / "destination")

        assert result.strategy_used is MoveMethod.COPY_AND_DELETE

    def test_copy_file_uses_settings_interval(
        self, clean_environment, adapter, source_tree, tmp_path
    ):
        settings = TreeshiftSettings(
            read_buffer_size=4, progress_update_byte_interval=4, _env_file=None
        )
        service = create_tree_service(settings, adapter)
        reports: list[FileProgress] = []

        copied = service.copy_file(
            source_tree / "a.bin", tmp_path / "a.bin", progress_callback=reports.append
        )

        assert copied == 10
        assert [report.bytes_finished for report in reports] == [4, 8, 10]

    def test_copy_directory_accepts_strings(self, service, source_tree, tmp_path):
        result = service.copy_directory(str(source_tree), str(tmp_path / "destination"))

        assert result == CopyFinished(
            total_bytes_copied=30, files_copied=2, directories_created=2
        )

    def test_scan_and_helpers(self, service, source_tree):
        paths = [entry.relative_path.as_posix() for entry in service.scan_directory(source_tree)]

        assert paths == ["a.bin", "foo", "foo/b.bin"]
        assert not service.is_directory_empty(source_tree)
        assert service.directory_size_in_bytes(source_tree) == 30


class TestModuleLevelApi:
    """Test the convenience functions backed by the default service."""

    @pytest.fixture(autouse=True)
    def isolated(self, reset_default_service, monkeypatch, tmp_path: Path):
        # keep a stray .env in the working directory out of the default settings
        monkeypatch.chdir(tmp_path)

    def test_default_service_is_cached(self):
        assert get_default_service() is get_default_service()

    def test_default_service_reads_environment(self, monkeypatch, source_tree, tmp_path):
        monkeypatch.setenv("TREESHIFT_MOVE_STRATEGY", "copy_and_delete_only")

        result = treeshift.move_directory(source_tree, tmp_path / "destination")

        assert result.strategy_used is MoveMethod.COPY_AND_DELETE

    def test_copy_and_move_directory(self, source_tree, tmp_path, progress_recorder):
        copied = treeshift.copy_directory_with_progress(
            source_tree, tmp_path / "copy", CopyOptions(), progress_recorder
        )
        moved = treeshift.move_directory(tmp_path / "copy", tmp_path / "moved")

        assert copied.total_bytes_copied == 30
        assert progress_recorder.last.is_finished
        assert moved.total_bytes_moved == 30
        assert (tmp_path / "moved" / "foo" / "b.bin").read_bytes() == b"b" * 20
        assert not (tmp_path / "copy").exists()

    def test_file_functions(self, source_tree, tmp_path):
        assert treeshift.copy_file(source_tree / "a.bin", tmp_path / "copy.bin") == 10
        assert treeshift.move_file(tmp_path / "copy.bin", tmp_path / "moved.bin") == 10
        assert treeshift.file_size_in_bytes(tmp_path / "moved.bin") == 10

        treeshift.remove_file(tmp_path / "moved.bin")

        assert not (tmp_path / "moved.bin").exists()

    def test_directory_helpers(self, source_tree):
        assert treeshift.directory_size_in_bytes(source_tree) == 30
        assert not treeshift.is_directory_empty(source_tree)
        assert len(list(treeshift.scan_directory(source_tree))) == 3
