"""Core test fixtures for the treeshift project."""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from treeshift.adapters.file_adapter import LocalFileSystemAdapter
from treeshift.config import TreeshiftSettings
from treeshift.models.results import TreeProgress
from treeshift.tree.service import (
    TreeOperationsService,
    create_tree_service,
    get_default_service,
)


TreeLayout = dict[str, Any]


def pytest_collection_modifyitems(config: pytest.Config, items: list[Any]) -> None:
    """Skip tests marked ``symlinks`` where links need extra privileges."""
    if sys.platform != "win32":
        return
    skip = pytest.mark.skip(reason="creating symbolic links needs privileges on Windows")
    for item in items:
        if "symlinks" in item.keywords:
            item.add_marker(skip)


# ---- Tree helpers ----


@pytest.fixture
def make_tree() -> Callable[[Path, TreeLayout], Path]:
    """Return a helper that materializes a nested dict as files and directories.

    Bytes values become files, dict values become directories.
    """

    def _make(root: Path, layout: TreeLayout) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for name, content in layout.items():
            path = root / name
            if isinstance(content, dict):
                _make(path, content)
            else:
                path.write_bytes(content)
        return root

    return _make


@pytest.fixture
def read_tree() -> Callable[[Path], dict[str, Any]]:
    """Return a helper that snapshots a tree as ``{relative_path: content}``.

    Files map to their bytes, directories to None and links to
    ``("link", target)``.
    """

    def _read(root: Path) -> dict[str, Any]:
        snapshot: dict[str, Any] = {}
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            for name in sorted(dirnames + filenames):
                path = current / name
                relative = path.relative_to(root).as_posix()
                if path.is_symlink():
                    snapshot[relative] = ("link", os.readlink(path))
                elif path.is_dir():
                    snapshot[relative] = None
                else:
                    snapshot[relative] = path.read_bytes()
        return snapshot

    return _read


@pytest.fixture
def source_tree(tmp_path: Path, make_tree: Callable[[Path, TreeLayout], Path]) -> Path:
    """Source tree with a 10 byte file at the root and a 20 byte file in foo/."""
    return make_tree(
        tmp_path / "source",
        {"a.bin": b"a" * 10, "foo": {"b.bin": b"b" * 20}},
    )


# ---- Service fixtures ----


@pytest.fixture
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove TREESHIFT_* variables so tests see default settings."""
    for key in list(os.environ):
        if key.startswith("TREESHIFT_"):
            monkeypatch.delenv(key)


@pytest.fixture
def settings(clean_environment: None) -> TreeshiftSettings:
    """Default settings, isolated from the environment and any .env file."""
    return TreeshiftSettings(_env_file=None)


@pytest.fixture
def adapter() -> LocalFileSystemAdapter:
    return LocalFileSystemAdapter()


@pytest.fixture
def service(
    settings: TreeshiftSettings, adapter: LocalFileSystemAdapter
) -> TreeOperationsService:
    return create_tree_service(settings, adapter)


@pytest.fixture
def reset_default_service(clean_environment: None):
    """Drop the cached default service before and after a test."""
    get_default_service.cache_clear()
    yield
    get_default_service.cache_clear()


class ProgressRecorder:
    """Progress callback that keeps every snapshot it receives."""

    def __init__(self) -> None:
        self.snapshots: list[TreeProgress] = []

    def __call__(self, progress: TreeProgress) -> None:
        self.snapshots.append(progress)

    @property
    def last(self) -> TreeProgress:
        return self.snapshots[-1]


@pytest.fixture
def progress_recorder() -> ProgressRecorder:
    return ProgressRecorder()
