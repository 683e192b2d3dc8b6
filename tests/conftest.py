"""Shared fixtures: snapshot writers, a scratch index and sample configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Sequence

import pytest

from hot_archiver.config import ArchiveConfig, ConfigLocator, ConfigRepository, GlobalConfig
from hot_archiver.infra import HotIndex, SQLiteManager


@pytest.fixture(autouse=True)
def _isolated_home(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOT_ARCHIVER_HOME", raising=False)


@pytest.fixture
def snapshot_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "snapshots"
    directory.mkdir()
    return directory


@pytest.fixture
def make_snapshot(snapshot_dir: Path) -> Callable[..., Path]:
    """Write a snapshot body from a flat list of lines (title, summary, ...)."""

    def _builder(name: str, lines: Sequence[str], directory: Path | None = None) -> Path:
        path = (directory or snapshot_dir) / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _builder


@pytest.fixture
def storage() -> Iterable[SQLiteManager]:
    manager = SQLiteManager()
    yield manager
    manager.close_all()


@pytest.fixture
def index_path(tmp_path: Path) -> Path:
    return tmp_path / "hot.sqlite"


@pytest.fixture
def index(storage: SQLiteManager, index_path: Path) -> HotIndex:
    hot_index = HotIndex(storage.connect(index_path))
    hot_index.ensure_schema()
    return hot_index


@pytest.fixture
def sample_global_config(tmp_path: Path) -> GlobalConfig:
    return GlobalConfig(
        archive=ArchiveConfig(
            snapshot_dir=tmp_path / "snapshots",
            retired_dir="archived",
            index_path=tmp_path / "hot.sqlite",
        )
    )


@pytest.fixture
def temp_config_repository(tmp_path: Path) -> ConfigRepository:
    return ConfigRepository(ConfigLocator(project_root=tmp_path))
