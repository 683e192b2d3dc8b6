from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from hot_archiver.engine import snapshot
from hot_archiver.records import HotItem, MalformedTimestampError


def test_snapshot_filename_is_sortable() -> None:
    earlier = snapshot.snapshot_filename(datetime(2024, 1, 9, 23, 59, 59))
    later = snapshot.snapshot_filename(datetime(2024, 1, 10, 0, 0, 0))
    assert earlier == "2024-01-09-23-59-59.hot.txt"
    assert sorted([later, earlier]) == [earlier, later]


def test_parse_snapshot_name() -> None:
    assert snapshot.parse_snapshot_name("2024-01-01-08-30-00.hot.txt") == datetime(2024, 1, 1, 8, 30)
    with pytest.raises(MalformedTimestampError):
        snapshot.parse_snapshot_name("today.hot.txt")
    with pytest.raises(ValueError):
        snapshot.parse_snapshot_name("2024-01-01-08-30-00.txt")


def test_parse_body_pairs_lines() -> None:
    items = snapshot.parse_body("A\nsumA\nB\nsumB\n")
    assert items == [HotItem("A", "sumA"), HotItem("B", "sumB")]


def test_parse_body_drops_unpaired_trailing_line() -> None:
    # three lines, no trailing newline
    items = snapshot.parse_body("A\nsumA\nleftover")
    assert items == [HotItem("A", "sumA")]


def test_parse_body_empty() -> None:
    assert snapshot.parse_body("") == []


def test_parse_body_keeps_empty_summary() -> None:
    assert snapshot.parse_body("A\n\nB\nsumB\n") == [HotItem("A", ""), HotItem("B", "sumB")]


def test_write_then_read_preserves_order(tmp_path: Path) -> None:
    items = [HotItem("第一", "摘要一"), HotItem("second", ""), HotItem("third", "s3")]
    path = snapshot.write_snapshot(tmp_path / "2024-03-01-12-00-00.hot.txt", items)
    pending = snapshot.list_pending(tmp_path)
    assert [p.path for p in pending] == [path]
    entries = snapshot.read_entries(pending[0])
    assert [(e.title, e.summary) for e in entries] == [(i.title, i.summary) for i in items]
    assert {e.observed_at for e in entries} == {datetime(2024, 3, 1, 12, 0, 0)}


def test_render_rejects_embedded_newline() -> None:
    with pytest.raises(ValueError):
        snapshot.render_snapshot([HotItem("bad\ntitle", "x")])


def test_list_pending_filters_and_sorts(snapshot_dir: Path, make_snapshot) -> None:
    make_snapshot("2024-01-02-00-00-00.hot.txt", ["B", "b"])
    make_snapshot("2024-01-01-00-00-00.hot.txt", ["A", "a"])
    (snapshot_dir / "notes.txt").write_text("ignored", encoding="utf-8")
    (snapshot_dir / "archived").mkdir()
    make_snapshot("2023-12-31-00-00-00.hot.txt", ["old", "o"], directory=snapshot_dir / "archived")

    pending = snapshot.list_pending(snapshot_dir)
    assert [p.name for p in pending] == [
        "2024-01-01-00-00-00.hot.txt",
        "2024-01-02-00-00-00.hot.txt",
    ]
    assert pending[0].observed_at < pending[1].observed_at


def test_list_pending_missing_directory(tmp_path: Path) -> None:
    assert snapshot.list_pending(tmp_path / "not-created") == []


def test_list_pending_rejects_malformed_name(snapshot_dir: Path, make_snapshot) -> None:
    make_snapshot("2024-01-01-00-00-00.hot.txt", ["A", "a"])
    make_snapshot("broken.hot.txt", ["B", "b"])
    with pytest.raises(MalformedTimestampError):
        snapshot.list_pending(snapshot_dir)


def test_retire_moves_file(snapshot_dir: Path, make_snapshot) -> None:
    make_snapshot("2024-01-01-00-00-00.hot.txt", ["A", "a"])
    pending = snapshot.list_pending(snapshot_dir)
    retired_dir = snapshot.ensure_retired_dir(snapshot_dir / "archived")
    # idempotent
    snapshot.ensure_retired_dir(retired_dir)
    target = snapshot.retire(pending[0], retired_dir)
    assert target == retired_dir / "2024-01-01-00-00-00.hot.txt"
    assert target.exists()
    assert not pending[0].path.exists()


def test_check_chronological_rejects_out_of_order(tmp_path: Path) -> None:
    later = snapshot.SnapshotFile(tmp_path / "b.hot.txt", datetime(2024, 1, 2))
    earlier = snapshot.SnapshotFile(tmp_path / "a.hot.txt", datetime(2024, 1, 1))
    snapshot.check_chronological([earlier, later])
    snapshot.check_chronological([earlier, earlier])
    with pytest.raises(snapshot.SnapshotOrderError):
        snapshot.check_chronological([later, earlier])
