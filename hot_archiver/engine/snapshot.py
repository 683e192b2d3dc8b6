"""Snapshot files on disk: naming, body encoding and the retired area."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Sequence

from ..records import HotEntry, HotItem, format_timestamp, parse_timestamp

SNAPSHOT_SUFFIX = ".hot.txt"


class SnapshotOrderError(RuntimeError):
    """Raised when pending snapshots would not be processed chronologically."""


@dataclass(slots=True, frozen=True)
class SnapshotFile:
    """A pending snapshot and the observation time encoded in its name."""

    path: Path
    observed_at: datetime

    @property
    def name(self) -> str:
        return self.path.name


def snapshot_filename(observed_at: datetime) -> str:
    return f"{format_timestamp(observed_at)}{SNAPSHOT_SUFFIX}"


def is_snapshot_name(name: str) -> bool:
    return name.endswith(SNAPSHOT_SUFFIX)


def parse_snapshot_name(name: str) -> datetime:
    """Return the timestamp embedded in ``name``.

    Raises ``MalformedTimestampError`` when the prefix does not follow the
    fixed format, and ``ValueError`` for names without the snapshot suffix.
    """

    if not is_snapshot_name(name):
        raise ValueError(f"Not a snapshot file name: {name}")
    return parse_timestamp(name[: -len(SNAPSHOT_SUFFIX)])


def list_pending(directory: Path) -> list[SnapshotFile]:
    """Collect snapshot files in ``directory`` in ascending timestamp order.

    Names are fixed width, so sorting them is chronological; the parsed
    timestamps are still checked so a violation surfaces as an error instead
    of silently corrupting dedup decisions.
    """

    if not directory.exists():
        return []
    names = sorted(
        path.name for path in directory.iterdir() if path.is_file() and is_snapshot_name(path.name)
    )
    snapshots = [SnapshotFile(path=directory / name, observed_at=parse_snapshot_name(name)) for name in names]
    check_chronological(snapshots)
    return snapshots


def check_chronological(snapshots: Sequence[SnapshotFile]) -> None:
    """Raise ``SnapshotOrderError`` unless observation times never decrease."""

    for previous, current in zip(snapshots, snapshots[1:]):
        if current.observed_at < previous.observed_at:
            raise SnapshotOrderError(
                f"{current.name} is older than {previous.name}; snapshots must be processed in order"
            )


def parse_body(text: str) -> list[HotItem]:
    # A trailing unpaired line (usually the empty string after the final
    # newline) is dropped by the floor division.
    lines = text.split("\n")
    return [HotItem(title=lines[i * 2], summary=lines[i * 2 + 1]) for i in range(len(lines) // 2)]


def read_entries(snapshot: SnapshotFile) -> list[HotEntry]:
    text = snapshot.path.read_text(encoding="utf-8")
    return [
        HotEntry(title=item.title, summary=item.summary, observed_at=snapshot.observed_at)
        for item in parse_body(text)
    ]


def render_snapshot(items: Iterable[HotItem]) -> str:
    chunks: list[str] = []
    for item in items:
        if "\n" in item.title or "\n" in item.summary:
            raise ValueError(f"Snapshot fields cannot contain newlines: {item.title!r}")
        chunks.append(f"{item.title}\n{item.summary}\n")
    return "".join(chunks)


def write_snapshot(path: Path, items: Iterable[HotItem]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_snapshot(items), encoding="utf-8")
    return path


def ensure_retired_dir(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def retire(snapshot: SnapshotFile, retired_dir: Path) -> Path:
    target = retired_dir / snapshot.name
    snapshot.path.rename(target)
    return target


__all__ = [
    "SNAPSHOT_SUFFIX",
    "SnapshotFile",
    "SnapshotOrderError",
    "check_chronological",
    "ensure_retired_dir",
    "is_snapshot_name",
    "list_pending",
    "parse_body",
    "parse_snapshot_name",
    "read_entries",
    "render_snapshot",
    "retire",
    "snapshot_filename",
    "write_snapshot",
]
