"""Value objects shared by the snapshot, dedup and archive layers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"
# strptime accepts unpadded fields, the snapshot format does not
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}$")


class MalformedTimestampError(ValueError):
    """Raised when a snapshot name or a stored row carries an unparseable timestamp."""


def parse_timestamp(text: str) -> datetime:
    if not _TIMESTAMP_PATTERN.match(text):
        raise MalformedTimestampError(f"Timestamp does not match {TIMESTAMP_FORMAT}: {text!r}")
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise MalformedTimestampError(f"Invalid timestamp: {text!r}") from exc


def format_timestamp(value: datetime) -> str:
    return value.strftime(TIMESTAMP_FORMAT)


@dataclass(slots=True, frozen=True)
class HotItem:
    """A (title, summary) pair as written in a snapshot body."""

    title: str
    summary: str = ""


@dataclass(slots=True, frozen=True)
class HotEntry:
    """A topic observation carrying the timestamp of the snapshot it came from."""

    title: str
    summary: str
    observed_at: datetime

    @property
    def date(self) -> str:
        return format_timestamp(self.observed_at)


@dataclass(slots=True, frozen=True)
class IndexedRecord:
    """Row returned by title lookups; ``date`` is kept as stored text."""

    date: str
    title: str


@dataclass(slots=True, frozen=True)
class ArchiveResult:
    """Statistics for one archived snapshot file."""

    source: str
    total_count: int
    accepted_count: int
    duplicate_count: int

    def __post_init__(self) -> None:
        if self.accepted_count + self.duplicate_count != self.total_count:
            raise ValueError(
                f"{self.source}: accepted ({self.accepted_count}) + duplicate "
                f"({self.duplicate_count}) != total ({self.total_count})"
            )

    def as_dict(self) -> dict[str, int | str]:
        return {
            "source": self.source,
            "accepted": self.accepted_count,
            "duplicate": self.duplicate_count,
            "total": self.total_count,
        }


__all__ = [
    "ArchiveResult",
    "HotEntry",
    "HotItem",
    "IndexedRecord",
    "MalformedTimestampError",
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "parse_timestamp",
]
