"""Recency-window deduplication of hot topics against the index."""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Protocol, Sequence

from ..records import HotEntry, IndexedRecord, parse_timestamp

RECENCY_WINDOW = timedelta(hours=7 * 24)


class TitleIndex(Protocol):
    def find_by_title(self, title: str) -> Sequence[IndexedRecord]: ...

    def insert(self, date: str, title: str, summary: str) -> None: ...


class Decision(str, Enum):
    """Outcome of a dedup check."""

    ACCEPT = "accept"
    DUPLICATE = "duplicate"


class DeduplicationEngine:
    """Reject a title seen less than ``window`` before the candidate.

    Stored dates that fail to parse raise ``MalformedTimestampError``. A
    stored date later than the candidate yields a negative duration and is
    treated as a duplicate as well.
    """

    def __init__(self, index: TitleIndex, window: timedelta = RECENCY_WINDOW) -> None:
        self.index = index
        self.window = window

    def decide(self, candidate: HotEntry) -> Decision:
        for record in self.index.find_by_title(candidate.title):
            first_seen = parse_timestamp(record.date)
            if candidate.observed_at - first_seen < self.window:
                return Decision.DUPLICATE
        return Decision.ACCEPT

    def accept(self, candidate: HotEntry) -> Decision:
        decision = self.decide(candidate)
        if decision is Decision.ACCEPT:
            self.index.insert(candidate.date, candidate.title, candidate.summary)
        return decision


__all__ = ["Decision", "DeduplicationEngine", "RECENCY_WINDOW", "TitleIndex"]
