"""Engine components: fetch → parse → snapshot → dedup → archive."""

from .archiver import Archiver
from .dedup import Decision, DeduplicationEngine, RECENCY_WINDOW
from .fetcher import FetchError, FetchResponse, Fetcher
from .parser import HotBoardParser
from .snapshot import SnapshotFile, SnapshotOrderError

__all__ = [
    "Archiver",
    "Decision",
    "DeduplicationEngine",
    "FetchError",
    "FetchResponse",
    "Fetcher",
    "HotBoardParser",
    "RECENCY_WINDOW",
    "SnapshotFile",
    "SnapshotOrderError",
]
