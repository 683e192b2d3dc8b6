"""Archival pass folding pending snapshots into the hot topic index."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Literal

import structlog

from ..infra.storage import HotIndex, SQLiteManager
from ..records import ArchiveResult
from . import snapshot as snapshots
from .dedup import RECENCY_WINDOW, Decision, DeduplicationEngine

RetireOrder = Literal["after_commit", "before_commit"]


class Archiver:
    """Run one archival pass over every pending snapshot.

    The whole pass shares a single transaction: any read, parse or storage
    error rolls back every insert made by the pass and propagates. Files are
    processed in ascending timestamp order because later dedup decisions
    depend on rows inserted for earlier files.

    ``retire_order`` controls when processed files move to ``retired_dir``:

    * ``after_commit`` renames them once the transaction has committed. A
      failed pass leaves every file in place. If renaming fails after the
      commit, the next pass re-reads those files and rejects all of their
      entries as duplicates.
    * ``before_commit`` renames each file as soon as it is processed. A later
      failure rolls the index back while already renamed files stay retired.
    """

    def __init__(
        self,
        index: HotIndex,
        snapshot_dir: Path,
        retired_dir: Path,
        retire_order: RetireOrder = "after_commit",
        window: timedelta = RECENCY_WINDOW,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        if retire_order not in ("after_commit", "before_commit"):
            raise ValueError(f"Unknown retire order: {retire_order}")
        self.index = index
        self.snapshot_dir = snapshot_dir
        self.retired_dir = retired_dir
        self.retire_order = retire_order
        self.dedup = DeduplicationEngine(index, window)
        self.logger = (logger or structlog.get_logger("hot_archiver.archiver")).bind(
            component="archiver"
        )

    def run(self) -> list[ArchiveResult]:
        self.index.ensure_schema()
        pending = snapshots.list_pending(self.snapshot_dir)
        if not pending:
            self.logger.info("archive_nothing_pending", snapshot_dir=str(self.snapshot_dir))
            return []

        snapshots.ensure_retired_dir(self.retired_dir)
        results: list[ArchiveResult] = []
        with SQLiteManager.transaction(self.index.conn):
            for snapshot in pending:
                results.append(self._archive_one(snapshot))
                if self.retire_order == "before_commit":
                    snapshots.retire(snapshot, self.retired_dir)
        if self.retire_order == "after_commit":
            for snapshot in pending:
                snapshots.retire(snapshot, self.retired_dir)

        self.logger.info(
            "archive_finished",
            files=len(results),
            accepted=sum(result.accepted_count for result in results),
            duplicates=sum(result.duplicate_count for result in results),
        )
        return results

    def _archive_one(self, snapshot: snapshots.SnapshotFile) -> ArchiveResult:
        entries = snapshots.read_entries(snapshot)
        duplicates = 0
        for entry in entries:
            if self.dedup.accept(entry) is Decision.DUPLICATE:
                duplicates += 1
        result = ArchiveResult(
            source=snapshot.name,
            total_count=len(entries),
            accepted_count=len(entries) - duplicates,
            duplicate_count=duplicates,
        )
        self.logger.info("snapshot_archived", **result.as_dict())
        return result


__all__ = ["Archiver", "RetireOrder"]
