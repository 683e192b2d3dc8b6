"""Orchestrator wiring configuration, crawler, archiver and scheduler together."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import structlog

from .config import ConfigRepository, GlobalConfig
from .engine import Archiver, Fetcher, HotBoardParser
from .engine.snapshot import snapshot_filename, write_snapshot
from .infra import HotIndex, SQLiteManager
from .records import ArchiveResult
from .scheduler import APSchedulerAdapter


class Orchestrator:
    """Expose the two parameterless operations the scheduler fires.

    ``crawl_once`` writes one snapshot, ``archive_pending`` runs one archival
    pass, and ``run_cycle`` runs both while isolating their failures.
    """

    def __init__(
        self,
        config_repository: ConfigRepository,
        storage: SQLiteManager,
        scheduler: APSchedulerAdapter | None = None,
        fetcher: Fetcher | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.config_repository = config_repository
        self.config: GlobalConfig = config_repository.load_global_config()
        self.storage = storage
        self.scheduler = scheduler
        self._fetcher = fetcher
        self.logger = (logger or structlog.get_logger("hot_archiver.orchestrator")).bind(
            component="orchestrator"
        )

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    @property
    def snapshot_dir(self) -> Path:
        return self.config.archive.resolved_snapshot_dir(self.config_repository.base_dir)

    @property
    def retired_dir(self) -> Path:
        return self.config.archive.resolved_retired_dir(self.config_repository.base_dir)

    @property
    def index_path(self) -> Path:
        return self.config.archive.resolved_index_path(self.config_repository.base_dir)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def crawl_once(self, output: Path | None = None, now: datetime | None = None) -> Path:
        fetcher = self._fetcher or Fetcher(self.config.crawler)
        try:
            response = fetcher.fetch()
        finally:
            if self._fetcher is None:
                fetcher.close()
        items = HotBoardParser(self.config.crawler).parse(response.text)
        if output is None:
            # Snapshot names use wall-clock time of the configured timezone, second precision.
            observed_at = now or datetime.now(self.config.schedule.tzinfo)
            output = self.snapshot_dir / snapshot_filename(observed_at.replace(tzinfo=None))
        write_snapshot(output, items)
        self.logger.info("crawl_finished", path=str(output), items=len(items))
        return output

    def build_archiver(self) -> Archiver:
        index = HotIndex(self.storage.connect(self.index_path))
        return Archiver(
            index,
            snapshot_dir=self.snapshot_dir,
            retired_dir=self.retired_dir,
            retire_order=self.config.archive.retire_order,
            logger=self.logger,
        )

    def archive_pending(self) -> list[ArchiveResult]:
        return self.build_archiver().run()

    def run_cycle(self) -> None:
        """Crawl then archive; a failing step is logged and does not block the other."""

        try:
            self.crawl_once()
        except Exception:  # noqa: BLE001
            self.logger.exception("cycle_step_failed", step="crawl")
        try:
            self.archive_pending()
        except Exception:  # noqa: BLE001
            self.logger.exception("cycle_step_failed", step="archive")

    def register_schedule(self) -> None:
        if self.scheduler is None:
            raise RuntimeError("No scheduler configured")
        self.scheduler.schedule_cycle(self.run_cycle, self.config.schedule)

    def close(self) -> None:
        self.storage.close_all()


__all__ = ["Orchestrator"]
