"""Pydantic models used across the hot-archiver configuration flow."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.triggers.cron import CronTrigger
from pydantic import BaseModel, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/101.0.4951.54 Safari/537.36"
)


class CrawlerConfig(BaseModel):
    """Where the hot board lives and how to pick topics out of it."""

    target_url: str = "https://top.baidu.com/board?tab=realtime"
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 15.0
    item_selector: str = 'div[class="content_1YWBm"]'
    title_selector: str = 'div[class="c-single-text-ellipsis"]'
    summary_selector: str = "div.small_Uvkd3"

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be > 0")
        return value


class ScheduleConfig(BaseModel):
    """Cron cadence for the crawl → archive cycle."""

    cron: str = "5 * * * *"
    timezone: str = "Asia/Shanghai"

    @field_validator("cron")
    @classmethod
    def _validate_cron(cls, value: str) -> str:
        try:
            CronTrigger.from_crontab(value)
        except ValueError as exc:
            raise ValueError(f"Invalid cron expression: {value}") from exc
        return value

    @field_validator("timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


class ArchiveConfig(BaseModel):
    """Snapshot locations, index path and retire ordering."""

    snapshot_dir: Path = Field(default=Path("."))
    retired_dir: Path = Field(default=Path("archived"))
    index_path: Path = Field(default=Path("hot.sqlite"))
    retire_order: Literal["after_commit", "before_commit"] = "after_commit"

    @field_validator("snapshot_dir", "retired_dir", "index_path", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Path:
        return Path(value)

    def resolved_snapshot_dir(self, base_dir: Path) -> Path:
        return _resolve(self.snapshot_dir, base_dir)

    def resolved_retired_dir(self, base_dir: Path) -> Path:
        """Retired files live under the snapshot directory unless absolute."""

        return _resolve(self.retired_dir, self.resolved_snapshot_dir(base_dir))

    def resolved_index_path(self, base_dir: Path) -> Path:
        return _resolve(self.index_path, base_dir)


class GlobalConfig(BaseModel):
    """Top-level configuration document."""

    crawler: CrawlerConfig = Field(default_factory=CrawlerConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)


def _resolve(path: Path, base_dir: Path) -> Path:
    if not path.is_absolute():
        return (base_dir / path).resolve()
    return path


__all__ = [
    "ArchiveConfig",
    "CrawlerConfig",
    "DEFAULT_USER_AGENT",
    "GlobalConfig",
    "ScheduleConfig",
]
