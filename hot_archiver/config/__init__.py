"""Configuration package exports."""

from .loader import ConfigLocator, ConfigRepository
from .models import ArchiveConfig, CrawlerConfig, GlobalConfig, ScheduleConfig

__all__ = [
    "ArchiveConfig",
    "ConfigLocator",
    "ConfigRepository",
    "CrawlerConfig",
    "GlobalConfig",
    "ScheduleConfig",
]
