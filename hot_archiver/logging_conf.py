"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Iterable

import structlog

_LOGGING_INITIALISED = False


def default_log_dir() -> Path:
    home = os.environ.get("HOT_ARCHIVER_HOME")
    root = Path(home).expanduser() if home else Path.cwd()
    return root.resolve() / "logs"


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger."""

    global _LOGGING_INITIALISED
    log_dir = log_dir or default_log_dir()
    app_log = log_dir / "hot_archiver.log"
    error_log = log_dir / "error.log"

    if not _LOGGING_INITIALISED:
        log_dir.mkdir(parents=True, exist_ok=True)
        level = "DEBUG" if verbose else "INFO"
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "json": {
                        "()": "pythonjsonlogger.json.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "level": level,
                        "formatter": "json",
                    },
                    "app_file": {
                        "class": "logging.FileHandler",
                        "level": "INFO",
                        "filename": str(app_log),
                        "formatter": "json",
                        "encoding": "utf-8",
                    },
                    "error_file": {
                        "class": "logging.FileHandler",
                        "level": "ERROR",
                        "filename": str(error_log),
                        "formatter": "json",
                        "encoding": "utf-8",
                    },
                },
                "loggers": {
                    "hot_archiver": {
                        "handlers": ["console", "app_file", "error_file"],
                        "level": level,
                        "propagate": False,
                    },
                    # APScheduler reports job errors and skipped runs here
                    "apscheduler": {
                        "handlers": ["console", "app_file", "error_file"],
                        "level": "INFO",
                        "propagate": False,
                    },
                },
            }
        )

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                # JSON rendering happens in the stdlib handler formatter
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("hot_archiver")


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


def available_logs(log_dir: Path | None = None) -> Iterable[Path]:
    log_dir = log_dir or default_log_dir()
    if not log_dir.exists():
        return []
    return sorted(log_dir.glob("*.log"))


__all__ = ["available_logs", "configure_logging", "default_log_dir", "tail_log"]
