"""Configuration loading helpers for hot-archiver."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

import yaml

from .models import GlobalConfig

CONFIG_FILENAME = "hot_archiver.yaml"
HOME_ENV = "HOT_ARCHIVER_HOME"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix in (".yaml", ".yml"):
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


def _write_file(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as stream:
        if path.suffix in (".yaml", ".yml"):
            yaml.safe_dump(payload, stream, allow_unicode=True, sort_keys=False)
        else:
            json.dump(payload, stream, indent=2, ensure_ascii=False)


@dataclass(slots=True)
class ConfigLocator:
    """Resolve important paths from the project home.

    The home is ``project_root`` when given, otherwise ``$HOT_ARCHIVER_HOME``,
    otherwise the working directory.
    """

    project_root: Path | None = None
    config_path: Path | None = None
    logs_dir: Path | None = None

    def __post_init__(self) -> None:
        env_root = os.environ.get(HOME_ENV)
        if self.project_root is not None:
            root = Path(self.project_root).expanduser().resolve()
        elif env_root:
            root = Path(env_root).expanduser().resolve()
        else:
            root = Path.cwd().resolve()
        self.project_root = root
        self.config_path = (self.config_path or root / CONFIG_FILENAME).resolve()
        self.logs_dir = (root / "logs").resolve()


class ConfigRepository:
    """Repository encapsulating config IO and schema validation."""

    def __init__(self, locator: ConfigLocator | None = None) -> None:
        self.locator = locator or ConfigLocator()
        self._cache: GlobalConfig | None = None

    @property
    def base_dir(self) -> Path:
        return self.locator.project_root

    def load_global_config(self) -> GlobalConfig:
        if self._cache is not None:
            return self._cache
        path = self.locator.config_path
        if path.exists():
            config = GlobalConfig.model_validate(_read_file(path))
        else:
            config = GlobalConfig()
        self._cache = config
        return config

    def save_global_config(self, config: GlobalConfig) -> Path:
        path = self.locator.config_path
        path.parent.mkdir(parents=True, exist_ok=True)
        _write_file(path, config.model_dump(mode="json"))
        self._cache = config
        return path


__all__ = ["CONFIG_FILENAME", "ConfigLocator", "ConfigRepository", "HOME_ENV"]
