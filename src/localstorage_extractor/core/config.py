from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..extractors.exceptions import ConfigurationError

STORE_BACKEND_NAMES = ("leveldb", "raw")


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    log_max_mb: int = 10
    log_backup_count: int = 3
    log_dir: Optional[Path] = None

    @property
    def level_number(self) -> int:
        level = logging.getLevelName(self.level.upper())
        if not isinstance(level, int):
            raise ConfigurationError(f"Unknown logging level: {self.level!r}")
        return level


@dataclass(slots=True)
class StoreConfig:
    """Which browser profile to read and how to open its store."""

    browser: str = "chrome"
    profile: str = "Default"
    backend: str = "leveldb"  # "leveldb" (plyvel, live) or "raw" (ccl, lock-free)
    path: Optional[Path] = None  # Explicit Local Storage/leveldb directory


@dataclass(slots=True)
class ExtractorConfig:
    """Top-level configuration resolved from disk."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    def to_json(self) -> str:
        """Serialize the configuration into a JSON string."""
        data = {
            "logging": {
                "level": self.logging.level,
                "log_max_mb": self.logging.log_max_mb,
                "log_backup_count": self.logging.log_backup_count,
                "log_dir": str(self.logging.log_dir) if self.logging.log_dir else None,
            },
            "store": {
                "browser": self.store.browser,
                "profile": self.store.profile,
                "backend": self.store.backend,
                "path": str(self.store.path) if self.store.path else None,
            },
        }
        return json.dumps(data, indent=2, sort_keys=True)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            content = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc
        if not isinstance(content, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _section(overrides: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = overrides.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Config section {name!r} must be a mapping.")
    return section


def _optional_path(value: Any) -> Optional[Path]:
    return Path(value).expanduser() if value else None


def load_config(path: Optional[Path] = None) -> ExtractorConfig:
    """Load extractor configuration from a YAML file, providing sensible defaults."""

    config_overrides = _load_yaml(path) if path is not None else {}

    logging_cfg = _section(config_overrides, "logging")
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", "INFO")),
        log_max_mb=int(logging_cfg.get("log_max_mb", 10)),
        log_backup_count=int(logging_cfg.get("log_backup_count", 3)),
        log_dir=_optional_path(logging_cfg.get("log_dir")),
    )

    store_cfg = _section(config_overrides, "store")
    store_config = StoreConfig(
        browser=str(store_cfg.get("browser", "chrome")),
        profile=str(store_cfg.get("profile", "Default")),
        backend=str(store_cfg.get("backend", "leveldb")),
        path=_optional_path(store_cfg.get("path")),
    )
    if store_config.backend not in STORE_BACKEND_NAMES:
        raise ConfigurationError(
            f"Unknown store backend {store_config.backend!r}; expected one of {', '.join(STORE_BACKEND_NAMES)}"
        )

    return ExtractorConfig(logging=logging_config, store=store_config)
