"""Tests for YAML configuration loading."""

import json
import logging
from pathlib import Path

import pytest

from localstorage_extractor.core.config import (
    ExtractorConfig,
    LoggingConfig,
    StoreConfig,
    load_config,
)
from localstorage_extractor.extractors.exceptions import ConfigurationError


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:

    def test_defaults_without_path(self):
        config = load_config()
        assert config.store == StoreConfig()
        assert config.logging == LoggingConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yml")
        assert config.store.browser == "chrome"
        assert config.store.backend == "leveldb"

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(_write(tmp_path, "")).store.profile == "Default"

    def test_overrides(self, tmp_path):
        path = _write(tmp_path, """
logging:
  level: debug
  log_max_mb: 5
  log_dir: /var/log/lsx
store:
  browser: edge
  profile: Profile 1
  backend: raw
  path: /evidence/Local Storage/leveldb
""")
        config = load_config(path)
        assert config.logging.level == "debug"
        assert config.logging.level_number == logging.DEBUG
        assert config.logging.log_max_mb == 5
        assert config.logging.log_backup_count == 3
        assert config.logging.log_dir == Path("/var/log/lsx")
        assert config.store == StoreConfig(
            browser="edge",
            profile="Profile 1",
            backend="raw",
            path=Path("/evidence/Local Storage/leveldb"),
        )

    def test_unknown_backend(self, tmp_path):
        with pytest.raises(ConfigurationError, match="backend"):
            load_config(_write(tmp_path, "store:\n  backend: sqlite\n"))

    def test_top_level_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, "- just\n- a list\n"))

    def test_section_must_be_mapping(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, "store: chrome\n"))

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(_write(tmp_path, "store: {browser: [unclosed\n"))


class TestLoggingConfig:

    def test_unknown_level(self):
        with pytest.raises(ConfigurationError):
            LoggingConfig(level="chatty").level_number


class TestExtractorConfigJson:

    def test_to_json(self):
        config = ExtractorConfig(store=StoreConfig(path=Path("/tmp/ls")))
        data = json.loads(config.to_json())
        assert data["store"]["path"] == "/tmp/ls"
        assert data["store"]["backend"] == "leveldb"
        assert data["logging"]["log_dir"] is None
