"""Global pytest configuration: LevelDB store and package logger fixtures."""

import logging
from pathlib import Path
from typing import Callable, Dict

import plyvel
import pytest

from localstorage_extractor.core.logging import LOGGER_NAMESPACE


# Store contents shared by the extractor scenarios:
# two entries for a.com, one for b.com, no bare origin key.
SCENARIO_RECORDS: Dict[bytes, bytes] = {
    b"_https://a.com\x00\x01theme": b"\x01dark",
    b"_https://a.com\x00\x01lang": b"\x01en",
    b"_https://b.com\x00\x01theme": b"\x01light",
}


@pytest.fixture()
def make_leveldb(tmp_path: Path) -> Callable[[Dict[bytes, bytes]], Path]:
    """Write records into a fresh LevelDB directory and return its path.

    The directory is laid out like a profile: ``<tmp>/Local Storage/leveldb``.
    """

    def _make(records: Dict[bytes, bytes], name: str = "leveldb") -> Path:
        path = tmp_path / "Local Storage" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        db = plyvel.DB(str(path), create_if_missing=True)
        try:
            for key, value in records.items():
                db.put(key, value)
        finally:
            db.close()
        return path

    return _make


@pytest.fixture()
def scenario_store(make_leveldb) -> Path:
    """LevelDB store holding SCENARIO_RECORDS."""
    return make_leveldb(SCENARIO_RECORDS)


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handler and level changes made to the package logger by a test."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    saved_handlers, saved_level = list(logger.handlers), logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.handlers[:] = saved_handlers
    logger.setLevel(saved_level)
