"""
LevelDB Wrapper for Chromium Local Storage

Provides a small read-only interface over a Chromium LevelDB directory:
point lookups and inclusive, ordered range scans.

Backends:
- LevelDBWrapper: plyvel (libleveldb). Opens the live store and takes the
  LevelDB lock, so it fails while a browser holds the profile open.
- RawLevelDBSnapshot: ccl_chromium_reader. Parses the .ldb/.log files
  directly without locking, which suits copied or in-use profiles.

Both release their handle on every exit path, including generator
abandonment, and report all backend failures as StoreUnavailableError.

Usage:
    with LevelDBWrapper(db_path) as store:
        value = store.get(b"_https://example.com\\x00\\x01theme")
        for key, value in store.iterate_range(lower, upper):
            ...

Dependencies:
    - plyvel
    - ccl_chromium_reader (optional, for RawLevelDBSnapshot)
"""

from __future__ import annotations

from bisect import bisect_left, bisect_right
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

import plyvel

from ...core.logging import get_logger
from ..exceptions import NotFoundError, StoreUnavailableError

LOGGER = get_logger("extractors.leveldb")

# ccl_chromium_reader is an optional extra; RawLevelDBSnapshot refuses to open without it
CCL_AVAILABLE = False
ccl_leveldb = None

try:
    from ccl_chromium_reader.ccl_chromium_localstorage import ccl_leveldb

    CCL_AVAILABLE = True
except ImportError:
    LOGGER.debug("ccl_chromium_reader not installed - raw LevelDB snapshots unavailable")


class KeyValueStore(Protocol):
    """Read-only store interface shared by the LevelDB backends."""

    db_path: Path

    def open(self) -> "KeyValueStore":
        ...

    def close(self) -> None:
        ...

    def __enter__(self) -> "KeyValueStore":
        ...

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        ...

    def get(self, key: bytes) -> bytes:
        ...

    def iterate_range(self, lower: bytes, upper: bytes) -> Iterator[Tuple[bytes, bytes]]:
        ...


def _require_directory(db_path: Path) -> None:
    if not db_path.exists():
        raise StoreUnavailableError(db_path, "path does not exist")
    if not db_path.is_dir():
        raise StoreUnavailableError(db_path, "path is not a directory")


class LevelDBWrapper:
    """
    plyvel-backed reader for a live LevelDB directory.

    The handle is exclusive: LevelDB refuses a second open of the same
    directory (in this process or another) until close() runs.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._db: Optional[plyvel.DB] = None

    @property
    def is_open(self) -> bool:
        return self._db is not None

    def open(self) -> "LevelDBWrapper":
        """Open the database if not already open."""
        if self._db is not None:
            return self

        _require_directory(self.db_path)
        try:
            self._db = plyvel.DB(str(self.db_path), create_if_missing=False)
        except plyvel.Error as e:
            LOGGER.error("Failed to open LevelDB at %s: %s", self.db_path, e)
            raise StoreUnavailableError(self.db_path, str(e)) from e

        LOGGER.debug("Opened LevelDB at %s", self.db_path)
        return self

    def close(self) -> None:
        """Close the database handle. Safe to call more than once."""
        if self._db is None:
            return
        db, self._db = self._db, None
        db.close()
        LOGGER.debug("Closed LevelDB at %s", self.db_path)

    def __enter__(self) -> "LevelDBWrapper":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _handle(self) -> plyvel.DB:
        if self._db is None:
            raise StoreUnavailableError(self.db_path, "store is not open")
        return self._db

    def get(self, key: bytes) -> bytes:
        """
        Fetch the value stored under an exact key.

        Raises:
            NotFoundError: no record exists for the key
            StoreUnavailableError: the backend failed while reading
        """
        try:
            value = self._handle().get(key)
        except plyvel.Error as e:
            raise StoreUnavailableError(self.db_path, str(e)) from e
        if value is None:
            raise NotFoundError(key)
        return value

    def iterate_range(self, lower: bytes, upper: bytes) -> Iterator[Tuple[bytes, bytes]]:
        """
        Yield (key, value) pairs with lower <= key <= upper in ascending order.

        One record is read per request from the consumer. The underlying
        iterator is closed exactly once, whether the range is exhausted,
        the generator is closed early, or the backend raises.
        """
        iterator = self._handle().iterator(
            start=lower,
            stop=upper,
            include_start=True,
            include_stop=True,
        )
        count = 0
        try:
            while True:
                try:
                    key, value = next(iterator)
                except StopIteration:
                    break
                except plyvel.Error as e:
                    LOGGER.warning("LevelDB iteration failed at %s after %d records: %s",
                                   self.db_path, count, e)
                    raise StoreUnavailableError(self.db_path, str(e)) from e
                count += 1
                yield key, value
        finally:
            iterator.close()
            LOGGER.debug("Range scan on %s released after %d records", self.db_path, count)


class RawLevelDBSnapshot:
    """
    Lock-free reader built on ccl_chromium_reader's raw record parser.

    Opening resolves the live version of every user key (highest sequence
    number wins, deleted keys drop out) and keeps a sorted key index, so
    get() and iterate_range() behave like the plyvel backend.
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._keys: Optional[List[bytes]] = None
        self._values: Dict[bytes, bytes] = {}

    @property
    def is_open(self) -> bool:
        return self._keys is not None

    def open(self) -> "RawLevelDBSnapshot":
        """Parse the store files and build the key index."""
        if self._keys is not None:
            return self

        if not CCL_AVAILABLE:
            raise StoreUnavailableError(
                self.db_path,
                "ccl_chromium_reader not installed. Install with: pip install 'localstorage-extractor[raw]'",
            )
        _require_directory(self.db_path)
        if not check_leveldb_directory(self.db_path):
            raise StoreUnavailableError(self.db_path, "no LevelDB files found")

        try:
            raw_db = ccl_leveldb.RawLevelDb(self.db_path)
        except Exception as e:
            LOGGER.error("Failed to open raw LevelDB at %s: %s", self.db_path, e)
            raise StoreUnavailableError(self.db_path, str(e)) from e

        try:
            self._values = self._resolve_live_records(raw_db.iterate_records_raw())
        except StoreUnavailableError:
            raise
        except Exception as e:
            raise StoreUnavailableError(self.db_path, f"failed to parse records: {e}") from e
        finally:
            raw_db.close()

        self._keys = sorted(self._values)
        LOGGER.debug("Raw snapshot of %s holds %d live keys", self.db_path, len(self._keys))
        return self

    def _resolve_live_records(self, records) -> Dict[bytes, bytes]:
        latest: Dict[bytes, Tuple[int, bool, bytes]] = {}
        for record in records:
            key = bytes(record.user_key)
            seen = latest.get(key)
            if seen is not None and seen[0] >= record.seq:
                continue
            is_deleted = record.state == ccl_leveldb.KeyState.Deleted
            latest[key] = (record.seq, is_deleted, bytes(record.value or b""))

        return {
            key: value
            for key, (_, is_deleted, value) in latest.items()
            if not is_deleted
        }

    def close(self) -> None:
        """Drop the snapshot. Safe to call more than once."""
        self._keys = None
        self._values = {}

    def __enter__(self) -> "RawLevelDBSnapshot":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    def _index(self) -> List[bytes]:
        if self._keys is None:
            raise StoreUnavailableError(self.db_path, "store is not open")
        return self._keys

    def get(self, key: bytes) -> bytes:
        self._index()
        try:
            return self._values[key]
        except KeyError:
            raise NotFoundError(key) from None

    def iterate_range(self, lower: bytes, upper: bytes) -> Iterator[Tuple[bytes, bytes]]:
        keys = self._index()
        start = bisect_left(keys, lower)
        stop = bisect_right(keys, upper)
        for key in keys[start:stop]:
            yield key, self._values[key]


def check_leveldb_directory(path: Path) -> bool:
    """
    Check if a path looks like a valid LevelDB directory.

    Args:
        path: Directory path to check

    Returns:
        True if directory contains LevelDB files
    """
    if not path.is_dir():
        return False

    # LevelDB directories typically have CURRENT or MANIFEST files
    has_current = (path / "CURRENT").exists()
    has_manifest = any(path.glob("MANIFEST-*"))
    has_ldb = any(path.glob("*.ldb")) or any(path.glob("*.log"))

    return has_current or has_manifest or has_ldb
