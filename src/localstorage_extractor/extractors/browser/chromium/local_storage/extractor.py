"""
Chromium Local Storage Extractor

Reads Local Storage values for one origin out of a browser profile's
``Local Storage/leveldb`` store.

Every call opens its own store handle and closes it before the result or
error reaches the caller. read_all() is lazy: one record is read per item
the caller pulls, and closing or dropping the iterator early still closes
the store.
"""
from __future__ import annotations

from contextlib import closing
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Iterator, Optional

from ...._shared.leveldb_wrapper import KeyValueStore, LevelDBWrapper, RawLevelDBSnapshot
from ....exceptions import ConfigurationError
from .....core.logging import configure_logging_from_config, get_logger
from ._discovery import DEFAULT_PROFILE, locate_legacy_local_storage, locate_local_storage
from ._keys import (
    LocalStorageEntry,
    ScanBounds,
    decode_stored_key,
    decode_value,
    derive_entry_key,
    derive_scan_bounds,
)
from ._legacy import iterate_legacy_localstorage, localstorage_filename_for_url

if TYPE_CHECKING:
    from .....core.config import ExtractorConfig

LOGGER = get_logger("extractors.browser.chromium.local_storage")

StoreFactory = Callable[[Path], KeyValueStore]

STORE_BACKENDS: Dict[str, StoreFactory] = {
    "leveldb": LevelDBWrapper,
    "raw": RawLevelDBSnapshot,
}


def get_store_factory(backend: str) -> StoreFactory:
    try:
        return STORE_BACKENDS[backend]
    except KeyError:
        raise ConfigurationError(
            f"Unknown store backend {backend!r}; expected one of {', '.join(STORE_BACKENDS)}"
        ) from None


class LocalStorageExtractor:
    """
    Point lookups and per-origin scans over a Chromium Local Storage store.

    Args:
        db_path: Path to the ``Local Storage/leveldb`` directory
        open_store: Factory returning an unopened store for db_path
            (default: LevelDBWrapper)
    """

    def __init__(
        self,
        db_path: Path,
        open_store: Optional[StoreFactory] = None,
    ):
        self.db_path = Path(db_path)
        self._open_store = open_store or LevelDBWrapper

    @classmethod
    def create(
        cls,
        browser: str = "chrome",
        profile: str = DEFAULT_PROFILE,
        *,
        backend: str = "leveldb",
        home: Optional[Path] = None,
        system: Optional[str] = None,
    ) -> "LocalStorageExtractor":
        """Build an extractor for an installed browser's profile."""
        store_factory = get_store_factory(backend)
        db_path = locate_local_storage(browser, profile, home=home, system=system)
        LOGGER.info("Using %s Local Storage at %s (%s backend)", browser, db_path, backend)
        return cls(db_path, store_factory)

    @classmethod
    def from_config(cls, config: "ExtractorConfig") -> "LocalStorageExtractor":
        """
        Build an extractor from a loaded config.

        The ``logging`` section is applied to the package logger first, then
        the ``store`` section selects the store path and backend.
        """
        configure_logging_from_config(config.logging)
        store = config.store
        if store.path is not None:
            return cls(store.path, get_store_factory(store.backend))
        return cls.create(store.browser, store.profile, backend=store.backend)

    def read(self, url: str, key: str) -> str:
        """
        Return the value stored under ``key`` for the URL's origin.

        Raises:
            InvalidInputError: URL has no host
            StoreUnavailableError: store missing, locked or unreadable
            NotFoundError: no value stored under the key
            MalformedValueError: stored value has no frame byte
        """
        store_key = derive_entry_key(url, key)
        with self._open_store(self.db_path) as store:
            return decode_value(store.get(store_key))

    def read_all(self, url: str) -> Iterator[LocalStorageEntry]:
        """
        Iterate every entry stored for the URL's origin, in key order.

        The URL is validated immediately; the store is opened on the first
        pull. Call close() on the returned iterator (or use
        contextlib.closing) to release the store before exhaustion.

        Raises:
            InvalidInputError: URL has no host (raised at call time)
            StoreUnavailableError: store missing, locked or unreadable
            MalformedValueError: a key in range lacks the separator, or a
                value lacks its frame byte
        """
        bounds = derive_scan_bounds(url)
        return self._scan(bounds)

    def _scan(self, bounds: ScanBounds) -> Iterator[LocalStorageEntry]:
        with self._open_store(self.db_path) as store, \
                closing(store.iterate_range(bounds.lower, bounds.upper)) as records:
            for raw_key, raw_value in records:
                yield LocalStorageEntry(
                    key=decode_stored_key(raw_key),
                    value=decode_value(raw_value),
                )

    def read_all_legacy(self, url: str) -> Iterator[LocalStorageEntry]:
        """
        Iterate the origin's entries from a pre-LevelDB ``.localstorage`` file.

        The file is looked up next to the LevelDB directory, in
        ``Local Storage/<scheme>_<host>_<port>.localstorage``.
        """
        legacy_dir = locate_legacy_local_storage(self.db_path)
        return iterate_legacy_localstorage(legacy_dir / localstorage_filename_for_url(url))
