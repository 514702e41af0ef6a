"""
Pre-LevelDB Local Storage files.

Old Chromium/CefSharp builds stored Local Storage as one SQLite file per
origin, named ``{scheme}_{host}_{port}.localstorage``, each with a single
table ``ItemTable (key TEXT UNIQUE, value BLOB NOT NULL)``. Values are
UTF-16LE encoded BLOBs without a framing byte.
"""
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterator
from urllib.parse import urlsplit

from ....exceptions import StoreUnavailableError
from .....core.logging import get_logger
from ._keys import LocalStorageEntry, origin_from_url

LOGGER = get_logger("extractors.browser.chromium.local_storage.legacy")

LEGACY_SUFFIX = ".localstorage"


def origin_from_localstorage_filename(filename: str) -> str:
    """
    Extract the origin URL from an old-format .localstorage filename.

    Examples:
        ``https_example.net_0.localstorage``        → ``https://example.net``
        ``http_localhost_8080.localstorage``         → ``http://localhost:8080``

    Returns:
        Reconstructed origin URL, or the raw stem if parsing fails.
    """
    stem = filename[:-len(LEGACY_SUFFIX)] if filename.endswith(LEGACY_SUFFIX) else filename
    parts = stem.split("_")
    if len(parts) < 3:
        return stem  # Unparseable — return as-is

    scheme = parts[0]
    port = parts[-1]
    host = "_".join(parts[1:-1])

    if port == "0":
        return f"{scheme}://{host}"
    return f"{scheme}://{host}:{port}"


def localstorage_filename_for_url(url: str) -> str:
    """Return the .localstorage filename an origin would have been stored under."""
    origin = urlsplit(origin_from_url(url))
    host = origin.hostname or ""
    port = origin.port or 0
    return f"{origin.scheme}_{host}_{port}{LEGACY_SUFFIX}"


def _decode_legacy_value(value_blob) -> str:
    if value_blob is None:
        return ""
    if not isinstance(value_blob, bytes):
        return str(value_blob)
    try:
        return value_blob.decode("utf-16-le")
    except UnicodeDecodeError:
        return value_blob.decode("utf-8", errors="replace")


def iterate_legacy_localstorage(path: Path) -> Iterator[LocalStorageEntry]:
    """
    Stream the entries of one .localstorage SQLite file.

    The file is opened read-only and the connection is closed when the
    generator finishes, fails, or is closed early.

    Raises:
        StoreUnavailableError: file missing or not a readable SQLite database
    """
    path = Path(path)
    if not path.is_file():
        raise StoreUnavailableError(path, "legacy .localstorage file does not exist")

    try:
        conn = sqlite3.connect(f"file:{path}?mode=ro", uri=True)
    except sqlite3.Error as e:
        raise StoreUnavailableError(path, str(e)) from e

    count = 0
    try:
        try:
            cursor = conn.execute("SELECT key, value FROM ItemTable ORDER BY key")
        except sqlite3.Error as e:
            raise StoreUnavailableError(path, str(e)) from e

        for key, value_blob in cursor:
            count += 1
            yield LocalStorageEntry(key=str(key), value=_decode_legacy_value(value_blob))
    finally:
        conn.close()
        LOGGER.debug("Read %d records from legacy file %s", count, path.name)
