"""
Tests for pre-LevelDB .localstorage handling.

Covers:
- Origin URL reconstruction from .localstorage filenames
- Filename derivation from URLs
- UTF-16LE value decoding, with UTF-8 fallback
- Error handling for missing and corrupt files
"""

import sqlite3
from pathlib import Path

import pytest

from localstorage_extractor.extractors.browser.chromium.local_storage._legacy import (
    iterate_legacy_localstorage,
    localstorage_filename_for_url,
    origin_from_localstorage_filename,
)
from localstorage_extractor.extractors.browser.chromium.local_storage import LocalStorageEntry
from localstorage_extractor.extractors.exceptions import InvalidInputError, StoreUnavailableError


def _create_localstorage_sqlite(path: Path, records: dict):
    """Helper: create a .localstorage SQLite file with ItemTable."""
    conn = sqlite3.connect(str(path))
    conn.execute(
        "CREATE TABLE ItemTable (key TEXT UNIQUE ON CONFLICT REPLACE, "
        "value BLOB NOT NULL ON CONFLICT FAIL)"
    )
    for key, value in records.items():
        if isinstance(value, str):
            value = value.encode("utf-16-le")
        conn.execute("INSERT INTO ItemTable (key, value) VALUES (?, ?)", (key, value))
    conn.commit()
    conn.close()


# =============================================================================
# Filenames
# =============================================================================

class TestOriginFromFilename:
    """Test origin URL reconstruction from old-format .localstorage filenames."""

    def test_https_default_port(self):
        assert origin_from_localstorage_filename("https_test.net_0.localstorage") == "https://test.net"

    def test_non_default_port(self):
        assert origin_from_localstorage_filename("http_localhost_8080.localstorage") == "http://localhost:8080"

    def test_host_with_underscore(self):
        assert origin_from_localstorage_filename("http_my_server_9999.localstorage") == "http://my_server:9999"

    def test_minimal_unparseable(self):
        assert origin_from_localstorage_filename("garbage.localstorage") == "garbage"


class TestFilenameForUrl:

    def test_default_port(self):
        assert localstorage_filename_for_url("https://a.com/page") == "https_a.com_0.localstorage"

    def test_explicit_port(self):
        assert localstorage_filename_for_url("http://localhost:8080") == "http_localhost_8080.localstorage"

    def test_round_trip_with_origin(self):
        filename = localstorage_filename_for_url("http://localhost:8080/x")
        assert origin_from_localstorage_filename(filename) == "http://localhost:8080"

    def test_requires_host(self):
        with pytest.raises(InvalidInputError):
            localstorage_filename_for_url("localhost")


# =============================================================================
# File parsing
# =============================================================================

class TestIterateLegacyLocalStorage:
    """Test streaming entries out of .localstorage SQLite files."""

    def test_utf16_values(self, tmp_path):
        path = tmp_path / "https_a.com_0.localstorage"
        _create_localstorage_sqlite(path, {"theme": "dark", "lang": "en"})

        entries = list(iterate_legacy_localstorage(path))
        assert entries == [
            LocalStorageEntry(key="lang", value="en"),
            LocalStorageEntry(key="theme", value="dark"),
        ]

    def test_odd_length_blob_falls_back_to_utf8(self, tmp_path):
        path = tmp_path / "https_a.com_0.localstorage"
        _create_localstorage_sqlite(path, {"raw": b"abc"})
        assert list(iterate_legacy_localstorage(path)) == [LocalStorageEntry(key="raw", value="abc")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreUnavailableError):
            list(iterate_legacy_localstorage(tmp_path / "https_a.com_0.localstorage"))

    def test_missing_table(self, tmp_path):
        path = tmp_path / "https_a.com_0.localstorage"
        conn = sqlite3.connect(str(path))
        conn.execute("CREATE TABLE Other (x TEXT)")
        conn.commit()
        conn.close()
        with pytest.raises(StoreUnavailableError):
            list(iterate_legacy_localstorage(path))

    def test_not_a_database(self, tmp_path):
        path = tmp_path / "https_a.com_0.localstorage"
        path.write_bytes(b"this is not sqlite" * 100)
        with pytest.raises(StoreUnavailableError):
            list(iterate_legacy_localstorage(path))

    def test_file_not_modified(self, tmp_path):
        path = tmp_path / "https_a.com_0.localstorage"
        _create_localstorage_sqlite(path, {"theme": "dark"})
        before = path.read_bytes()
        list(iterate_legacy_localstorage(path))
        assert path.read_bytes() == before
