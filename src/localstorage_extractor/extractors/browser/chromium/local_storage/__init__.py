"""
Chromium Local Storage Extractor

Reads Local Storage entries for one origin from a profile's LevelDB store.

Features:
- Point lookup of a single script key
- Lazy, ordered scan of every key stored for an origin
- Live (plyvel) and lock-free (ccl_chromium_reader) store backends
- Pre-LevelDB .localstorage SQLite files
"""

from ._discovery import (
    locate_legacy_local_storage,
    locate_local_storage,
    locate_profile_dir,
    locate_profile_root,
)
from ._keys import (
    HOST_KEY_SEPARATOR,
    LocalStorageEntry,
    ScanBounds,
    decode_stored_key,
    decode_value,
    derive_entry_key,
    derive_origin_key,
    derive_scan_bounds,
    origin_from_url,
)
from ._legacy import (
    iterate_legacy_localstorage,
    localstorage_filename_for_url,
    origin_from_localstorage_filename,
)
from .extractor import LocalStorageExtractor

__all__ = [
    "HOST_KEY_SEPARATOR",
    "LocalStorageEntry",
    "LocalStorageExtractor",
    "ScanBounds",
    "decode_stored_key",
    "decode_value",
    "derive_entry_key",
    "derive_origin_key",
    "derive_scan_bounds",
    "iterate_legacy_localstorage",
    "locate_legacy_local_storage",
    "locate_local_storage",
    "locate_profile_dir",
    "locate_profile_root",
    "localstorage_filename_for_url",
    "origin_from_localstorage_filename",
    "origin_from_url",
]
