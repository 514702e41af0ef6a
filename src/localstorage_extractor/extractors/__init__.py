"""
Extractors for browser storage artifacts.

Folder Structure:
- browser/         Browser family extractors (chromium/)
- _shared/         Shared store backends (leveldb_wrapper)
"""

from .exceptions import (  # noqa: F401
    ConfigurationError,
    ExtractorError,
    InvalidInputError,
    MalformedValueError,
    NotFoundError,
    StoreUnavailableError,
)
