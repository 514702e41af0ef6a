"""
Exceptions for Local Storage extraction.

Every error raised by the key codec, the store backends and the extractor
derives from ExtractorError, so callers can catch the whole family at once.
"""

from pathlib import Path
from typing import Optional, Union


class ExtractorError(Exception):
    """Base exception for extractor errors."""
    pass


class ConfigurationError(ExtractorError):
    """Raised when extractor configuration is invalid."""
    pass


class InvalidInputError(ExtractorError, ValueError):
    """Raised when a URL cannot be turned into a storage origin (e.g. no host)."""
    pass


class StoreUnavailableError(ExtractorError):
    """
    Raised when the on-disk store cannot be opened or read.

    Covers a missing directory, a lock held by another process (usually a
    running browser), corruption, or a missing backend library. Retrying
    after the conflicting process exits may succeed.
    """

    def __init__(self, db_path: Optional[Union[str, Path]], reason: str):
        self.db_path = Path(db_path) if db_path is not None else None
        self.reason = reason
        super().__init__(f"Store unavailable at {db_path}: {reason}")


class NotFoundError(ExtractorError, KeyError):
    """Raised when a point lookup finds no record for the derived key."""

    def __init__(self, key: bytes):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"No record for key {self.key!r}"


class MalformedValueError(ExtractorError):
    """Raised when a stored key or value violates the expected framing."""
    pass
