"""Read Chromium Local Storage values for an origin from a profile's LevelDB store."""

from .core.config import ExtractorConfig, load_config
from .core.logging import configure_logging, configure_logging_from_config, get_logger
from .extractors.exceptions import (
    ConfigurationError,
    ExtractorError,
    InvalidInputError,
    MalformedValueError,
    NotFoundError,
    StoreUnavailableError,
)
from .extractors.browser.chromium.local_storage import (
    LocalStorageEntry,
    LocalStorageExtractor,
    ScanBounds,
    decode_stored_key,
    decode_value,
    derive_entry_key,
    derive_origin_key,
    derive_scan_bounds,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ExtractorConfig",
    "ExtractorError",
    "InvalidInputError",
    "LocalStorageEntry",
    "LocalStorageExtractor",
    "MalformedValueError",
    "NotFoundError",
    "ScanBounds",
    "StoreUnavailableError",
    "configure_logging",
    "configure_logging_from_config",
    "decode_stored_key",
    "decode_value",
    "derive_entry_key",
    "derive_origin_key",
    "derive_scan_bounds",
    "get_logger",
    "load_config",
]
