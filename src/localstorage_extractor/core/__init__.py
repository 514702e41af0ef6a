"""Logging and configuration shared by the extractor modules."""

from .config import ExtractorConfig, load_config  # noqa: F401
from .logging import configure_logging, configure_logging_from_config, get_logger  # noqa: F401
