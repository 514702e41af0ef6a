"""Browser family extractors."""
