"""Shared helpers used by several extractors."""
