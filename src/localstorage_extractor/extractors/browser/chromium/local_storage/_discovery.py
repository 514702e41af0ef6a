"""
Profile discovery for Chromium Local Storage.

Resolves where a browser keeps its Local Storage LevelDB directory for the
current (or a given) user and platform. Nothing here checks that the
directories exist; opening the store reports a missing path.
"""
from __future__ import annotations

import platform
from pathlib import Path
from typing import Optional

from ....exceptions import ConfigurationError
from .._patterns import (
    CHROMIUM_ARTIFACTS,
    CHROMIUM_BROWSERS,
    get_profile_root,
    is_flat_profile,
)
from .....core.logging import get_logger

LOGGER = get_logger("extractors.browser.chromium.local_storage.discovery")

DEFAULT_PROFILE = "Default"


def locate_profile_root(
    browser: str = "chrome",
    *,
    home: Optional[Path] = None,
    system: Optional[str] = None,
) -> Path:
    """
    Return the browser's user-data directory.

    Args:
        browser: Browser key from CHROMIUM_BROWSERS
        home: User home directory (default: Path.home())
        system: Platform name as reported by platform.system() (default: current)

    Raises:
        ConfigurationError: unknown browser, or no known location on the platform
    """
    if browser not in CHROMIUM_BROWSERS:
        raise ConfigurationError(
            f"Unknown browser {browser!r}; expected one of {', '.join(CHROMIUM_BROWSERS)}"
        )

    system_name = (system or platform.system()).lower()
    relative_root = get_profile_root(browser, system_name)
    if relative_root is None:
        raise ConfigurationError(f"No known profile location for {browser} on {system_name}")

    root = (home or Path.home()) / relative_root
    LOGGER.debug("Resolved %s profile root on %s: %s", browser, system_name, root)
    return root


def locate_profile_dir(
    browser: str = "chrome",
    profile: str = DEFAULT_PROFILE,
    *,
    home: Optional[Path] = None,
    system: Optional[str] = None,
) -> Path:
    """Return the directory holding one profile's artifacts."""
    root = locate_profile_root(browser, home=home, system=system)
    if is_flat_profile(browser):
        return root
    return root / profile


def locate_local_storage(
    browser: str = "chrome",
    profile: str = DEFAULT_PROFILE,
    *,
    home: Optional[Path] = None,
    system: Optional[str] = None,
) -> Path:
    """Return the profile's ``Local Storage/leveldb`` directory."""
    profile_dir = locate_profile_dir(browser, profile, home=home, system=system)
    return profile_dir / CHROMIUM_ARTIFACTS["local_storage"][0]


def locate_legacy_local_storage(db_path: Path) -> Path:
    """
    Return the directory holding pre-LevelDB ``.localstorage`` files for a
    profile, given that profile's ``Local Storage/leveldb`` path.
    """
    depth = len(Path(CHROMIUM_ARTIFACTS["local_storage"][0]).parts)
    if len(db_path.parts) <= depth:
        return db_path.parent
    profile_dir = db_path.parents[depth - 1]
    return profile_dir / CHROMIUM_ARTIFACTS["legacy_local_storage"][0]
