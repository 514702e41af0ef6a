"""
Chromium browser family profile locations.

Covers Chromium-based browsers:
- Google Chrome (Stable, Beta, Dev, Canary)
- Chromium (open-source)
- Microsoft Edge (Stable, Beta, Dev, Canary)
- Brave (Stable, Beta, Nightly)
- Opera (Stable, GX) — Note: Opera uses flat profile structure (no Default/ subdir)

Profile roots are relative to the user's home directory and keyed by
platform.system() in lowercase ("windows", "darwin", "linux").

Usage:
    from localstorage_extractor.extractors.browser.chromium._patterns import (
        CHROMIUM_BROWSERS,
        get_profile_root,
    )

    # Chrome's profile root on Linux
    root = get_profile_root("chrome", "linux")  # ".config/google-chrome"
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


# flat_profile: If True, artifacts are stored directly under the profile root (Opera style)
#               If False/missing, artifacts are under <root>/Default/ or <root>/Profile */
CHROMIUM_BROWSERS: Dict[str, Dict[str, Any]] = {
    # =========================================================================
    # Google Chrome (all channels)
    # =========================================================================
    "chrome": {
        "display_name": "Google Chrome",
        "profile_roots": {
            "windows": "AppData/Local/Google/Chrome/User Data",
            "darwin": "Library/Application Support/Google/Chrome",
            "linux": ".config/google-chrome",
        },
    },
    "chrome_beta": {
        "display_name": "Google Chrome Beta",
        "profile_roots": {
            "windows": "AppData/Local/Google/Chrome Beta/User Data",
            "darwin": "Library/Application Support/Google/Chrome Beta",
            "linux": ".config/google-chrome-beta",
        },
    },
    "chrome_dev": {
        "display_name": "Google Chrome Dev",
        "profile_roots": {
            "windows": "AppData/Local/Google/Chrome Dev/User Data",
            "darwin": "Library/Application Support/Google/Chrome Dev",
            # Linux uses the "unstable" suffix
            "linux": ".config/google-chrome-unstable",
        },
    },
    "chrome_canary": {
        "display_name": "Google Chrome Canary",
        "profile_roots": {
            # SxS = Side-by-Side
            "windows": "AppData/Local/Google/Chrome SxS/User Data",
            "darwin": "Library/Application Support/Google/Chrome Canary",
            "linux": ".config/google-chrome-canary",
        },
    },
    # =========================================================================
    # Chromium (open-source browser)
    # =========================================================================
    "chromium": {
        "display_name": "Chromium",
        "profile_roots": {
            "windows": "AppData/Local/Chromium/User Data",
            "darwin": "Library/Application Support/Chromium",
            "linux": ".config/chromium",
        },
    },
    # =========================================================================
    # Microsoft Edge (all channels)
    # =========================================================================
    "edge": {
        "display_name": "Microsoft Edge",
        "profile_roots": {
            "windows": "AppData/Local/Microsoft/Edge/User Data",
            "darwin": "Library/Application Support/Microsoft Edge",
            "linux": ".config/microsoft-edge",
        },
    },
    "edge_beta": {
        "display_name": "Microsoft Edge Beta",
        "profile_roots": {
            "windows": "AppData/Local/Microsoft/Edge Beta/User Data",
            "darwin": "Library/Application Support/Microsoft Edge Beta",
            "linux": ".config/microsoft-edge-beta",
        },
    },
    "edge_dev": {
        "display_name": "Microsoft Edge Dev",
        "profile_roots": {
            "windows": "AppData/Local/Microsoft/Edge Dev/User Data",
            "darwin": "Library/Application Support/Microsoft Edge Dev",
            "linux": ".config/microsoft-edge-dev",
        },
    },
    "edge_canary": {
        "display_name": "Microsoft Edge Canary",
        "profile_roots": {
            "windows": "AppData/Local/Microsoft/Edge SxS/User Data",
            "darwin": "Library/Application Support/Microsoft Edge Canary",
        },
    },
    # =========================================================================
    # Brave Browser (all channels)
    # =========================================================================
    "brave": {
        "display_name": "Brave",
        "profile_roots": {
            "windows": "AppData/Local/BraveSoftware/Brave-Browser/User Data",
            "darwin": "Library/Application Support/BraveSoftware/Brave-Browser",
            "linux": ".config/BraveSoftware/Brave-Browser",
        },
    },
    "brave_beta": {
        "display_name": "Brave Beta",
        "profile_roots": {
            "windows": "AppData/Local/BraveSoftware/Brave-Browser-Beta/User Data",
            "darwin": "Library/Application Support/BraveSoftware/Brave-Browser-Beta",
            "linux": ".config/BraveSoftware/Brave-Browser-Beta",
        },
    },
    "brave_nightly": {
        "display_name": "Brave Nightly",
        "profile_roots": {
            "windows": "AppData/Local/BraveSoftware/Brave-Browser-Nightly/User Data",
            "darwin": "Library/Application Support/BraveSoftware/Brave-Browser-Nightly",
            "linux": ".config/BraveSoftware/Brave-Browser-Nightly",
        },
    },
    # =========================================================================
    # Opera Browser
    # IMPORTANT: Opera uses FLAT profile structure - artifacts are stored
    # directly under the profile root, NOT in Default/ or Profile */ subdirs
    # =========================================================================
    "opera": {
        "display_name": "Opera",
        "flat_profile": True,
        "profile_roots": {
            "windows": "AppData/Roaming/Opera Software/Opera Stable",
            "darwin": "Library/Application Support/com.operasoftware.Opera",
            "linux": ".config/opera",
        },
    },
    "opera_gx": {
        "display_name": "Opera GX",
        "flat_profile": True,
        "profile_roots": {
            "windows": "AppData/Roaming/Opera Software/Opera GX Stable",
            "darwin": "Library/Application Support/com.operasoftware.OperaGX",
            "linux": ".config/opera-gx",
        },
    },
}


# Artifact paths relative to the profile directory
CHROMIUM_ARTIFACTS: Dict[str, List[str]] = {
    "local_storage": [
        "Local Storage/leveldb",
    ],
    # Pre-LevelDB per-origin SQLite files (*.localstorage) live here
    "legacy_local_storage": [
        "Local Storage",
    ],
}


def get_profile_root(browser: str, system: str) -> Optional[str]:
    """
    Return the home-relative profile root for a browser on a platform.

    Args:
        browser: Browser key (chrome, edge, brave, opera, chromium, etc.)
        system: Lowercase platform name (windows, darwin, linux)

    Returns:
        Relative root path, or None when the browser does not ship there

    Raises:
        KeyError: unknown browser key
    """
    return CHROMIUM_BROWSERS[browser]["profile_roots"].get(system)


def is_flat_profile(browser: str) -> bool:
    return bool(CHROMIUM_BROWSERS[browser].get("flat_profile", False))

