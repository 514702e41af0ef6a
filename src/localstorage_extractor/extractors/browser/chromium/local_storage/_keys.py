"""
Key and value codec for Chromium Local Storage LevelDB records.

Layout of the store's flat namespace:
- Key:   b"_" + b"<scheme>://<host>" [+ b"\\x00\\x01" + <script key>]
- Value: 1 framing byte + text payload

All keys of one origin sort between the bare origin key and the origin key
followed by b"\\x01", because the separator starts with b"\\x00" and no
origin string contains b"\\x00" or b"\\x01".
"""
from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from ....exceptions import InvalidInputError, MalformedValueError

KEY_PREFIX = "_"
HOST_KEY_SEPARATOR = b"\x00\x01"
SCAN_END_MARKER = HOST_KEY_SEPARATOR[1:]
DEFAULT_SCHEME = "https"

# Framing byte Chromium uses for UTF-16 payloads; anything else is read as UTF-8
UTF16_VALUE_MARKER = 0x00


@dataclass(frozen=True, slots=True)
class LocalStorageEntry:
    """One decoded script key and value of an origin."""

    key: str
    value: str


@dataclass(frozen=True, slots=True)
class ScanBounds:
    """Inclusive key range covering every entry stored under one origin."""

    lower: bytes
    upper: bytes

    def __contains__(self, key: bytes) -> bool:
        return self.lower <= key <= self.upper


def origin_from_url(url: str) -> str:
    """
    Reduce a URL to its ``<scheme>://<host>`` origin.

    The scheme defaults to https when missing (``//example.com``). The port,
    when present, stays part of the host.

    Raises:
        InvalidInputError: URL has no host, an invalid port, or control bytes
            that would collide with the key separator.
    """
    try:
        parsed = urlsplit(url)
        port = parsed.port
    except ValueError as exc:
        raise InvalidInputError(f"Cannot parse URL {url!r}: {exc}") from exc

    hostname = parsed.hostname
    if not hostname:
        raise InvalidInputError(f"URL {url!r} has no host")

    host = f"[{hostname}]" if ":" in hostname else hostname
    if port is not None:
        host = f"{host}:{port}"

    origin = f"{parsed.scheme or DEFAULT_SCHEME}://{host}"
    if "\x00" in origin or "\x01" in origin:
        raise InvalidInputError(f"URL {url!r} contains reserved control characters")
    return origin


def _encode_text(text: str, what: str) -> bytes:
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(f"Cannot encode {what} {text!r} as UTF-8: {exc}") from exc


def derive_origin_key(url: str) -> bytes:
    """Return the store key of the origin itself, e.g. ``b"_https://a.com"``."""
    return _encode_text(f"{KEY_PREFIX}{origin_from_url(url)}", "origin")


def derive_entry_key(url: str, app_key: str) -> bytes:
    """Return the store key of one script key under the URL's origin."""
    return derive_origin_key(url) + HOST_KEY_SEPARATOR + _encode_text(app_key, "key")


def derive_scan_bounds(url: str) -> ScanBounds:
    """Return the inclusive range holding every entry key of the URL's origin."""
    origin_key = derive_origin_key(url)
    return ScanBounds(lower=origin_key, upper=origin_key + SCAN_END_MARKER)


def decode_value(raw: bytes) -> str:
    """
    Strip the one-byte frame from a stored value and decode the payload.

    Raises:
        MalformedValueError: the value is empty, so no frame byte exists.
    """
    if not raw:
        raise MalformedValueError("Stored value is empty; expected a leading frame byte")

    payload = bytes(raw[1:])
    if raw[0] == UTF16_VALUE_MARKER:
        return payload.decode("utf-16-le", errors="replace")
    return payload.decode("utf-8", errors="replace")


def decode_stored_key(raw: bytes) -> str:
    """
    Recover the script key from a full store key.

    Raises:
        MalformedValueError: the key has no origin/key separator.
    """
    _, separator, app_key = bytes(raw).partition(HOST_KEY_SEPARATOR)
    if not separator:
        raise MalformedValueError(f"Store key {raw!r} has no origin/key separator")
    return app_key.decode("utf-8", errors="replace")
