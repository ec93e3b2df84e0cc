"""
Naming policy for stored files.

This module decides how uploaded content is named on disk and which
client-supplied names may be joined to the storage root.
"""

import os
import re
import threading
import time

# Directory inside the storage root where uploads are staged before commit
STAGING_DIR_NAME = ".incoming"

MAX_NAME_BYTES = 255

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_SEPARATORS = ("/", "\\", "\x00")


class InvalidNameError(ValueError):
    """Raised when a name cannot be safely used inside the storage root."""
    pass


class _TokenClock:
    """Strictly increasing nanosecond tokens for generated names."""

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        with self._lock:
            token = max(time.time_ns(), self._last + 1)
            self._last = token
            return token


_clock = _TokenClock()


def sanitize_name(name: str) -> str:
    """
    Sanitize a caller-supplied base name.

    Every character outside [a-zA-Z0-9.-] becomes '_' and the result
    is lower-cased.

    Args:
        name: Custom name supplied with the upload

    Returns:
        Sanitized base name
    """
    return _UNSAFE_CHARS.sub("_", name).lower()


def extract_extension(original_name: str) -> str:
    """
    Get the extension of the original upload name, including the dot.

    Only the final path component is considered and a leading dot does not
    start an extension ('.bashrc' has none, 'archive.tar.gz' has '.gz').
    """
    basename = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    return os.path.splitext(basename)[1]


def generate_token() -> str:
    """Distinguishing base name for uploads without a custom name."""
    return str(_clock.next())


def build_stored_name(original_name: str, suggested_name: str | None = None) -> str:
    """
    Resolve the final on-disk name for an upload.

    Args:
        original_name: Client-side filename of the upload
        suggested_name: Optional custom name; empty means none

    Returns:
        Base name (sanitized custom name or generated token) plus the
        original extension
    """
    if suggested_name:
        base = sanitize_name(suggested_name)
    else:
        base = generate_token()
    return f"{base}{extract_extension(original_name or '')}"


def validate_entry_name(name: str | None) -> str:
    """
    Check that a name refers to a direct child of the storage root.

    Args:
        name: Name taken from a path parameter, request body or upload

    Returns:
        The unchanged name

    Raises:
        InvalidNameError: If the name is empty, contains a path separator,
            is a relative directory reference or is reserved
    """
    if name is None or not name.strip():
        raise InvalidNameError("File name must not be empty")
    if any(sep in name for sep in _SEPARATORS):
        raise InvalidNameError(f"File name must not contain path separators: {name!r}")
    if name in (".", ".."):
        raise InvalidNameError(f"File name must not reference a directory: {name!r}")
    if name == STAGING_DIR_NAME:
        raise InvalidNameError(f"File name is reserved: {name!r}")
    if len(name.encode("utf-8")) > MAX_NAME_BYTES:
        raise InvalidNameError(f"File name exceeds {MAX_NAME_BYTES} bytes")
    return name
