"""Object key convention for uploaded videos."""

from __future__ import annotations

KEY_PREFIX = "videos/"
KEY_SUFFIX = ".mp4"


def object_key(file_id: str) -> str:
    """Return the storage key for ``file_id``."""
    return f"{KEY_PREFIX}{file_id}{KEY_SUFFIX}"


def file_id_from_key(key: str) -> str:
    """Invert :func:`object_key`; reject any other key shape."""
    if not (key.startswith(KEY_PREFIX) and key.endswith(KEY_SUFFIX)):
        raise ValueError(f"Unsupported object key '{key}'")
    file_id = key[len(KEY_PREFIX) : -len(KEY_SUFFIX)]
    if not file_id or "/" in file_id:
        raise ValueError(f"Unsupported object key '{key}'")
    return file_id
