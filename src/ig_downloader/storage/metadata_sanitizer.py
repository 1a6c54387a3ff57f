"""Sanitization of user-metadata values sent as object-store headers."""

from __future__ import annotations

import re
from collections.abc import Mapping

MAX_METADATA_LENGTH = 1000

_CONTROL_WHITESPACE = re.compile(r"[\r\n\t]")
_NON_PRINTABLE_ASCII = re.compile(r"[^\x20-\x7E]")


def sanitize_metadata_value(value: object | None) -> str:
    """Make ``value`` safe for an HTTP header.

    CR, LF and TAB become spaces, anything outside printable ASCII is dropped,
    the result is stripped and cut to ``MAX_METADATA_LENGTH`` characters.
    """
    if value is None or value == "":
        return ""
    text = _CONTROL_WHITESPACE.sub(" ", str(value))
    text = _NON_PRINTABLE_ASCII.sub("", text)
    return text.strip()[:MAX_METADATA_LENGTH]


def sanitize_metadata(values: Mapping[str, object | None]) -> dict[str, str]:
    return {key: sanitize_metadata_value(value) for key, value in values.items()}
