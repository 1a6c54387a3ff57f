"""Formatting helpers for media responses."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
_TWO_PLACES = Decimal("0.01")


def format_file_size(size_bytes: int) -> str:
    """Render ``size_bytes`` in base-1024 units, two decimals rounded half up."""
    if size_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and size_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    scaled = (Decimal(size_bytes) / Decimal(1024**exponent)).quantize(
        _TWO_PLACES, rounding=ROUND_HALF_UP
    )
    value = f"{scaled:f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[exponent]}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def isoformat_utc(moment: datetime | None) -> str | None:
    """ISO 8601 with millisecond precision and a ``Z`` suffix."""
    if moment is None:
        return None
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
