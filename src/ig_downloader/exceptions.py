"""Domain level exceptions shared by adapters and the media lifecycle."""

from __future__ import annotations

__all__ = [
    "AppError",
    "ConfigError",
    "ValidationError",
    "ExtractionError",
    "DownloadError",
    "StorageError",
    "ensure_present",
]


class AppError(Exception):
    """Base class for application specific errors."""

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigError(AppError):
    """Raised at startup when required configuration is missing or invalid."""


class ValidationError(AppError):
    """Raised when a request lacks required input."""


class ExtractionError(AppError):
    """Raised when the extraction tool fails to resolve a media URL."""


class DownloadError(ExtractionError):
    """Raised when the extraction tool fails to stage media on disk.

    ``kind`` separates a failing tool run (``tool_failed``) from a run that
    exited cleanly but left no file behind (``file_missing``).
    """

    TOOL_FAILED = "tool_failed"
    FILE_MISSING = "file_missing"

    def __init__(self, message: str, *, kind: str, details: str | None = None) -> None:
        super().__init__(message, details=details)
        self.kind = kind


class StorageError(AppError):
    """Raised when an object-store operation fails."""

    def __init__(
        self, message: str, *, operation: str, details: str | None = None
    ) -> None:
        super().__init__(message, details=details)
        self.operation = operation


def ensure_present(value: str | None, *, message: str) -> str:
    """Return ``value`` or raise :class:`ValidationError` when it is empty."""

    if not value:
        raise ValidationError(message)
    return value
