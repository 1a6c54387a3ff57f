"""Reusable error primitives for API exception handling."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request, status
from fastapi.responses import JSONResponse

from ..exceptions import AppError


@dataclass(slots=True)
class ApiError(Exception):
    """Structured application-level error for HTTP handlers."""

    status_code: int
    message: str
    details: str | None = None

    def to_response(self) -> JSONResponse:
        """Materialise the error into a ``JSONResponse`` instance."""

        content: dict[str, str] = {"error": self.message}
        if self.details is not None:
            content["details"] = self.details
        return JSONResponse(status_code=self.status_code, content=content)


async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    """Convert :class:`ApiError` exceptions into JSON payloads."""

    return exc.to_response()


def bad_request_error(message: str) -> ApiError:
    """Return an :class:`ApiError` for missing or malformed input."""

    return ApiError(status.HTTP_400_BAD_REQUEST, message)


def server_error(message: str, details: str | None = None) -> ApiError:
    """Return an :class:`ApiError` for adapter or unexpected failures."""

    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, details)


def from_app_error(exc: AppError, *, message: str | None = None) -> ApiError:
    """Map a domain failure to a 500 carrying its diagnostic text."""

    return server_error(message or exc.message, exc.details)


__all__ = [
    "ApiError",
    "api_error_handler",
    "bad_request_error",
    "from_app_error",
    "server_error",
]
