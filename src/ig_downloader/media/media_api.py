"""HTTP routes for the video download/link/delete lifecycle."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from ..api.errors import bad_request_error, from_app_error, server_error
from ..config import AppConfig
from ..exceptions import DownloadError, ExtractionError, StorageError, ValidationError
from .media_helpers import isoformat_utc
from .media_models import ReadLink
from .media_schemas import (
    DeleteResponse,
    DirectUrlResponse,
    ReadLinkResponse,
    UploadResponse,
)
from .media_service import MediaService

router = APIRouter(tags=["media"])
link_router = APIRouter(tags=["media"])
logger = logging.getLogger(__name__)


def get_media_service(request: Request) -> MediaService:
    """Fetch media service from application state."""
    try:
        return request.app.state.media_service  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("MediaService is not configured") from exc


def get_app_config(request: Request) -> AppConfig:
    try:
        return request.app.state.config  # type: ignore[attr-defined]
    except AttributeError as exc:  # pragma: no cover
        raise RuntimeError("AppConfig is not configured") from exc


async def _read_source_url(request: Request) -> str | None:
    """Pull ``url`` from a JSON object body; anything else counts as missing."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    url = body.get("url")
    return url if isinstance(url, str) else None


def _link_fields(link: ReadLink) -> dict[str, object]:
    return {
        "url": link.url,
        "r2Key": link.key,
        "fileId": link.file_id,
        "urlExpiresIn": link.expires_in,
        "urlExpiresAt": isoformat_utc(link.expires_at),
    }


@router.post("/download", response_model=UploadResponse | DirectUrlResponse)
async def download_video(
    request: Request,
    service: MediaService = Depends(get_media_service),
    config: AppConfig = Depends(get_app_config),
) -> UploadResponse | DirectUrlResponse:
    """Download a post's video and upload it, or return the direct URL in proxy mode."""
    source_url = await _read_source_url(request)

    try:
        if not config.uploads_enabled:
            direct = await service.resolve_direct_url(source_url)
            return DirectUrlResponse(url=direct)
        uploaded = await service.create(source_url)
    except ValidationError as exc:
        logger.warning("media.download.invalid_request", extra={"reason": exc.message})
        raise bad_request_error(exc.message) from exc
    except DownloadError as exc:
        raise from_app_error(exc) from exc
    except ExtractionError as exc:
        raise from_app_error(exc, message="Failed to extract video URL") from exc
    except StorageError as exc:
        raise from_app_error(exc) from exc
    except Exception as exc:
        logger.exception("media.download.unexpected_error")
        raise server_error("Internal server error", str(exc)) from exc

    metadata = uploaded.metadata
    return UploadResponse(
        **_link_fields(uploaded.link),
        bucket=uploaded.bucket,
        description=metadata.description,
        title=metadata.title,
        duration=metadata.duration,
        size=metadata.byte_size,
        sizeFormatted=uploaded.size_formatted,
        uploadedAt=isoformat_utc(uploaded.uploaded_at),
    )


@link_router.get("/url/{file_id}", response_model=ReadLinkResponse)
async def get_video_url(
    file_id: str,
    service: MediaService = Depends(get_media_service),
) -> ReadLinkResponse:
    """Regenerate the read link for a previously uploaded video."""
    try:
        link = await service.read_link(file_id)
    except ValidationError as exc:
        raise bad_request_error(exc.message) from exc
    except StorageError as exc:
        raise from_app_error(exc, message="Failed to generate presigned URL") from exc
    except Exception as exc:
        logger.exception("media.url.unexpected_error", extra={"file_id": file_id})
        raise server_error("Internal server error", str(exc)) from exc
    return ReadLinkResponse(**_link_fields(link))


@link_router.delete("/delete/{file_id}", response_model=DeleteResponse)
async def delete_video(
    file_id: str,
    service: MediaService = Depends(get_media_service),
) -> DeleteResponse:
    """Delete an uploaded video from the object store."""
    try:
        deleted = await service.delete(file_id)
    except ValidationError as exc:
        raise bad_request_error(exc.message) from exc
    except StorageError as exc:
        raise from_app_error(exc, message="Failed to delete file from Cloudflare R2") from exc
    except Exception as exc:
        logger.exception("media.delete.unexpected_error", extra={"file_id": file_id})
        raise server_error("Internal server error", str(exc)) from exc
    return DeleteResponse(
        fileId=deleted.file_id,
        r2Key=deleted.key,
        deletedAt=isoformat_utc(deleted.deleted_at),
    )
