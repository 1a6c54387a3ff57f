"""Download-upload-link lifecycle for remote videos."""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path

import structlog

from ..exceptions import AppError, DownloadError, StorageError, ensure_present
from ..extraction.extraction_base import Extractor
from ..storage.metadata_sanitizer import sanitize_metadata
from ..storage.storage_base import ObjectStore
from ..storage.storage_keys import object_key
from .media_helpers import format_file_size, utcnow
from .media_models import DeletedVideo, ReadLink, UploadedVideo, VideoMetadata
from .staging_store import StagingStore

VIDEO_CONTENT_TYPE = "video/mp4"
MISSING_URL_MESSAGE = "Instagram URL missing"
MISSING_FILE_ID_MESSAGE = "File ID missing"


def _new_file_id() -> str:
    return str(uuid.uuid4())


@dataclass(slots=True)
class MediaService:
    """Coordinates extraction, staging, upload, link generation and cleanup.

    The staged file belongs to a single call of :meth:`create` and is removed
    on every exit path, whether the upload succeeded or not.
    """

    extractor: Extractor
    staging: StagingStore
    storage: ObjectStore | None = None
    id_factory: Callable[[], str] = _new_file_id
    clock: Callable[[], datetime] = utcnow
    log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger(__name__)
    )

    async def resolve_direct_url(self, source_url: str | None) -> str:
        """Proxy flow: hand back the tool's direct media URL without staging."""
        url = ensure_present(source_url, message=MISSING_URL_MESSAGE)
        direct = await self.extractor.fetch_direct_url(url)
        self.log.info("media.direct_url.resolved", source_url=url)
        return direct

    async def create(self, source_url: str | None) -> UploadedVideo:
        url = ensure_present(source_url, message=MISSING_URL_MESSAGE)
        storage = self._require_storage()

        file_id = self.id_factory()
        key = object_key(file_id)
        staged = self.staging.path_for(file_id)
        log = self.log.bind(file_id=file_id, key=key)

        try:
            metadata = await self._extract_metadata(url, log)

            await self.extractor.download_to_path(url, staged)
            body = staged.read_bytes()
            metadata.byte_size = len(body)
            log.info("media.download.done", size_bytes=metadata.byte_size)

            await self._upload(storage, key, body, url, metadata)
            log.info("media.upload.done")

            link = await self._link(storage, file_id, key)
        except DownloadError as exc:
            log.error("media.download.failed", kind=exc.kind, details=exc.details)
            raise
        except StorageError as exc:
            log.error("media.storage.failed", operation=exc.operation, details=exc.details)
            raise
        except AppError:
            raise
        except Exception:
            log.exception("media.create.unexpected_error")
            raise
        finally:
            self._cleanup(staged, log)

        return UploadedVideo(
            link=link,
            bucket=storage.bucket,
            metadata=metadata,
            size_formatted=format_file_size(metadata.byte_size),
            uploaded_at=self.clock(),
        )

    async def read_link(self, file_id: str | None) -> ReadLink:
        """Regenerate a link for ``file_id``.

        Object existence is not checked: a link for a missing object is
        returned as-is and will fail when dereferenced.
        """
        file_id = ensure_present(file_id, message=MISSING_FILE_ID_MESSAGE)
        storage = self._require_storage()
        return await self._link(storage, file_id, object_key(file_id))

    async def delete(self, file_id: str | None) -> DeletedVideo:
        file_id = ensure_present(file_id, message=MISSING_FILE_ID_MESSAGE)
        storage = self._require_storage()
        key = object_key(file_id)
        try:
            await storage.delete_object(key)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(
                "Failed to delete file from Cloudflare R2",
                operation="delete",
                details=str(exc),
            ) from exc
        self.log.info("media.delete.done", file_id=file_id, key=key)
        return DeletedVideo(file_id=file_id, key=key, deleted_at=self.clock())

    async def _extract_metadata(
        self, url: str, log: structlog.stdlib.BoundLogger
    ) -> VideoMetadata:
        try:
            return await self.extractor.fetch_metadata(url)
        except Exception as exc:  # metadata is best-effort
            log.warning("media.metadata.failed", error=str(exc))
            return VideoMetadata()

    @staticmethod
    async def _upload(
        storage: ObjectStore,
        key: str,
        body: bytes,
        source_url: str,
        metadata: VideoMetadata,
    ) -> None:
        headers = sanitize_metadata(
            {
                "original-url": source_url,
                "description": metadata.description,
                "title": metadata.title,
            }
        )
        try:
            await storage.put_object(key, body, VIDEO_CONTENT_TYPE, headers)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(
                "Failed to upload to Cloudflare R2", operation="put", details=str(exc)
            ) from exc

    async def _link(self, storage: ObjectStore, file_id: str, key: str) -> ReadLink:
        try:
            url = await storage.get_read_link(key)
        except StorageError:
            raise
        except Exception as exc:
            raise StorageError(
                "Failed to generate presigned URL", operation="presign", details=str(exc)
            ) from exc

        expires_in = storage.link_expiry
        expires_at = (
            self.clock() + timedelta(seconds=expires_in) if expires_in is not None else None
        )
        return ReadLink(
            url=url,
            key=key,
            file_id=file_id,
            expires_in=expires_in,
            expires_at=expires_at,
        )

    def _cleanup(self, staged: Path, log: structlog.stdlib.BoundLogger) -> None:
        if self.staging.remove(staged):
            log.debug("media.cleanup.done", path=str(staged))

    def _require_storage(self) -> ObjectStore:
        if self.storage is None:
            raise RuntimeError("Object storage is not configured")
        return self.storage
