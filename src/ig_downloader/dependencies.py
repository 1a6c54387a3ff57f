"""Dependency wiring helpers."""

from __future__ import annotations

from fastapi import FastAPI

from .api.errors import ApiError, api_error_handler
from .config import AppConfig
from .extraction.extraction_base import Extractor
from .extraction.extraction_ytdlp import YtDlpExtractor
from .media.media_api import link_router, router as media_router
from .media.media_service import MediaService
from .media.staging_store import StagingStore
from .storage.object_storage import ObjectStorage
from .storage.storage_base import ObjectStore


def build_media_service(
    config: AppConfig,
    *,
    extractor: Extractor | None = None,
    storage: ObjectStore | None = None,
) -> MediaService:
    """Construct the media service; adapters may be swapped in for tests."""
    if extractor is None:
        extractor = YtDlpExtractor(
            binary=config.extractor.binary,
            format_selector=config.extractor.format_selector,
        )
    if storage is None and config.storage is not None:
        storage = ObjectStorage.from_settings(config.storage)
    return MediaService(
        extractor=extractor,
        staging=StagingStore(config.downloads_dir),
        storage=storage,
    )


def include_routers(
    app: FastAPI,
    config: AppConfig,
    *,
    media_service: MediaService | None = None,
) -> None:
    """Mount routers, register error handling and attach services."""
    app.state.config = config
    app.state.media_service = media_service or build_media_service(config)

    app.add_exception_handler(ApiError, api_error_handler)
    app.include_router(media_router)
    if config.uploads_enabled:
        app.include_router(link_router)
