from __future__ import annotations

from pathlib import Path

import pytest

from ig_downloader.config import MODE_PROXY, MODE_UPLOAD, AppConfig, ExtractorSettings, StorageSettings
from ig_downloader.media.media_models import VideoMetadata
from ig_downloader.media.media_service import MediaService
from ig_downloader.media.staging_store import StagingStore
from tests.mocks.adapters import FakeExtractor, FakeStorage


def build_config(downloads_dir: Path, *, mode: str = MODE_UPLOAD, public_url: str | None = None) -> AppConfig:
    storage = None
    if mode == MODE_UPLOAD:
        storage = StorageSettings(
            access_key_id="test-key",
            secret_access_key="test-secret",
            endpoint="https://account.r2.cloudflarestorage.com",
            bucket="reelbucket",
            public_url=public_url,
        )
    return AppConfig(
        mode=mode,
        downloads_dir=downloads_dir,
        extractor=ExtractorSettings(),
        storage=storage,
    )


@pytest.fixture
def downloads_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "downloads"
    directory.mkdir()
    return directory


@pytest.fixture
def upload_config(downloads_dir: Path) -> AppConfig:
    return build_config(downloads_dir)


@pytest.fixture
def proxy_config(downloads_dir: Path) -> AppConfig:
    return build_config(downloads_dir, mode=MODE_PROXY)


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor(metadata=VideoMetadata(title="T", description="D", duration=30))


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def media_service(
    downloads_dir: Path, fake_extractor: FakeExtractor, fake_storage: FakeStorage
) -> MediaService:
    return MediaService(
        extractor=fake_extractor,
        staging=StagingStore(downloads_dir),
        storage=fake_storage,
    )
