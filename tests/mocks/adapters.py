"""Deterministic extractor and object-store doubles for unit and integration tests."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from ig_downloader.exceptions import DownloadError, ExtractionError
from ig_downloader.extraction.extraction_base import Extractor
from ig_downloader.media.media_models import VideoMetadata
from ig_downloader.storage.storage_base import ObjectStore

FAKE_LINK_BASE = "https://links.example.test"


@dataclass
class FakeExtractor(Extractor):
    """Returns canned metadata and writes ``payload`` to the destination."""

    metadata: VideoMetadata = field(default_factory=VideoMetadata)
    payload: bytes = b"video-bytes"
    direct_url: str = "https://cdn.example.test/video.mp4"
    metadata_error: Exception | None = None
    download_error: DownloadError | None = None
    write_before_error: bool = False
    skip_write: bool = False
    direct_url_error: ExtractionError | None = None
    downloads: list[Path] = field(default_factory=list)

    async def fetch_direct_url(self, source_url: str) -> str:
        if self.direct_url_error:
            raise self.direct_url_error
        return self.direct_url

    async def fetch_metadata(self, source_url: str) -> VideoMetadata:
        if self.metadata_error:
            raise self.metadata_error
        return VideoMetadata(
            title=self.metadata.title,
            description=self.metadata.description,
            duration=self.metadata.duration,
        )

    async def download_to_path(self, source_url: str, destination: Path) -> None:
        self.downloads.append(destination)
        if self.download_error:
            if self.write_before_error:
                destination.write_bytes(b"partial")
            raise self.download_error
        if self.skip_write:
            raise DownloadError(
                "Video file not found after download", kind=DownloadError.FILE_MISSING
            )
        destination.write_bytes(self.payload)


@dataclass
class FakeStorage(ObjectStore):
    """In-memory object store that echoes fixed links."""

    bucket: str = "reelbucket"
    public_url: str | None = None
    expiry: int = 604800
    put_error: Exception | None = None
    link_error: Exception | None = None
    delete_error: Exception | None = None
    objects: dict[str, bytes] = field(default_factory=dict)
    metadata: dict[str, Mapping[str, str]] = field(default_factory=dict)
    content_types: dict[str, str] = field(default_factory=dict)
    put_calls: int = 0
    link_calls: int = 0
    deleted: list[str] = field(default_factory=list)

    @property
    def link_expiry(self) -> int | None:
        return None if self.public_url else self.expiry

    async def put_object(
        self, key: str, body: bytes, content_type: str, metadata: Mapping[str, str]
    ) -> None:
        self.put_calls += 1
        if self.put_error:
            raise self.put_error
        self.objects[key] = body
        self.metadata[key] = dict(metadata)
        self.content_types[key] = content_type

    async def get_read_link(self, key: str, expiry_seconds: int | None = None) -> str:
        self.link_calls += 1
        if self.link_error:
            raise self.link_error
        if self.public_url:
            return f"{self.public_url}/{key}"
        return f"{FAKE_LINK_BASE}/{key}?signature={self.link_calls}"

    async def delete_object(self, key: str) -> None:
        if self.delete_error:
            raise self.delete_error
        self.objects.pop(key, None)
        self.deleted.append(key)
