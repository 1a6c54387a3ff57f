"""Abstract extraction tool interface."""

from abc import ABC, abstractmethod
from pathlib import Path

from ..media.media_models import VideoMetadata


class Extractor(ABC):
    """Base interface for extraction tool adapters."""

    @abstractmethod
    async def fetch_direct_url(self, source_url: str) -> str:
        """Resolve ``source_url`` to a direct media URL or raise ``ExtractionError``."""

    @abstractmethod
    async def fetch_metadata(self, source_url: str) -> VideoMetadata:
        """Return title/description/duration; empty metadata on any tool failure."""

    @abstractmethod
    async def download_to_path(self, source_url: str, destination: Path) -> None:
        """Write the media to ``destination`` or raise ``DownloadError``."""
