"""Media data models."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class VideoMetadata:
    title: str = ""
    description: str = ""
    duration: float = 0
    byte_size: int = 0


@dataclass(slots=True)
class ReadLink:
    url: str
    key: str
    file_id: str
    expires_in: int | None = None
    expires_at: datetime | None = None


@dataclass(slots=True)
class UploadedVideo:
    """Outcome of a completed download-upload-link run."""

    link: ReadLink
    bucket: str
    metadata: VideoMetadata
    size_formatted: str
    uploaded_at: datetime


@dataclass(slots=True)
class DeletedVideo:
    file_id: str
    key: str
    deleted_at: datetime
