"""Pydantic schemas for media responses.

Field names follow the public JSON contract (camelCase), so no aliasing.
"""

from pydantic import BaseModel, ConfigDict


class DirectUrlResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str


class UploadResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    r2Key: str
    bucket: str
    fileId: str
    description: str
    title: str
    duration: int | float
    size: int
    sizeFormatted: str
    uploadedAt: str
    urlExpiresIn: int | None = None
    urlExpiresAt: str | None = None


class ReadLinkResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str
    r2Key: str
    fileId: str
    urlExpiresIn: int | None = None
    urlExpiresAt: str | None = None


class DeleteResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    success: bool = True
    message: str = "File deleted successfully"
    fileId: str
    r2Key: str
    deletedAt: str
