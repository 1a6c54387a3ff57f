"""S3-compatible object store backed by boto3 (Cloudflare R2 by default)."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import StorageSettings
from ..exceptions import StorageError
from .storage_base import ObjectStore

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


def build_s3_client(settings: StorageSettings) -> Any:
    """Create the single S3 client shared by the process."""
    return boto3.client(
        "s3",
        endpoint_url=settings.endpoint,
        region_name=settings.region,
        aws_access_key_id=settings.access_key_id,
        aws_secret_access_key=settings.secret_access_key,
        config=Config(signature_version="s3v4", s3={"addressing_style": "path"}),
    )


@dataclass(slots=True)
class ObjectStorage(ObjectStore):
    """Wrap a boto3 S3 client; blocking SDK calls run in worker threads."""

    client: Any
    bucket: str
    public_url: str | None = None
    url_expiration: int = 604800
    log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger(__name__)
    )

    @classmethod
    def from_settings(cls, settings: StorageSettings, client: Any | None = None) -> "ObjectStorage":
        return cls(
            client=client if client is not None else build_s3_client(settings),
            bucket=settings.bucket,
            public_url=settings.public_url,
            url_expiration=settings.url_expiration,
        )

    @property
    def link_expiry(self) -> int | None:
        return None if self.public_url else self.url_expiration

    async def put_object(
        self, key: str, body: bytes, content_type: str, metadata: Mapping[str, str]
    ) -> None:
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
                Metadata=dict(metadata),
            )
        except (ClientError, BotoCoreError) as exc:
            self.log.error("storage.put.failed", key=key, error=str(exc))
            raise StorageError(
                "Failed to upload to Cloudflare R2", operation="put", details=str(exc)
            ) from exc
        self.log.info("storage.put.done", key=key, bucket=self.bucket, size_bytes=len(body))

    async def get_read_link(self, key: str, expiry_seconds: int | None = None) -> str:
        if self.public_url:
            return f"{self.public_url.rstrip('/')}/{key}"
        expires_in = expiry_seconds if expiry_seconds is not None else self.url_expiration
        try:
            return await asyncio.to_thread(
                self.client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as exc:
            self.log.error("storage.presign.failed", key=key, error=str(exc))
            raise StorageError(
                "Failed to generate presigned URL", operation="presign", details=str(exc)
            ) from exc

    async def delete_object(self, key: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=key)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code in _MISSING_KEY_CODES:
                self.log.info("storage.delete.already_absent", key=key)
                return
            self.log.error("storage.delete.failed", key=key, error=str(exc))
            raise StorageError(
                "Failed to delete file from Cloudflare R2",
                operation="delete",
                details=str(exc),
            ) from exc
        except BotoCoreError as exc:
            self.log.error("storage.delete.failed", key=key, error=str(exc))
            raise StorageError(
                "Failed to delete file from Cloudflare R2",
                operation="delete",
                details=str(exc),
            ) from exc
        self.log.info("storage.delete.done", key=key, bucket=self.bucket)
