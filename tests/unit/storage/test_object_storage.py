from __future__ import annotations

from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from ig_downloader.config import StorageSettings
from ig_downloader.exceptions import StorageError
from ig_downloader.storage.object_storage import ObjectStorage, build_s3_client

pytestmark = pytest.mark.unit

KEY = "videos/550e8400-e29b-41d4-a716-446655440000.mp4"


def _settings(public_url: str | None = None) -> StorageSettings:
    return StorageSettings(
        access_key_id="test-key",
        secret_access_key="test-secret",
        endpoint="https://account.r2.cloudflarestorage.com",
        bucket="reelbucket",
        public_url=public_url,
    )


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": f"{code} raised"}}, operation)


@pytest.mark.asyncio
async def test_put_object_sends_body_content_type_and_metadata() -> None:
    client = MagicMock()
    storage = ObjectStorage(client=client, bucket="reelbucket")

    await storage.put_object(KEY, b"data", "video/mp4", {"title": "T"})

    client.put_object.assert_called_once_with(
        Bucket="reelbucket",
        Key=KEY,
        Body=b"data",
        ContentType="video/mp4",
        Metadata={"title": "T"},
    )


@pytest.mark.asyncio
async def test_put_object_translates_sdk_errors() -> None:
    client = MagicMock()
    client.put_object.side_effect = _client_error("AccessDenied", "PutObject")
    storage = ObjectStorage(client=client, bucket="reelbucket")

    with pytest.raises(StorageError) as excinfo:
        await storage.put_object(KEY, b"data", "video/mp4", {})

    assert excinfo.value.operation == "put"
    assert "AccessDenied" in (excinfo.value.details or "")


@pytest.mark.asyncio
async def test_public_url_mode_returns_stable_link_without_expiry() -> None:
    client = MagicMock()
    storage = ObjectStorage(
        client=client, bucket="reelbucket", public_url="https://pub.example.r2.dev/"
    )

    first = await storage.get_read_link(KEY)
    second = await storage.get_read_link(KEY)

    assert first == second == f"https://pub.example.r2.dev/{KEY}"
    assert storage.link_expiry is None
    client.generate_presigned_url.assert_not_called()


@pytest.mark.asyncio
async def test_presigned_links_share_key_and_expiry_window() -> None:
    settings = _settings()
    storage = ObjectStorage.from_settings(settings, client=build_s3_client(settings))

    first = urlparse(await storage.get_read_link(KEY))
    second = urlparse(await storage.get_read_link(KEY))

    assert first.path == second.path == f"/reelbucket/{KEY}"
    assert parse_qs(first.query)["X-Amz-Expires"] == ["604800"]
    assert parse_qs(second.query)["X-Amz-Expires"] == ["604800"]
    assert storage.link_expiry == 604800


@pytest.mark.asyncio
async def test_presigned_link_honours_explicit_expiry() -> None:
    client = MagicMock()
    client.generate_presigned_url.return_value = "https://signed.example/x"
    storage = ObjectStorage(client=client, bucket="reelbucket")

    url = await storage.get_read_link(KEY, expiry_seconds=60)

    assert url == "https://signed.example/x"
    client.generate_presigned_url.assert_called_once_with(
        "get_object",
        Params={"Bucket": "reelbucket", "Key": KEY},
        ExpiresIn=60,
    )


@pytest.mark.asyncio
async def test_delete_missing_object_is_success() -> None:
    client = MagicMock()
    client.delete_object.side_effect = _client_error("NoSuchKey", "DeleteObject")
    storage = ObjectStorage(client=client, bucket="reelbucket")

    await storage.delete_object(KEY)

    client.delete_object.assert_called_once_with(Bucket="reelbucket", Key=KEY)


@pytest.mark.asyncio
async def test_delete_transport_failure_raises_storage_error() -> None:
    client = MagicMock()
    client.delete_object.side_effect = EndpointConnectionError(
        endpoint_url="https://account.r2.cloudflarestorage.com"
    )
    storage = ObjectStorage(client=client, bucket="reelbucket")

    with pytest.raises(StorageError) as excinfo:
        await storage.delete_object(KEY)

    assert excinfo.value.operation == "delete"
    assert excinfo.value.message == "Failed to delete file from Cloudflare R2"
