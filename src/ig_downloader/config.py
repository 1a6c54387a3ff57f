"""Application configuration builder."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError

MODE_UPLOAD = "upload"
MODE_PROXY = "proxy"

DEFAULT_URL_EXPIRATION = 7 * 24 * 60 * 60
DEFAULT_PORT = 10000


@dataclass(slots=True)
class StorageSettings:
    access_key_id: str
    secret_access_key: str
    endpoint: str
    bucket: str
    region: str = "auto"
    public_url: str | None = None
    url_expiration: int = DEFAULT_URL_EXPIRATION


@dataclass(slots=True)
class ExtractorSettings:
    binary: str = "yt-dlp"
    format_selector: str = "best[ext=mp4]/best"


@dataclass(slots=True)
class AppConfig:
    mode: str
    downloads_dir: Path
    extractor: ExtractorSettings
    storage: StorageSettings | None
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @property
    def uploads_enabled(self) -> bool:
        return self.mode == MODE_UPLOAD


_REQUIRED_STORAGE_VARS = (
    "R2_ACCESS_KEY_ID",
    "R2_SECRET_ACCESS_KEY",
    "R2_ENDPOINT",
    "R2_BUCKET",
)


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _load_storage(env: Mapping[str, str]) -> StorageSettings:
    missing = [name for name in _REQUIRED_STORAGE_VARS if not env.get(name)]
    if missing:
        raise ConfigError(
            f"Missing required Cloudflare R2 env vars: {', '.join(missing)}"
        )
    return StorageSettings(
        access_key_id=env["R2_ACCESS_KEY_ID"],
        secret_access_key=env["R2_SECRET_ACCESS_KEY"],
        endpoint=env["R2_ENDPOINT"],
        bucket=env["R2_BUCKET"],
        region=env.get("R2_REGION") or "auto",
        public_url=env.get("R2_PUBLIC_URL") or None,
        url_expiration=_int_env(env, "R2_URL_EXPIRATION", DEFAULT_URL_EXPIRATION),
    )


def load_config(env: Mapping[str, str] | None = None) -> AppConfig:
    """Load configuration from environment, failing fast on missing storage vars.

    Without an explicit ``env`` mapping, a ``.env`` file in the working directory
    is loaded into the process environment first; variables already set win.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
    source = os.environ if env is None else env

    mode = (source.get("DOWNLOAD_MODE") or MODE_UPLOAD).strip().lower()
    if mode not in (MODE_UPLOAD, MODE_PROXY):
        raise ConfigError(f"DOWNLOAD_MODE must be 'upload' or 'proxy', got {mode!r}")

    storage = _load_storage(source) if mode == MODE_UPLOAD else None

    downloads_dir = Path(source.get("DOWNLOADS_DIR") or "downloads")
    downloads_dir.mkdir(parents=True, exist_ok=True)

    extractor = ExtractorSettings(
        binary=source.get("YTDLP_BINARY") or "yt-dlp",
        format_selector=source.get("YTDLP_FORMAT") or "best[ext=mp4]/best",
    )

    return AppConfig(
        mode=mode,
        downloads_dir=downloads_dir,
        extractor=extractor,
        storage=storage,
        host=source.get("HOST") or "0.0.0.0",
        port=_int_env(source, "PORT", DEFAULT_PORT),
        log_level=source.get("LOG_LEVEL") or "INFO",
    )
