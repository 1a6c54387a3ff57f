"""yt-dlp extraction adapter driven as an external process."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from ..exceptions import DownloadError, ExtractionError
from ..media.media_models import VideoMetadata
from .extraction_base import Extractor


@dataclass(slots=True)
class ProcessResult:
    returncode: int
    stdout: str
    stderr: str


@dataclass(slots=True)
class YtDlpExtractor(Extractor):
    """Invoke the ``yt-dlp`` binary with an argument vector (no shell)."""

    binary: str = "yt-dlp"
    format_selector: str = "best[ext=mp4]/best"
    log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger(__name__)
    )

    async def fetch_direct_url(self, source_url: str) -> str:
        try:
            result = await self._run("-f", self.format_selector, "-g", source_url)
        except OSError as exc:
            raise ExtractionError("Failed to start extraction tool", details=str(exc)) from exc

        if result.returncode != 0:
            self.log.error(
                "extraction.direct_url.failed",
                source_url=source_url,
                returncode=result.returncode,
                stderr=result.stderr,
            )
            raise ExtractionError("Extraction tool failed", details=result.stderr)

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines or not lines[0].startswith(("http://", "https://")):
            raise ExtractionError(
                "Extraction tool returned no media URL", details=result.stdout.strip()
            )
        return lines[0]

    async def fetch_metadata(self, source_url: str) -> VideoMetadata:
        try:
            result = await self._run("--dump-json", "--no-download", source_url)
        except OSError as exc:
            self.log.warning("extraction.metadata.unavailable", error=str(exc))
            return VideoMetadata()

        if result.returncode != 0 or not result.stdout.strip():
            self.log.warning(
                "extraction.metadata.unavailable",
                source_url=source_url,
                returncode=result.returncode,
                stderr=result.stderr,
            )
            return VideoMetadata()

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as exc:
            self.log.warning("extraction.metadata.parse_failed", error=str(exc))
            return VideoMetadata()
        if not isinstance(payload, dict):
            self.log.warning("extraction.metadata.parse_failed", error="not an object")
            return VideoMetadata()
        return _metadata_from_payload(payload)

    async def download_to_path(self, source_url: str, destination: Path) -> None:
        try:
            result = await self._run(
                "-f",
                self.format_selector,
                "-o",
                str(destination),
                "--no-part",
                source_url,
            )
        except OSError as exc:
            raise DownloadError(
                "Failed to download video",
                kind=DownloadError.TOOL_FAILED,
                details=str(exc),
            ) from exc

        if result.returncode != 0:
            self.log.error(
                "extraction.download.failed",
                source_url=source_url,
                returncode=result.returncode,
                stderr=result.stderr,
            )
            raise DownloadError(
                "Failed to download video",
                kind=DownloadError.TOOL_FAILED,
                details=result.stderr,
            )

        if not destination.is_file():
            raise DownloadError(
                "Video file not found after download", kind=DownloadError.FILE_MISSING
            )

    async def _run(self, *args: str) -> ProcessResult:
        proc = await asyncio.create_subprocess_exec(
            self.binary,
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        return ProcessResult(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )


def _metadata_from_payload(payload: dict[str, Any]) -> VideoMetadata:
    title = payload.get("title") or ""
    duration = payload.get("duration") or 0
    if not isinstance(duration, (int, float)):
        duration = 0
    return VideoMetadata(
        title=str(title),
        description=str(payload.get("description") or title),
        duration=duration,
    )
