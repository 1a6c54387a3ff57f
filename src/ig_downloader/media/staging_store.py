"""Request-scoped staging files for downloaded media."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

STAGING_SUFFIX = ".mp4"


@dataclass(slots=True)
class StagingStore:
    """Maps file identifiers to local scratch files and removes them.

    The directory is created once at config load; the store never creates it.
    """

    root: Path
    log: structlog.stdlib.BoundLogger = field(
        default_factory=lambda: structlog.get_logger(__name__)
    )

    def path_for(self, file_id: str) -> Path:
        return self.root / f"{file_id}{STAGING_SUFFIX}"

    def remove(self, path: Path) -> bool:
        """Delete ``path`` and its ``<name>.*`` scratch siblings if present.

        The download tool may leave ``.part``, ``.ytdl`` or fragment files next
        to the target when it fails midway. Failures are logged, never raised.
        """
        removed = True
        for candidate in (path, *path.parent.glob(f"{path.name}.*")):
            try:
                candidate.unlink(missing_ok=True)
            except OSError as exc:
                self.log.warning(
                    "media.cleanup.failed", path=str(candidate), error=str(exc)
                )
                removed = False
        return removed
