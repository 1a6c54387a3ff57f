"""FastAPI application entry point."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from .config import AppConfig, load_config
from .dependencies import include_routers
from .logging import configure_logging
from .media.media_service import MediaService

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    *,
    media_service: MediaService | None = None,
) -> FastAPI:
    """Build FastAPI instance with configured dependencies.

    Configuration is validated here, so a missing storage variable aborts
    startup before any connection is accepted.
    """
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    app = FastAPI(title="IG Downloader", version="0.1.0")
    include_routers(app, cfg, media_service=media_service)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


def run() -> None:
    """Console entry point: build the app from the environment and serve it."""
    config = load_config()
    app = create_app(config)
    logger.info("IG Downloader running on port %s (mode=%s)", config.port, config.mode)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
