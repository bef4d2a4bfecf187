"""Helpers to launch the HTTP API."""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn

from .config import PipelineSettings
from .webapp import create_app

logger = logging.getLogger(__name__)


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 8765,
    settings: Optional[PipelineSettings] = None,
    log_level: str = "info",
) -> None:
    """Start the FastAPI app with uvicorn."""
    app = create_app(settings=settings or PipelineSettings())
    logger.info("Serving activity insights on http://%s:%d", host, port)
    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
