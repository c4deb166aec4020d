"""Helpers to launch the local focus timer API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import uvicorn

from .webapp import create_app


def run_api(
    *,
    host: str = "127.0.0.1",
    port: int = 8766,
    log_path: Optional[Path] = None,
    log_level: str = "info",
) -> None:
    """Serve the timer API until interrupted."""
    app = create_app(log_path=log_path)
    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
