"""
Process-wide logging setup.
"""

from __future__ import annotations

import logging
import os

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def configure_logging() -> None:
    root = logging.getLogger()
    if root.handlers:
        # uvicorn (or a test runner) already installed handlers.
        root.setLevel(log_level())
        return
    logging.basicConfig(level=log_level(), format=_FORMAT)
