"""Logging configuration."""

from __future__ import annotations

import os

LOG_LEVEL = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

ENV_SHOW_TRANSPORT_LOGS = "SHOW_TRANSPORT_LOGS"
TRANSPORT_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "websockets")

__all__ = ["LOG_LEVEL", "LOG_FORMAT", "ENV_SHOW_TRANSPORT_LOGS", "TRANSPORT_LOGGERS"]
