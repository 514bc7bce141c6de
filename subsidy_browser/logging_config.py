from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger import jsonlogger

LOG_FORMAT_ENV = "SUBSIDY_BROWSER_LOG_FORMAT"

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Fields named here lead each JSON record; `extra={...}` keys follow them
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _build_formatter(mode: str) -> logging.Formatter:
    if mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)
    return jsonlogger.JsonFormatter(JSON_FORMAT)


def configure_logging(
    level: int = logging.INFO,
    force_format: Optional[str] = None,
) -> None:
    """
    Send all browser logs to stderr through a single root handler.

    The format is "json" (one object per line, with the structured `extra`
    fields callbacks attach) unless "plain" is requested, either through
    force_format or the SUBSIDY_BROWSER_LOG_FORMAT env var.
    """
    mode = force_format or os.getenv(LOG_FORMAT_ENV, "json")

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(mode.lower()))

    root = logging.getLogger()
    root.setLevel(level)
    # Re-configuring (e.g. Dash's debug reloader) must not stack handlers
    root.handlers.clear()
    root.addHandler(handler)
