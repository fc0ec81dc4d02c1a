"""Root-logger setup for applications embedding palette_extractor."""

from __future__ import annotations

import logging

from .settings import get_settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a stream handler at *level*, or at ``LOG_LEVEL`` when omitted."""

    name = (level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, name, logging.INFO), format=LOG_FORMAT)
