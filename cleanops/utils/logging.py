"""Logging setup shared by the API process and the maintenance scripts."""

from __future__ import annotations

import logging

from cleanops.config import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level and a uniform format to the root logger."""

    resolved = (level or get_settings().log_level or "INFO").upper()
    numeric_level = logging.getLevelName(resolved)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=numeric_level, format=_LOG_FORMAT)
    root.setLevel(numeric_level)
    logging.getLogger("apscheduler").setLevel(max(numeric_level, logging.WARNING))


__all__ = ["configure_logging"]
