"""Logging setup shared by the HTTP API and the live channel."""

import logging

from sportmate.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install a single console handler on the ``sportmate`` logger."""

    logger = logging.getLogger("sportmate")
    logger.setLevel((level or settings.LOG_LEVEL).upper())

    if any(getattr(handler, "_sportmate", False) for handler in logger.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler._sportmate = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
