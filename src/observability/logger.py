"""Logging setup.

All loader components log through named children of the ``dashboard-data``
logger, written to stderr so CLI output on stdout stays machine-readable.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "dashboard-data"


def get_logger(name: str = ROOT_LOGGER_NAME, level: Optional[str] = None) -> logging.Logger:
    """Create (or return) a configured logger.

    Args:
        name: Logger name. Short names are nested under ``dashboard-data``.
        level: Optional log level string (e.g. "INFO"). If omitted, keeps existing.

    Returns:
        Configured logger writing to stderr.
    """

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level.upper())

    if name == ROOT_LOGGER_NAME:
        logger.propagate = False
        if logger.level == logging.NOTSET:
            logger.setLevel(logging.INFO)
        if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
            handler = logging.StreamHandler(stream=sys.stderr)
            handler.setFormatter(
                logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
            )
            logger.addHandler(handler)
    else:
        # Children inherit level and handler from the root logger.
        get_logger(ROOT_LOGGER_NAME)

    return logger
