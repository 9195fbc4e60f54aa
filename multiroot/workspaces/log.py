"""Logging configuration using loguru.

Library modules log through ``loguru.logger`` directly; the CLI calls
``setup_logging`` once so that records (including stdlib ``logging`` records
from third-party code) end up in a single sink with a unified format.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class _InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Report the caller, not the logging module
        frame = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", sink: TextIO = sys.stderr) -> None:
    """Make loguru the only logging sink, writing to ``sink`` at ``level``."""
    level = level.upper()

    logger.remove()
    logger.add(sink, level=level, format=LOG_FORMAT, colorize=sink.isatty())

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    logger.debug("Logging initialised (level={})", level)
