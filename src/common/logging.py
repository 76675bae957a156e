"""Structured logging configuration for the deal monitor."""

from __future__ import annotations

import logging
import sys
from typing import TextIO


def setup_logging(
    level: int | str = logging.INFO,
    module_name: str = "src",
    stream: TextIO | None = None,
) -> logging.Logger:
    """Configure and return a logger with consistent formatting.

    Args:
        level: Logging level (default INFO). Level names such as "DEBUG"
               are accepted as well.
        module_name: Name for the logger instance. The default covers every
                     module under the ``src`` package.
        stream: Output stream (default stdout). CLIs that print JSON to
                stdout log to stderr instead.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(module_name)

    if logger.handlers:
        return logger

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
