"""Loguru sink setup for the command-line entry point."""

from __future__ import annotations

import sys

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def configure_logging(level: str = "WARNING") -> None:
    """Replace loguru's default sink with a single stderr sink at *level*."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=_FORMAT)
