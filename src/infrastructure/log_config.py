"""Loguru sinks for the kata scraper, configured from Settings."""

import sys
from typing import TextIO

from loguru import logger

from infrastructure.config import Settings

CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

# One debug line per stage per challenge; only wanted when tracing extraction
EXTRACTION_MODULES = ("infrastructure.extractors", "infrastructure.browser")


def level_filter(settings: Settings) -> dict[str, str]:
    """Minimum level per module; the empty key applies to everything else."""
    levels = {"": settings.log_level}
    if not settings.log_extraction_steps:
        for module in EXTRACTION_MODULES:
            levels[module] = "INFO"
    return levels


def setup_logger(settings: Settings, console: TextIO = sys.stderr) -> list[int]:
    """
    Replace loguru's default handler with the scraper's console and file sinks.

    Returns:
        Handler ids, so callers can remove exactly what was added
    """
    logger.remove()
    filters = level_filter(settings)

    handlers = [
        logger.add(
            console,
            format=CONSOLE_FORMAT,
            level=settings.log_level,
            filter=filters,
            colorize=console is sys.stderr,
        )
    ]

    if settings.log_file:
        handlers.append(
            logger.add(
                settings.log_file,
                format=FILE_FORMAT,
                level=settings.log_level,
                filter=filters,
                rotation=settings.log_rotation,
                retention=settings.log_retention,
                enqueue=True,
            )
        )

    logger.debug(f"Logging at {settings.log_level} to {len(handlers)} sink(s)")
    return handlers
