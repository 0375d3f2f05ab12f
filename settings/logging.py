"""Logging configuration."""

import logging
import sys

from loguru import logger

from settings import LOG_DIR

# Libraries that log through stdlib logging on every request
_NOISY = ("httpx", "httpcore")


def setup_logging(level: str = "INFO", to_file: bool = True, file_level: str = "DEBUG"):
    """Console sink at ``level``, plus a daily file sink at ``file_level``.

    The file sink keeps every cache hit/miss and fallback for a week.
    """
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <7}</level> | <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if to_file:
        LOG_DIR.mkdir(exist_ok=True)
        logger.add(
            LOG_DIR / "delta_{time:YYYY-MM-DD}.log",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {name}:{function}:{line} | {message}",
            level=file_level,
            rotation="00:00",
            retention="7 days",
            compression="gz",
            enqueue=True,
        )
        logger.info("Logging to {}", LOG_DIR)

    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
