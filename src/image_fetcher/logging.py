"""Loguru sinks for the image fetcher.

The fetcher never reports failures to its callers; a failed download shows up
only as a WARNING record ("Error loading image at <url>"). Cache misses,
undecodable cached bytes and failed cache writes are logged at DEBUG. Library
code logs through ``loguru.logger`` directly and leaves sink selection to the
host: the CLI calls :func:`setup_logging` from its callback, and an embedding
application may call it once at startup or install its own loguru sinks.
"""

import sys
from typing import Any

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: str | None = None,
) -> Any:
    """Replace loguru's sinks with the fetcher's stderr and file sinks.

    Run with ``level="DEBUG"`` to see why a particular URL fell back to the
    network or failed to decode.

    Args:
        level: Minimum log level to capture. One of: DEBUG, INFO, WARNING, ERROR, CRITICAL.
        json_output: If True, emit serialized JSON records on stderr.
        log_file: Optional file path for a rotating log file.

    Returns:
        The configured loguru logger instance.

    """
    logger.remove()

    if json_output:
        logger.add(sys.stderr, format="{message}", serialize=True, level=level)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            format=CONSOLE_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
            compression="gz",
        )

    return logger


def get_logger(name: str | None = None) -> Any:
    """Return the loguru logger, bound to ``name`` when one is given.

    The bound name lands in each record's ``extra`` dict, which the JSON sink
    serializes, so a host can tell fetcher records apart from its own.
    """
    if name:
        return logger.bind(name=name)
    return logger
