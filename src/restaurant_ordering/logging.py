"""Loguru logging configuration.

Call setup_logging() once at application startup to configure sinks.
All other modules simply do `from loguru import logger` and log normally.
"""

import sys
from pathlib import Path

from loguru import logger


def setup_logging(level: str = "WARNING", log_file: str | Path | None = None) -> None:
    """Configure loguru with a stderr sink and an optional rotating file sink.

    Args:
        level: Minimum log level (default WARNING, so logs stay out of the prompts).
        log_file: Path of a rotating log file. No file is written when unset.
    """
    # Remove the default stderr handler so we can reconfigure it
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level="DEBUG",
            rotation="3 hours",
            retention="1 day",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
        )
