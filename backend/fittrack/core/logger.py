"""Loguru sinks for the API process."""

import sys
from pathlib import Path

from loguru import logger

from fittrack.core.config import Settings, settings as default_settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(config: Settings | None = None) -> Path | None:
    """Replace loguru's default sink with ours, driven by `log_*` settings.

    Always logs to stderr. When `log_file` is set, also writes a rotated,
    zipped file there and returns its path.
    """
    config = config or default_settings
    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=config.log_level, colorize=True)

    log_path = None
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=config.log_level,
            rotation=config.log_rotation,
            retention=config.log_retention,
            compression="zip",
        )

    logger.debug(f"Logging at {config.log_level}" + (f" to {log_path}" if log_path else ""))
    return log_path
