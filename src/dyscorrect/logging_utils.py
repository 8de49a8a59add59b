"""
Logging setup for the server and CLI.
"""

import logging
import logging.handlers
from pathlib import Path

from dyscorrect.config import Settings, get_settings


FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logger(settings: Settings | None = None) -> logging.Logger:
    """Configure the package logger once; later calls return it unchanged."""
    settings = settings or get_settings()
    logger = logging.getLogger("dyscorrect")

    if logger.handlers:
        return logger

    logger.setLevel(settings.log_level)
    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    if settings.log_file:
        Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            filename=settings.log_file,
            maxBytes=settings.max_log_size,
            backupCount=settings.log_backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
