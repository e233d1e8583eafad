"""
Logger configuration for the backend.

Application events go to `healthguard`, raw model answers to `healthguard.raw`.
Both write to rotating files so the logs do not grow without bound.
"""

import logging
from logging.handlers import RotatingFileHandler
import os

APP_LOGGER = "healthguard"
RAW_LOGGER = "healthguard.raw"


def setup_logger(
    name: str,
    log_file: str,
    level: int = logging.INFO,
    propagate: bool = True
) -> logging.Logger:
    """
    Configure and return a named logger writing to `log_file`.

    Calling it again for an already configured logger returns it unchanged,
    so handlers are never added twice.

    Args:
        name (str): Logger name.
        log_file (str): Path of the log file; its directory is created.
        level (int): Logging level, e.g. logging.INFO.
        propagate (bool): Whether records also reach parent loggers.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger.setLevel(level)
    logger.propagate = propagate

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 5MB per file, 5 backups
    handler = RotatingFileHandler(log_file, maxBytes=5*1024*1024, backupCount=5, encoding="utf-8")
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


def configure_logging(settings) -> logging.Logger:
    level = logging.getLevelName(settings.LOG_LEVEL)
    if not isinstance(level, int):
        level = logging.INFO
    setup_logger(RAW_LOGGER, settings.raw_log_file, logging.DEBUG, propagate=False)
    return setup_logger(APP_LOGGER, settings.log_file, level)
