"""Logging setup for applications embedding the backend.

Every module logs to a child of the 'cms_backend_azure' logger. Calling
configure_logging() again replaces what an earlier call installed; the root
logger and third-party loggers are never touched.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = "cms_backend_azure"
LOG_FILE_PREFIX = "cms-backend-azure"

# Index is the verbosity; anything above the last entry logs at DEBUG
VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

CONSOLE_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s"
FILE_FORMAT = "%(asctime)s %(threadName)s %(name)s %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def level_for_verbosity(verbosity: int) -> int:
    return VERBOSITY_LEVELS[max(0, min(verbosity, len(VERBOSITY_LEVELS) - 1))]


def _log_file_handler(logdir: str, level: int) -> logging.FileHandler:
    directory = Path(logdir)
    directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    handler = logging.FileHandler(directory / f"{LOG_FILE_PREFIX}_{stamp}.log", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure_logging(verbosity: int = 0, logdir: Optional[str] = None) -> logging.Logger:
    """Route the backend's log records to stderr and, optionally, a file.

    Fetches run on worker threads, so the file format records the thread name.

    Args:
        verbosity: 0 logs warnings, 1 adds workflow events, 2 adds every
            remote read and lock hand-off
        logdir: Directory for a timestamped log file, created if missing

    Returns:
        The package logger
    """
    level = level_for_verbosity(verbosity)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=DATE_FORMAT))
    package_logger.addHandler(console)

    if logdir:
        package_logger.addHandler(_log_file_handler(logdir, level))

    return package_logger
