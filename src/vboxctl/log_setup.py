"""
Run log for vboxctl.

Every record goes to one size-capped file in the working directory, one
line per record. An oversized log is rolled over to a numbered backup and
the fresh file opens with a cleanup marker.
"""
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "vboxctl"
LOG_FORMAT = "> %(asctime)s | %(message)s"
DATE_FORMAT = "%Y%m%d-%H%M%S"


def setup_logging(log_file, max_bytes=10000000, backup_count=3, level="INFO", verbose=False):
    """
    Attach a size-capped rotating file handler to the package logger.

    Calling it again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        str(log_path),
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)

    if verbose:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(stream_handler)

    logger.propagate = False
    return logger


def rotate_if_oversized(logger, log_file, max_bytes):
    """Roll the log over once it has grown past max_bytes."""
    try:
        size = os.path.getsize(log_file)
    except OSError:
        return False
    if size <= max_bytes:
        return False

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.doRollover()
    logger.info(f"log file has exceeded {max_bytes} bytes; running cleanup")
    return True
