"""
logging_setup.py

Configures process-wide logging for the exporter. Log records go to stderr
and, when a log directory is configured, to a size-rotated log file.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
MAX_LOG_BYTES = 1_000_000
BACKUP_COUNT = 3


def setup_logging(
    log_dir: Optional[str] = None,
    log_file_name: str = "sensor_exporter.log",
    log_level: str = "INFO",
) -> logging.Logger:
    """
    Configure the root logger and return it.

    Args:
        log_dir: Directory for the rotating log file. Created if missing.
            When None, only the stream handler is installed.
        log_file_name: File name of the log file inside log_dir.
        log_level: Level name, e.g. "DEBUG" or "INFO".

    Returns:
        logging.Logger: The configured root logger.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))

    formatter = logging.Formatter(LOG_FORMAT)

    # Repeated calls must not stack handlers.
    has_stream = any(
        type(h) is logging.StreamHandler for h in root.handlers
    )
    if not has_stream:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        root.addHandler(stream_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.abspath(os.path.join(log_dir, log_file_name))
        has_file = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
            for h in root.handlers
        )
        if not has_file:
            file_handler = RotatingFileHandler(
                log_path, maxBytes=MAX_LOG_BYTES, backupCount=BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    return root
