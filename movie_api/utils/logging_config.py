"""
Logging setup for the movie catalog service.

Records go to stdout and, when a log file name is configured, to a
size-rotated file under the log directory.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_dir: str = "logs",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> Optional[Path]:
    """
    Replace the root logger's handlers with the service's own.

    Args:
        level: Level name such as 'DEBUG' or 'WARNING'. Unknown names mean INFO.
        log_file: File name for the rotating log, or None for stdout only
        log_dir: Directory the log file is created in
        max_bytes: File size at which the log is rotated
        backup_count: Rotated files kept next to the live one

    Returns:
        Path of the log file, or None when logging to stdout only
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    log_path = None
    if log_file:
        log_path = Path(log_dir) / log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_path, maxBytes=max_bytes, backupCount=backup_count))

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(log_level)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Box-office requests would otherwise log every connection
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    if log_path is not None:
        root_logger.info("Logging to file: %s", log_path)
    return log_path
