"""
Logging configuration for the wallet bank service.

Creates a rotating file logger under logs/ (see WALLETBANK_LOG_DIR).
"""

import logging
from pathlib import Path
from logging.handlers import RotatingFileHandler

from walletbank import config

SERVICE_LOG_FILE = "walletbank.log"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _setup_file_logger(name: str, log_file: Path, level: int) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers = []

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    return logger


def setup_logging() -> None:
    """
    Configure root + service loggers for walletbank.
    """
    level = getattr(logging, config.LOG_LEVEL, logging.INFO)

    log_dir = Path(config.LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.getLogger().setLevel(level)

    _setup_file_logger("walletbank", log_dir / SERVICE_LOG_FILE, level)

    # Statement logging is controlled by SQL_ECHO; keep the logger itself quiet otherwise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if config.SQL_ECHO else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Convenience wrapper to get a named logger.
    """
    return logging.getLogger(name)
