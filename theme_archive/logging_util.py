from __future__ import annotations

import os
import logging

# Logging configuration
LOG_DIR = os.getenv('THEME_ARCHIVE_LOG_DIR', 'logs')
LOG_FILE = os.path.join(LOG_DIR, 'theme_archive.log')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = getattr(logging, (os.getenv('THEME_ARCHIVE_LOG_LEVEL') or 'INFO').strip().upper(), logging.INFO)


# Create a formatter that removes double underscores
class NoDunderFormatter(logging.Formatter):
    def format(self, record):
        record.name = record.name.replace("__", "")
        return super().format(record)


# Stream handler
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(NoDunderFormatter(LOG_FORMAT))

_file_handler: logging.FileHandler | None = None


def _file_logging_enabled() -> bool:
    return (os.getenv('THEME_ARCHIVE_LOG_FILE') or '').strip().lower() in {'1', 'true', 'yes', 'on'}


def get_file_handler() -> logging.FileHandler:
    """Return the shared file handler, creating the log directory on first use."""
    global _file_handler
    if _file_handler is None:
        os.makedirs(LOG_DIR, exist_ok=True)
        _file_handler = logging.FileHandler(LOG_FILE, mode='w', encoding='utf-8')
        _file_handler.setFormatter(NoDunderFormatter(LOG_FORMAT))
    return _file_handler


# Logger assembly helper (idempotent)
def get_logger(name: str = 'theme_archive') -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)
        logger.addHandler(stream_handler)
        if _file_logging_enabled():
            logger.addHandler(get_file_handler())
    return logger
