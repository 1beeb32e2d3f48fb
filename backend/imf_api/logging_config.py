"""
Logging Configuration
Console logging always; a rotating app.log when a writable log directory is configured.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE_NAME = "app.log"


def _prepare_log_file(log_dir: str) -> Optional[str]:
    """Return the log file path, or None if file logging is off or the directory is not writable."""
    if not log_dir:
        return None
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
    except OSError:
        return None
    if not os.access(log_dir, os.W_OK):
        return None
    return os.path.join(log_dir, LOG_FILE_NAME)


def setup_logging(log_dir: str = "logs", log_level: str = "INFO") -> Optional[str]:
    """
    Configure logging for the application.

    Args:
        log_dir: Directory for app.log. Empty disables file logging.
        log_level: Level for the root and imf_api loggers.

    Returns:
        The log file path, or None when logging to the console only.
    """
    log_level = log_level.upper()
    log_file_path = _prepare_log_file(log_dir)

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "stream": sys.stdout,
            "formatter": "default",
        },
    }
    if log_file_path:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": log_file_path,
            "maxBytes": 10 * 1024 * 1024,  # 10 MB
            "backupCount": 5,
            "formatter": "default",
            "encoding": "utf8",
        }
    handler_names = list(handlers)

    # uvicorn loggers keep their own level so access logs survive a quieter app level
    loggers = {
        name: {"handlers": handler_names, "level": "INFO", "propagate": False}
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access")
    }
    loggers["imf_api"] = {"handlers": handler_names, "level": log_level, "propagate": False}

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {"format": LOG_FORMAT, "datefmt": "%Y-%m-%d %H:%M:%S"},
        },
        "handlers": handlers,
        "root": {"handlers": handler_names, "level": log_level},
        "loggers": loggers,
    })

    logger = logging.getLogger("imf_api")
    if log_file_path:
        logger.info("Logging initialized. Writing logs to %s", log_file_path)
    else:
        logger.warning("Logging to console only (log_dir=%r not usable)", log_dir)
    return log_file_path
