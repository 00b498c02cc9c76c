"""Logging setup for the application."""

import logging
from logging.handlers import RotatingFileHandler

from enrollment.core.config import Settings

LOG_FORMAT = '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'


def configure_logging(settings: Settings) -> logging.Logger:
    """
    Attach a rotating file handler (and a console handler in debug mode)
    to the ``enrollment`` and ``gateway`` loggers.

    Calling it again does not add duplicate handlers.
    """
    log_path = settings.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root = logging.getLogger("enrollment")
    for name in ("enrollment", "gateway"):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if logger.handlers:
            continue

        file_handler = RotatingFileHandler(log_path, maxBytes=10240000, backupCount=10)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

        if settings.DEBUG:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
            logger.addHandler(console_handler)

    return root
