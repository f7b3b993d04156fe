"""Logging configuration for the storefront client."""

import logging
import sys
from typing import Optional

from storefront.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "httpx", "httpcore")


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Attach a stdout handler to the ``storefront`` logger.

    The client is embedded in a host app, so the root logger is left alone.
    Calling this again only updates the level.

    Raises:
        ValueError: ``log_level`` is not a logging level name.
    """
    settings = settings or get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {settings.log_level}")

    package_logger = logging.getLogger("storefront")
    package_logger.setLevel(level)
    if not any(getattr(h, "_storefront", False) for h in package_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._storefront = True
        package_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return package_logger
