"""
Logging setup for the parcel tracker.

All modules log under the "tracker" namespace and pass structured
context through ``extra``.
"""

import logging

from tracker.app.core.config import settings

LOGGER_NAME = "tracker"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def configure_logging(level: str = None) -> logging.Logger:
    """
    Attach a stream handler to the tracker logger.

    Safe to call more than once; the handler is only installed the first time.

    Args:
        level: Log level name, defaults to settings.log_level

    Returns:
        The configured "tracker" logger
    """
    logger.setLevel((level or settings.log_level).upper())

    if not any(h.get_name() == LOGGER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(LOGGER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
