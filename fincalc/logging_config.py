"""
Logging setup for the calculator engine.

Every module logs through ``logging.getLogger(__name__)``; this module only
attaches a handler to the package logger.
"""

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``fincalc`` package logger.

    Args:
        level: Log level name (e.g. "INFO"); defaults to the configured setting

    Returns:
        The package logger
    """
    if level is None:
        from fincalc.config import get_settings

        level = get_settings().log_level

    logger = logging.getLogger("fincalc")
    logger.setLevel(level.upper())

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
