"""Loguru logging configuration.

Called once from the application lifespan. Service modules import
``logger`` straight from loguru; this module only decides where the
records go and how they look.
"""

import sys

from loguru import logger

_LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} | {message}"


def setup_logging(log_level: str = "INFO") -> None:
    """Replace loguru's default sink with a single formatted stderr sink.

    Args:
        log_level: Minimum log level to emit.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format=_LOG_FORMAT,
        backtrace=False,
        diagnose=False,
    )
