"""Logging setup: append-only error log plus console output."""

import logging
import sys

from schemadict.config import LogConfig

ERROR_LOG_FORMAT = "Error Logger:\t%(asctime)s %(filename)s:%(lineno)d: %(message)s"
CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Marker attribute so repeated calls replace rather than stack handlers
_HANDLER_FLAG = "_schemadict_handler"


def configure_logging(config: LogConfig, logger_name: str = "schemadict") -> logging.Logger:
    """
    Attach the error-log file handler and a console handler.

    Args:
        config: Logging configuration
        logger_name: Logger to configure (package root by default)

    Returns:
        The configured logger
    """
    logger = logging.getLogger(logger_name)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    file_handler = logging.FileHandler(config.error_log, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.ERROR)
    file_handler.setFormatter(logging.Formatter(ERROR_LOG_FORMAT))
    setattr(file_handler, _HANDLER_FLAG, True)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    setattr(console, _HANDLER_FLAG, True)

    logger.addHandler(file_handler)
    logger.addHandler(console)
    logger.setLevel(min(level, logging.ERROR))
    return logger
