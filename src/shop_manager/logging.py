"""Named diagnostic loggers for the shop CLI.

Log records go to stderr (and to LOG_FILE when set) so stdout stays with the
menu. LOG_LEVEL picks the starting level; ``--log-level`` retunes every shop
logger through ``set_level``.
"""

import logging
import os
from typing import Union

PREFIX = "shop."
DEFAULT_LEVEL = logging.WARNING
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NAMED_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def level_from(value: Union[str, int, None]) -> int:
    """Map a level name or number to a logging level; unknown names mean WARNING."""
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _NAMED_LEVELS.get(value.strip().upper(), DEFAULT_LEVEL)
    return DEFAULT_LEVEL


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(PREFIX + name)
    if logger.handlers:
        return logger
    logger.setLevel(level_from(os.environ.get("LOG_LEVEL")))
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    logger.addHandler(stream)

    log_file = os.environ.get("LOG_FILE")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            logger.warning(f"Ignoring LOG_FILE {log_file}: {exc}")
        else:
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    return logger


def set_level(value: Union[str, int]) -> None:
    level = level_from(value)
    for name, logger in logging.root.manager.loggerDict.items():
        if name.startswith(PREFIX) and isinstance(logger, logging.Logger):
            logger.setLevel(level)
