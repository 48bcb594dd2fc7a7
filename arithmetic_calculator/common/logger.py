"""Package-wide logger."""
import logging
import sys
from typing import Union


LOGGER_NAME = "arithmetic_calculator"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(processName)s - %(message)s"

logger: logging.Logger = logging.getLogger(LOGGER_NAME)

if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.INFO)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Set the level of the package logger.

    :param level: Level name (e.g. "DEBUG") or numeric level
    :raises ValueError: If the level name is unknown
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level}")
        level = numeric
    logger.setLevel(level)
