"""Test the package logger configuration."""
import logging

import pytest

from arithmetic_calculator.common.logger import configure_logging, logger


@pytest.fixture(autouse=True)
def restore_level():
    """Put the logger back to its original level after each test."""
    level = logger.level
    yield
    logger.setLevel(level)


@pytest.mark.parametrize("level,expected", [
    ("debug", logging.DEBUG),
    ("ERROR", logging.ERROR),
    (logging.WARNING, logging.WARNING),
])
def test_configure_logging(level, expected) -> None:
    """Level names and numbers are both accepted."""
    configure_logging(level)
    assert logger.level == expected


def test_configure_logging_unknown_level() -> None:
    """Unknown level names are rejected."""
    with pytest.raises(ValueError):
        configure_logging("LOUD")


def test_single_handler() -> None:
    """The package logger carries exactly one handler."""
    assert logger.name == "arithmetic_calculator"
    assert len(logger.handlers) == 1
