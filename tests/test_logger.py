"""Test the package logger configuration."""
import logging

from calc_solver.common.logger import configure_logging, logger


def test_configure_logging_sets_level() -> None:
    """The package logger takes the requested level."""
    configure_logging("debug")
    assert logger.level == logging.DEBUG
    configure_logging("WARNING")
    assert logger.level == logging.WARNING


def test_configure_logging_keeps_a_single_handler() -> None:
    """Repeated calls do not stack handlers."""
    configure_logging("INFO")
    configure_logging("INFO")
    assert len(logger.handlers) == 1
