"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from shots_organizer.shared import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.parametrize(
    "verbose,quiet,level",
    [
        (False, False, logging.INFO),
        (True, False, logging.DEBUG),
        (False, True, logging.WARNING),
        (True, True, logging.WARNING),
    ],
)
def test_levels(verbose, quiet, level):
    setup_logging(verbose=verbose, quiet=quiet)

    assert logging.getLogger().level == level


def test_installs_rich_handler():
    setup_logging()

    assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)
