import logging

import pytest

from astargrid.core.astar import find_path
from astargrid.core.types import Grid
from astargrid.log import configure_logging, logger


@pytest.fixture(autouse=True)
def restore_level():
    level = logger.level
    yield
    logger.setLevel(level)


def test_configure_logging_sets_level():
    assert configure_logging("debug") is logger
    assert logger.level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    configure_logging("chatty")
    assert logger.level == logging.INFO


def test_unreachable_goal_is_logged(caplog):
    grid = Grid.empty(1, 3)
    grid.set_obstacle((0, 1))
    with caplog.at_level(logging.INFO, logger="astargrid"):
        assert find_path(grid, (0, 0), (0, 2)) == []
    assert "no path" in caplog.text
