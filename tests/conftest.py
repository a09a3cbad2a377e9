import pytest

from astargrid.core.types import Grid, Terrain

LEGEND = {
    ".": Terrain.NORMAL,
    "#": Terrain.OBSTACLE,
    "s": Terrain.SAND,
    "r": Terrain.ROCKY,
}


@pytest.fixture
def make_grid():
    """Build a Grid from rows of legend characters, e.g. ["..#", ".s."]."""
    def _make(*rows, start=None, goal=None):
        cells = [[LEGEND[ch] for ch in row] for row in rows]
        return Grid(len(rows), len(rows[0]), cells, start, goal)
    return _make
