# astargrid/core/maps.py
"""
JSON map files.

    {
      "rows": 3, "cols": 4,
      "start": [0, 0], "goal": [2, 3],      # optional, [row, col]
      "cells": [[0, 0, 2, 0],                # 0 normal, 1 obstacle,
                [0, 1, 2, 0],                # 2 sand, 3 rocky
                [0, 0, 3, 0]]
    }
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

from astargrid.core.types import Cell, Grid, Terrain


class MapFormatError(ValueError):
    pass


def _cell(data: Dict[str, Any], key: str, cells) -> Optional[Cell]:
    raw = data.get(key)
    if raw is None:
        return None
    try:
        r, c = (int(v) for v in raw)
    except (TypeError, ValueError):
        raise MapFormatError(f"{key} must be a [row, col] pair, got {raw!r}") from None
    rows, cols = len(cells), len(cells[0])
    if not (0 <= r < rows and 0 <= c < cols):
        raise MapFormatError(f"{key} {(r, c)} out of bounds for {rows}x{cols} grid")
    if cells[r][c] is Terrain.OBSTACLE:
        raise MapFormatError(f"{key} {(r, c)} is on an obstacle")
    return (r, c)


def parse_map(data: Dict[str, Any]) -> Grid:
    if not isinstance(data, dict):
        raise MapFormatError(f"map must be a JSON object, got {type(data).__name__}")
    try:
        rows = int(data["rows"])
        cols = int(data["cols"])
        raw_cells = data["cells"]
    except KeyError as ex:
        raise MapFormatError(f"missing field {ex.args[0]!r}") from None
    except (TypeError, ValueError) as ex:
        raise MapFormatError(f"rows/cols must be integers: {ex}") from None

    if rows < 1 or cols < 1:
        raise MapFormatError(f"grid must be at least 1x1, got {rows}x{cols}")
    if not isinstance(raw_cells, list) or not all(isinstance(r, list) for r in raw_cells):
        raise MapFormatError("cells must be a list of rows")
    if len(raw_cells) != rows or any(len(r) != cols for r in raw_cells):
        raise MapFormatError(f"cells size mismatch, expected {rows}x{cols}")
    try:
        cells = [[Terrain(int(v)) for v in row] for row in raw_cells]
    except (TypeError, ValueError) as ex:
        raise MapFormatError(f"unknown terrain code: {ex}") from None

    start = _cell(data, "start", cells)
    goal = _cell(data, "goal", cells)
    return Grid(rows, cols, cells, start, goal)


def load_map(path) -> Grid:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as ex:
            raise MapFormatError(f"{path}: {ex}") from None
    return parse_map(data)


def dump_map(grid: Grid) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "rows": grid.rows,
        "cols": grid.cols,
        "cells": [[t.value for t in row] for row in grid.cells],
    }
    if grid.start is not None:
        data["start"] = list(grid.start)
    if grid.goal is not None:
        data["goal"] = list(grid.goal)
    return data


def save_map(grid: Grid, path) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(dump_map(grid), f, indent=2)
