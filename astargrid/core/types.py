# astargrid/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import hypot
from typing import Iterator, List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)

# 8-connected moves, row-major order; also the neighbor iteration order
MOVES8: Tuple[Cell, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    ( 0, -1),          ( 0, 1),
    ( 1, -1), ( 1, 0), ( 1, 1),
)


class InvalidTerrain(ValueError):
    """Movement cost asked for a terrain that has none (obstacles)."""


class Terrain(Enum):
    NORMAL = 0
    OBSTACLE = 1
    SAND = 2
    ROCKY = 3

    @property
    def multiplier(self) -> float:
        return cost_multiplier(self)


_MULTIPLIERS: Dict[Terrain, float] = {
    Terrain.NORMAL: 1.0,
    Terrain.SAND: 1.5,
    Terrain.ROCKY: 2.0,
}


def cost_multiplier(terrain: Terrain) -> float:
    try:
        return _MULTIPLIERS[terrain]
    except KeyError:
        raise InvalidTerrain(f"No movement cost for {terrain.name} terrain") from None


def distance(a: Cell, b: Cell) -> float:
    """Euclidean distance between two cells, (row, col) taken as cartesian."""
    return hypot(a[0] - b[0], a[1] - b[1])


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[Terrain]]             # [row][col]
    start: Optional[Cell] = None
    goal: Optional[Cell] = None

    @classmethod
    def empty(cls, rows: int, cols: int, start: Optional[Cell] = None,
              goal: Optional[Cell] = None) -> "Grid":
        cells = [[Terrain.NORMAL] * cols for _ in range(rows)]
        return cls(rows, cols, cells, start, goal)

    def in_bounds(self, c: Cell) -> bool:
        r, q = c
        return 0 <= r < self.rows and 0 <= q < self.cols

    def terrain_at(self, c: Cell) -> Terrain:
        r, q = c
        return self.cells[r][q]

    def is_block(self, c: Cell) -> bool:
        return self.terrain_at(c) is Terrain.OBSTACLE

    def cost_of(self, c: Cell) -> float:
        """Multiplier of the cell being entered. Raises InvalidTerrain on obstacles."""
        return cost_multiplier(self.terrain_at(c))

    def neighbors8(self, c: Cell) -> Iterator[Cell]:
        r, q = c
        for dr, dq in MOVES8:
            n = (r + dr, q + dq)
            if self.in_bounds(n):
                yield n

    # -------------------- editing (between searches only) --------------------

    def set_terrain(self, c: Cell, terrain: Terrain) -> None:
        r, q = c
        self.cells[r][q] = terrain

    def set_obstacle(self, c: Cell, flag: bool = True) -> None:
        if flag:
            self.set_terrain(c, Terrain.OBSTACLE)
        elif self.is_block(c):
            self.set_terrain(c, Terrain.NORMAL)

    def clear(self) -> None:
        for row in self.cells:
            row[:] = [Terrain.NORMAL] * self.cols


@dataclass(frozen=True)
class PathResult:
    path: List[Cell]         # [start, ..., goal]
    cost: float              # sum of distance * entered-cell multiplier
    expanded: int            # cells moved to the closed set


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


def path_cost(grid: Grid, path: List[Cell]) -> float:
    """Cost of walking `path`, terrain charged on the cell being entered."""
    total = 0.0
    for a, b in zip(path, path[1:]):
        total += distance(a, b) * grid.cost_of(b)
    return total
