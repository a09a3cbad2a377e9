# astargrid/app/session.py
"""
Editor state behind the viewer: grid, start/goal, brush, algorithm, overlays.

No pygame in here. The viewer maps pixels/keys to these calls and draws
whatever the session holds. Any grid edit drops the in-flight search, so the
grid never changes under a running search.
"""
from typing import Dict, List, Set, Union

from astargrid.core.astar import AStarAlgo
from astargrid.core.dijkstra import DijkstraAlgo
from astargrid.core.types import Cell, Grid, StepResult, Terrain
from astargrid.log import logger

ALGORITHMS = {
    "A*": AStarAlgo,
    "Dijkstra": DijkstraAlgo,
}

Brush = Union[str, Terrain]  # "start" | "goal" | Terrain


def _with_endpoints(grid: Grid) -> Grid:
    if grid.start is None:
        grid.start = (0, 0)
    if grid.goal is None:
        grid.goal = (grid.rows - 1, grid.cols - 1)
    return grid


def _empty_metrics(algo: str) -> dict:
    return {
        "algo": algo,
        "popped": 0,
        "open_size": 0,
        "closed_count": 0,
        "path_len": 0,
        "total_cost": None,
    }


class EditorSession:
    def __init__(self, grid: Grid, algo: str = "A*"):
        self.grid = _with_endpoints(grid)
        self.brush: Brush = Terrain.OBSTACLE
        self.selected_algo = algo
        self.algo = ALGORITHMS[algo]()
        self.state = "Idle"               # Idle | Running | Done | No path
        self.open_set: Set[Cell] = set()
        self.closed_set: Set[Cell] = set()
        self.path: List[Cell] = []
        self.last_metrics: Dict = _empty_metrics(algo)
        self.algo.init(self.grid)

    @property
    def finished(self) -> bool:
        return self.state in ("Done", "No path")

    # ---------- editing ----------
    def set_brush(self, brush: Brush) -> None:
        if brush not in ("start", "goal") and not isinstance(brush, Terrain):
            raise ValueError(f"unknown brush {brush!r}")
        self.brush = brush

    def apply_brush(self, cell: Cell) -> bool:
        """Paint `cell` with the active brush. Returns False if the edit was refused."""
        if not self.grid.in_bounds(cell):
            return False

        if self.brush in ("start", "goal"):
            if self.grid.is_block(cell):
                return False
            if cell == getattr(self.grid, self.brush):
                return True
            if self.brush == "start":
                self.grid.start = cell
            else:
                self.grid.goal = cell
        else:
            if self.brush is Terrain.OBSTACLE and cell in (self.grid.start, self.grid.goal):
                return False
            if self.grid.terrain_at(cell) is self.brush:
                return True
            self.grid.set_terrain(cell, self.brush)

        self.reset()
        return True

    def clear(self) -> None:
        self.grid.clear()
        self.reset()

    def load_grid(self, grid: Grid) -> None:
        self.grid = _with_endpoints(grid)
        self.reset()

    # ---------- algorithm ----------
    def switch_algo(self, label: str) -> None:
        if label not in ALGORITHMS:
            raise ValueError(f"unknown algorithm {label!r}")
        self.selected_algo = label
        self.algo = ALGORITHMS[label]()
        self.reset()

    def reset(self) -> None:
        self.algo.init(self.grid)
        self.state = "Idle"
        self.open_set.clear()
        self.closed_set.clear()
        self.path = []
        self.last_metrics = _empty_metrics(self.selected_algo)

    def step(self) -> StepResult:
        res = self.algo.step()
        for c in res.closed:
            self.open_set.discard(c)
            self.closed_set.add(c)
        for c in res.opened:
            self.open_set.add(c)
        if res.path is not None:
            self.path = res.path
        if res.status == "done":
            self.state = "Done"
        elif res.status == "no_path":
            self.state = "No path"
        if res.metrics:
            self.last_metrics = res.metrics
        return res

    def solve(self) -> StepResult:
        res = self.step()
        while res.status == "running":
            res = self.step()
        logger.info("%s: %s, path len %d, cost %s", self.selected_algo, self.state,
                    len(self.path), self.last_metrics.get("total_cost"))
        return res
