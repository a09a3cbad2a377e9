#!/usr/bin/env python3
"""
A* over a terrain grid — one expansion per step() so the viewer can animate it.

Algorithm API shared with the viewer:
- init(grid, start, goal) - reset() - step() -> StepResult - run()

Movement:
- 8-connected; a move costs distance(u, v) * multiplier(v), i.e. terrain is
  charged on the cell being entered.
- Heuristic is the Euclidean distance to the goal. Multipliers are >= 1, so it
  never overestimates and is consistent: a closed cell is never reopened.

Search state (g, h, f, parent, open/closed) lives on the algorithm object and
is rebuilt by reset(); the grid itself is only read.

Tie-breaking in the PQ: (f, seq, cell), lower f first, then FIFO by seq. A
cell whose path improves is pushed again with a fresh seq; the older entry is
dropped when popped because the cell is already closed by then.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import heapq

from astargrid.core.types import Cell, Grid, PathResult, StepResult, distance
from astargrid.log import logger


@dataclass
class AStarAlgo:
    name: str = "A*"

    # Internal state
    grid: Optional[Grid] = None
    start_cell: Optional[Cell] = None
    goal_cell: Optional[Cell] = None
    open_pq: List[Tuple[float, int, Cell]] = field(default_factory=list)  # (f, seq, cell)
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, float] = field(default_factory=dict)
    h: Dict[Cell, float] = field(default_factory=dict)
    f: Dict[Cell, float] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False
    seq: int = 0  # monotonic counter for PQ stability

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Optional[Cell] = None, goal: Optional[Cell] = None) -> None:
        """Bind to a grid. start/goal default to the grid's own."""
        self.grid = grid
        self.start_cell = start if start is not None else grid.start
        self.goal_cell = goal if goal is not None else grid.goal
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start cell."""
        if self.grid is None or self.start_cell is None or self.goal_cell is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.g.clear()
        self.h.clear()
        self.f.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.seq = 0

        s = self.start_cell
        logger.debug("%s search %s -> %s on %dx%d grid", self.name, s, self.goal_cell,
                     self.grid.rows, self.grid.cols)
        # an obstacle start is never seeded: the first step reports no path
        if self.grid.is_block(s):
            return
        self.g[s] = 0.0
        self.h[s] = self._h(s)
        self.f[s] = self.g[s] + self.h[s]
        heapq.heappush(self.open_pq, (self.f[s], self._bump(), s))
        self.open_set.add(s)

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _h(self, c: Cell) -> float:
        return distance(c, self.goal_cell)

    def _pop_best(self) -> Optional[Cell]:
        while self.open_pq:
            _, _, u = heapq.heappop(self.open_pq)
            if u in self.closed_set:
                continue  # superseded entry
            return u
        return None

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = [end]
        cur = end
        while cur in self.parent:
            cur = self.parent[cur]
            path.append(cur)
        path.reverse()
        return path

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE A* expansion step:
          - Pop the lowest-f open cell and close it.
          - If it is the goal, reconstruct and finish.
          - Else relax its 8 neighbors, skipping obstacles and closed cells.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.goal_cell)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", path=[], metrics=self._metrics())

        u = self._pop_best()
        if u is None:
            self.no_path = True
            logger.info("%s: no path from %s to %s (%d cells expanded)",
                        self.name, self.start_cell, self.goal_cell, self.popped_count)
            return StepResult(status="no_path", path=[], metrics=self._metrics())

        # Finalize u
        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)

        if u == self.goal_cell:
            self.done = True
            path = self._reconstruct_path(u)
            logger.debug("%s: reached %s, cost %.3f, %d cells expanded",
                         self.name, u, self.g[u], self.popped_count)
            return StepResult(status="done", closed=[u], current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        # Relax neighbors
        opened_now: List[Cell] = []
        g_u = self.g[u]
        for v in self.grid.neighbors8(u):
            if self.grid.is_block(v) or v in self.closed_set:
                continue
            alt = g_u + distance(u, v) * self.grid.cost_of(v)
            if v not in self.open_set:
                self.open_set.add(v)
                self.h[v] = self._h(v)
                opened_now.append(v)
            elif alt >= self.g[v]:
                continue
            self.parent[v] = u
            self.g[v] = alt
            self.f[v] = alt + self.h[v]
            heapq.heappush(self.open_pq, (self.f[v], self._bump(), v))

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def run(self) -> StepResult:
        """Step until the goal is closed or the open set is exhausted."""
        res = self.step()
        while res.status == "running":
            res = self.step()
        return res

    # -------------------- metrics --------------------

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
            "total_cost": self.g.get(self.goal_cell) if self.done else None,
        }


# -------------------- one-shot queries --------------------

def search(grid: Grid, start: Cell, goal: Cell, algo: Optional[AStarAlgo] = None) -> Optional[PathResult]:
    """Lowest-cost path from start to goal, or None when the goal is unreachable."""
    algo = algo if algo is not None else AStarAlgo()
    algo.init(grid, start, goal)
    res = algo.run()
    if res.status != "done":
        return None
    return PathResult(path=res.path, cost=algo.g[goal], expanded=algo.popped_count)


def find_path(grid: Grid, start: Cell, goal: Cell) -> List[Cell]:
    """Cells from start to goal inclusive; [] if no route exists."""
    result = search(grid, start, goal)
    return result.path if result else []
