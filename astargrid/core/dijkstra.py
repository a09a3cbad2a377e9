# astargrid/core/dijkstra.py
#!/usr/bin/env python3

from dataclasses import dataclass
from typing import List

from astargrid.core.astar import AStarAlgo, search
from astargrid.core.types import Cell, Grid


@dataclass
class DijkstraAlgo(AStarAlgo):
    """Uniform-cost search: the A* engine with a zero heuristic, so f == g."""
    name: str = "Dijkstra"

    def _h(self, c: Cell) -> float:
        return 0.0


def find_path_dijkstra(grid: Grid, start: Cell, goal: Cell) -> List[Cell]:
    result = search(grid, start, goal, algo=DijkstraAlgo())
    return result.path if result else []
