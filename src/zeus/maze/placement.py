from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from zeus.config import PlacementTuning
from zeus.errors import MazeConfigError
from zeus.rng import RandomSource

from .grid import Cell, WallGrid
from .pathfinding import is_reachable, reachable_cells

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Start (entrance/exit) cell and item cell chosen once per maze."""

    start: Cell
    item: Cell
    used_fallback: bool = False

    def as_pair(self) -> Tuple[Cell, Cell]:
        return self.start, self.item


def cell_distance(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def _biased(rng: RandomSource, size: int, far_half: bool) -> int:
    lo, hi = (size // 2, size - 1) if far_half else (1, size // 2)
    if hi <= lo:
        # Half-range is empty on very narrow grids.
        lo, hi = 1, size - 1
    return rng.randrange(lo, hi)


def find_start_cell(grid: WallGrid) -> Cell:
    """First interior passage in row-major order."""
    for cell in grid.passage_cells():
        return cell
    raise MazeConfigError(f"Maze {grid.width}x{grid.height} has no interior passage to start from")


class PlacementPlanner:
    """Choose a well separated, guaranteed reachable item cell.

    Candidates are sampled with a bias toward the half of the maze opposite the
    start (per axis). A candidate must be a passage, lie farther than
    ``min_item_distance`` cells from the start and be reachable from it. When
    the sampling budget runs out the farthest reachable passage is used, which
    may be closer than the threshold on small mazes.
    """

    def __init__(self, tuning: Optional[PlacementTuning] = None) -> None:
        self.tuning = tuning or PlacementTuning()

    def place(self, grid: WallGrid, rng: RandomSource) -> Placement:
        start = find_start_cell(grid)
        w, h = grid.width, grid.height
        prefer_right = start[0] < w // 2
        prefer_bottom = start[1] < h // 2

        for attempt in range(self.tuning.attempts):
            if rng.random() < self.tuning.bias:
                x = _biased(rng, w, prefer_right)
                y = _biased(rng, h, prefer_bottom)
            else:
                x = rng.randrange(1, w - 1)
                y = rng.randrange(1, h - 1)

            candidate = (x, y)
            if grid.is_wall(x, y):
                continue
            if cell_distance(start, candidate) <= self.tuning.min_item_distance:
                continue
            if is_reachable(start, candidate, grid):
                logger.debug("Placed item at %s after %d attempt(s); start=%s", candidate, attempt + 1, start)
                return Placement(start=start, item=candidate)

        logger.warning(
            "No item cell beyond %.2f cells found in %d attempts; using farthest reachable cell",
            self.tuning.min_item_distance,
            self.tuning.attempts,
        )
        return Placement(start=start, item=self._farthest_reachable(grid, start), used_fallback=True)

    @staticmethod
    def _farthest_reachable(grid: WallGrid, start: Cell) -> Cell:
        # Columns outer, rows inner; the first strict maximum wins.
        reachable = reachable_cells(start, grid)
        best = start
        best_distance = 0.0
        for x in range(1, grid.width - 1):
            for y in range(1, grid.height - 1):
                cell = (x, y)
                if cell not in reachable:
                    continue
                d = cell_distance(start, cell)
                if d > best_distance:
                    best_distance = d
                    best = cell
        return best


def plan_placement(grid: WallGrid, rng: RandomSource, tuning: Optional[PlacementTuning] = None) -> Placement:
    return PlacementPlanner(tuning).place(grid, rng)


__all__ = ["Placement", "PlacementPlanner", "cell_distance", "find_start_cell", "plan_placement"]
