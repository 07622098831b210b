from __future__ import annotations

import logging
from typing import List, Optional

from zeus.config import MIN_MAZE_DIMENSION
from zeus.errors import MazeConfigError
from zeus.rng import RandomSource

from .grid import Cell, WallGrid

logger = logging.getLogger(__name__)

SEED_CELL: Cell = (1, 1)

# Sub-lattice steps: carving nodes sit two cells apart (W, E, N, S).
_LATTICE_STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))


class MazeGenerator:
    """Perfect maze generator using randomized depth-first backtracking.

    Algorithm:
    - Start from an all-wall grid and open the seed cell (1, 1).
    - Keep an explicit stack of carving nodes. For the node on top, collect the
      still-walled lattice neighbours two cells away that lie strictly inside
      the border. Pick one at random, open it and the wall cell between them,
      and push it; when none remain, pop (backtrack).
    - Force the outer ring back to wall once the stack is empty.

    The carved nodes form a spanning tree, so every passage is reachable from
    the seed cell.
    """

    def __init__(self, width: int, height: int, rng: RandomSource) -> None:
        if width < MIN_MAZE_DIMENSION or height < MIN_MAZE_DIMENSION:
            raise MazeConfigError(
                f"Maze must be at least {MIN_MAZE_DIMENSION}x{MIN_MAZE_DIMENSION}, got {width}x{height}"
            )
        self.width = width
        self.height = height
        self.rng = rng

    def generate(self) -> WallGrid:
        grid = WallGrid(self.width, self.height, fill=True)

        grid.set(*SEED_CELL, False)
        stack: List[Cell] = [SEED_CELL]
        carved = 1

        while stack:
            current = stack[-1]
            candidates = self._unvisited_neighbors(grid, current)
            if not candidates:
                stack.pop()
                continue
            nx, ny = candidates[self.rng.randrange(len(candidates))]
            cx, cy = current
            grid.set((cx + nx) // 2, (cy + ny) // 2, False)
            grid.set(nx, ny, False)
            stack.append((nx, ny))
            carved += 1

        for x, y in list(grid.border_cells()):
            grid.set(x, y, True)

        logger.debug(
            "Generated %dx%d maze: %d lattice nodes carved, signature=%s",
            self.width,
            self.height,
            carved,
            grid.signature(),
        )
        return grid

    @staticmethod
    def _unvisited_neighbors(grid: WallGrid, cell: Cell) -> List[Cell]:
        x, y = cell
        out: List[Cell] = []
        for dx, dy in _LATTICE_STEPS:
            nx, ny = x + dx, y + dy
            if grid.is_interior(nx, ny) and grid.get(nx, ny):
                out.append((nx, ny))
        return out


def generate_maze(
    width: int,
    height: int,
    seed: Optional[int] = None,
    rng: Optional[RandomSource] = None,
) -> WallGrid:
    """Build a perfect maze. ``rng`` wins over ``seed`` when both are given."""
    if rng is None:
        rng = RandomSource(seed)
    return MazeGenerator(width, height, rng).generate()


__all__ = ["MazeGenerator", "SEED_CELL", "generate_maze"]
