from __future__ import annotations

from collections import deque
from typing import Iterator, Optional, Set

from .grid import Cell, WallGrid


def _open_neighbors(grid: WallGrid, x: int, y: int) -> Iterator[Cell]:
    """Axis neighbours strictly inside the border that are passages."""
    for nx, ny in grid.neighbors4(x, y):
        if grid.is_interior(nx, ny) and not grid.get(nx, ny):
            yield nx, ny


def is_reachable(start: Cell, target: Cell, grid: WallGrid) -> bool:
    """Breadth-first search over passage cells; True if ``target`` can be walked to.

    A wall (or out-of-bounds) target is simply unreachable. The grid is never
    modified; visited cells are tracked locally.
    """
    if grid.is_wall(*target):
        return False
    if start == target:
        return True

    q = deque([start])
    seen = {start}
    while q:
        x, y = q.popleft()
        for nxt in _open_neighbors(grid, x, y):
            if nxt in seen:
                continue
            if nxt == target:
                return True
            seen.add(nxt)
            q.append(nxt)
    return False


def reachable_cells(start: Cell, grid: WallGrid) -> Set[Cell]:
    """Return every passage cell connected to ``start`` (4-neigh), start included if open."""
    if grid.is_wall(*start):
        return set()
    q = deque([start])
    seen = {start}
    while q:
        x, y = q.popleft()
        for nxt in _open_neighbors(grid, x, y):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def path_length(start: Cell, target: Cell, grid: WallGrid) -> Optional[int]:
    """Shortest walk length in steps between two passages, or None when disconnected."""
    if grid.is_wall(*start) or grid.is_wall(*target):
        return None

    q = deque([(start, 0)])
    seen = {start}
    while q:
        cell, d = q.popleft()
        if cell == target:
            return d
        for nxt in _open_neighbors(grid, *cell):
            if nxt not in seen:
                seen.add(nxt)
                q.append((nxt, d + 1))
    return None


__all__ = ["is_reachable", "path_length", "reachable_cells"]
