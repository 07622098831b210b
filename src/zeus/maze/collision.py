from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .grid import Cell, WallGrid

DEFAULT_INSET = 2.0


@dataclass(frozen=True)
class Vec2:
    """World-space (pixel) vector; y grows down like the grid."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float) -> "Vec2":
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction; the zero vector stays zero."""
        n = self.length()
        if n == 0:
            return Vec2()
        return Vec2(self.x / n, self.y / n)

    def distance_to(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_angle(cls, angle: float, speed: float = 1.0) -> "Vec2":
        return cls(math.cos(angle) * speed, math.sin(angle) * speed)


def world_to_cell(point: Vec2, cell_size: int) -> Cell:
    return int(point.x // cell_size), int(point.y // cell_size)


def cell_center(cell: Cell, cell_size: int) -> Vec2:
    return Vec2(cell[0] * cell_size + cell_size / 2, cell[1] * cell_size + cell_size / 2)


def centered_in_cell(cell: Cell, size: Vec2, cell_size: int) -> Vec2:
    """Top-left position that centres a box of ``size`` inside ``cell``."""
    return Vec2(
        cell[0] * cell_size + (cell_size - size.x) / 2,
        cell[1] * cell_size + (cell_size - size.y) / 2,
    )


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def hits_wall(position: Vec2, size: Vec2, grid: WallGrid, cell_size: int, inset: float = DEFAULT_INSET) -> bool:
    """Corner-collision test for a box with top-left ``position``.

    The box is shrunk by ``inset`` on every side, each of its four corners is
    mapped to a cell (clamped into the grid) and the box is blocked if any of
    those cells is a wall.
    """
    left_px = position.x + inset
    top_px = position.y + inset
    right_px = left_px + size.x - inset * 2
    bottom_px = top_px + size.y - inset * 2

    max_x = grid.width - 1
    max_y = grid.height - 1
    left = _clamp(int(left_px // cell_size), 0, max_x)
    right = _clamp(int(right_px // cell_size), 0, max_x)
    top = _clamp(int(top_px // cell_size), 0, max_y)
    bottom = _clamp(int(bottom_px // cell_size), 0, max_y)

    cells = grid.cells
    return cells[left][top] or cells[right][top] or cells[left][bottom] or cells[right][bottom]


def boxes_overlap(pos_a: Vec2, size_a: Vec2, pos_b: Vec2, size_b: Vec2) -> bool:
    """Axis-aligned overlap on integer-truncated boxes; shared edges do not count."""
    ax, ay, aw, ah = int(pos_a.x), int(pos_a.y), int(size_a.x), int(size_a.y)
    bx, by, bw, bh = int(pos_b.x), int(pos_b.y), int(size_b.x), int(size_b.y)
    return ax < bx + bw and bx < ax + aw and ay < by + bh and by < ay + ah


def slide_move(
    position: Vec2,
    delta: Vec2,
    size: Vec2,
    grid: WallGrid,
    cell_size: int,
    inset: float = DEFAULT_INSET,
) -> Vec2:
    """Resolve a move against walls: full move, else X only, else Y only, else stay."""
    target = position + delta
    if not hits_wall(target, size, grid, cell_size, inset):
        return target
    x_only = Vec2(target.x, position.y)
    if not hits_wall(x_only, size, grid, cell_size, inset):
        return x_only
    y_only = Vec2(position.x, target.y)
    if not hits_wall(y_only, size, grid, cell_size, inset):
        return y_only
    return position


__all__ = [
    "DEFAULT_INSET",
    "Vec2",
    "boxes_overlap",
    "cell_center",
    "centered_in_cell",
    "hits_wall",
    "slide_move",
    "world_to_cell",
]
