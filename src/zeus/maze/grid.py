from __future__ import annotations

import hashlib
import logging
from typing import Iterator, List, Sequence, Tuple

from zeus.errors import MazeConfigError

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

WALL_CHAR = "#"
PASSAGE_CHAR = "."


class WallGrid:
    """A 2D boolean wall grid: ``True`` is wall, ``False`` is passage.

    Cells are indexed ``cells[x][y]`` with (0, 0) at the top-left; x grows to
    the right, y grows down. Reads outside the grid count as wall so that
    collision queries never raise; writes outside the grid raise IndexError.
    """

    __slots__ = ("_w", "_h", "_cells")

    def __init__(self, width: int, height: int, fill: bool = True) -> None:
        if width <= 0 or height <= 0:
            raise MazeConfigError(f"WallGrid dimensions must be positive, got {width}x{height}")
        self._w = int(width)
        self._h = int(height)
        self._cells: List[List[bool]] = [[fill for _ in range(self._h)] for _ in range(self._w)]

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    @property
    def cells(self) -> List[List[bool]]:
        """Column-major view ``cells[x][y]``; treat as read-only outside generation."""
        return self._cells

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def is_interior(self, x: int, y: int) -> bool:
        """True when (x, y) lies strictly inside the outer ring."""
        return 0 < x < self._w - 1 and 0 < y < self._h - 1

    def is_border(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and not self.is_interior(x, y)

    def get(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        return self._cells[x][y]

    def set(self, x: int, y: int, wall: bool) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"Coordinates out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        self._cells[x][y] = bool(wall)

    def is_wall(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self._cells[x][y]

    def is_passage(self, x: int, y: int) -> bool:
        return not self.is_wall(x, y)

    def neighbors4(self, x: int, y: int) -> Iterator[Cell]:
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def interior_cells(self) -> Iterator[Cell]:
        """Interior coordinates in row-major order (rows outer, columns inner)."""
        for y in range(1, self._h - 1):
            for x in range(1, self._w - 1):
                yield x, y

    def passage_cells(self) -> Iterator[Cell]:
        for x, y in self.interior_cells():
            if not self._cells[x][y]:
                yield x, y

    def border_cells(self) -> Iterator[Cell]:
        for y in range(self._h):
            for x in range(self._w):
                if not self.is_interior(x, y):
                    yield x, y

    def copy(self) -> "WallGrid":
        other = WallGrid(self._w, self._h)
        other._cells = [column[:] for column in self._cells]
        return other

    def signature(self) -> str:
        """Deterministic digest of the wall pattern, stable across runs."""
        raw = "\n".join(self.to_lines()).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "WallGrid":
        """Create a grid from rows of ``#`` (wall) and ``.`` (passage)."""
        if not lines:
            raise MazeConfigError("lines must not be empty")
        width = len(lines[0])
        if width == 0:
            raise MazeConfigError("line width must be positive")
        for i, row in enumerate(lines):
            if len(row) != width:
                raise MazeConfigError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")

        grid = cls(width, len(lines))
        for y, row in enumerate(lines):
            for x, ch in enumerate(row):
                if ch not in (WALL_CHAR, PASSAGE_CHAR):
                    raise MazeConfigError(f"Unknown grid character {ch!r} at ({x}, {y})")
                grid._cells[x][y] = ch == WALL_CHAR
        return grid

    def to_lines(self) -> List[str]:
        return [
            "".join(WALL_CHAR if self._cells[x][y] else PASSAGE_CHAR for x in range(self._w))
            for y in range(self._h)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WallGrid):
            return NotImplemented
        return self._w == other._w and self._h == other._h and self._cells == other._cells

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"WallGrid(width={self._w}, height={self._h})"


__all__ = ["Cell", "WallGrid"]
