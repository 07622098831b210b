import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from zeus.maze.grid import WallGrid  # noqa: E402
from zeus.rng import RandomSource  # noqa: E402


@pytest.fixture
def rng():
    return RandomSource(1234)


@pytest.fixture
def corridor_grid():
    """7x5 grid with a single horizontal corridor on row 1."""
    return WallGrid.from_lines(
        [
            "#######",
            "#.....#",
            "#######",
            "#######",
            "#######",
        ]
    )


@pytest.fixture
def open_grid():
    """20x20 grid: walled border around a fully open interior."""
    rows = ["#" * 20] + ["#" + "." * 18 + "#" for _ in range(18)] + ["#" * 20]
    return WallGrid.from_lines(rows)
