from zeus.maze.grid import WallGrid
from zeus.maze.pathfinding import is_reachable, path_length, reachable_cells

SPLIT = [
    "#####",
    "#...#",
    "#####",
    "#.###",
    "#####",
]


def test_reachable_along_a_straight_corridor():
    grid = WallGrid.from_lines(SPLIT)
    assert is_reachable((1, 1), (3, 1), grid) is True
    assert is_reachable((3, 1), (1, 1), grid) is True
    assert is_reachable((1, 1), (2, 1), grid) is True


def test_unreachable_behind_an_uncarved_wall():
    grid = WallGrid.from_lines(SPLIT)
    assert is_reachable((1, 1), (1, 3), grid) is False


def test_wall_target_is_unreachable_not_an_error():
    grid = WallGrid.from_lines(SPLIT)
    assert is_reachable((1, 1), (2, 2), grid) is False
    assert is_reachable((1, 1), (0, 0), grid) is False


def test_out_of_bounds_target_is_unreachable():
    grid = WallGrid.from_lines(SPLIT)
    assert is_reachable((1, 1), (9, 9), grid) is False
    assert is_reachable((1, 1), (-1, 1), grid) is False


def test_start_equal_to_target():
    grid = WallGrid.from_lines(SPLIT)
    assert is_reachable((3, 1), (3, 1), grid) is True


def test_search_never_walks_through_the_border():
    # Top row is open, but the border is never part of a route.
    grid = WallGrid.from_lines(
        [
            ".....",
            "#.#.#",
            "#####",
            "#####",
            "#####",
        ]
    )
    assert is_reachable((1, 1), (3, 1), grid) is False


def test_query_does_not_mutate_grid():
    grid = WallGrid.from_lines(SPLIT)
    before = grid.copy()
    is_reachable((1, 1), (3, 1), grid)
    is_reachable((1, 1), (1, 3), grid)
    reachable_cells((1, 1), grid)
    assert grid == before


def test_reachable_cells_flood_fill():
    grid = WallGrid.from_lines(SPLIT)
    assert reachable_cells((1, 1), grid) == {(1, 1), (2, 1), (3, 1)}
    assert reachable_cells((1, 3), grid) == {(1, 3)}
    assert reachable_cells((0, 0), grid) == set()


def test_path_length_counts_steps():
    grid = WallGrid.from_lines(
        [
            "#####",
            "#...#",
            "#.#.#",
            "#...#",
            "#####",
        ]
    )
    assert path_length((1, 1), (1, 1), grid) == 0
    assert path_length((1, 1), (3, 3), grid) == 4
    assert path_length((1, 1), (2, 2), grid) is None


def test_path_length_none_when_disconnected():
    grid = WallGrid.from_lines(SPLIT)
    assert path_length((1, 1), (1, 3), grid) is None
