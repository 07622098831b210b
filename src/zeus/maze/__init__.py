"""
Procedural maze subsystem for Project Zeus.

Contains the wall grid, perfect-maze generation, reachability queries, item
placement, the corner-collision helpers and the roaming pursuit enemy.
"""
from .collision import Vec2, boxes_overlap, hits_wall, slide_move, world_to_cell
from .generator import MazeGenerator, generate_maze
from .grid import Cell, WallGrid
from .pathfinding import is_reachable, path_length, reachable_cells
from .placement import Placement, PlacementPlanner, plan_placement
from .pursuit import PursuitController, PursuitEnemy, PursuitState
from .run import MazeRun

__all__ = [
    "Cell",
    "MazeGenerator",
    "MazeRun",
    "Placement",
    "PlacementPlanner",
    "PursuitController",
    "PursuitEnemy",
    "PursuitState",
    "Vec2",
    "WallGrid",
    "boxes_overlap",
    "generate_maze",
    "hits_wall",
    "is_reachable",
    "path_length",
    "plan_placement",
    "reachable_cells",
    "slide_move",
    "world_to_cell",
]
