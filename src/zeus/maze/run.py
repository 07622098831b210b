from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from zeus.config import MazeSettings
from zeus.rng import RandomSource

from .collision import Vec2, boxes_overlap, cell_center, centered_in_cell, slide_move, world_to_cell
from .generator import generate_maze
from .grid import Cell, WallGrid
from .placement import Placement, plan_placement
from .pursuit import PursuitController

logger = logging.getLogger(__name__)


@dataclass
class MazeRun:
    """One playthrough of the maze level: grid, placement, agent, item and enemy.

    The hosting scene polls input and draws; it feeds a movement direction and
    an interact flag to :meth:`update` once per frame and reads the published
    state back.
    """

    settings: MazeSettings
    grid: WallGrid
    placement: Placement
    enemy: PursuitController
    agent_position: Vec2
    item_position: Vec2
    entrance_position: Vec2
    item_collected: bool = False
    completed: bool = False
    agent_velocity: Vec2 = field(default_factory=Vec2)

    @classmethod
    def create(cls, settings: Optional[MazeSettings] = None, rng: Optional[RandomSource] = None) -> "MazeRun":
        settings = settings or MazeSettings()
        settings.validate()
        rng = rng if rng is not None else RandomSource(settings.seed)

        grid = generate_maze(settings.width, settings.height, rng=rng)
        placement = plan_placement(grid, rng, settings.placement())
        cs = settings.cell_size
        agent_size = Vec2(*settings.agent.size)

        run = cls(
            settings=settings,
            grid=grid,
            placement=placement,
            enemy=PursuitController(settings.pursuit(), rng),
            agent_position=centered_in_cell(placement.start, agent_size, cs),
            item_position=cell_center(placement.item, cs),
            entrance_position=cell_center(placement.start, cs),
        )
        logger.info(
            "Maze run ready: %dx%d start=%s item=%s fallback=%s",
            grid.width,
            grid.height,
            placement.start,
            placement.item,
            placement.used_fallback,
        )
        return run

    @property
    def agent_size(self) -> Vec2:
        return Vec2(*self.settings.agent.size)

    @property
    def agent_center(self) -> Vec2:
        size = self.agent_size
        return Vec2(self.agent_position.x + size.x / 2, self.agent_position.y + size.y / 2)

    @property
    def agent_cell(self) -> Cell:
        return world_to_cell(self.agent_center, self.settings.cell_size)

    def update(self, dt: float, move: Tuple[float, float] = (0.0, 0.0), interact: bool = False) -> None:
        """Advance one frame. Ignored once the run is completed."""
        if self.completed:
            return

        cs = self.settings.cell_size
        inset = self.settings.collision_inset
        size = self.agent_size

        self.agent_velocity = Vec2(*move).normalized() * self.settings.agent.speed
        self.agent_position = slide_move(self.agent_position, self.agent_velocity * dt, size, self.grid, cs, inset)

        self.enemy.update(dt, self.agent_position, self.grid, cs)
        self.agent_position = self.enemy.push_agent(self.agent_position, size, dt, self.grid, cs)

        if interact and not self.item_collected and self._touches_item():
            self.item_collected = True
            logger.info("Item collected at cell %s", self.placement.item)

        if self.item_collected:
            if self.agent_center.distance_to(self.entrance_position) < self.settings.agent.exit_radius:
                self.completed = True
                logger.info("Maze completed")

    def _touches_item(self) -> bool:
        half = self.settings.agent.item_size / 2
        item_box = Vec2(self.item_position.x - half, self.item_position.y - half)
        item_size = Vec2(self.settings.agent.item_size, self.settings.agent.item_size)
        return boxes_overlap(self.agent_position, self.agent_size, item_box, item_size)

    # ------------------------ Visibility ------------------------
    def is_visible(self, cell: Cell) -> bool:
        """Chebyshev-radius visibility around the agent's centre cell."""
        ax, ay = self.agent_cell
        r = self.settings.agent.visibility_radius
        return abs(cell[0] - ax) <= r and abs(cell[1] - ay) <= r

    def visible_cells(self) -> Iterator[Cell]:
        ax, ay = self.agent_cell
        r = self.settings.agent.visibility_radius
        for y in range(max(0, ay - r), min(self.grid.height, ay + r + 1)):
            for x in range(max(0, ax - r), min(self.grid.width, ax + r + 1)):
                yield x, y


__all__ = ["MazeRun"]
