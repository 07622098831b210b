from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from zeus.config import PursuitTuning
from zeus.rng import RandomSource

from .collision import Vec2, boxes_overlap, centered_in_cell, hits_wall
from .grid import WallGrid

logger = logging.getLogger(__name__)

# Absorbs float drift when the countdown is sub-stepped (e.g. 50 x 0.1s).
_TIMER_EPSILON = 1e-9


class PursuitState(Enum):
    DORMANT = "dormant"
    ACTIVE = "active"


@dataclass
class PursuitEnemy:
    """Mutable state of the roaming enemy; absent from the maze while dormant."""

    size: Vec2
    timer: float
    state: PursuitState = PursuitState.DORMANT
    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)

    @property
    def is_active(self) -> bool:
        return self.state is PursuitState.ACTIVE


class PursuitController:
    """Timed spawn/despawn state machine for the maze's roaming enemy.

    Dormant: count down ``spawn_delay``, then try to spawn on a random passage
    far enough from the agent. A failed search keeps the enemy dormant and is
    retried on the next tick.

    Active: random walk at a fixed speed. A step that would put a corner of the
    enemy's box into a wall is cancelled and a new heading is drawn; a free
    step is taken and occasionally re-aimed at random. After
    ``active_lifetime`` the enemy goes dormant again.
    """

    def __init__(self, tuning: Optional[PursuitTuning] = None, rng: Optional[RandomSource] = None) -> None:
        self.tuning = tuning or PursuitTuning()
        self.rng = rng if rng is not None else RandomSource()
        self.enemy = PursuitEnemy(size=Vec2(*self.tuning.size), timer=self.tuning.spawn_delay)

    # ------------------------ Read accessors ------------------------
    @property
    def is_active(self) -> bool:
        return self.enemy.is_active

    @property
    def state(self) -> PursuitState:
        return self.enemy.state

    @property
    def position(self) -> Vec2:
        return self.enemy.position

    @property
    def velocity(self) -> Vec2:
        return self.enemy.velocity

    @property
    def collision_size(self) -> Vec2:
        return self.enemy.size

    @property
    def timer(self) -> float:
        return self.enemy.timer

    # ------------------------ Core API ------------------------
    def reset(self) -> None:
        self.enemy.state = PursuitState.DORMANT
        self.enemy.timer = self.tuning.spawn_delay
        self.enemy.velocity = Vec2()

    def update(self, dt: float, agent_position: Vec2, grid: WallGrid, cell_size: int) -> None:
        """Advance the countdown and either try to spawn or move the active enemy."""
        enemy = self.enemy
        enemy.timer -= dt

        if not enemy.is_active:
            if enemy.timer <= _TIMER_EPSILON and self._spawn(agent_position, grid, cell_size):
                enemy.state = PursuitState.ACTIVE
                enemy.timer = self.tuning.active_lifetime
                logger.debug("Pursuit enemy spawned at (%.1f, %.1f)", enemy.position.x, enemy.position.y)
            return

        self._move(dt, grid, cell_size)
        if enemy.timer <= _TIMER_EPSILON:
            enemy.state = PursuitState.DORMANT
            enemy.timer = self.tuning.spawn_delay
            logger.debug("Pursuit enemy despawned; next spawn in %.1fs", enemy.timer)

    def push_agent(self, agent_position: Vec2, agent_size: Vec2, dt: float, grid: WallGrid, cell_size: int) -> Vec2:
        """Return the agent position after contact with the enemy.

        On overlap the agent is nudged directly away from the enemy at
        ``push_speed``; the nudge is dropped if it would put the agent in a wall.
        """
        enemy = self.enemy
        if not enemy.is_active:
            return agent_position
        if not boxes_overlap(agent_position, agent_size, enemy.position, enemy.size):
            return agent_position

        direction = (agent_position - enemy.position).normalized()
        if direction.length_squared() == 0:
            return agent_position

        pushed = agent_position + direction * (self.tuning.push_speed * dt)
        if hits_wall(pushed, agent_size, grid, cell_size, self.tuning.collision_inset):
            return agent_position
        return pushed

    # ------------------------ Internals ------------------------
    def _random_velocity(self) -> Vec2:
        return Vec2.from_angle(self.rng.direction_angle(), self.tuning.speed)

    def _spawn(self, agent_position: Vec2, grid: WallGrid, cell_size: int) -> bool:
        enemy = self.enemy
        for _ in range(self.tuning.spawn_attempts):
            x = self.rng.randrange(1, grid.width - 1)
            y = self.rng.randrange(1, grid.height - 1)
            if grid.is_wall(x, y):
                continue
            spawn = centered_in_cell((x, y), enemy.size, cell_size)
            if spawn.distance_to(agent_position) > self.tuning.min_spawn_distance:
                enemy.position = spawn
                enemy.velocity = self._random_velocity()
                return True
        logger.debug("Pursuit spawn search exhausted after %d attempts", self.tuning.spawn_attempts)
        return False

    def _move(self, dt: float, grid: WallGrid, cell_size: int) -> None:
        enemy = self.enemy
        target = enemy.position + enemy.velocity * dt
        if hits_wall(target, enemy.size, grid, cell_size, self.tuning.collision_inset):
            enemy.velocity = self._random_velocity()
            return
        enemy.position = target
        if self.rng.random() < self.tuning.direction_change_chance:
            enemy.velocity = self._random_velocity()


__all__ = ["PursuitController", "PursuitEnemy", "PursuitState"]
