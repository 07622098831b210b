import dataclasses

import pytest

from zeus.config import PursuitTuning
from zeus.maze.collision import Vec2
from zeus.maze.pursuit import PursuitController, PursuitState
from zeus.rng import RandomSource

CELL = 32
FAR_CORNER = Vec2(0.0, 0.0)


def make_controller(**overrides):
    tuning = dataclasses.replace(PursuitTuning(), **overrides)
    return PursuitController(tuning, RandomSource(42))


def activate_at(controller, position, velocity, timer=10.0):
    controller.enemy.state = PursuitState.ACTIVE
    controller.enemy.position = position
    controller.enemy.velocity = velocity
    controller.enemy.timer = timer


def test_starts_dormant_with_spawn_delay():
    controller = make_controller()
    assert controller.is_active is False
    assert controller.state is PursuitState.DORMANT
    assert controller.timer == pytest.approx(5.0)
    assert controller.collision_size == Vec2(24.0, 28.0)


@pytest.mark.parametrize("dt,ticks", [(0.25, 20), (0.1, 50), (1.0, 5), (5.0, 1)])
def test_spawns_exactly_when_spawn_delay_elapses(open_grid, dt, ticks):
    controller = make_controller(min_spawn_distance=0.0)
    for _ in range(ticks - 1):
        controller.update(dt, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is False

    controller.update(dt, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is True
    assert controller.timer == pytest.approx(15.0)
    assert controller.velocity.length() == pytest.approx(80.0)


def test_spawns_once_and_despawns_after_lifetime(open_grid):
    controller = make_controller(min_spawn_distance=0.0)
    spawns = 0
    was_active = False
    for _ in range(20 + 59):
        controller.update(0.25, FAR_CORNER, open_grid, CELL)
        if controller.is_active and not was_active:
            spawns += 1
        was_active = controller.is_active
    assert spawns == 1
    assert controller.is_active is True

    controller.update(0.25, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is False
    assert controller.timer == pytest.approx(5.0)


def test_spawn_lands_on_passage_away_from_agent(open_grid):
    agent = Vec2(36.0, 34.0)
    controller = make_controller()
    controller.update(5.0, agent, open_grid, CELL)
    assert controller.is_active
    assert controller.position.distance_to(agent) > 150.0
    cx = int((controller.position.x + 12) // CELL)
    cy = int((controller.position.y + 14) // CELL)
    assert open_grid.is_passage(cx, cy)


def test_exhausted_spawn_search_stays_dormant_and_retries(open_grid):
    controller = make_controller(min_spawn_distance=1e9)
    controller.update(5.0, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is False
    assert controller.timer <= 0

    controller.update(0.1, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is False

    controller.tuning = dataclasses.replace(controller.tuning, min_spawn_distance=0.0)
    controller.update(0.1, FAR_CORNER, open_grid, CELL)
    assert controller.is_active is True


def test_blocked_step_keeps_position_and_picks_new_heading(corridor_grid):
    controller = make_controller()
    start = Vec2(68.0, 34.0)
    activate_at(controller, start, Vec2(0.0, -80.0))

    controller.update(0.1, FAR_CORNER, corridor_grid, CELL)

    assert controller.position == start
    assert controller.velocity.length() == pytest.approx(80.0)
    assert controller.is_active is True


def test_free_step_moves_along_velocity(corridor_grid):
    controller = make_controller(direction_change_chance=0.0)
    activate_at(controller, Vec2(68.0, 34.0), Vec2(80.0, 0.0))

    controller.update(0.1, FAR_CORNER, corridor_grid, CELL)

    assert controller.position.x == pytest.approx(76.0)
    assert controller.position.y == pytest.approx(34.0)
    assert controller.velocity == Vec2(80.0, 0.0)


def test_free_step_may_rerandomise_heading(corridor_grid):
    controller = make_controller(direction_change_chance=1.0)
    activate_at(controller, Vec2(68.0, 34.0), Vec2(80.0, 0.0))

    controller.update(0.1, FAR_CORNER, corridor_grid, CELL)

    assert controller.position.x == pytest.approx(76.0)
    assert controller.velocity != Vec2(80.0, 0.0)
    assert controller.velocity.length() == pytest.approx(80.0)


def test_push_moves_agent_away_from_enemy(corridor_grid):
    controller = make_controller()
    activate_at(controller, Vec2(68.0, 34.0), Vec2())
    pushed = controller.push_agent(Vec2(70.0, 34.0), Vec2(24, 28), 0.1, corridor_grid, CELL)
    assert pushed.x == pytest.approx(75.0)
    assert pushed.y == pytest.approx(34.0)


def test_push_is_dropped_when_it_would_enter_a_wall(corridor_grid):
    controller = make_controller()
    activate_at(controller, Vec2(68.0, 34.0), Vec2())
    agent = Vec2(68.0, 40.0)
    assert controller.push_agent(agent, Vec2(24, 28), 0.1, corridor_grid, CELL) == agent


def test_no_push_when_coincident_dormant_or_apart(corridor_grid):
    controller = make_controller()
    same = Vec2(68.0, 34.0)
    activate_at(controller, same, Vec2())
    assert controller.push_agent(same, Vec2(24, 28), 0.1, corridor_grid, CELL) == same

    apart = Vec2(140.0, 34.0)
    assert controller.push_agent(apart, Vec2(24, 28), 0.1, corridor_grid, CELL) == apart

    controller.reset()
    near = Vec2(70.0, 34.0)
    assert controller.push_agent(near, Vec2(24, 28), 0.1, corridor_grid, CELL) == near


def test_reset_returns_to_dormant():
    controller = make_controller()
    activate_at(controller, Vec2(10, 10), Vec2(80, 0), timer=3.0)
    controller.reset()
    assert controller.state is PursuitState.DORMANT
    assert controller.timer == pytest.approx(5.0)
    assert controller.velocity == Vec2()
