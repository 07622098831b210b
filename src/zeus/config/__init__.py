from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from zeus.errors import MazeConfigError

logger = logging.getLogger(__name__)

MIN_MAZE_DIMENSION = 5


@dataclass(frozen=True)
class PlacementTuning:
    """Sampling budget and bias for choosing the item cell.

    ``min_item_distance`` is measured in cells between cell coordinates.
    """

    attempts: int = 150
    bias: float = 0.7
    min_item_distance: float = 15.625


@dataclass(frozen=True)
class PursuitTuning:
    spawn_delay: float = 5.0
    active_lifetime: float = 15.0
    speed: float = 80.0
    direction_change_chance: float = 0.02
    min_spawn_distance: float = 150.0
    spawn_attempts: int = 50
    push_speed: float = 50.0
    size: Tuple[float, float] = (24.0, 28.0)
    collision_inset: float = 2.0


@dataclass(frozen=True)
class AgentTuning:
    size: Tuple[float, float] = (24.0, 28.0)
    speed: float = 120.0
    item_size: float = 24.0
    exit_radius: float = 30.0
    visibility_radius: int = 3


@dataclass
class MazeSettings:
    """Runtime settings for the maze level.

    The settings can be constructed/overridden from:
    - The packaged defaults (zeus/config/maze.yaml)
    - An optional user YAML file overlaid on the defaults
    - Environment variables (prefix: ZEUS_)
    """

    width: int = 25
    height: int = 15
    cell_size: int = 32
    seed: Optional[int] = None
    collision_inset: float = 2.0
    placement_tuning: PlacementTuning = field(default_factory=PlacementTuning)
    pursuit_tuning: PursuitTuning = field(default_factory=PursuitTuning)
    agent: AgentTuning = field(default_factory=AgentTuning)

    # ------------------------ Derived tuning ------------------------
    def placement(self) -> PlacementTuning:
        return self.placement_tuning

    def pursuit(self) -> PursuitTuning:
        if self.pursuit_tuning.collision_inset == self.collision_inset:
            return self.pursuit_tuning
        return dataclasses.replace(self.pursuit_tuning, collision_inset=self.collision_inset)

    # ------------------------ Validation ------------------------
    def validate(self) -> None:
        """Raise MazeConfigError for values that cannot produce a playable maze."""
        if self.width < MIN_MAZE_DIMENSION or self.height < MIN_MAZE_DIMENSION:
            raise MazeConfigError(
                f"Maze must be at least {MIN_MAZE_DIMENSION}x{MIN_MAZE_DIMENSION}, got {self.width}x{self.height}"
            )
        if self.cell_size <= 0:
            raise MazeConfigError(f"cell_size must be positive, got {self.cell_size}")
        if self.collision_inset < 0:
            raise MazeConfigError(f"collision_inset must be non-negative, got {self.collision_inset}")

        p = self.placement_tuning
        if p.attempts < 0:
            raise MazeConfigError(f"placement attempts must be non-negative, got {p.attempts}")
        if not 0.0 <= p.bias <= 1.0:
            raise MazeConfigError(f"placement bias must be within [0, 1], got {p.bias}")

        e = self.pursuit_tuning
        if not 0.0 <= e.direction_change_chance <= 1.0:
            raise MazeConfigError(
                f"direction_change_chance must be within [0, 1], got {e.direction_change_chance}"
            )
        if e.spawn_attempts <= 0:
            raise MazeConfigError(f"spawn_attempts must be positive, got {e.spawn_attempts}")
        if e.spawn_delay < 0 or e.active_lifetime <= 0:
            raise MazeConfigError("spawn_delay must be >= 0 and active_lifetime must be > 0")
        if e.speed <= 0:
            raise MazeConfigError(f"pursuit speed must be positive, got {e.speed}")
        if e.push_speed < 0:
            raise MazeConfigError(f"push_speed must be non-negative, got {e.push_speed}")
        if p.min_item_distance < 0:
            raise MazeConfigError(f"min_item_distance must be non-negative, got {p.min_item_distance}")
        for name, size in (("pursuit size", e.size), ("agent size", self.agent.size)):
            if size[0] <= 0 or size[1] <= 0:
                raise MazeConfigError(f"{name} must be positive, got {size}")
            # A box wider than a cell centred in a passage overlaps the walls around it.
            if size[0] > self.cell_size or size[1] > self.cell_size:
                raise MazeConfigError(f"{name} {size} does not fit in a {self.cell_size} px cell")

    # ------------------------ Loading & Overrides ------------------------
    @staticmethod
    def _parse_yaml(text: str, source: object) -> dict:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise MazeConfigError(f"Invalid YAML in {source}: {exc}") from exc
        if not isinstance(data, dict):
            raise MazeConfigError(f"Maze settings in {source} must be a mapping, got {type(data).__name__}")
        return data

    @classmethod
    def _load_yaml(cls, path: Path) -> dict:
        with path.open("r", encoding="utf-8") as f:
            return cls._parse_yaml(f.read(), path)

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def _size(value: Any, default: Tuple[float, float]) -> Tuple[float, float]:
        if value is None:
            return default
        w, h = value
        return (float(w), float(h))

    @staticmethod
    def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, Mapping):
            raise MazeConfigError(f"'{name}' settings must be a mapping, got {type(section).__name__}")
        return section

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MazeSettings":
        placement = cls._section(data, "placement")
        pursuit = cls._section(data, "pursuit")
        agent = cls._section(data, "agent")
        try:
            settings = cls._build(data, placement, pursuit, agent)
        except (TypeError, ValueError) as exc:
            raise MazeConfigError(f"Invalid maze settings value: {exc}") from exc
        settings.validate()
        return settings

    @classmethod
    def _build(
        cls,
        data: Mapping[str, Any],
        placement: Mapping[str, Any],
        pursuit: Mapping[str, Any],
        agent: Mapping[str, Any],
    ) -> "MazeSettings":
        inset = float(data.get("collision_inset", 2.0))
        seed = data.get("seed")

        return cls(
            width=int(data.get("width", 25)),
            height=int(data.get("height", 15)),
            cell_size=int(data.get("cell_size", 32)),
            seed=int(seed) if seed is not None else None,
            collision_inset=inset,
            placement_tuning=PlacementTuning(
                attempts=int(placement.get("attempts", 150)),
                bias=float(placement.get("bias", 0.7)),
                min_item_distance=float(placement.get("min_item_distance", 15.625)),
            ),
            pursuit_tuning=PursuitTuning(
                spawn_delay=float(pursuit.get("spawn_delay", 5.0)),
                active_lifetime=float(pursuit.get("active_lifetime", 15.0)),
                speed=float(pursuit.get("speed", 80.0)),
                direction_change_chance=float(pursuit.get("direction_change_chance", 0.02)),
                min_spawn_distance=float(pursuit.get("min_spawn_distance", 150.0)),
                spawn_attempts=int(pursuit.get("spawn_attempts", 50)),
                push_speed=float(pursuit.get("push_speed", 50.0)),
                size=cls._size(pursuit.get("size"), (24.0, 28.0)),
                collision_inset=inset,
            ),
            agent=AgentTuning(
                size=cls._size(agent.get("size"), (24.0, 28.0)),
                speed=float(agent.get("speed", 120.0)),
                item_size=float(agent.get("item_size", 24.0)),
                exit_radius=float(agent.get("exit_radius", 30.0)),
                visibility_radius=int(agent.get("visibility_radius", 3)),
            ),
        )

    @staticmethod
    def env_overrides(env: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        env = os.environ if env is None else env
        mapping = {
            "ZEUS_MAZE_WIDTH": "width",
            "ZEUS_MAZE_HEIGHT": "height",
            "ZEUS_MAZE_SEED": "seed",
            "ZEUS_CELL_SIZE": "cell_size",
        }
        out: Dict[str, Any] = {}
        for key, name in mapping.items():
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                out[name] = int(raw)
            except ValueError as exc:
                raise MazeConfigError(f"{key} must be an integer, got {raw!r}") from exc
        return out

    @classmethod
    def load(cls, user_path: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> "MazeSettings":
        """Load settings from built-in defaults, an optional YAML override file and env vars."""
        default_data = cls._parse_yaml(
            resources.files("zeus.config").joinpath("maze.yaml").read_text(encoding="utf-8"),
            "packaged maze.yaml",
        )

        user_data: dict = {}
        if user_path is not None:
            if user_path.exists():
                user_data = cls._load_yaml(user_path)
                logger.info("Loaded maze settings from %s", user_path)
            else:
                logger.warning("Maze settings file not found: %s", user_path)

        merged = cls._deep_merge(default_data, user_data)
        merged = cls._deep_merge(merged, cls.env_overrides(env))
        settings = cls.from_dict(merged)
        logger.debug("Maze settings merged: %s", settings)
        return settings


__all__ = [
    "MIN_MAZE_DIMENSION",
    "AgentTuning",
    "MazeSettings",
    "PlacementTuning",
    "PursuitTuning",
]
