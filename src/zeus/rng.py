from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling for generation, placement and the pursuit enemy
    - support optional deterministic seeding for tests
    - provide the direction-angle helper used by every random walk
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randrange(self, start: int, stop: int | None = None) -> int:
        """Return an integer in [start, stop), or [0, start) when stop is omitted."""
        if stop is None:
            return self._rng.randrange(start)
        return self._rng.randrange(start, stop)

    def random(self) -> float:
        return self._rng.random()

    def direction_angle(self) -> float:
        """Angle in radians sampled uniformly from [0, 2*pi)."""
        return self._rng.random() * math.tau


__all__ = ["RandomSource"]
