"""Food pellets and their placement."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import numpy as np

from snake_duel.point import Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pellet:
    """A food item sitting on one cell."""

    point: Point

    @classmethod
    def new_random(
        cls, width: int, height: int, rng: np.random.Generator,
    ) -> Pellet:
        return cls(Point.new_random(width, height, rng))

    def to_dict(self) -> dict:
        return self.point.to_dict()


class FoodSpawner:
    """Keeps the board stocked with up to ``target_count`` pellets.

    Placement uses rejection sampling over interior cells: a candidate is
    redrawn whenever it lands on a snake or on another pellet. Each call to
    :meth:`replenish` gives up after ``max_attempts`` draws and leaves the
    board short until the next call.
    """

    def __init__(
        self,
        width: int,
        height: int,
        target_count: int = 7,
        rng: np.random.Generator | None = None,
        max_attempts: int = 10_000,
    ) -> None:
        if target_count < 1:
            raise ValueError("target_count must be at least 1.")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.width = width
        self.height = height
        self.target_count = target_count
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts
        self.pellets: list[Pellet] = []

    def __len__(self) -> int:
        return len(self.pellets)

    def __iter__(self) -> Iterator[Pellet]:
        return iter(self.pellets)

    def pellet_at(self, point: Point) -> Pellet | None:
        for pellet in self.pellets:
            if pellet.point == point:
                return pellet
        return None

    def replenish(
        self, occupied: Callable[[Point], bool] = lambda _: False,
    ) -> list[Pellet]:
        """Top the food back up to ``target_count``.

        *occupied* reports whether a snake covers a given point.
        Returns the list of newly placed pellets.
        """
        placed: list[Pellet] = []
        attempts = 0
        while len(self.pellets) < self.target_count:
            if attempts >= self.max_attempts:
                logger.warning(
                    "Gave up placing food after %d attempts (%d/%d pellets).",
                    attempts, len(self.pellets), self.target_count,
                )
                break
            attempts += 1
            candidate = Pellet.new_random(self.width, self.height, self.rng)
            if occupied(candidate.point):
                continue
            if self.pellet_at(candidate.point) is not None:
                continue
            self.pellets.append(candidate)
            placed.append(candidate)
        return placed

    def remove(self, pellet: Pellet) -> bool:
        """Remove a pellet. Returns True if it was on the board."""
        if pellet in self.pellets:
            self.pellets.remove(pellet)
            return True
        return False

    def to_dict(self) -> dict:
        return {
            "pellets": [p.to_dict() for p in self.pellets],
            "target_count": self.target_count,
        }
