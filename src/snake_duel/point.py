"""Immutable grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point:
    """An (x, y) cell on the board.

    ``x`` grows to the right and ``y`` grows downward. The outermost ring
    of cells (``x`` or ``y`` equal to 0 or to the board size) is wall.
    """

    x: int
    y: int

    def is_out_of_bounds(self, width: int, height: int) -> bool:
        """Check whether the point lies on or beyond the board edge."""
        return self.x <= 0 or self.x >= width or self.y <= 0 or self.y >= height

    def offset(self, dx: int, dy: int) -> Point:
        return Point(self.x + dx, self.y + dy)

    @classmethod
    def new_random(
        cls, width: int, height: int, rng: np.random.Generator,
    ) -> Point:
        """Draw a uniformly random interior point."""
        return cls(int(rng.integers(1, width)), int(rng.integers(1, height)))

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}
