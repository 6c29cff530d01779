"""Snake representation, steering, and movement logic."""

from __future__ import annotations

import enum
import itertools
from collections import deque
from collections.abc import Iterable, Mapping

from snake_duel.food import Pellet
from snake_duel.point import Point


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

ARROW_KEYS: dict[str, Direction] = {
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
}

WASD_KEYS: dict[str, Direction] = {
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
}

# Segments gained per pellet eaten.
GROWTH_PER_PELLET = 2


class Snake:
    """A snake represented as an ordered deque of :class:`Point` segments.

    The head is ``body[0]``; the tail is ``body[-1]``. A snake accepts at
    most one direction change per tick; the lock is released by
    :meth:`end_tick`.
    """

    def __init__(
        self,
        key_bindings: Mapping[str, Direction],
        start: Point,
        direction: Direction = Direction.RIGHT,
        color: str = "orange",
    ) -> None:
        self.key_bindings: dict[str, Direction] = dict(key_bindings)
        self.body: deque[Point] = deque([start])
        self.pending_direction = direction
        self.growth_credit = 0
        self.direction_locked = False
        self.color = color

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.body[0]

    def contains(self, point: Point) -> bool:
        """Check whether any segment sits on *point*."""
        return point in self.body

    def handle_key_press(self, key: str) -> None:
        """Steer by key identifier; unbound keys are ignored."""
        direction = self.key_bindings.get(key)
        if direction is not None:
            self.request_direction_change(direction)

    def request_direction_change(self, new_direction: Direction) -> bool:
        """Change direction unless it is a reversal or already changed this tick.

        Returns True if the change was accepted.
        """
        if self.direction_locked:
            return False
        if new_direction is self.pending_direction.opposite:
            return False
        self.pending_direction = new_direction
        self.direction_locked = True
        return True

    def next_head(self) -> Point:
        """Compute the next head position without moving."""
        dx, dy = self.pending_direction.value
        return self.head.offset(dx, dy)

    def advance(self) -> Point:
        """Push a new head one cell along the pending direction."""
        new_head = self.next_head()
        self.body.appendleft(new_head)
        return new_head

    def trim_tail(self) -> Point | None:
        """Drop the tail, or spend one growth credit to keep it.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        if self.growth_credit == 0:
            return self.body.pop()
        self.growth_credit -= 1
        return None

    def grow(self) -> None:
        self.growth_credit += GROWTH_PER_PELLET

    def has_self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in itertools.islice(self.body, 1, None))

    def is_out_of_bounds(self, width: int, height: int) -> bool:
        return self.head.is_out_of_bounds(width, height)

    def consumed_food(self, pellets: Iterable[Pellet]) -> Pellet | None:
        """Return the first pellet under the head, if any."""
        head = self.head
        for pellet in pellets:
            if pellet.point == head:
                return pellet
        return None

    def end_tick(self) -> None:
        """Release the per-tick direction lock."""
        self.direction_locked = False

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [[seg.x, seg.y] for seg in self.body],
            "direction": self.pending_direction.name.lower(),
            "growth_credit": self.growth_credit,
            "color": self.color,
        }
