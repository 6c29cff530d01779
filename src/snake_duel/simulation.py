"""Tick-driven simulation of a snake duel."""

from __future__ import annotations

import enum
import itertools
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from snake_duel.config import BoardConfig
from snake_duel.food import FoodSpawner, Pellet
from snake_duel.interfaces import Renderer
from snake_duel.point import Point
from snake_duel.snake import Snake

logger = logging.getLogger(__name__)


class SimulationState(enum.Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


class CollisionKind(enum.Enum):
    """Why a round ended."""

    WALL = "wall"
    SELF = "self"
    SNAKE = "snake"


@dataclass(frozen=True)
class Collision:
    """A terminal condition found by the pre-movement check.

    ``other_index`` is only set for :attr:`CollisionKind.SNAKE` and names
    the snake whose body was hit.
    """

    kind: CollisionKind
    snake_index: int
    other_index: int | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "snake_index": self.snake_index,
            "other_index": self.other_index,
        }


class Simulation:
    """Owns the snakes and the food and advances them one tick at a time.

    Collisions are checked against the positions left by the previous
    tick, before anything moves. A snake that steps into a wall or another
    body therefore stays visible there for one frame, and the round ends on
    the following :meth:`tick`. Once terminated the simulation never runs
    again; build a new instance to replay.
    """

    def __init__(
        self,
        snakes: Sequence[Snake],
        config: BoardConfig | None = None,
        renderer: Renderer | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        if not snakes:
            raise ValueError("A simulation needs at least one snake.")
        cfg = config or BoardConfig()
        self.config = cfg
        self.snakes: list[Snake] = list(snakes)
        self.renderer = renderer
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.food = FoodSpawner(
            cfg.width,
            cfg.height,
            target_count=cfg.target_food_count,
            rng=self.rng,
            max_attempts=cfg.max_placement_attempts,
        )
        self.state = SimulationState.RUNNING
        self.collision: Collision | None = None
        self.tick_count = 0

    @property
    def terminated(self) -> bool:
        return self.state is SimulationState.TERMINATED

    def find_collision(self) -> Collision | None:
        """Return the first terminal condition on the current board, if any."""
        width, height = self.config.width, self.config.height
        for i, snake in enumerate(self.snakes):
            if snake.has_self_collision():
                return Collision(CollisionKind.SELF, i)
            if snake.is_out_of_bounds(width, height):
                return Collision(CollisionKind.WALL, i)

        # Only a later snake's body is checked against an earlier head.
        for i, j in itertools.combinations(range(len(self.snakes)), 2):
            if self.snakes[j].contains(self.snakes[i].head):
                return Collision(CollisionKind.SNAKE, i, j)
        return None

    def tick(self) -> dict:
        """Advance the simulation by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.terminated:
            return self.get_state()

        collision = self.find_collision()
        if collision is not None:
            self._terminate(collision)
            return self.get_state()

        if self.renderer is not None:
            self.renderer.clear()
            for pellet in self.food:
                self._draw(pellet.point, self.config.food_color)

        for snake in self.snakes:
            snake.advance()
            snake.trim_tail()
            if self.renderer is not None:
                for seg in snake.body:
                    self._draw(seg, snake.color)
            eaten = snake.consumed_food(self.food)
            if eaten is not None:
                self.food.remove(eaten)
                snake.grow()
            snake.end_tick()

        self.replenish_food()
        self.tick_count += 1
        return self.get_state()

    def replenish_food(self) -> list[Pellet]:
        """Place pellets until the target count is met."""
        return self.food.replenish(self.is_occupied)

    def is_occupied(self, point: Point) -> bool:
        """Check whether any snake covers *point*."""
        return any(snake.contains(point) for snake in self.snakes)

    def get_state(self) -> dict:
        """Return the full, serializable simulation state."""
        return {
            "tick": self.tick_count,
            "state": self.state.value,
            "collision": (
                self.collision.to_dict() if self.collision is not None else None
            ),
            "snakes": [s.to_dict() for s in self.snakes],
            "food": self.food.to_dict(),
            "board": {
                "width": self.config.width,
                "height": self.config.height,
            },
        }

    def _draw(self, point: Point, color: str) -> None:
        assert self.renderer is not None  # noqa: S101
        self.renderer.draw_point(point.x, point.y, color)

    def _terminate(self, collision: Collision) -> None:
        self.state = SimulationState.TERMINATED
        self.collision = collision
        if collision.kind is CollisionKind.SNAKE:
            logger.info(
                "Snake %d ran into snake %d at tick %d.",
                collision.snake_index, collision.other_index, self.tick_count,
            )
        else:
            logger.info(
                "Snake %d hit %s at tick %d.",
                collision.snake_index,
                "a wall" if collision.kind is CollisionKind.WALL else "itself",
                self.tick_count,
            )
