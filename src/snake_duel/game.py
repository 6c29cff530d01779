"""Wires a simulation to its timer and keyboard, and runs it to the end."""

from __future__ import annotations

import logging
from typing import Any

import numpy as np

from snake_duel.config import BoardConfig
from snake_duel.interfaces import InputSource, Renderer, Scheduler
from snake_duel.point import Point
from snake_duel.simulation import Simulation
from snake_duel.snake import ARROW_KEYS, WASD_KEYS, Direction, Snake

logger = logging.getLogger(__name__)


def default_snakes() -> list[Snake]:
    """The standard roster: arrow keys versus WASD."""
    return [
        Snake(ARROW_KEYS, Point(2, 2), Direction.RIGHT, color="orange"),
        Snake(WASD_KEYS, Point(18, 18), Direction.LEFT, color="blue"),
    ]


class Game:
    """Drives a :class:`Simulation` from a scheduler and an input source.

    :meth:`play` registers one key listener and one recurring tick. Both
    are released together, once, on the first tick that finds the
    simulation terminated.
    """

    def __init__(
        self,
        simulation: Simulation,
        scheduler: Scheduler,
        input_source: InputSource,
        interval_ms: int | None = None,
    ) -> None:
        self.simulation = simulation
        self.scheduler = scheduler
        self.input_source = input_source
        self.interval_ms = (
            interval_ms
            if interval_ms is not None
            else simulation.config.tick_interval_ms
        )
        self._handle: Any = None
        self._started = False
        self._stopped = False

    @classmethod
    def from_config(
        cls,
        config: BoardConfig,
        renderer: Renderer | None,
        scheduler: Scheduler,
        input_source: InputSource,
        rng: np.random.Generator | None = None,
    ) -> Game:
        """Build a game with the default two-snake roster."""
        simulation = Simulation(
            default_snakes(), config=config, renderer=renderer, rng=rng,
        )
        return cls(simulation, scheduler, input_source)

    @property
    def stopped(self) -> bool:
        return self._stopped

    def play(self) -> None:
        """Attach the key listener and start ticking."""
        if self._started:
            raise RuntimeError("Game has already been started.")
        self._started = True
        self.input_source.on_key_down(self.on_key)
        self._handle = self.scheduler.start_recurring(
            self.interval_ms, self.on_tick,
        )
        logger.info(
            "Game started with %d snakes (tick every %d ms).",
            len(self.simulation.snakes), self.interval_ms,
        )

    def on_key(self, key: str) -> None:
        """Forward a key press to every snake."""
        if self._stopped:
            return
        for snake in self.simulation.snakes:
            snake.handle_key_press(key)

    def on_tick(self) -> None:
        if self._stopped:
            return
        try:
            self.simulation.tick()
        except Exception:
            # The scheduler stops on a failing callback; release input too.
            self._stop()
            raise
        if self.simulation.terminated:
            self._stop()

    def _stop(self) -> None:
        """Cancel the timer and detach input exactly once."""
        if self._stopped:
            return
        self._stopped = True
        self.scheduler.cancel(self._handle)
        self.input_source.remove_listener(self.on_key)
        self._handle = None
        logger.info(
            "Game over after %d ticks.", self.simulation.tick_count,
        )
