"""Tests for the Game wiring and its lifecycle."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from snake_duel.config import BoardConfig
from snake_duel.game import Game, default_snakes
from snake_duel.hosts import AsyncioScheduler, KeyboardDispatcher, TextRenderer
from snake_duel.point import Point
from snake_duel.simulation import CollisionKind, Simulation
from snake_duel.snake import ARROW_KEYS, Direction, Snake


class ManualScheduler:
    """Scheduler whose ticks are fired by the test."""

    def __init__(self):
        self.callbacks = {}
        self.cancelled = []
        self.intervals = []
        self._next = 0

    def start_recurring(self, interval_ms, callback):
        self._next += 1
        self.callbacks[self._next] = callback
        self.intervals.append(interval_ms)
        return self._next

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.callbacks.pop(handle, None)

    def fire(self):
        for callback in list(self.callbacks.values()):
            callback()


def _game(snakes=None, **cfg_kwargs):
    cfg = BoardConfig(seed=0, **cfg_kwargs)
    sim = Simulation(snakes or default_snakes(), config=cfg)
    scheduler = ManualScheduler()
    keys = KeyboardDispatcher()
    return Game(sim, scheduler, keys), scheduler, keys


class TestDefaultSnakes:
    def test_roster(self):
        first, second = default_snakes()
        assert first.head == Point(2, 2)
        assert first.pending_direction == Direction.RIGHT
        assert first.color == "orange"
        assert "ArrowUp" in first.key_bindings
        assert second.head == Point(18, 18)
        assert second.pending_direction == Direction.LEFT
        assert second.color == "blue"
        assert "w" in second.key_bindings


class TestGamePlay:
    def test_play_registers_listener_and_timer(self):
        game, scheduler, keys = _game()
        game.play()
        assert keys.listener_count == 1
        assert scheduler.intervals == [400]
        assert not game.stopped

    def test_play_twice_rejected(self):
        game, _, _ = _game()
        game.play()
        with pytest.raises(RuntimeError, match="already"):
            game.play()

    def test_interval_override(self):
        sim = Simulation(default_snakes())
        scheduler = ManualScheduler()
        Game(sim, scheduler, KeyboardDispatcher(), interval_ms=50).play()
        assert scheduler.intervals == [50]

    def test_keys_reach_every_snake(self):
        game, scheduler, keys = _game()
        game.play()
        keys.press("ArrowDown")
        keys.press("w")
        scheduler.fire()
        first, second = game.simulation.snakes
        assert first.head == Point(2, 3)
        assert second.head == Point(18, 17)

    def test_unknown_key_ignored(self):
        game, scheduler, keys = _game()
        game.play()
        keys.press("Escape")
        scheduler.fire()
        assert game.simulation.snakes[0].head == Point(3, 2)


class TestGameTermination:
    def test_stops_once_on_termination(self):
        snakes = [Snake(ARROW_KEYS, Point(28, 5), Direction.RIGHT)]
        game, scheduler, keys = _game(snakes)
        game.play()
        for _ in range(5):
            scheduler.fire()
        assert game.simulation.terminated
        assert game.simulation.collision.kind == CollisionKind.WALL
        assert game.stopped
        assert scheduler.cancelled == [1]
        assert keys.listener_count == 0
        assert game.simulation.tick_count == 2

    def test_no_events_after_termination(self):
        snakes = [Snake(ARROW_KEYS, Point(30, 5), Direction.RIGHT)]
        game, scheduler, keys = _game(snakes)
        game.play()
        scheduler.fire()
        assert game.stopped
        game.on_tick()
        game.on_key("ArrowUp")
        assert scheduler.cancelled == [1]
        assert game.simulation.snakes[0].pending_direction == Direction.RIGHT


    def test_failing_tick_releases_timer_and_input(self, monkeypatch):
        game, scheduler, keys = _game()
        game.play()

        def broken_tick():
            raise RuntimeError("renderer gone")

        monkeypatch.setattr(game.simulation, "tick", broken_tick)
        with pytest.raises(RuntimeError, match="renderer gone"):
            scheduler.fire()
        assert game.stopped
        assert scheduler.cancelled == [1]
        assert keys.listener_count == 0


class TestGameFromConfig:
    def test_builds_default_roster(self):
        renderer = TextRenderer(30, 30)
        game = Game.from_config(
            BoardConfig(seed=1),
            renderer,
            ManualScheduler(),
            KeyboardDispatcher(),
            rng=np.random.default_rng(1),
        )
        assert len(game.simulation.snakes) == 2
        assert game.simulation.renderer is renderer
        game.play()
        game.scheduler.fire()
        assert renderer.glyph_at(3, 2) == "O"
        assert renderer.glyph_at(17, 18) == "B"


class TestGameAsyncLoop:
    @pytest.mark.asyncio
    async def test_runs_to_completion(self):
        """A duel on the asyncio scheduler ends when a snake hits a wall."""
        scheduler = AsyncioScheduler()
        keys = KeyboardDispatcher()
        renderer = TextRenderer(30, 30)
        game = Game.from_config(
            BoardConfig(tick_interval_ms=1, seed=7), renderer, scheduler, keys,
        )
        game.play()
        keys.press("ArrowUp")
        await asyncio.wait_for(scheduler.wait(), timeout=5)
        assert game.stopped
        assert game.simulation.terminated
        assert keys.listener_count == 0
        assert scheduler.active == 0
        assert renderer.frames_cleared == game.simulation.tick_count

    @pytest.mark.asyncio
    async def test_failing_tick_detaches_input(self):
        class BrokenRenderer:
            def clear(self):
                raise RuntimeError("surface lost")

            def draw_point(self, x, y, color):
                pass

        scheduler = AsyncioScheduler()
        keys = KeyboardDispatcher()
        game = Game.from_config(
            BoardConfig(tick_interval_ms=1, seed=7),
            BrokenRenderer(),
            scheduler,
            keys,
        )
        game.play()
        await asyncio.wait_for(scheduler.wait(), timeout=5)
        assert game.stopped
        assert keys.listener_count == 0
        assert scheduler.active == 0
