"""Snake Duel — two-player snake simulation engine."""

from snake_duel.config import BoardConfig
from snake_duel.food import FoodSpawner, Pellet
from snake_duel.game import Game, default_snakes
from snake_duel.hosts import AsyncioScheduler, KeyboardDispatcher, TextRenderer
from snake_duel.point import Point
from snake_duel.simulation import (
    Collision,
    CollisionKind,
    Simulation,
    SimulationState,
)
from snake_duel.snake import ARROW_KEYS, WASD_KEYS, Direction, Snake

__all__ = [
    "ARROW_KEYS",
    "AsyncioScheduler",
    "BoardConfig",
    "Collision",
    "CollisionKind",
    "Direction",
    "FoodSpawner",
    "Game",
    "KeyboardDispatcher",
    "Pellet",
    "Point",
    "Simulation",
    "SimulationState",
    "Snake",
    "TextRenderer",
    "WASD_KEYS",
    "default_snakes",
]
