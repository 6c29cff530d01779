"""Board and timing configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardConfig:
    """Configuration for a duel.

    ``scale`` is the pixel size of one cell and exists only for pixel
    renderers. Neither the simulation nor :class:`TextRenderer`, which
    draws one character per cell, reads it.
    """

    width: int = 30
    height: int = 30
    scale: int = 15
    target_food_count: int = 7
    tick_interval_ms: int = 400
    max_placement_attempts: int = 10_000
    food_color: str = "green"
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width < 3 or self.height < 3:
            raise ValueError("width and height must each be at least 3.")
        if self.scale < 1:
            raise ValueError("scale must be at least 1.")
        if self.target_food_count < 1:
            raise ValueError("target_food_count must be at least 1.")
        if self.tick_interval_ms < 1:
            raise ValueError("tick_interval_ms must be at least 1.")
        if self.max_placement_attempts < 1:
            raise ValueError("max_placement_attempts must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> BoardConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
