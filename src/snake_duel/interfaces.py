"""Boundary collaborators the simulation and game wiring depend on."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

KeyListener = Callable[[str], None]


class Renderer(Protocol):
    """Drawing surface addressed in board cells."""

    def clear(self) -> None: ...

    def draw_point(self, x: int, y: int, color: str) -> None: ...


class Scheduler(Protocol):
    """Fixed-interval timer driving the tick loop."""

    def start_recurring(
        self, interval_ms: int, callback: Callable[[], None],
    ) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class InputSource(Protocol):
    """Keyboard event feed delivering key identifiers."""

    def on_key_down(self, callback: KeyListener) -> None: ...

    def remove_listener(self, callback: KeyListener) -> None: ...
