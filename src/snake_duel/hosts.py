"""Concrete host adapters: asyncio timer, in-process keyboard, text canvas."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping

import numpy as np

from snake_duel.interfaces import KeyListener

logger = logging.getLogger(__name__)

_DEFAULT_GLYPHS: dict[str, str] = {
    "green": "*",
    "orange": "O",
    "blue": "B",
}
_EMPTY = "."
_UNKNOWN = "?"


class AsyncioScheduler:
    """Runs recurring callbacks as tasks on the running event loop.

    Each recurring callback gets its own task. Cancelling a handle from
    inside its own callback is allowed; the loop exits once the callback
    returns.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def start_recurring(
        self, interval_ms: int, callback: Callable[[], None],
    ) -> asyncio.Task:
        if interval_ms < 1:
            raise ValueError("interval_ms must be at least 1.")
        task = asyncio.create_task(self._run(interval_ms / 1000.0, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel(self, handle: asyncio.Task) -> None:
        if handle.done():
            return
        # From inside the callback this takes effect at the next sleep.
        handle.cancel()

    @property
    def active(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    async def wait(self) -> None:
        """Wait until every recurring callback has stopped."""
        tasks = [t for t in self._tasks if not t.done()]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _run(self, interval: float, callback: Callable[[], None]) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                callback()
        except asyncio.CancelledError:
            logger.debug("Recurring callback cancelled.")
            raise
        except Exception:
            logger.exception("Recurring callback failed; stopping its timer.")


class KeyboardDispatcher:
    """In-process input source; :meth:`press` stands in for a key event."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    def on_key_down(self, callback: KeyListener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: KeyListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def press(self, key: str) -> None:
        """Deliver *key* to every registered listener."""
        # Listeners may detach themselves while handling the key.
        for listener in list(self._listeners):
            listener(key)


class TextRenderer:
    """NumPy-backed character canvas addressed in board cells.

    The canvas covers the boundary ring as well as the interior, so a snake
    that has just stepped onto a wall cell is still visible. Points outside
    the canvas are dropped. Coordinates use (x, y) ordering; the array is
    indexed ``cells[y, x]``.
    """

    def __init__(
        self,
        width: int,
        height: int,
        glyphs: Mapping[str, str] | None = None,
    ) -> None:
        if width < 1 or height < 1:
            raise ValueError("Canvas dimensions must be positive.")
        self.width = width
        self.height = height
        self.glyphs = dict(_DEFAULT_GLYPHS if glyphs is None else glyphs)
        self.cells = np.full((height + 1, width + 1), _EMPTY, dtype="<U1")
        self.frames_cleared = 0

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = _EMPTY
        self.frames_cleared += 1

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height

    def draw_point(self, x: int, y: int, color: str) -> None:
        if not self.in_bounds(x, y):
            return
        self.cells[y, x] = self.glyphs.get(color, _UNKNOWN)

    def glyph_at(self, x: int, y: int) -> str:
        return str(self.cells[y, x])

    def frame(self) -> str:
        """Return the canvas as newline-separated rows."""
        return "\n".join("".join(row) for row in self.cells.tolist())
