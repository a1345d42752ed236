"""Periodic callbacks on the asyncio event loop."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable

from studyfocus_cli.utils.logger import get_logger

logger = get_logger("focus.scheduling")

ScheduleCallback = Callable[[], Awaitable[object] | object]


class PeriodicSchedule:
    """Runs ``callback`` every ``interval`` seconds in its own task.

    The first call happens one full interval after ``start()``. A callback
    that raises is logged and the schedule keeps going; a coroutine callback
    is awaited before the next interval begins.
    """

    def __init__(self, name: str, interval: float, callback: ScheduleCallback):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.callback = callback
        self._task: asyncio.Task | None = None
        self._cancelling: set[asyncio.Task] = set()

    @property
    def active(self) -> bool:
        """Whether the schedule is currently running."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start firing; no-op when already active."""
        if self.active:
            return
        self._task = asyncio.get_running_loop().create_task(
            self._run(), name=f"studyfocus-{self.name}"
        )

    def cancel(self) -> None:
        """Stop firing. The task finishes on the next loop iteration."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        self._cancelling.add(task)
        task.add_done_callback(self._cancelling.discard)

    async def aclose(self) -> None:
        """Cancel and wait until no callback of this schedule is running."""
        self.cancel()
        pending = list(self._cancelling)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                result = self.callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("%s callback failed", self.name)
