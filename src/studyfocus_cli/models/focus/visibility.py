"""Turns foreground/background signals into distraction accounting."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from studyfocus_cli.utils.logger import get_logger

from .engine import Notifier, TimerEngine

logger = get_logger("focus.visibility")


class VisibilityTracker:
    """Records a distraction for every hidden interval inside a running period.

    A hidden interval only counts when it both begins and ends while the
    engine is running: hiding while paused is ignored, and pausing or
    stopping while hidden discards the pending interval.
    """

    def __init__(
        self,
        engine: TimerEngine,
        notifier: Notifier | None = None,
        *,
        clock: Callable[[], float] | None = None,
    ):
        self.engine = engine
        self.notifier = notifier
        self.clock = clock or engine.clock
        self.hidden_at: float | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def is_attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self) -> None:
        """Subscribe to engine transitions."""
        if self._unsubscribe is None:
            self._unsubscribe = self.engine.add_listener(self._on_transition)

    def detach(self) -> None:
        """Unsubscribe and forget any pending hidden interval."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.hidden_at = None

    @contextmanager
    def attached(self) -> Iterator["VisibilityTracker"]:
        """Keep the tracker subscribed for the duration of the block."""
        self.attach()
        try:
            yield self
        finally:
            self.detach()

    def hidden(self) -> None:
        """The client lost foreground visibility."""
        if self.engine.state != "running":
            return
        if self.hidden_at is None:
            self.hidden_at = self.clock()

    def visible(self) -> int | None:
        """The client regained visibility.

        Returns the seconds credited as distraction, or None when nothing
        was counted.
        """
        hidden_at, self.hidden_at = self.hidden_at, None
        if hidden_at is None or self.engine.state != "running":
            return None

        gap = max(0, int(self.clock() - hidden_at))
        credited = self.engine.record_distraction(gap)
        logger.info("distraction of %ds recorded (%ds hidden)", credited, gap)
        if self.notifier is not None:
            self.notifier.notify(
                "Tab Switch Detected",
                f"Lost focus for {credited} seconds. Stay concentrated!",
                "destructive",
            )
        return credited

    def _on_transition(self, old_state: str, new_state: str) -> None:
        if new_state != "running" and self.hidden_at is not None:
            logger.debug("hidden interval dropped on %s -> %s", old_state, new_state)
            self.hidden_at = None
        if new_state == "stopped":
            # the engine drops all listeners when a session stops
            self._unsubscribe = None
