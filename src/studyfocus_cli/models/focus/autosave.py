"""Periodic best-effort persistence of the running session."""

from __future__ import annotations

import httpx

from studyfocus_cli.utils.logger import get_logger

from .engine import Notifier, SessionsBackend, TimerEngine
from .scheduling import PeriodicSchedule
from .session import SessionSnapshot

logger = get_logger("focus.autosave")


class AutosavePublisher:
    """Pushes the session's counters to the service every ``interval`` seconds.

    Runs while the session is running or paused. A failed save is logged and
    reported, never retried on the spot: the next interval sends a newer
    snapshot that supersedes it.
    """

    def __init__(
        self,
        engine: TimerEngine,
        sessions_api: SessionsBackend,
        notifier: Notifier | None = None,
        *,
        interval: float = 30.0,
    ):
        self.engine = engine
        self.sessions_api = sessions_api
        self.notifier = notifier
        self.schedule = PeriodicSchedule("autosave", interval, self.flush)
        self.last_saved: SessionSnapshot | None = None
        self.failures = 0

    def start(self) -> None:
        """Hand the schedule to the engine, which cancels it on stop."""
        self.engine.add_schedule(self.schedule)

    async def flush(self) -> bool:
        """Send the current snapshot once. Returns True when it was stored."""
        if not self.engine.is_active or self.engine.session.id is None:
            return False

        snapshot = self.engine.session.snapshot()
        try:
            await self.sessions_api.update_session(
                snapshot.session_id, snapshot.to_payload(), retry=0
            )
        except (httpx.HTTPError, ValueError) as e:
            self.failures += 1
            logger.warning("autosave of %s failed: %s", snapshot.session_id, e)
            if self.notifier is not None:
                self.notifier.notify("Error", f"Autosave failed: {e}", "destructive")
            return False

        self.last_saved = snapshot
        logger.debug(
            "autosaved %s at %ds", snapshot.session_id, snapshot.elapsed_seconds
        )
        return True
