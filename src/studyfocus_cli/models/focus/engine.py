"""Concentration-mode timer engine.

The engine owns one :class:`FocusSession` at a time and drives it through
``idle -> running <-> paused -> idle``. All mutation happens on the asyncio
event loop: the tick and milestone schedules, externally triggered
visibility events and user commands each run to completion before the next
one starts, so no locking is needed.

Collaborators plug in through two seams:

* ``add_listener`` - called with ``(old_state, new_state)`` on every
  transition (used by the visibility tracker);
* ``add_schedule`` - a periodic job that keeps running while paused and is
  cancelled by ``stop()`` (used by the autosave publisher).

Both are released when the session stops.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Protocol

import httpx

from studyfocus_cli.utils.logger import get_logger

from .exceptions import InvalidTransitionError, SessionCreateError
from .scheduling import PeriodicSchedule
from .session import NO_REASON, FocusSession, PauseEntry, SessionSnapshot, finalize

logger = get_logger("focus.engine")

TransitionListener = Callable[[str, str], None]

MILESTONE_TITLE = "5 Minutes Passed"
MILESTONE_MESSAGE = "Keep focusing!"


class SessionsBackend(Protocol):
    """The part of the study-sessions API the engine relies on."""

    async def create_session(self, *, concentration_mode: bool = True) -> dict: ...

    async def update_session(
        self, session_id: str, payload: dict[str, Any], *, retry: int | None = None
    ) -> dict: ...


class Notifier(Protocol):
    """User-facing side effects."""

    def notify(self, title: str, message: str, variant: str = "default") -> None: ...

    def beep(self) -> None: ...


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class TimerEngine:
    """Elapsed-time counter with pause and distraction accounting."""

    def __init__(
        self,
        sessions_api: SessionsBackend,
        notifier: Notifier | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = utc_now,
        tick_interval: float = 1.0,
        milestone_interval: float = 300.0,
        concentration_mode: bool = True,
    ):
        self.sessions_api = sessions_api
        self.notifier = notifier
        self.clock = clock
        self.now = now
        self.concentration_mode = concentration_mode
        self.session = FocusSession()

        self._tick = PeriodicSchedule("tick", tick_interval, self.tick)
        self._milestone = PeriodicSchedule(
            "milestone", milestone_interval, self._fire_milestone
        )
        self._schedules: list[PeriodicSchedule] = []
        self._listeners: list[TransitionListener] = []
        self._starting = False
        self._pause_started: float | None = None
        self._pause_reason: str | None = None

    async def __aenter__(self) -> "TimerEngine":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def state(self) -> str:
        """Current lifecycle state: idle, running or paused."""
        return self.session.state

    @property
    def is_active(self) -> bool:
        return self.session.is_active

    def paused_for(self) -> int:
        """Seconds spent in the current pause, 0 when not paused."""
        if self.state != "paused" or self._pause_started is None:
            return 0
        return max(0, int(self.clock() - self._pause_started))

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def add_listener(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a transition listener and return its unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def add_schedule(self, schedule: PeriodicSchedule) -> None:
        """Attach a job that runs while running or paused until ``stop()``."""
        if schedule not in self._schedules:
            self._schedules.append(schedule)
        if self.is_active:
            schedule.start()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    async def start(self) -> FocusSession:
        """Create a remote session and begin counting.

        Raises:
            InvalidTransitionError: If a session is already in progress
            SessionCreateError: If the service could not create the session;
                the engine stays idle
        """
        if self.state != "idle" or self._starting:
            raise InvalidTransitionError("start", "starting" if self._starting else self.state)

        self._starting = True
        try:
            self.session = FocusSession()
            try:
                created = await self.sessions_api.create_session(
                    concentration_mode=self.concentration_mode
                )
                session_id = str(created["id"])
            except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
                logger.warning("session creation failed: %s", e)
                self._notify("Error", f"Could not start session: {e}", "destructive")
                raise SessionCreateError(str(e)) from e
        finally:
            self._starting = False

        self.session.id = session_id
        self.session.started_at = self.now().isoformat()
        self._transition("running")
        self._tick.start()
        self._milestone.start()
        for schedule in self._schedules:
            schedule.start()

        logger.info("session %s started", session_id)
        return self.session

    def tick(self) -> None:
        """Count one second of running time; ignored unless running."""
        if self.state != "running":
            return
        self.session.elapsed_seconds += 1

    def pause(self, reason: str | None = None) -> None:
        """Suspend counting. Autosave keeps running."""
        if self.state != "running":
            raise InvalidTransitionError("pause", self.state)

        self._pause_started = self.clock()
        self._pause_reason = reason or None
        self._tick.cancel()
        self._milestone.cancel()
        self._transition("paused")
        logger.info("session %s paused", self.session.id)

    def resume(self, reason: str | None = None) -> PauseEntry:
        """Close the current pause, log it and resume counting.

        ``reason`` overrides the reason given at pause time; when neither is
        set the entry is recorded with :data:`NO_REASON`.
        """
        if self.state != "paused":
            raise InvalidTransitionError("resume", self.state)

        entry = self._close_pause(reason)
        self._transition("running")
        self._tick.start()
        self._milestone.start()
        logger.info(
            "session %s resumed after %ds (%s)",
            self.session.id,
            entry.duration_seconds,
            entry.reason,
        )
        return entry

    def record_distraction(self, seconds: int) -> int:
        """Account for a lost-focus interval; returns the seconds credited.

        Only counted while running; returns 0 otherwise.
        """
        if self.state != "running":
            logger.debug("distraction of %ss ignored while %s", seconds, self.state)
            return 0
        return self.session.record_distraction(seconds)

    async def stop(self) -> SessionSnapshot:
        """Finish the session, flush the final snapshot and return to idle.

        A pause still open at stop time is closed and logged first. Failure
        to deliver the final snapshot is reported but does not prevent the
        transition; the returned snapshot always holds the final counters.
        """
        if not self.is_active:
            raise InvalidTransitionError("stop", self.state)

        if self.state == "paused":
            self._close_pause(None)

        await self._cancel_schedules()
        self._transition("stopped")
        self._listeners.clear()
        self._schedules.clear()

        snapshot = finalize(self.session.snapshot(), self.now().isoformat())
        self.session = FocusSession()
        await self._send_final(snapshot)
        return snapshot

    async def close(self) -> SessionSnapshot | None:
        """Stop an active session, or release schedules left over when idle."""
        if self.is_active:
            return await self.stop()
        await self._cancel_schedules()
        self._listeners.clear()
        self._schedules.clear()
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _transition(self, new_state: str) -> None:
        old_state = self.session.state
        self.session.state = new_state
        for listener in list(self._listeners):
            listener(old_state, new_state)

    def _close_pause(self, reason: str | None) -> PauseEntry:
        started = self._pause_started if self._pause_started is not None else self.clock()
        entry = PauseEntry(
            reason=reason or self._pause_reason or NO_REASON,
            duration_seconds=max(0, int(self.clock() - started)),
            ended_at=self.now().isoformat(),
        )
        self.session.record_pause(entry)
        self._pause_started = None
        self._pause_reason = None
        return entry

    async def _cancel_schedules(self) -> None:
        await self._tick.aclose()
        await self._milestone.aclose()
        for schedule in self._schedules:
            await schedule.aclose()

    async def _send_final(self, snapshot: SessionSnapshot) -> None:
        if snapshot.session_id is None:
            return
        try:
            await self.sessions_api.update_session(
                snapshot.session_id, snapshot.to_payload()
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("final snapshot for %s not saved: %s", snapshot.session_id, e)
            self._notify("Error", f"Could not save session: {e}", "destructive")
            return

        logger.info(
            "session %s stopped: %ds elapsed, %d distractions",
            snapshot.session_id,
            snapshot.elapsed_seconds,
            snapshot.distraction_count,
        )
        self._notify(
            "Session Complete!",
            f"Focused for {snapshot.focused_seconds // 60} minutes "
            f"with {snapshot.distraction_count} interruptions.",
        )

    def _fire_milestone(self) -> None:
        if self.state != "running":
            return
        logger.info("milestone reached at %ds", self.session.elapsed_seconds)
        if self.notifier is not None:
            self.notifier.beep()
        self._notify(MILESTONE_TITLE, MILESTONE_MESSAGE)

    def _notify(self, title: str, message: str, variant: str = "default") -> None:
        if self.notifier is not None:
            self.notifier.notify(title, message, variant)
