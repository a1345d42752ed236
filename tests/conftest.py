"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class FakeNow:
    """Wall clock that follows a FakeClock."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.origin = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
        self.start = clock.value

    def __call__(self) -> datetime:
        return self.origin + timedelta(seconds=self.clock.value - self.start)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture()
def sessions_api():
    """Stand-in for StudySessionsAPI with async methods."""
    api = MagicMock()
    api.create_session = AsyncMock(return_value={"id": "session-1"})
    api.update_session = AsyncMock(return_value={})
    api.list_sessions = AsyncMock(return_value=[])
    return api


@pytest.fixture()
def notifier():
    return MagicMock()


@pytest.fixture()
def make_engine(sessions_api, notifier, clock):
    """Build a TimerEngine whose schedules never fire on their own."""
    from studyfocus_cli.models.focus.engine import TimerEngine

    def _make(**kwargs):
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("now", FakeNow(clock))
        kwargs.setdefault("tick_interval", 3600)
        kwargs.setdefault("milestone_interval", 3600)
        return TimerEngine(sessions_api, notifier, **kwargs)

    return _make


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance, and
    the instance yielded is the one commands obtain from get_config_service().
    """
    from studyfocus_cli.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("studyfocus_cli.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("studyfocus_cli.services.config_service.user_data_dir", return_value=tmpdir):
            svc = get_config_service()
            yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Logging and auth
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path):
    """Send the application log file into tmp_path."""
    import studyfocus_cli.utils.logger as logger_mod

    logger_mod._logger = None
    logging.getLogger("studyfocus_cli").handlers.clear()
    with patch("studyfocus_cli.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logging.getLogger("studyfocus_cli").handlers.clear()
    logger_mod._logger = None


@pytest.fixture(autouse=True)
def bypass_auth():
    """Skip authentication checks in all tests by default."""
    with patch("studyfocus_cli.commands.decorators._require_auth"):
        yield
