"""Tests for the Pomodoro commands."""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from typer.testing import CliRunner

from studyfocus_cli.commands.pomodoro import PomodoroRecorder, app, run_pomodoro
from studyfocus_cli.models.focus.controller import PomodoroController
from studyfocus_cli.models.focus.cycling import PomodoroRecord, PomodoroTimer

runner = CliRunner()

SESSIONS = [
    {"id": 2, "workDuration": 25, "breakDuration": 5, "completedCycles": 2, "createdAt": "2026-03-01T09:00:00Z"},
    {"id": 1, "workDuration": 50, "breakDuration": 10, "completedCycles": 1, "createdAt": "2026-02-28T09:00:00Z"},
]


@pytest.fixture
def mock_api(mocker):
    mocker.patch("studyfocus_cli.commands.pomodoro.APIClient")
    api = mocker.patch("studyfocus_cli.commands.pomodoro.PomodoroSessionsAPI").return_value
    api.list_sessions = AsyncMock(return_value=SESSIONS)
    api.create_session = AsyncMock(return_value={"id": 3})
    return api


class TestPomodoroRecorder:
    @pytest.mark.asyncio
    async def test_saves_in_background(self):
        api = MagicMock()
        api.create_session = AsyncMock(return_value={"id": 1})
        notifier = MagicMock()
        recorder = PomodoroRecorder(api, notifier)

        recorder(PomodoroRecord(25, 5))
        await recorder.drain()

        api.create_session.assert_awaited_once_with(25, 5, 1)
        assert recorder.saved == 1
        notifier.notify.assert_called_once_with("Session Saved", "Completed 1 cycle!")

    @pytest.mark.asyncio
    async def test_failure_is_reported(self):
        api = MagicMock()
        api.create_session = AsyncMock(side_effect=httpx.ConnectError("offline"))
        notifier = MagicMock()
        recorder = PomodoroRecorder(api, notifier)

        recorder(PomodoroRecord(25, 5))
        await recorder.drain()

        assert recorder.saved == 0
        assert notifier.notify.call_args.args[2] == "destructive"


@pytest.mark.asyncio
async def test_run_pomodoro_quits_on_q():
    timer = PomodoroTimer()
    controller = PomodoroController(timer)
    keyboard = MagicMock()
    keyboard.get_events.side_effect = [[" "], ["p"], ["q"]]
    rendered = []

    await run_pomodoro(timer, controller, keyboard, lambda: rendered.append(1), poll_interval=0)

    assert controller.quit_requested
    assert not timer.is_running
    assert timer.phase == "work"
    assert len(rendered) == 3


def test_start_rejects_out_of_range_durations(tmp_config, mock_api):
    result = runner.invoke(app, ["start", "--work", "200"])
    assert result.exit_code == 2
    assert "Work must be 1-180 minutes" in result.output


def test_history_pretty(tmp_config, mock_api):
    result = runner.invoke(app, ["history"])

    assert result.exit_code == 0
    assert "Pomodoro Sessions (2)" in result.output
    assert "Total Study Time: 1h 40m" in result.output
    assert "Completed Cycles: 3" in result.output


def test_history_json(tmp_config, mock_api):
    result = runner.invoke(app, ["history", "-o", "json", "--limit", "1"])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["total_cycles"] == 3
    assert [s["id"] for s in data["sessions"]] == [2]


def test_history_empty(tmp_config, mock_api):
    mock_api.list_sessions.return_value = []
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "No Pomodoro sessions found" in result.output
