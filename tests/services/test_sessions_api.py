"""Tests for the study-session and Pomodoro-session endpoints."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from studyfocus_cli.models.focus.session import SessionSnapshot
from studyfocus_cli.services.api.client import APIClient
from studyfocus_cli.services.api.pomodoro_sessions import PomodoroSessionsAPI
from studyfocus_cli.services.api.study_sessions import StudySessionsAPI


def _response(method, path, data, status=200):
    return httpx.Response(
        status, json=data, request=httpx.Request(method, f"https://studyfocus.app{path}")
    )


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.patch = AsyncMock()
    return client


class TestStudySessionsAPI:
    @pytest.mark.asyncio
    async def test_create_session(self, mock_client):
        mock_client.post.return_value = _response(
            "POST", "/api/study-sessions", {"id": 12, "duration": 0}
        )
        api = StudySessionsAPI(mock_client)

        created = await api.create_session()

        assert created["id"] == 12
        mock_client.post.assert_awaited_once_with(
            "/api/study-sessions",
            json={
                "duration": 0,
                "tabSwitches": 0,
                "timeWasted": 0,
                "isConcentrationMode": True,
            },
        )

    @pytest.mark.asyncio
    async def test_update_session_passes_retry(self, mock_client):
        mock_client.patch.return_value = _response("PATCH", "/api/study-sessions/12", {})
        api = StudySessionsAPI(mock_client)

        await api.update_session("12", {"duration": 2}, retry=0)

        mock_client.patch.assert_awaited_once_with(
            "/api/study-sessions/12", json={"duration": 2}, retry=0
        )

    @pytest.mark.asyncio
    async def test_list_sessions_filters_concentration_mode(self, mock_client):
        mock_client.get.return_value = _response(
            "GET",
            "/api/study-sessions",
            [{"id": 1, "isConcentrationMode": True}, {"id": 2, "isConcentrationMode": False}],
        )
        api = StudySessionsAPI(mock_client)

        assert [s["id"] for s in await api.list_sessions()] == [1, 2]
        assert [s["id"] for s in await api.list_sessions(concentration_mode=True)] == [1]
        assert [s["id"] for s in await api.list_sessions(concentration_mode=False)] == [2]


class TestPomodoroSessionsAPI:
    @pytest.mark.asyncio
    async def test_create_session(self, mock_client):
        mock_client.post.return_value = _response("POST", "/api/pomodoro-sessions", {"id": 3})
        api = PomodoroSessionsAPI(mock_client)

        await api.create_session(25, 5)

        mock_client.post.assert_awaited_once_with(
            "/api/pomodoro-sessions",
            json={"workDuration": 25, "breakDuration": 5, "completedCycles": 1},
        )

    @pytest.mark.asyncio
    async def test_list_sessions(self, mock_client):
        mock_client.get.return_value = _response(
            "GET", "/api/pomodoro-sessions", [{"id": 3, "completedCycles": 1}]
        )
        api = PomodoroSessionsAPI(mock_client)
        assert await api.list_sessions() == [{"id": 3, "completedCycles": 1}]


class FakeStudyService:
    """In-memory service treating PATCH as a field-wise upsert."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self.next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            record = {"id": self.next_id, **json.loads(request.content)}
            self.records[str(self.next_id)] = record
            self.next_id += 1
            return httpx.Response(201, json=record)
        session_id = request.url.path.rsplit("/", 1)[-1]
        self.records[session_id].update(json.loads(request.content))
        return httpx.Response(200, json=self.records[session_id])


@pytest.mark.asyncio
async def test_repeated_update_is_idempotent(tmp_config):
    service = FakeStudyService()
    with patch(
        "studyfocus_cli.services.api.client.get_config_service",
        return_value=tmp_config,
    ):
        client = APIClient()
    client._client = httpx.AsyncClient(
        base_url=client.base_url, transport=httpx.MockTransport(service)
    )
    api = StudySessionsAPI(client)

    created = await api.create_session()
    payload = SessionSnapshot(
        str(created["id"]), "running", elapsed_seconds=125, pause_count=0
    ).to_payload()

    first = await api.update_session(str(created["id"]), payload)
    second = await api.update_session(str(created["id"]), payload)

    assert first == second
    assert second["duration"] == 2
    assert second["isConcentrationMode"] is True
    await client.close()
