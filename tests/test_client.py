"""Tests for the maze client SDK."""

from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from labyrinth.client.maze_client import LocalMazeClient, MazeClient, TransportError
from labyrinth.core.grid import Direction, Survey
from labyrinth.main import create_app


@pytest.fixture
def http(service, settings):
    """TestClient standing in for a requests.Session."""
    with TestClient(create_app(settings, service)) as test_client:
        yield test_client


@pytest.fixture
def maze_client(http):
    return MazeClient("http://testserver/", http=http)


def fake_response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class TestMazeClient:
    """Tests for the HTTP client against a live app."""

    def test_base_url_is_normalized(self, maze_client):
        assert maze_client.base_url == "http://testserver"

    def test_awake(self, maze_client, service):
        result = maze_client.awake()

        assert result.status == "survey"
        assert result.steps == 0
        assert result.survey == service.session.grid.room_at(service.session.start).walls

    def test_move_and_victory(self, maze_client, service, corridor_session):
        service.start_session(corridor_session)

        result = maze_client.move(Direction.DOWN)

        assert result.is_victory
        assert result.steps == 1

    def test_move_accepts_tokens(self, maze_client, service, l_shaped_session):
        service.start_session(l_shaped_session)

        result = maze_client.move("right")

        assert result.survey == Survey(top=True, right=False, bottom=True, left=False)

    def test_failure_replies_are_results(self, maze_client, service, l_shaped_session):
        """409/400 replies are protocol outcomes, not transport errors."""
        service.start_session(l_shaped_session)

        blocked = maze_client.move(Direction.UP)
        invalid = maze_client.move("diagonal")

        assert blocked.is_failure and blocked.reason == "WallBlocked"
        assert invalid.is_failure and invalid.reason == "InvalidDirection"

    def test_done(self, maze_client, service):
        service.scoreboard.record(6)
        summary = maze_client.done()
        assert summary.attempts == 1
        assert summary.mean_steps == 6


class TestTransportErrors:
    """Tests for network and decoding failures."""

    def test_connection_error(self):
        http = MagicMock()
        http.get.side_effect = requests.exceptions.ConnectionError("refused")
        client = MazeClient("http://127.0.0.1:1", http=http)

        with pytest.raises(TransportError, match="failed"):
            client.move(Direction.UP)

    def test_timeout_is_passed(self):
        http = MagicMock()
        http.get.return_value = fake_response(
            payload={"status": "survey", "survey": Survey().to_dict(), "steps": 0}
        )
        client = MazeClient("http://daedalus:3001", timeout=2.5, http=http)

        client.awake()

        http.get.assert_called_once_with("http://daedalus:3001/awake", timeout=2.5)

    def test_unexpected_status(self):
        http = MagicMock()
        http.get.return_value = fake_response(500, text="Internal Server Error")
        client = MazeClient("http://daedalus", http=http)

        with pytest.raises(TransportError, match="500"):
            client.awake()

    def test_undecodable_body(self):
        http = MagicMock()
        http.get.return_value = fake_response(payload=ValueError("Expecting value"))
        client = MazeClient("http://daedalus", http=http)

        with pytest.raises(TransportError, match="Undecodable"):
            client.move("left")

    def test_unknown_reply_shape(self):
        http = MagicMock()
        http.get.return_value = fake_response(payload={"Victory": True, "Message": ""})
        client = MazeClient("http://daedalus", http=http)

        with pytest.raises(TransportError, match="Unexpected reply"):
            client.move("left")


class TestLocalMazeClient:
    def test_same_interface(self, service, l_shaped_session):
        client = LocalMazeClient(service)
        assert client.awake().status == "survey"

        service.start_session(l_shaped_session)
        assert client.move(Direction.RIGHT).steps == 1
        assert client.move("up").reason == "WallBlocked"

        service.scoreboard.record(3)
        assert client.done().attempts == 1
