"""
Labyrinth Maze Client SDK

Icarus's side of the discovery protocol. Wraps the Daedalus HTTP API:

    client = MazeClient("http://127.0.0.1:3001")
    result = client.awake()            # survey of the start room
    result = client.move(Direction.DOWN)
    if result.is_victory:
        print(f"Treasure found in {result.steps} steps!")
    client.done()

LocalMazeClient offers the same interface over an in-process
LabyrinthService, without any HTTP.
"""

from typing import Optional, Union

import requests
from pydantic import ValidationError

from labyrinth.core.grid import Direction
from labyrinth.core.maze_engine import MoveResult
from labyrinth.schemas.maze import DoneResponse, parse_move_reply
from labyrinth.services.labyrinth_service import LabyrinthService
from labyrinth.services.scoreboard import ScoreSummary

# Statuses that still carry a protocol reply in the body
_REPLY_STATUSES = (200, 400, 409)


class MazeClientError(Exception):
    """Base exception for maze client errors."""
    pass


class TransportError(MazeClientError):
    """The request could not be completed or its reply could not be decoded."""
    pass


class MazeClient:
    """
    HTTP client for a Daedalus server.

    Example:
        client = MazeClient("http://127.0.0.1:3001", timeout=5)
        survey = client.awake().survey
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ):
        """
        Initialize the maze client.

        Args:
            base_url: Daedalus base URL, e.g. "http://127.0.0.1:3001".
            timeout: Seconds to wait for each reply.
            http: Session used for requests. A new requests.Session by default.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http or requests.Session()

    def _get(self, endpoint: str) -> dict:
        """GET an endpoint and decode its JSON body."""
        url = f"{self.base_url}{endpoint}"
        try:
            response = self._http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code not in _REPLY_STATUSES:
            raise TransportError(
                f"API error: {response.status_code} - {response.text[:200]}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Undecodable reply from {url}: {e}") from e

    def _get_reply(self, endpoint: str) -> MoveResult:
        data = self._get(endpoint)
        try:
            return parse_move_reply(data)
        except ValidationError as e:
            raise TransportError(f"Unexpected reply from {endpoint}: {e}") from e

    def awake(self) -> MoveResult:
        """
        Ask Daedalus for a new labyrinth.

        Returns:
            MoveResult with the survey of the start room.

        Raises:
            TransportError: If the request fails.
        """
        return self._get_reply("/awake")

    def move(self, direction: Union[Direction, str]) -> MoveResult:
        """
        Move one room. COSTS 1 STEP.

        Args:
            direction: Direction.UP/RIGHT/DOWN/LEFT or its token.

        Returns:
            MoveResult: survey, victory, or failure with the server's reason.

        Raises:
            TransportError: If the request fails.
        """
        token = direction.value if isinstance(direction, Direction) else direction
        return self._get_reply(f"/move/{token}")

    def done(self) -> ScoreSummary:
        """
        Tell Daedalus all attempts are finished.

        Returns:
            The server's score summary.

        Raises:
            TransportError: If the request fails.
        """
        data = self._get("/done")
        try:
            response = DoneResponse.model_validate(data)
        except ValidationError as e:
            raise TransportError(f"Unexpected reply from /done: {e}") from e
        return ScoreSummary(
            attempts=response.attempts,
            mean_steps=response.mean_steps,
            scores=response.scores,
        )

    def close(self) -> None:
        self._http.close()


class LocalMazeClient:
    """
    Maze client for an in-process LabyrinthService.

    Example:
        service = LabyrinthService(Settings(width=5, height=5))
        client = LocalMazeClient(service)
        client.awake()
    """

    def __init__(self, service: LabyrinthService):
        self.service = service

    def awake(self) -> MoveResult:
        return self.service.awake()

    def move(self, direction: Union[Direction, str]) -> MoveResult:
        token = direction.value if isinstance(direction, Direction) else direction
        return self.service.move(token)

    def done(self) -> ScoreSummary:
        return self.service.report()

    def close(self) -> None:
        pass
