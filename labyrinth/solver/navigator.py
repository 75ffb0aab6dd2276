"""
Icarus: labyrinth navigator.

Icarus only ever sees the walls of the room he stands in. He explores with a
randomized depth-first search:

1. Open sides of the current room are candidates, except the side he just
   came through.
2. Candidates are tried in random order. A move that wins ends the search.
3. After a successful move the search continues from the new room.
4. When everything behind a move fails, he walks back through the same
   side and tries the next candidate.

There is no visited set. On a maze without loops this always finds the
treasure; on a maze with loops it may circle forever, which max_moves bounds.

The search is kept on an explicit stack instead of the call stack, so large
mazes don't hit the recursion limit.
"""

import logging
import random
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Union

from labyrinth.client.maze_client import TransportError
from labyrinth.core.grid import Direction, Survey
from labyrinth.core.maze_engine import MoveResult
from labyrinth.services.scoreboard import ScoreSummary

logger = logging.getLogger(__name__)


class MazeConnection(Protocol):
    """What Icarus needs from a client."""

    def awake(self) -> MoveResult: ...

    def move(self, direction: Union[Direction, str]) -> MoveResult: ...

    def done(self) -> ScoreSummary: ...


class MoveBudgetExceeded(Exception):
    """Raised inside the search once max_moves moves were issued."""
    pass


@dataclass
class _Frame:
    arrived: Optional[Direction]
    remaining: Iterator[Direction]


class Navigator:
    """
    Randomized depth-first labyrinth solver.

    Example:
        navigator = Navigator(MazeClient("http://127.0.0.1:3001"))
        solved = navigator.solve(client.awake().survey)
    """

    def __init__(
        self,
        client: MazeConnection,
        rng: Optional[random.Random] = None,
        max_moves: Optional[int] = None,
    ):
        self.client = client
        self.rng = rng or random.Random()
        self.max_moves = max_moves
        self.moves_issued = 0

    def candidates(self, survey: Survey, arrived: Optional[Direction]) -> list[Direction]:
        """
        Open sides of the room in random order, minus the way back.

        Args:
            survey: Walls of the current room.
            arrived: Direction of the move that led here, None at the start.
        """
        back = arrived.opposite if arrived is not None else None
        options = [d for d in survey.open_sides() if d != back]
        self.rng.shuffle(options)
        return options

    def solve(self, survey: Survey) -> bool:
        """
        Search for the treasure from the current room.

        Args:
            survey: Walls of the room Icarus stands in.

        Returns:
            True once a move reached the treasure, False if every path was
            exhausted or the move budget ran out.
        """
        self.moves_issued = 0
        try:
            return self._search(survey)
        except MoveBudgetExceeded:
            logger.warning(f"Giving up after {self.moves_issued} moves")
            return False

    def _search(self, survey: Survey) -> bool:
        stack = [_Frame(None, iter(self.candidates(survey, None)))]

        while stack:
            frame = stack[-1]
            direction = next(frame.remaining, None)

            if direction is None:
                # Dead end or fully explored: step back into the parent room
                stack.pop()
                if frame.arrived is not None and self._backtrack(frame.arrived):
                    return True
                continue

            result = self._move(direction)
            if result is None:
                continue
            if result.is_victory:
                return True

            stack.append(_Frame(direction, iter(self.candidates(result.survey, direction))))

        return False

    def _move(self, direction: Direction) -> Optional[MoveResult]:
        """Issue one move. Failures are logged and come back as None."""
        if self.max_moves is not None and self.moves_issued >= self.max_moves:
            raise MoveBudgetExceeded()
        self.moves_issued += 1

        try:
            result = self.client.move(direction)
        except TransportError as e:
            logger.error(f"Move {direction.value} failed: {e}")
            return None

        if result.is_failure:
            logger.warning(f"Move {direction.value} rejected: {result.reason}: {result.message}")
            return None
        return result

    def _backtrack(self, arrived: Direction) -> bool:
        """Walk back out of a failed branch. True only if that somehow wins."""
        result = self._move(arrived.opposite)
        if result is None:
            logger.error(f"Could not backtrack {arrived.opposite.value}")
            return False
        return result.is_victory


def run_attempts(
    client: MazeConnection,
    times: int,
    navigator: Optional[Navigator] = None,
) -> ScoreSummary:
    """
    Wake up, solve, repeat; then tell the server we are done.

    Args:
        client: Connection to Daedalus.
        times: Number of labyrinths to solve.
        navigator: Solver to use. A fresh Navigator on client by default.

    Returns:
        The server's final score summary.
    """
    navigator = navigator or Navigator(client)
    logger.info(f"Solving {times} times")

    for attempt in range(1, times + 1):
        try:
            start = client.awake()
        except TransportError as e:
            logger.error(f"Attempt {attempt}: could not wake up: {e}")
            continue

        if start.is_victory:
            logger.warning(f"Attempt {attempt}: woke up on the treasure")
            continue
        if start.is_failure:
            logger.error(f"Attempt {attempt}: awake rejected: {start.reason}")
            continue

        if navigator.solve(start.survey):
            logger.info(f"Attempt {attempt}: treasure found after {navigator.moves_issued} moves")
        else:
            logger.warning(f"Attempt {attempt}: no way to the treasure found")

    return client.done()
