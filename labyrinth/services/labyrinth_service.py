"""Daedalus: owns the current maze session and the scoreboard."""

import logging
import random
from typing import Callable, Optional

from labyrinth.config import Settings
from labyrinth.core.generator import MazeGenerator
from labyrinth.core.grid import Direction, LabyrinthError
from labyrinth.core.maze_engine import MazeSession, MoveResult, NotStartedError, Victory
from labyrinth.services.scoreboard import Scoreboard, ScoreSummary

logger = logging.getLogger(__name__)


class LabyrinthService:
    """
    Single-client labyrinth server logic.

    One session at a time: every awake() throws the previous maze away and
    generates a new one. Scores accumulate across sessions.

    Not safe for concurrent clients.
    """

    def __init__(
        self,
        settings: Settings,
        rng: Optional[random.Random] = None,
        scoreboard: Optional[Scoreboard] = None,
    ):
        self.settings = settings
        self.rng = rng or random.Random(settings.seed)
        self.generator = MazeGenerator(self.rng)
        self.scoreboard = scoreboard or Scoreboard()
        self.session: Optional[MazeSession] = None
        self._reported = False
        self._on_finish: Optional[Callable[[], None]] = None

    def set_finish_hook(self, hook: Optional[Callable[[], None]]) -> None:
        """Register a callable for run_finish_hook()."""
        self._on_finish = hook

    def awake(self, algorithm: Optional[str] = None) -> MoveResult:
        """
        Generate a new maze and place the explorer on its start.

        Returns:
            MoveResult with the start room's survey.
        """
        grid = self.generator.generate(
            self.settings.width, self.settings.height, algorithm=algorithm
        )
        return self.start_session(MazeSession(grid))

    def start_session(self, session: MazeSession) -> MoveResult:
        """Replace the current session and survey its start room."""
        self.session = session
        logger.info(
            f"New {session.grid.width}x{session.grid.height} maze: "
            f"start={session.start.to_dict()}, treasure={session.treasure.to_dict()}"
        )
        logger.debug("\n" + session.visualize())

        survey = session.survey()
        if isinstance(survey, Victory):
            logger.error("Explorer woke up on the treasure. This shouldn't ever happen")
            return self._victory(survey.steps)
        return MoveResult.surveyed(survey, session.steps_taken)

    def move(self, direction: str) -> MoveResult:
        """
        Move the explorer, then survey the room reached.

        Args:
            direction: Wire token, one of "up", "right", "down", "left".

        Returns:
            survey after a successful move, victory when the room reached
            holds the treasure, failure when the move was rejected.
        """
        steps = self.session.steps_taken if self.session else 0

        try:
            parsed = Direction.parse(direction)
            if self.session is None:
                raise NotStartedError("No maze yet, call awake first")
            self.session.move(parsed)
        except LabyrinthError as e:
            logger.debug(f"Move {direction} rejected: {e.reason}: {e}")
            return MoveResult.failure(e, steps)

        survey = self.session.survey()
        if isinstance(survey, Victory):
            return self._victory(survey.steps)
        return MoveResult.surveyed(survey, self.session.steps_taken)

    def _victory(self, steps: int) -> MoveResult:
        self.scoreboard.record(steps)
        logger.info(f"Victory achieved in {steps} steps")
        return MoveResult.victory(steps)

    def report(self) -> ScoreSummary:
        """Log and return the scores recorded so far."""
        summary = self.scoreboard.summary()
        logger.info(summary.message)
        self._reported = True
        return summary

    def run_finish_hook(self) -> None:
        """Icarus is done: hand over to the registered hook (server shutdown)."""
        if self._on_finish is not None:
            logger.info("Icarus is done, shutting down")
            self._on_finish()

    def close(self) -> None:
        """Report on teardown unless done already did."""
        if not self._reported:
            self.report()
        self.session = None
