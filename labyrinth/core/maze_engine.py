"""
Labyrinth Maze Engine

Position/movement state machine for one solve attempt:
- Surveying the explorer's current room
- Moving through open sides only
- Step counting
- Victory detection

A session is ACTIVE until a survey finds the explorer on the treasure, then
VICTORIOUS for good. A successful move never reports victory itself; the
survey that follows it does.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional, Union

from .grid import (
    Coordinate,
    Direction,
    Grid,
    LabyrinthError,
    OutOfBoundsError,
    Survey,
)


class WallBlockedError(LabyrinthError):
    """Move attempted through a standing wall."""

    reason = "WallBlocked"


class AlreadyFinishedError(LabyrinthError):
    """Move attempted after the treasure was found."""

    reason = "AlreadyFinished"


class NotStartedError(LabyrinthError):
    """Move attempted before any maze was generated."""

    reason = "NotStarted"


class SessionState(Enum):
    ACTIVE = "active"
    VICTORIOUS = "victorious"


@dataclass(frozen=True)
class Victory:
    """The explorer stands on the treasure."""

    steps: int


@dataclass(frozen=True)
class MoveResult:
    """
    Tagged outcome of awake/move, exactly one of:

        survey   survey of the current room and the step count
        victory  final step count
        failure  reason token, message and the unchanged step count
    """

    status: Literal["survey", "victory", "failure"]
    steps: int
    survey: Optional[Survey] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def surveyed(cls, survey: Survey, steps: int) -> "MoveResult":
        return cls(status="survey", steps=steps, survey=survey)

    @classmethod
    def victory(cls, steps: int) -> "MoveResult":
        return cls(
            status="victory",
            steps=steps,
            message=f"Victory achieved in {steps} steps",
        )

    @classmethod
    def failure(cls, error: LabyrinthError, steps: int) -> "MoveResult":
        return cls(status="failure", steps=steps, reason=error.reason, message=str(error))

    @property
    def is_victory(self) -> bool:
        return self.status == "victory"

    @property
    def is_failure(self) -> bool:
        return self.status == "failure"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {"status": self.status, "steps": self.steps}
        if self.survey is not None:
            result["survey"] = self.survey.to_dict()
        if self.reason:
            result["reason"] = self.reason
        if self.message:
            result["message"] = self.message
        return result


class MazeSession:
    """
    Explorer position and step counter over an exclusively owned grid.

    Example usage:
        session = MazeSession(grid)
        walls = session.survey()          # Survey, or Victory on the treasure
        session.move(Direction.DOWN)      # raises on walls/borders/after victory
    """

    def __init__(self, grid: Grid):
        """
        Wrap a generated grid. The explorer wakes up on the start room.

        Raises:
            ValueError: If the grid has no start or treasure placed.
        """
        if grid.start is None or grid.treasure is None:
            raise ValueError("Maze must have a start and a treasure")

        self.grid = grid
        self.start: Coordinate = grid.start
        self.treasure: Coordinate = grid.treasure
        self.explorer: Coordinate = grid.start
        self.steps_taken: int = 0
        self.state = SessionState.ACTIVE

    @property
    def is_victorious(self) -> bool:
        return self.state == SessionState.VICTORIOUS

    def survey(self) -> Union[Survey, Victory]:
        """
        Look at the walls of the explorer's room. Does not cost a step.

        Returns:
            Victory if the explorer is on the treasure, otherwise the walls.
        """
        if self.explorer == self.treasure:
            self.state = SessionState.VICTORIOUS
            return Victory(self.steps_taken)
        return self.grid.room_at(self.explorer).walls

    def move(self, direction: Direction) -> Coordinate:
        """
        Move the explorer one room. COSTS 1 STEP.

        Returns:
            The explorer's new coordinate.

        Raises:
            AlreadyFinishedError: If the treasure was already reached.
            WallBlockedError: If a wall stands on that side.
            OutOfBoundsError: If the destination is outside the grid.
        """
        if self.is_victorious:
            raise AlreadyFinishedError("The treasure has already been found")

        walls = self.survey()
        if isinstance(walls, Victory):
            raise AlreadyFinishedError("The treasure has already been found")

        if walls.has_wall(direction):
            raise WallBlockedError(f"Can't walk {direction.value} through walls")

        destination = self.explorer.move(direction)
        if not self.grid.contains(destination):
            raise OutOfBoundsError(
                f"Room ({destination.x}, {destination.y}) is outside of the maze boundaries"
            )

        self.explorer = destination
        self.steps_taken += 1
        return destination

    def visualize(self) -> str:
        """
        ASCII drawing of the grid.

        S marks the start, T the treasure and @ the explorer.
        """
        grid = self.grid
        lines = ["+" + "---+" * grid.width]

        for y in range(grid.height):
            row = "|"
            floor = "+"
            for x in range(grid.width):
                here = Coordinate(x, y)
                walls = grid.get_room(x, y).walls
                if here == self.explorer:
                    mark = "@"
                elif here == self.treasure:
                    mark = "T"
                elif here == self.start:
                    mark = "S"
                else:
                    mark = " "
                row += f" {mark} " + ("|" if walls.right else " ")
                floor += ("---" if walls.bottom else "   ") + "+"
            lines.append(row)
            lines.append(floor)

        return "\n".join(lines)
