# Core module
from .grid import (
    Coordinate,
    Direction,
    Grid,
    InvalidDirectionError,
    LabyrinthError,
    OutOfBoundsError,
    PlacementError,
    Room,
    Survey,
)
from .generator import MazeGenerator, generate
from .maze_engine import (
    AlreadyFinishedError,
    MazeSession,
    MoveResult,
    NotStartedError,
    SessionState,
    Victory,
    WallBlockedError,
)

__all__ = [
    "Coordinate",
    "Direction",
    "Grid",
    "InvalidDirectionError",
    "LabyrinthError",
    "OutOfBoundsError",
    "PlacementError",
    "Room",
    "Survey",
    "MazeGenerator",
    "generate",
    "AlreadyFinishedError",
    "MazeSession",
    "MoveResult",
    "NotStartedError",
    "SessionState",
    "Victory",
    "WallBlockedError",
]
