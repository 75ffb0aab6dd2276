"""
Labyrinth Grid & Wall Model

A rectangular grid of rooms. Each room knows which of its four sides carry a
wall and whether it hosts the start or the treasure.

Coordinates are (x, y), 0-indexed, with y growing downwards:

    (0,0) (1,0) (2,0)
    (0,1) (1,1) (2,1)

Walls are stored per room, so the edge shared by two neighbours is stored
twice. Grid.carve() keeps both copies in agreement; remove_wall()/add_wall()
only touch the room they are given.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator, Optional


class LabyrinthError(Exception):
    """Base class for labyrinth errors."""

    reason = "LabyrinthError"


class OutOfBoundsError(LabyrinthError):
    """Coordinate lies outside the grid."""

    reason = "OutOfBounds"


class InvalidDirectionError(LabyrinthError):
    """Direction token is not one of up, right, down, left."""

    reason = "InvalidDirection"


class PlacementError(LabyrinthError):
    """Start and treasure cannot share a room."""

    reason = "Placement"


class Direction(Enum):
    """Movement directions. The values are the wire tokens."""

    UP = "up"
    RIGHT = "right"
    DOWN = "down"
    LEFT = "left"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.RIGHT: (1, 0),
            Direction.DOWN: (0, 1),
            Direction.LEFT: (-1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        """Get the direction pointing back."""
        opposites = {
            Direction.UP: Direction.DOWN,
            Direction.RIGHT: Direction.LEFT,
            Direction.DOWN: Direction.UP,
            Direction.LEFT: Direction.RIGHT,
        }
        return opposites[self]

    @classmethod
    def parse(cls, token: str) -> "Direction":
        """
        Convert a wire token into a Direction.

        Matching is case-sensitive: only "up", "right", "down" and "left"
        are accepted.

        Raises:
            InvalidDirectionError: If the token is anything else.
        """
        try:
            return cls(token)
        except ValueError:
            raise InvalidDirectionError(
                f"Invalid direction '{token}'. "
                f"Must be one of: {', '.join(d.value for d in cls)}"
            ) from None


@dataclass(frozen=True)
class Coordinate:
    """2D position in the grid."""

    x: int
    y: int

    def move(self, direction: Direction) -> "Coordinate":
        """Return the coordinate one step away in direction."""
        dx, dy = direction.delta
        return Coordinate(self.x + dx, self.y + dy)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Survey:
    """Walls around a single room, as seen from inside it. True = wall."""

    top: bool = True
    right: bool = True
    bottom: bool = True
    left: bool = True

    _SIDES = {
        Direction.UP: "top",
        Direction.RIGHT: "right",
        Direction.DOWN: "bottom",
        Direction.LEFT: "left",
    }

    def has_wall(self, side: Direction) -> bool:
        """Check whether a wall stands on the given side."""
        return getattr(self, self._SIDES[side])

    def with_wall(self, side: Direction, present: bool) -> "Survey":
        """Return a copy with one side set."""
        return replace(self, **{self._SIDES[side]: present})

    def open_sides(self) -> list[Direction]:
        """Directions without a wall, in up/right/down/left order."""
        return [side for side in Direction if not self.has_wall(side)]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "top": self.top,
            "right": self.right,
            "bottom": self.bottom,
            "left": self.left,
        }


@dataclass
class Room:
    """One grid cell: its walls plus the start/treasure markers."""

    walls: Survey = field(default_factory=Survey)
    is_start: bool = False
    is_treasure: bool = False

    def remove_wall(self, side: Direction) -> None:
        self.walls = self.walls.with_wall(side, False)

    def add_wall(self, side: Direction) -> None:
        self.walls = self.walls.with_wall(side, True)


class Grid:
    """
    Fixed-size rectangular mapping of Coordinate -> Room.

    Example usage:
        grid = Grid.full(4, 3)
        grid.carve(Coordinate(0, 0), Direction.RIGHT)
        grid.get_room(1, 0).walls.left  # False
    """

    def __init__(self, width: int, height: int, walled: bool = True):
        """
        Build a grid of width x height rooms.

        Args:
            width: Number of columns, must be positive.
            height: Number of rows, must be positive.
            walled: Start with every wall standing (True) or none (False).

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        walls = Survey() if walled else Survey(False, False, False, False)
        self._rooms: list[list[Room]] = [
            [Room(walls=walls) for _ in range(width)] for _ in range(height)
        ]
        self.start: Optional[Coordinate] = None
        self.treasure: Optional[Coordinate] = None

    @classmethod
    def full(cls, width: int, height: int) -> "Grid":
        """Grid with every wall present. Starting point for carving."""
        return cls(width, height, walled=True)

    @classmethod
    def empty(cls, width: int, height: int) -> "Grid":
        """Grid without any walls."""
        return cls(width, height, walled=False)

    @property
    def width(self) -> int:
        return len(self._rooms[0])

    @property
    def height(self) -> int:
        return len(self._rooms)

    def contains(self, coordinate: Coordinate) -> bool:
        """Check whether coordinate lies inside the grid."""
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height

    def get_room(self, x: int, y: int) -> Room:
        """
        Get the room at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBoundsError(f"Room ({x}, {y}) is outside of the maze boundaries")
        return self._rooms[y][x]

    def room_at(self, coordinate: Coordinate) -> Room:
        return self.get_room(coordinate.x, coordinate.y)

    def remove_wall(self, room: Room, side: Direction) -> None:
        """Remove one side of one room. The neighbour is left untouched."""
        room.remove_wall(side)

    def add_wall(self, room: Room, side: Direction) -> None:
        """Add one side of one room. The neighbour is left untouched."""
        room.add_wall(side)

    def neighbour(self, coordinate: Coordinate, direction: Direction) -> Optional[Coordinate]:
        """Adjacent coordinate in direction, or None past the border."""
        target = coordinate.move(direction)
        return target if self.contains(target) else None

    def carve(self, coordinate: Coordinate, direction: Direction) -> Coordinate:
        """
        Open the edge between coordinate and its neighbour in direction.

        Both rooms are updated so the shared edge stays symmetric.

        Returns:
            The neighbour's coordinate.

        Raises:
            OutOfBoundsError: If either room is outside the grid.
        """
        target = coordinate.move(direction)
        room = self.room_at(coordinate)
        other = self.room_at(target)
        self.remove_wall(room, direction)
        self.remove_wall(other, direction.opposite)
        return target

    def coordinates(self) -> Iterator[Coordinate]:
        """All coordinates in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Coordinate(x, y)

    def mark_start(self, coordinate: Coordinate) -> None:
        """
        Set the room where the explorer wakes up.

        Raises:
            OutOfBoundsError: If coordinate is outside the grid.
            PlacementError: If the room already holds the treasure.
        """
        room = self.room_at(coordinate)
        if room.is_treasure:
            raise PlacementError("Can't start in the treasure room")
        if self.start is not None:
            self.room_at(self.start).is_start = False
        room.is_start = True
        self.start = coordinate

    def mark_treasure(self, coordinate: Coordinate) -> None:
        """
        Set the room holding the treasure.

        Raises:
            OutOfBoundsError: If coordinate is outside the grid.
            PlacementError: If the room is already the start.
        """
        room = self.room_at(coordinate)
        if room.is_start:
            raise PlacementError("Can't have the treasure at the start")
        if self.treasure is not None:
            self.room_at(self.treasure).is_treasure = False
        room.is_treasure = True
        self.treasure = coordinate
