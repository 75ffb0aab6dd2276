"""
Maze Generator

Builds a fully walled grid, carves passages with one of three algorithms and
places the start and treasure rooms.

Algorithms:
    binary_tree             every cell opens south or east; a spanning tree
    binary_tree_with_holes  as above, but a cell may open both ways (loops)
    growing_tree            newest-cell growing tree (recursive backtracker)
"""

import logging
import random
from typing import Callable, Optional

from .grid import Coordinate, Direction, Grid

logger = logging.getLogger(__name__)

BINARY_TREE = "binary_tree"
BINARY_TREE_WITH_HOLES = "binary_tree_with_holes"
GROWING_TREE = "growing_tree"

# Relative pick weights for a random algorithm.
ALGORITHM_WEIGHTS = {
    BINARY_TREE_WITH_HOLES: 3,
    BINARY_TREE: 1,
    GROWING_TREE: 1,
}

_EAST = 0
_SOUTH = 1
_BOTH = 2


class MazeGenerator:
    """
    Random maze builder.

    Example usage:
        generator = MazeGenerator(random.Random(42))
        grid = generator.generate(15, 10)
        grid = generator.generate(15, 10, algorithm="growing_tree")
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._algorithms: dict[str, Callable[[int, int], Grid]] = {
            BINARY_TREE: self.binary_tree,
            BINARY_TREE_WITH_HOLES: self.binary_tree_with_holes,
            GROWING_TREE: self.growing_tree,
        }

    @property
    def algorithms(self) -> list[str]:
        return list(self._algorithms)

    def pick_algorithm(self) -> str:
        """Pick an algorithm name using ALGORITHM_WEIGHTS."""
        names = list(ALGORITHM_WEIGHTS)
        return self.rng.choices(names, weights=[ALGORITHM_WEIGHTS[n] for n in names])[0]

    def generate(self, width: int, height: int, algorithm: Optional[str] = None) -> Grid:
        """
        Create a new maze with start and treasure placed.

        Args:
            width: Number of columns.
            height: Number of rows.
            algorithm: Force a carving algorithm. Random when omitted.

        Returns:
            Carved Grid with start and treasure set.

        Raises:
            ValueError: If the algorithm is unknown or the grid is too small
                to hold distinct start and treasure rooms.
        """
        if width * height < 2:
            raise ValueError(f"A {width}x{height} maze cannot hold both start and treasure")

        if algorithm is None:
            algorithm = self.pick_algorithm()
        if algorithm not in self._algorithms:
            raise ValueError(
                f"Unknown algorithm '{algorithm}'. "
                f"Must be one of: {', '.join(self._algorithms)}"
            )

        grid = self._algorithms[algorithm](width, height)
        self.place_start_and_treasure(grid)
        logger.debug(
            f"Generated {width}x{height} maze with {algorithm}: "
            f"start={grid.start}, treasure={grid.treasure}"
        )
        return grid

    def binary_tree(self, width: int, height: int) -> Grid:
        """Each cell opens east or south at random. Produces a spanning tree."""
        return self._binary_tree(width, height, choices=(_EAST, _SOUTH))

    def binary_tree_with_holes(self, width: int, height: int) -> Grid:
        """Binary tree where a cell may open east and south at once, adding loops."""
        return self._binary_tree(width, height, choices=(_EAST, _SOUTH, _BOTH))

    def _binary_tree(self, width: int, height: int, choices: tuple[int, ...]) -> Grid:
        grid = Grid.full(width, height)
        last_x, last_y = width - 1, height - 1

        for cell in grid.coordinates():
            if cell.x == last_x and cell.y == last_y:
                break
            if cell.x == last_x:
                choice = _SOUTH
            elif cell.y == last_y:
                choice = _EAST
            else:
                choice = self.rng.choice(choices)

            if choice in (_EAST, _BOTH):
                grid.carve(cell, Direction.RIGHT)
            if choice in (_SOUTH, _BOTH):
                grid.carve(cell, Direction.DOWN)

        return grid

    def growing_tree(self, width: int, height: int) -> Grid:
        """
        Growing tree that always works on the newest frontier cell.

        The active cell carves into its first unvisited neighbour (directions
        inspected in random order) and that neighbour joins the frontier. An
        active cell without unvisited neighbours leaves the frontier.
        """
        grid = Grid.full(width, height)
        seed = Coordinate(self.rng.randrange(width), self.rng.randrange(height))
        visited = {seed}
        frontier = [seed]

        while frontier:
            active = frontier[-1]
            directions = list(Direction)
            self.rng.shuffle(directions)

            for direction in directions:
                target = grid.neighbour(active, direction)
                if target is not None and target not in visited:
                    grid.carve(active, direction)
                    visited.add(target)
                    frontier.append(target)
                    break
            else:
                frontier.pop()

        return grid

    def place_start_and_treasure(self, grid: Grid) -> None:
        """
        Draw treasure and start rooms and mark them on the grid.

        Both are drawn from [0, width - 1) x [0, height - 1); the last row
        and column never host either. An axis of length 1 uses [0, 1). The
        start is redrawn while its coordinate sum equals the treasure's.
        When that region has no two cells with different sums, the whole
        grid is used instead.
        """
        x_range = max(grid.width - 1, 1)
        y_range = max(grid.height - 1, 1)
        if x_range == 1 and y_range == 1:
            x_range, y_range = grid.width, grid.height

        treasure = self._random_cell(x_range, y_range)
        start = self._random_cell(x_range, y_range)
        while start.x + start.y == treasure.x + treasure.y:
            start = self._random_cell(x_range, y_range)

        grid.mark_treasure(treasure)
        grid.mark_start(start)

    def _random_cell(self, x_range: int, y_range: int) -> Coordinate:
        return Coordinate(self.rng.randrange(x_range), self.rng.randrange(y_range))


def generate(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    algorithm: Optional[str] = None,
) -> Grid:
    """Shortcut for MazeGenerator(rng).generate(width, height, algorithm)."""
    return MazeGenerator(rng).generate(width, height, algorithm=algorithm)
