"""Tests for maze generation."""

import random

import pytest

from labyrinth.core.generator import (
    ALGORITHM_WEIGHTS,
    BINARY_TREE,
    BINARY_TREE_WITH_HOLES,
    GROWING_TREE,
    MazeGenerator,
    generate,
)
from labyrinth.core.grid import Coordinate, Direction

ALGORITHMS = [BINARY_TREE, BINARY_TREE_WITH_HOLES, GROWING_TREE]
SIZES = [(1, 2), (2, 1), (1, 7), (7, 1), (2, 2), (3, 3), (8, 5), (15, 10)]


def assert_symmetric(grid):
    """Every shared edge carries the same wall flag on both sides."""
    for cell in grid.coordinates():
        walls = grid.room_at(cell).walls
        for side in Direction:
            other = grid.neighbour(cell, side)
            if other is None:
                continue
            assert walls.has_wall(side) == grid.room_at(other).walls.has_wall(side.opposite), (
                f"Asymmetric edge between {cell} and {other}"
            )


def assert_closed_perimeter(grid):
    for cell in grid.coordinates():
        walls = grid.room_at(cell).walls
        if cell.x == 0:
            assert walls.left
        if cell.y == 0:
            assert walls.top
        if cell.x == grid.width - 1:
            assert walls.right
        if cell.y == grid.height - 1:
            assert walls.bottom


class TestCarving:
    """Properties shared by all carving algorithms."""

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    @pytest.mark.parametrize("width,height", SIZES)
    def test_every_room_is_reachable(self, algorithm, width, height, reachable):
        rng = random.Random(width * 100 + height)
        for _ in range(5):
            grid = MazeGenerator(rng).generate(width, height, algorithm=algorithm)
            assert len(reachable(grid, grid.start)) == width * height
            assert grid.treasure in reachable(grid, grid.start)

    @pytest.mark.parametrize("algorithm", ALGORITHMS)
    @pytest.mark.parametrize("width,height", SIZES)
    def test_walls_are_symmetric(self, algorithm, width, height):
        rng = random.Random(width + height)
        for _ in range(5):
            grid = MazeGenerator(rng).generate(width, height, algorithm=algorithm)
            assert_symmetric(grid)
            assert_closed_perimeter(grid)

    @pytest.mark.parametrize("algorithm", [BINARY_TREE, GROWING_TREE])
    def test_tree_algorithms_have_no_loops(self, algorithm, edge_count):
        """A spanning tree over n rooms has exactly n - 1 edges."""
        rng = random.Random(5)
        for _ in range(10):
            grid = MazeGenerator(rng).generate(9, 7, algorithm=algorithm)
            assert edge_count(grid) == 9 * 7 - 1

    def test_holes_add_loops(self, edge_count):
        rng = random.Random(11)
        grids = [MazeGenerator(rng).generate(10, 10, algorithm=BINARY_TREE_WITH_HOLES) for _ in range(10)]
        assert all(edge_count(g) >= 10 * 10 - 1 for g in grids)
        assert any(edge_count(g) > 10 * 10 - 1 for g in grids)


class TestBinaryTree:
    """Tests for the binary tree layout."""

    def test_bottom_row_and_right_column_are_corridors(self):
        """The last row is open eastwards and the last column southwards."""
        rng = random.Random(3)
        for _ in range(20):
            grid = MazeGenerator(rng).binary_tree(3, 3)

            for x in range(2):
                assert grid.get_room(x, 2).walls.right is False
                assert grid.get_room(x + 1, 2).walls.left is False
            for y in range(2):
                assert grid.get_room(2, y).walls.bottom is False
                assert grid.get_room(2, y + 1).walls.top is False

            # Corner room is only entered, never carved from
            corner = grid.get_room(2, 2).walls
            assert corner.right and corner.bottom

    def test_inner_cells_open_south_or_east(self):
        rng = random.Random(8)
        grid = MazeGenerator(rng).binary_tree(6, 6)
        for cell in grid.coordinates():
            if cell.x < 5 and cell.y < 5:
                walls = grid.room_at(cell).walls
                assert walls.right != walls.bottom

    def test_single_column(self):
        grid = MazeGenerator(random.Random(1)).binary_tree(1, 4)
        for y in range(3):
            assert grid.get_room(0, y).walls.bottom is False

    def test_single_row(self):
        grid = MazeGenerator(random.Random(1)).binary_tree(4, 1)
        for x in range(3):
            assert grid.get_room(x, 0).walls.right is False


class TestPlacement:
    """Tests for start/treasure placement."""

    @pytest.mark.parametrize("width,height", [(4, 4), (10, 6), (3, 8)])
    def test_last_row_and_column_never_host_start_or_treasure(self, width, height):
        rng = random.Random(99)
        for _ in range(50):
            grid = generate(width, height, rng=rng)
            for cell in (grid.start, grid.treasure):
                assert 0 <= cell.x < width - 1
                assert 0 <= cell.y < height - 1

    def test_coordinate_sums_differ(self):
        rng = random.Random(7)
        for _ in range(50):
            grid = generate(6, 6, rng=rng)
            assert grid.start.x + grid.start.y != grid.treasure.x + grid.treasure.y

    @pytest.mark.parametrize("width,height", [(1, 2), (2, 1), (2, 2), (1, 5), (5, 1)])
    def test_degenerate_grids(self, width, height):
        rng = random.Random(2)
        for _ in range(20):
            grid = generate(width, height, rng=rng)
            assert grid.start != grid.treasure

    def test_exactly_one_start_and_treasure(self):
        grid = generate(8, 8, rng=random.Random(4))
        rooms = [grid.room_at(c) for c in grid.coordinates()]
        assert sum(r.is_start for r in rooms) == 1
        assert sum(r.is_treasure for r in rooms) == 1

    def test_single_room_grid_is_rejected(self):
        with pytest.raises(ValueError, match="cannot hold both"):
            generate(1, 1)


class TestAlgorithmChoice:
    """Tests for algorithm selection."""

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            generate(4, 4, algorithm="kruskal")

    def test_pick_covers_all_algorithms(self):
        generator = MazeGenerator(random.Random(0))
        picks = {generator.pick_algorithm() for _ in range(200)}
        assert picks == set(ALGORITHM_WEIGHTS)

    def test_same_seed_same_maze(self):
        first = generate(7, 7, rng=random.Random(21))
        second = generate(7, 7, rng=random.Random(21))
        assert [first.room_at(c) for c in first.coordinates()] == [
            second.room_at(c) for c in second.coordinates()
        ]
        assert first.start == second.start
        assert isinstance(first.start, Coordinate)
