"""Pytest configuration and fixtures."""

import random
from collections import deque
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from labyrinth.config import Settings
from labyrinth.core.grid import Coordinate, Direction, Grid
from labyrinth.core.maze_engine import MazeSession
from labyrinth.main import create_app
from labyrinth.services.labyrinth_service import LabyrinthService


def walk_reachable(grid: Grid, start: Coordinate) -> set[Coordinate]:
    """Every coordinate reachable from start through open sides."""
    seen = {start}
    queue = deque([start])
    while queue:
        here = queue.popleft()
        for side in grid.room_at(here).walls.open_sides():
            there = here.move(side)
            if grid.contains(there) and there not in seen:
                seen.add(there)
                queue.append(there)
    return seen


def open_edges(grid: Grid) -> int:
    """Number of carved edges, each counted once."""
    count = 0
    for cell in grid.coordinates():
        walls = grid.room_at(cell).walls
        count += (not walls.right and cell.x < grid.width - 1)
        count += (not walls.bottom and cell.y < grid.height - 1)
    return count


@pytest.fixture
def reachable() -> Callable[[Grid, Coordinate], set[Coordinate]]:
    return walk_reachable


@pytest.fixture
def edge_count() -> Callable[[Grid], int]:
    return open_edges


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic tests."""
    return random.Random(1234)


@pytest.fixture
def settings() -> Settings:
    """Small maze settings for testing."""
    return Settings(width=6, height=5, times=3, seed=42)


@pytest.fixture
def service(settings) -> LabyrinthService:
    return LabyrinthService(settings)


@pytest.fixture
def corridor_session() -> MazeSession:
    """
    1x2 maze, both rooms connected:

        +---+
        | S |
        +   +
        | T |
        +---+
    """
    grid = Grid.full(1, 2)
    grid.carve(Coordinate(0, 0), Direction.DOWN)
    grid.mark_treasure(Coordinate(0, 1))
    grid.mark_start(Coordinate(0, 0))
    return MazeSession(grid)


@pytest.fixture
def l_shaped_session() -> MazeSession:
    """
    3x2 maze with a dead end at (0,1):

        +---+---+---+
        | S         |
        +   +---+   +
        |   |   | T |
        +---+---+---+
    """
    grid = Grid.full(3, 2)
    grid.carve(Coordinate(0, 0), Direction.RIGHT)
    grid.carve(Coordinate(1, 0), Direction.RIGHT)
    grid.carve(Coordinate(0, 0), Direction.DOWN)
    grid.carve(Coordinate(2, 0), Direction.DOWN)
    grid.mark_treasure(Coordinate(2, 1))
    grid.mark_start(Coordinate(0, 0))
    return MazeSession(grid)


@pytest_asyncio.fixture(scope="function")
async def client(service, settings) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app = create_app(settings, service)

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
