import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stepwise_astar.grid import OccupancyGrid


@pytest.fixture
def open_grid():
    """5x5 grid without walls, 4-connected."""
    return OccupancyGrid.open(5, 5)


@pytest.fixture
def corridor_maze():
    return OccupancyGrid.from_strings([
        "#########",
        "#.......#",
        "#.#####.#",
        "#.#...#.#",
        "#.#.#.#.#",
        "#...#...#",
        "#########",
    ])


@pytest.fixture
def enclosed_goal_grid():
    """Goal cell (5, 3) is walled in on all four sides."""
    return OccupancyGrid.from_strings([
        "#########",
        "#.......#",
        "#....#..#",
        "#...#.#.#",
        "#....#..#",
        "#.......#",
        "#########",
    ])
