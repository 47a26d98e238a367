"""
One-shot pathfinding on top of the incremental search.
"""

from typing import List, Optional

import numpy as np

from .config import SearchConfig
from .exceptions import NoPathFound
from .grid import OccupancyGrid, Location
from .search import AStarSearch, StepOutcome


def find_path(grid, start, goal, config: Optional[SearchConfig] = None) -> List[Location]:
    """
    Run A* to completion and return the path.

    Args:
        grid: Grid adapter, or a 2D array where 0=free, 1=wall (4-connected)
        start: Start cell (x, z)
        goal: Goal cell (x, z)
        config: Optional search configuration

    Returns:
        List of locations from start to goal, both included

    Raises:
        NoPathFound: If the goal cannot be reached
        InvalidLocation: If start or goal lies outside the grid
    """
    if isinstance(grid, np.ndarray):
        grid = OccupancyGrid(grid)

    search = AStarSearch(grid, config)
    search.initialize(start, goal)
    # Budget of one step per cell plus the final goal check
    outcome = search.run(max_steps=grid.width * grid.depth + 1)

    if outcome is not StepOutcome.DONE:
        raise NoPathFound(search.start, search.goal)

    path = search.reconstruct_path()
    path.reverse()
    return path
