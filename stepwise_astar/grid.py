"""
Grid model consumed by the search: locations, direction sets and the
numpy-backed occupancy grid adapter.
"""

import random
from typing import Iterable, List, NamedTuple, Optional, Protocol, Sequence, Tuple

import numpy as np

FREE = 0
WALL = 1


class Location(NamedTuple):
    """Integer grid cell (x, z). Equality and hashing by coordinate pair."""
    x: int
    z: int

    def __add__(self, other):
        return Location(self.x + other[0], self.z + other[1])


FOUR_CONNECTED: Tuple[Location, ...] = (
    Location(1, 0),
    Location(0, 1),
    Location(-1, 0),
    Location(0, -1),
)

EIGHT_CONNECTED: Tuple[Location, ...] = FOUR_CONNECTED + (
    Location(1, 1),
    Location(1, -1),
    Location(-1, 1),
    Location(-1, -1),
)


class GridAdapter(Protocol):
    """Read-only view of a rectangular grid as seen by the search."""

    width: int
    depth: int
    directions: Sequence[Location]

    def is_blocked(self, loc: Location) -> bool:
        ...


def in_bounds(grid: GridAdapter, loc: Location) -> bool:
    """True if loc lies in the addressable range [0, width) x [0, depth)."""
    return 0 <= loc[0] < grid.width and 0 <= loc[1] < grid.depth


class OccupancyGrid:
    """
    Occupancy grid indexed as map[x, z], where 1 marks a wall.

    Cells outside the array report as blocked.
    """

    def __init__(self, occupancy, directions: Sequence[Location] = FOUR_CONNECTED):
        occupancy = np.asarray(occupancy, dtype=np.int8)
        if occupancy.ndim != 2:
            raise ValueError(f"Occupancy grid must be 2D, got shape {occupancy.shape}")
        self.map = occupancy
        self.width, self.depth = occupancy.shape
        self.directions = tuple(Location(*d) for d in directions)

    @classmethod
    def open(cls, width: int, depth: int, directions: Sequence[Location] = FOUR_CONNECTED):
        """Grid of the given size with no walls."""
        return cls(np.zeros((width, depth), dtype=np.int8), directions)

    @classmethod
    def from_strings(cls, rows: Iterable[str], directions: Sequence[Location] = FOUR_CONNECTED):
        """
        Build a grid from text rows, '#' for walls and anything else free.

        Row index is z, column index is x.

        Args:
            rows: Equal-length strings, one per z row
            directions: Neighbour step set

        Returns:
            OccupancyGrid
        """
        rows = [r for r in rows if r]
        if not rows:
            raise ValueError("No rows given")
        widths = {len(r) for r in rows}
        if len(widths) != 1:
            raise ValueError(f"Rows have different lengths: {sorted(widths)}")
        occupancy = np.array([[WALL if c == '#' else FREE for c in row] for row in rows])
        return cls(occupancy.T, directions)

    def is_blocked(self, loc: Location) -> bool:
        if not in_bounds(self, loc):
            return True
        return self.map[loc[0], loc[1]] == WALL

    def __repr__(self):
        return f"OccupancyGrid(width={self.width}, depth={self.depth}, walls={int(self.map.sum())})"


def free_cells(grid: GridAdapter, interior: bool = True) -> List[Location]:
    """
    List passable cells in z-major order.

    Args:
        grid: Grid adapter
        interior: Skip the outer ring of cells (border wall convention)

    Returns:
        List of free locations
    """
    margin = 1 if interior else 0
    cells = []
    for z in range(margin, grid.depth - margin):
        for x in range(margin, grid.width - margin):
            loc = Location(x, z)
            if not grid.is_blocked(loc):
                cells.append(loc)
    return cells


def random_endpoints(grid: GridAdapter, rng: Optional[random.Random] = None) -> Tuple[Location, Location]:
    """Pick two distinct free interior cells as (start, goal)."""
    rng = rng or random.Random()
    cells = free_cells(grid)
    if len(cells) < 2:
        raise ValueError(f"Need at least two free interior cells, found {len(cells)}")
    rng.shuffle(cells)
    return cells[0], cells[1]


def generate_maze(width: int, depth: int, rng: Optional[random.Random] = None,
                  directions: Sequence[Location] = FOUR_CONNECTED) -> OccupancyGrid:
    """
    Generate a maze with a solid border using a recursive backtracker.

    Corridors are carved between odd cells, so even sizes leave an extra
    wall column/row on the far side.

    Args:
        width: Grid width (>= 3)
        depth: Grid depth (>= 3)
        rng: Random generator, for reproducible mazes
        directions: Neighbour step set of the returned grid

    Returns:
        OccupancyGrid with walls marked
    """
    if width < 3 or depth < 3:
        raise ValueError(f"Maze too small: {width}x{depth}")
    rng = rng or random.Random()

    occupancy = np.full((width, depth), WALL, dtype=np.int8)
    start = (rng.randrange(1, width - 1, 2), rng.randrange(1, depth - 1, 2))
    occupancy[start] = FREE
    stack = [start]

    # Iterative so large mazes don't hit the recursion limit
    while stack:
        x, z = stack[-1]
        candidates = []
        for dx, dz in ((2, 0), (0, 2), (-2, 0), (0, -2)):
            nx, nz = x + dx, z + dz
            if 1 <= nx < width - 1 and 1 <= nz < depth - 1 and occupancy[nx, nz] == WALL:
                candidates.append((nx, nz))
        if not candidates:
            stack.pop()
            continue
        nx, nz = rng.choice(candidates)
        occupancy[(x + nx) // 2, (z + nz) // 2] = FREE
        occupancy[nx, nz] = FREE
        stack.append((nx, nz))

    return OccupancyGrid(occupancy, directions)
