import random
from collections import deque

import numpy as np
import pytest

from stepwise_astar.config import directions_for
from stepwise_astar.geometry import euclidean_distance, path_length
from stepwise_astar.grid import (
    EIGHT_CONNECTED,
    FOUR_CONNECTED,
    Location,
    OccupancyGrid,
    free_cells,
    generate_maze,
    in_bounds,
    random_endpoints,
)


def reachable_from(grid, origin):
    seen = {origin}
    queue = deque([origin])
    while queue:
        loc = queue.popleft()
        for d in FOUR_CONNECTED:
            n = loc + d
            if n not in seen and not grid.is_blocked(n):
                seen.add(n)
                queue.append(n)
    return seen


def test_location_value_semantics():
    a = Location(2, 3)
    assert a + Location(1, -1) == Location(3, 2)
    assert isinstance(a + (0, 1), Location)
    assert a == Location(2, 3)
    assert hash(a) == hash(Location(2, 3))
    assert {a: 1}[Location(2, 3)] == 1


def test_from_strings_orientation():
    grid = OccupancyGrid.from_strings([
        "#..",
        "..#",
    ])
    assert (grid.width, grid.depth) == (3, 2)
    assert grid.is_blocked(Location(0, 0))
    assert not grid.is_blocked(Location(1, 0))
    assert grid.is_blocked(Location(2, 1))
    assert not grid.is_blocked(Location(0, 1))


def test_from_strings_rejects_ragged_rows():
    with pytest.raises(ValueError):
        OccupancyGrid.from_strings(["###", "##"])


def test_grid_rejects_non_2d_array():
    with pytest.raises(ValueError):
        OccupancyGrid(np.zeros(4))


def test_out_of_bounds_reports_blocked(open_grid):
    for loc in [(-1, 0), (0, -1), (5, 0), (0, 5)]:
        assert not in_bounds(open_grid, Location(*loc))
        assert open_grid.is_blocked(Location(*loc))
    assert in_bounds(open_grid, Location(4, 4))


def test_free_cells_interior(corridor_maze):
    cells = free_cells(corridor_maze)
    assert Location(1, 1) in cells
    assert all(not corridor_maze.is_blocked(c) for c in cells)
    assert all(1 <= c.x <= corridor_maze.width - 2 and 1 <= c.z <= corridor_maze.depth - 2 for c in cells)

    assert len(free_cells(OccupancyGrid.open(4, 4), interior=False)) == 16
    assert len(free_cells(OccupancyGrid.open(4, 4))) == 4


def test_random_endpoints_distinct_and_free(corridor_maze):
    start, goal = random_endpoints(corridor_maze, random.Random(3))
    assert start != goal
    assert not corridor_maze.is_blocked(start)
    assert not corridor_maze.is_blocked(goal)
    assert (start, goal) == random_endpoints(corridor_maze, random.Random(3))


def test_random_endpoints_needs_two_cells():
    grid = OccupancyGrid.from_strings(["###", "#.#", "###"])
    with pytest.raises(ValueError):
        random_endpoints(grid)


@pytest.mark.parametrize("width, depth", [(7, 7), (10, 12), (31, 21)])
def test_generated_maze_is_connected(width, depth):
    grid = generate_maze(width, depth, random.Random(11))

    assert (grid.width, grid.depth) == (width, depth)
    assert grid.map[0, :].all() and grid.map[:, 0].all()
    assert grid.map[-1, :].all() and grid.map[:, -1].all()

    cells = free_cells(grid)
    assert len(cells) > 1
    assert set(cells) <= reachable_from(grid, cells[0])


def test_generated_maze_is_reproducible():
    a = generate_maze(15, 15, random.Random(5))
    b = generate_maze(15, 15, random.Random(5))
    np.testing.assert_array_equal(a.map, b.map)


def test_generate_maze_too_small():
    with pytest.raises(ValueError):
        generate_maze(2, 5)


def test_directions_for():
    assert directions_for(4) == FOUR_CONNECTED
    assert directions_for(8) == EIGHT_CONNECTED
    assert len(set(EIGHT_CONNECTED)) == 8
    with pytest.raises(ValueError):
        directions_for(6)


def test_distances():
    assert euclidean_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert isinstance(euclidean_distance(Location(1, 1), Location(1, 2)), float)
    assert path_length([Location(0, 0), Location(1, 0), Location(2, 1)]) == pytest.approx(1 + 2 ** 0.5)
    assert path_length([Location(0, 0)]) == 0.0
