#!/usr/bin/env python3
"""
Example: stepping an A* search through a small maze.

Shows how a caller drives the search one expansion at a time and reads
the scored neighbours through an observer.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stepwise_astar import (
    AStarSearch,
    OccupancyGrid,
    RecordingObserver,
    StepOutcome,
    create_search_image,
    save_image
)

MAZE = [
    "#########",
    "#.......#",
    "#.#####.#",
    "#.#...#.#",
    "#.#.#.#.#",
    "#...#...#",
    "#########",
]


def search_example(output: Path = None):
    """Example of driving a search step by step."""
    grid = OccupancyGrid.from_strings(MAZE)
    recorder = RecordingObserver()
    search = AStarSearch(grid, observers=[recorder])

    search.initialize((1, 1), (5, 3))
    print(f"Searching {search.start} -> {search.goal}")

    outcome = StepOutcome.CONTINUING
    while outcome is StepOutcome.CONTINUING:
        outcome = search.step()
        node = search.current_frontier()
        print(f"  step {search.expansions:2d}: closed {tuple(node.location)} "
              f"G: {node.g:.2f} H: {node.h:.2f} F: {node.f:.2f}")

    print(f"Outcome: {outcome.value}")
    print(f"  Neighbours scored: {len(recorder.of_kind('neighbour'))}")

    if outcome is StepOutcome.DONE:
        path = search.reconstruct_path()
        print(f"  Path (goal first): {[tuple(loc) for loc in path]}")
        if output is not None:
            save_image(create_search_image(grid, search, path), output, scale=16)
            print(f"  Saved {output}")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Step-by-step search example")
    parser.add_argument("-o", "--output", type=Path, help="Save a PNG of the finished search")
    args = parser.parse_args()

    search_example(args.output)
