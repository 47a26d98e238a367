#!/usr/bin/env python3
"""
Drive a step-by-step A* search on a maze from the command line.

Runs the search to completion with a progress bar, or interactively one
expansion at a time:
  p  begin a new search between two random free cells
  c  perform one expansion
  m  show the path from the current frontier back to the start
  q  quit
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from tqdm import tqdm

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from stepwise_astar.config import MazeConfig, SearchConfig, UpdatePolicy, VisualizerConfig, directions_for
from stepwise_astar.exceptions import SearchError
from stepwise_astar.geometry import path_length
from stepwise_astar.grid import Location, OccupancyGrid, free_cells, generate_maze, random_endpoints
from stepwise_astar.io_utils import load_grid_image, save_image
from stepwise_astar.search import AStarSearch, StepOutcome
from stepwise_astar.visualization import RerunSearchObserver, create_search_image


def build_grid(args, rng):
    """Create the grid described by the command line arguments."""
    directions = directions_for(args.connectivity)
    if args.image:
        return load_grid_image(args.image, directions=directions)
    if args.open:
        return OccupancyGrid.open(args.width, args.depth, directions)
    return generate_maze(args.width, args.depth, rng, directions)


def pick_endpoints(args, grid, rng):
    if args.start and args.goal:
        return Location(*args.start), Location(*args.goal)
    if args.start or args.goal:
        raise ValueError("--start and --goal must be given together")
    return random_endpoints(grid, rng)


def format_path(path):
    return " -> ".join(f"({x},{z})" for x, z in path)


def report_path(search, rerun_observer=None):
    """Print the path from the current frontier back to the start."""
    path = search.reconstruct_path()
    print(f"  Path ({len(path)} cells, length {path_length(path):.2f}):")
    print(f"  {format_path(path)}")
    if rerun_observer is not None:
        rerun_observer.log_path(path)
    return path


def run_to_completion(search, grid, max_steps=None):
    """Step the search until it terminates, showing progress."""
    total = len(free_cells(grid, interior=False))
    outcome = StepOutcome.CONTINUING
    with tqdm(total=total, desc="Expanding", unit="node") as progress:
        while outcome is StepOutcome.CONTINUING:
            if max_steps is not None and progress.n >= max_steps:
                break
            outcome = search.step()
            progress.update(1)
    return outcome


def interactive_loop(search, grid, rng, rerun_observer=None, max_steps=None):
    """Read single-letter commands from stdin and drive the search."""
    print("Commands: p = new search, c = step, m = show path, q = quit")
    while True:
        try:
            command = input("> ").strip().lower()
        except EOFError:
            return 0

        if command == "q":
            return 0
        if command == "p":
            start, goal = random_endpoints(grid, rng)
            search.initialize(start, goal)
            print(f"  New search {tuple(start)} -> {tuple(goal)}")
        elif command == "c":
            if search.is_finished:
                print(f"  Search already finished ({search.state.value})")
                continue
            if max_steps is not None and search.expansions >= max_steps:
                print(f"  Step budget of {max_steps} expansions reached")
                continue
            outcome = search.step()
            node = search.current_frontier()
            print(f"  [{search.expansions}] closed {tuple(node.location)} "
                  f"G: {node.g:.2f} H: {node.h:.2f} F: {node.f:.2f} -> {outcome.value}")
        elif command == "m":
            report_path(search, rerun_observer)
        elif command:
            print(f"  Unknown command: {command}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Step-by-step A* search on a grid",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Random 30x30 maze, random endpoints, run to completion
  python run_search.py --seed 7

  # Open 5x5 grid with fixed endpoints
  python run_search.py --open --width 5 --depth 5 --start 1 1 --goal 3 3

  # Walk through a search one expansion at a time, watching it in Rerun
  python run_search.py --interactive --rerun

  # Maze from an image, 8-connected, save a snapshot
  python run_search.py --image maze.png --connectivity 8 --snapshot out/search.png
        """
    )

    maze_defaults = MazeConfig()
    parser.add_argument("--image", type=Path, help="Grid image (dark pixels are walls)")
    parser.add_argument("--open", action="store_true", help="Use a grid without walls")
    parser.add_argument("--width", type=int, default=maze_defaults.width,
                        help=f"Grid width (default: {maze_defaults.width})")
    parser.add_argument("--depth", type=int, default=maze_defaults.depth,
                        help=f"Grid depth (default: {maze_defaults.depth})")
    parser.add_argument("--connectivity", type=int, choices=[4, 8], default=maze_defaults.connectivity,
                        help="Neighbour connectivity (default: 4)")
    parser.add_argument("--seed", type=int, default=maze_defaults.seed, help="Random seed")
    parser.add_argument("--start", nargs=2, type=int, help="Start cell (x z)")
    parser.add_argument("--goal", nargs=2, type=int, help="Goal cell (x z)")
    parser.add_argument("--policy", choices=[p.value for p in UpdatePolicy],
                        default=UpdatePolicy.ALWAYS.value,
                        help="How rediscovered open nodes are updated (default: always)")
    parser.add_argument("--max-steps", type=int, help="Stop after this many expansions (per search in interactive mode)")
    parser.add_argument("--interactive", action="store_true", help="Step with keyboard commands")
    parser.add_argument("--rerun", action="store_true", help="Stream the search to a Rerun viewer")
    parser.add_argument("--snapshot", type=Path, help="Save a PNG of the final search state")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every expansion")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.image and not args.image.exists():
        print(f"Error: {args.image} does not exist")
        return 1

    rng = random.Random(args.seed)

    try:
        grid = build_grid(args, rng)
        start, goal = pick_endpoints(args, grid, rng)

        search = AStarSearch(grid, SearchConfig(update_policy=UpdatePolicy(args.policy)))
        rerun_observer = None
        if args.rerun:
            rerun_observer = RerunSearchObserver(grid, VisualizerConfig())
            rerun_observer.start_viewer()
            search.add_observer(rerun_observer)

        print(f"Grid: {grid.width}x{grid.depth}, {args.connectivity}-connected")
        search.initialize(start, goal)
        print(f"Search {tuple(start)} -> {tuple(goal)}")

        if args.interactive:
            return interactive_loop(search, grid, rng, rerun_observer, args.max_steps)

        outcome = run_to_completion(search, grid, args.max_steps)
        print(f"\nOutcome: {outcome.value} after {search.expansions} expansions")

        path = None
        if outcome is not StepOutcome.NO_PATH_FOUND:
            path = report_path(search, rerun_observer)

        if args.snapshot:
            save_image(create_search_image(grid, search, path), args.snapshot, scale=8)
            print(f"Saved snapshot to {args.snapshot}")

        return 1 if outcome is StepOutcome.NO_PATH_FOUND else 0

    except (SearchError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nExiting...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
