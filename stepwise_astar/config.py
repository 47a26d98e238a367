"""
Configuration utilities and default settings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .grid import EIGHT_CONNECTED, FOUR_CONNECTED, Location


class UpdatePolicy(Enum):
    """How a rediscovered open node is updated."""
    # Overwrite g, h and parent every time, even when the new cost is worse
    ALWAYS = "always"
    # Overwrite only when the new g is strictly lower
    IF_BETTER = "if_better"


@dataclass
class SearchConfig:
    """Configuration for the incremental search."""
    update_policy: UpdatePolicy = UpdatePolicy.ALWAYS
    max_steps: Optional[int] = None  # Used by run(); None means until terminal


@dataclass
class VisualizerConfig:
    """Configuration for the Rerun search viewer."""
    recording_name: str = "stepwise-astar"
    spawn: bool = True
    cell_radius: float = 0.35
    show_costs: bool = True


@dataclass
class MazeConfig:
    """Configuration for generated mazes."""
    width: int = 30
    depth: int = 30
    connectivity: int = 4
    seed: Optional[int] = None


# Default configurations
DEFAULT_SEARCH_CONFIG = SearchConfig()
DEFAULT_VISUALIZER_CONFIG = VisualizerConfig()
DEFAULT_MAZE_CONFIG = MazeConfig()


def directions_for(connectivity: int) -> Tuple[Location, ...]:
    """
    Get the neighbour step set for a connectivity.

    Args:
        connectivity: 4 or 8

    Returns:
        Ordered tuple of direction offsets
    """
    if connectivity == 4:
        return FOUR_CONNECTED
    if connectivity == 8:
        return EIGHT_CONNECTED
    raise ValueError(f"Connectivity must be 4 or 8, got {connectivity}")
