"""
Step-observable A* pathfinding on 2D grids.
"""

from .grid import (
    Location,
    GridAdapter,
    OccupancyGrid,
    FOUR_CONNECTED,
    EIGHT_CONNECTED,
    in_bounds,
    free_cells,
    random_endpoints,
    generate_maze
)
from .search import (
    AStarSearch,
    SearchNode,
    SearchObserver,
    SearchState,
    StepEvent,
    StepOutcome
)
from .exceptions import (
    SearchError,
    NotInitialized,
    InvalidLocation,
    NoPathFound,
    PathReconstructionError
)
from .pathfinding import find_path
from .config import (
    UpdatePolicy,
    SearchConfig,
    VisualizerConfig,
    MazeConfig,
    DEFAULT_SEARCH_CONFIG,
    DEFAULT_VISUALIZER_CONFIG,
    DEFAULT_MAZE_CONFIG,
    directions_for
)
from .geometry import euclidean_distance, cell_centers, path_length
from .io_utils import load_image, load_grid_image, save_image
from .visualization import (
    setup_search_viewer_blueprint,
    create_search_image,
    RerunSearchObserver,
    RecordingObserver
)

__all__ = [
    # Grid
    'Location',
    'GridAdapter',
    'OccupancyGrid',
    'FOUR_CONNECTED',
    'EIGHT_CONNECTED',
    'in_bounds',
    'free_cells',
    'random_endpoints',
    'generate_maze',
    # Search
    'AStarSearch',
    'SearchNode',
    'SearchObserver',
    'SearchState',
    'StepEvent',
    'StepOutcome',
    # Errors
    'SearchError',
    'NotInitialized',
    'InvalidLocation',
    'NoPathFound',
    'PathReconstructionError',
    # Pathfinding
    'find_path',
    # Config
    'UpdatePolicy',
    'SearchConfig',
    'VisualizerConfig',
    'MazeConfig',
    'DEFAULT_SEARCH_CONFIG',
    'DEFAULT_VISUALIZER_CONFIG',
    'DEFAULT_MAZE_CONFIG',
    'directions_for',
    # Geometry
    'euclidean_distance',
    'cell_centers',
    'path_length',
    # IO utilities
    'load_image',
    'load_grid_image',
    'save_image',
    # Visualization
    'setup_search_viewer_blueprint',
    'create_search_image',
    'RerunSearchObserver',
    'RecordingObserver',
]
