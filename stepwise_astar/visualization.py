"""
Visualization of search progress with Rerun.
"""

import numpy as np
import rerun as rr

from .config import DEFAULT_VISUALIZER_CONFIG, VisualizerConfig
from .grid import WALL
from .search import SearchObserver

FREE_COLOR = [235, 235, 235]
WALL_COLOR = [40, 40, 40]
OPEN_COLOR = [80, 160, 255]
CLOSED_COLOR = [255, 140, 0]
PATH_COLOR = [220, 30, 30]
START_COLOR = [0, 90, 255]
GOAL_COLOR = [0, 200, 0]


def setup_search_viewer_blueprint():
    """
    Set up the blueprint for the search viewer.

    Returns:
        Blueprint configuration for Rerun viewer
    """
    blueprint = rr.blueprint.Blueprint(
        rr.blueprint.Horizontal(
            rr.blueprint.Spatial2DView(name="Search", origin="search"),
            rr.blueprint.TextLogView(name="Events", origin="log"),
            column_shares=[3, 1]
        ),
        collapse_panels=False,
    )
    return blueprint


def create_search_image(grid, search=None, path=None):
    """
    Create colored visualization of a grid and search state.

    Args:
        grid: OccupancyGrid (map indexed [x, z], 1=wall)
        search: Optional AStarSearch whose open/closed sets are drawn
        path: Optional sequence of locations to draw on top

    Returns:
        Colored image array (depth, width, 3) with uint8 dtype; rows are z
    """
    image = np.zeros((grid.depth, grid.width, 3), dtype=np.uint8)
    image[:] = FREE_COLOR
    image[grid.map.T == WALL] = WALL_COLOR

    if search is not None:
        for loc in search.open_nodes:
            image[loc.z, loc.x] = OPEN_COLOR
        for loc in search.closed_nodes:
            image[loc.z, loc.x] = CLOSED_COLOR

    if path is not None:
        for x, z in path:
            image[z, x] = PATH_COLOR

    if search is not None and search.start is not None:
        image[search.start.z, search.start.x] = START_COLOR
        image[search.goal.z, search.goal.x] = GOAL_COLOR
    return image


class RerunSearchObserver(SearchObserver):
    """
    Search observer that logs every scored neighbour and closed node to Rerun.

    Cell (x, z) is drawn at image pixel (x, z), so points line up with the
    grid image logged under search/grid.
    """

    def __init__(self, grid, config: VisualizerConfig = DEFAULT_VISUALIZER_CONFIG):
        self.grid = grid
        self.config = config
        self.step_index = 0

    def start_viewer(self):
        """Initialize the Rerun recording and send the blueprint."""
        rr.init(self.config.recording_name, spawn=self.config.spawn)
        rr.send_blueprint(setup_search_viewer_blueprint())

    def on_reset(self, start, goal):
        self.step_index = 0
        rr.set_time("step", sequence=self.step_index)
        rr.log("search/grid", rr.Image(create_search_image(self.grid)), static=True)
        rr.log("search/open", rr.Clear(recursive=True))
        rr.log("search/closed", rr.Clear(recursive=True))
        rr.log("search/path", rr.Clear(recursive=True))
        rr.log("search/start", rr.Points2D([self._center(start)], colors=[START_COLOR],
                                          radii=[self.config.cell_radius]))
        rr.log("search/goal", rr.Points2D([self._center(goal)], colors=[GOAL_COLOR],
                                         radii=[self.config.cell_radius]))
        rr.log("log", rr.TextLog(f"New search {tuple(start)} -> {tuple(goal)}"))

    def on_neighbour(self, event):
        label = None
        if self.config.show_costs:
            label = f"G: {event.g:.2f}\nH: {event.h:.2f}\nF: {event.f:.2f}"
        rr.log(
            f"search/open/{event.location.x}_{event.location.z}",
            rr.Points2D([self._center(event.location)], colors=[OPEN_COLOR],
                        radii=[self.config.cell_radius],
                        labels=[label] if label else None)
        )

    def on_closed(self, node):
        self.step_index += 1
        rr.set_time("step", sequence=self.step_index)
        key = f"{node.location.x}_{node.location.z}"
        rr.log(f"search/open/{key}", rr.Clear(recursive=False))
        rr.log(
            f"search/closed/{key}",
            rr.Points2D([self._center(node.location)], colors=[CLOSED_COLOR],
                        radii=[self.config.cell_radius])
        )

    def on_finished(self, outcome):
        rr.log("log", rr.TextLog(f"Search finished: {outcome.value}"))

    def log_path(self, path):
        """Log a reconstructed path as a line strip."""
        points = [self._center(loc) for loc in path]
        rr.log("search/path", rr.LineStrips2D([points], colors=[PATH_COLOR]))

    @staticmethod
    def _center(loc):
        # Pixel centres sit at +0.5 in Rerun image space
        return [loc[0] + 0.5, loc[1] + 0.5]


class RecordingObserver(SearchObserver):
    """Observer that keeps the ordered trace of search events in memory."""

    def __init__(self):
        self.events = []

    def on_reset(self, start, goal):
        self.events.append(("reset", (start, goal)))

    def on_neighbour(self, event):
        self.events.append(("neighbour", event))

    def on_closed(self, node):
        self.events.append(("closed", node.location))

    def on_finished(self, outcome):
        self.events.append(("finished", outcome))

    def of_kind(self, kind):
        return [payload for k, payload in self.events if k == kind]
