"""
Incremental A* search over a grid adapter.

The search is advanced one expansion at a time by the caller:

    search = AStarSearch(grid)
    search.initialize((1, 1), (3, 3))
    while search.step() is StepOutcome.CONTINUING:
        pass
    path = search.reconstruct_path()

Each call to step() expands the current frontier node, scores its
neighbours, then moves the open node with the lowest (f, h) to the closed
set and makes it the new frontier. Observers are notified of every scored
neighbour and every closed node, in the order they are produced.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional

from .config import DEFAULT_SEARCH_CONFIG, SearchConfig, UpdatePolicy
from .exceptions import InvalidLocation, NotInitialized, PathReconstructionError
from .geometry import euclidean_distance
from .grid import GridAdapter, Location, in_bounds

logger = logging.getLogger(__name__)


@dataclass
class SearchNode:
    """A grid cell discovered during search."""
    location: Location
    g: float
    h: float
    parent: Optional[Location] = None  # None only for the start node

    @property
    def f(self) -> float:
        return self.g + self.h


@dataclass(frozen=True)
class StepEvent:
    """A neighbour scored during one expansion."""
    location: Location
    g: float
    h: float
    parent: Location
    inserted: bool  # added to the open set
    updated: bool   # an existing open node was overwritten

    @property
    def f(self) -> float:
        return self.g + self.h


class StepOutcome(Enum):
    CONTINUING = "continuing"
    DONE = "done"
    NO_PATH_FOUND = "no_path_found"


class SearchState(Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    DONE = "done"
    NO_PATH = "no_path"


class SearchObserver:
    """
    Base class for search observers. All hooks are optional; any object
    providing some of these methods can be registered.
    """

    def on_reset(self, start: Location, goal: Location):
        pass

    def on_neighbour(self, event: StepEvent):
        pass

    def on_closed(self, node: SearchNode):
        pass

    def on_finished(self, outcome: StepOutcome):
        pass


class AStarSearch:
    """
    Step-driven A* search.

    State machine: IDLE -> SEARCHING -> DONE, or SEARCHING -> NO_PATH when
    the open set runs out before the goal is closed. initialize() may be
    called from any state and discards the previous search.

    Rediscovered open nodes are overwritten with the newly computed costs
    and parent even when the new cost is worse (UpdatePolicy.ALWAYS).
    Pass SearchConfig(update_policy=UpdatePolicy.IF_BETTER) to update only
    on strictly lower g; this changes which path is found.
    """

    def __init__(self, grid: GridAdapter, config: Optional[SearchConfig] = None, observers=()):
        self.grid = grid
        self.config = config or DEFAULT_SEARCH_CONFIG
        self.observers = list(observers)
        self.state = SearchState.IDLE
        self.expansions = 0
        self._open = {}
        self._closed = {}
        self._start_node: Optional[SearchNode] = None
        self._goal: Optional[Location] = None
        self._frontier: Optional[SearchNode] = None

    def add_observer(self, observer):
        self.observers.append(observer)

    @property
    def start(self) -> Optional[Location]:
        return self._start_node.location if self._start_node else None

    @property
    def goal(self) -> Optional[Location]:
        return self._goal

    @property
    def open_nodes(self) -> Mapping[Location, SearchNode]:
        return MappingProxyType(self._open)

    @property
    def closed_nodes(self) -> Mapping[Location, SearchNode]:
        return MappingProxyType(self._closed)

    @property
    def is_done(self) -> bool:
        """True once the goal has been reached."""
        return self.state is SearchState.DONE

    @property
    def is_finished(self) -> bool:
        """True once the search has terminated, with or without a path."""
        return self.state in (SearchState.DONE, SearchState.NO_PATH)

    def current_frontier(self) -> Optional[SearchNode]:
        """The most recently closed node, or the start node before the first expansion."""
        return self._frontier

    def initialize(self, start, goal):
        """
        Begin a new search from start to goal.

        Args:
            start: Start cell (x, z)
            goal: Goal cell (x, z)

        Raises:
            InvalidLocation: If start or goal lies outside the grid
        """
        start = Location(*start)
        goal = Location(*goal)
        for loc in (start, goal):
            if not in_bounds(self.grid, loc):
                raise InvalidLocation(loc, self.grid.width, self.grid.depth)

        start_node = SearchNode(start, 0.0, 0.0)
        self._open = {start: start_node}
        self._closed = {}
        self._start_node = start_node
        self._goal = goal
        self._frontier = start_node
        self.expansions = 0
        self.state = SearchState.SEARCHING

        logger.debug("Search initialized: %s -> %s", start, goal)
        self._notify("on_reset", start, goal)

    def step(self, current=None) -> StepOutcome:
        """
        Perform one bounded expansion.

        Args:
            current: Node (or location of a discovered node) to expand;
                defaults to the current frontier

        Returns:
            StepOutcome of this call. Once the search has terminated,
            further calls change nothing and repeat the terminal outcome.

        Raises:
            NotInitialized: If initialize() has not been called
            InvalidLocation: If current lies outside the grid
            ValueError: If current is not a node of this search
        """
        if self.state is SearchState.IDLE:
            raise NotInitialized("step")
        if self.state is SearchState.DONE:
            return StepOutcome.DONE
        if self.state is SearchState.NO_PATH:
            return StepOutcome.NO_PATH_FOUND

        if current is None:
            current = self._frontier
        else:
            current = self._resolve(current, ValueError)

        if current.location == self._goal:
            return self._finish(SearchState.DONE, StepOutcome.DONE)

        for direction in self.grid.directions:
            neighbour = current.location + direction
            if not in_bounds(self.grid, neighbour):
                continue
            if self.grid.is_blocked(neighbour):
                continue
            if neighbour in self._closed:
                continue

            g = euclidean_distance(current.location, neighbour) + current.g
            h = euclidean_distance(neighbour, self._goal)
            self._notify("on_neighbour", self._discover(neighbour, g, h, current.location))

        if not self._open:
            return self._finish(SearchState.NO_PATH, StepOutcome.NO_PATH_FOUND)

        best = min(self._open.values(), key=lambda n: (n.f, n.h))
        del self._open[best.location]
        self._closed[best.location] = best
        self._frontier = best
        self.expansions += 1

        logger.debug("Expansion %d closed %s (g=%.2f h=%.2f f=%.2f), %d open",
                     self.expansions, best.location, best.g, best.h, best.f, len(self._open))
        self._notify("on_closed", best)

        if best.location == self._goal:
            return self._finish(SearchState.DONE, StepOutcome.DONE)
        return StepOutcome.CONTINUING

    def run(self, max_steps: Optional[int] = None) -> StepOutcome:
        """
        Step until the search terminates or max_steps calls have been made.

        Args:
            max_steps: Step budget; falls back to config.max_steps, None for unlimited

        Returns:
            Outcome of the last step, CONTINUING if the budget ran out
        """
        if max_steps is None:
            max_steps = self.config.max_steps
        outcome = StepOutcome.CONTINUING
        count = 0
        while max_steps is None or count < max_steps:
            outcome = self.step()
            count += 1
            if outcome is not StepOutcome.CONTINUING:
                break
        return outcome

    def iter_path(self, from_node=None) -> Iterator[Location]:
        """
        Lazily walk parent links from from_node back to the start.

        Args:
            from_node: Node or discovered location; defaults to the frontier

        Yields:
            Locations from from_node to the start, start included last

        Raises:
            InvalidLocation: If from_node lies outside the grid
            PathReconstructionError: If the chain breaks or does not reach
                the start within |open| + |closed| hops
        """
        if self.state is SearchState.IDLE:
            raise NotInitialized("reconstruct path")

        if from_node is None:
            node = self._frontier
        else:
            node = self._resolve(from_node, PathReconstructionError)

        start = self._start_node.location
        limit = len(self._open) + len(self._closed)
        for _ in range(limit + 1):
            yield node.location
            if node.location == start:
                return
            if node.parent is None:
                raise PathReconstructionError(f"Node {node.location} has no parent")
            parent = self._node_at(node.parent)
            if parent is None:
                raise PathReconstructionError(f"Parent {node.parent} of {node.location} is unknown")
            node = parent
        raise PathReconstructionError(f"Parent chain did not reach start {start} within {limit} steps")

    def reconstruct_path(self, from_node=None) -> List[Location]:
        """Path from from_node (default: frontier) back to the start, start last."""
        return list(self.iter_path(from_node))

    def _discover(self, location: Location, g: float, h: float, parent: Location) -> StepEvent:
        existing = self._open.get(location)
        if existing is None:
            self._open[location] = SearchNode(location, g, h, parent)
            return StepEvent(location, g, h, parent, inserted=True, updated=False)

        updated = self.config.update_policy is UpdatePolicy.ALWAYS or g < existing.g
        if updated:
            existing.g = g
            existing.h = h
            existing.parent = parent
        return StepEvent(location, g, h, parent, inserted=False, updated=updated)

    def _resolve(self, ref, unknown_error) -> SearchNode:
        """Map a node or location to the node stored by this search."""
        loc = ref.location if isinstance(ref, SearchNode) else Location(*ref)
        if not in_bounds(self.grid, loc):
            raise InvalidLocation(loc, self.grid.width, self.grid.depth)
        node = self._node_at(loc)
        if node is None:
            raise unknown_error(f"Location {tuple(loc)} has not been discovered by this search")
        # Nodes left over from an earlier initialize() are not accepted
        if isinstance(ref, SearchNode) and ref is not node:
            raise unknown_error(f"Node at {tuple(loc)} does not belong to the current search")
        return node

    def _node_at(self, location: Location) -> Optional[SearchNode]:
        node = self._closed.get(location)
        if node is None:
            node = self._open.get(location)
        return node

    def _finish(self, state: SearchState, outcome: StepOutcome) -> StepOutcome:
        self.state = state
        if state is SearchState.DONE:
            logger.info("Reached goal %s after %d expansions", self._goal, self.expansions)
        else:
            logger.info("No path from %s to %s after %d expansions",
                        self.start, self._goal, self.expansions)
        self._notify("on_finished", outcome)
        return outcome

    def _notify(self, hook: str, *args):
        for observer in self.observers:
            method = getattr(observer, hook, None)
            if method is not None:
                method(*args)
