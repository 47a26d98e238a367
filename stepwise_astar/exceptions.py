"""
Errors reported by the search.
"""


class SearchError(Exception):
    """Base class for search errors."""


class NotInitialized(SearchError):
    """step() or reconstruct_path() called before initialize()."""

    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: search has not been initialized")
        self.operation = operation


class InvalidLocation(SearchError):
    """A location outside the addressable grid range."""

    def __init__(self, location, width: int, depth: int):
        super().__init__(
            f"Location {tuple(location)} is outside the grid "
            f"[0, {width}) x [0, {depth})"
        )
        self.location = location
        self.width = width
        self.depth = depth


class NoPathFound(SearchError):
    """The open set was exhausted before reaching the goal."""

    def __init__(self, start, goal):
        super().__init__(f"No path from {tuple(start)} to {tuple(goal)}")
        self.start = start
        self.goal = goal


class PathReconstructionError(SearchError):
    """The parent chain did not lead back to the start node."""
