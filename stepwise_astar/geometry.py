"""
Distance helpers over grid cell centres.
"""

import numpy as np
from typing import Sequence


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Euclidean distance between two cell centres.

    Args:
        a: First cell (x, z)
        b: Second cell (x, z)

    Returns:
        Distance as a Python float
    """
    return float(np.hypot(a[0] - b[0], a[1] - b[1]))


def cell_centers(cells) -> np.ndarray:
    """Stack cells into an (N, 2) float array of centre coordinates."""
    if len(cells) == 0:
        return np.empty((0, 2))
    return np.asarray(cells, dtype=float)


def path_length(path) -> float:
    """Total Euclidean length of a path of cells."""
    points = cell_centers(path)
    if len(points) < 2:
        return 0.0
    return float(np.linalg.norm(np.diff(points, axis=0), axis=1).sum())
