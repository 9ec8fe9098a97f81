"""Distance heuristics for coordinate index spaces.

These functions take two coordinate sequences (tuples, lists or numpy arrays
of equal length) and can be used directly as ``heuristic_distance`` of a
provider whose indices are grid or map coordinates. With unit step costs:
- manhattan: 4-connected moves
- chebyshev: 8-connected moves where a diagonal costs 1
- octile: 8-connected moves where a diagonal costs sqrt(2)
- euclidean: any-angle moves
"""

import logging
import math
from typing import Callable, Sequence

import numpy as np

logger = logging.getLogger(__name__)

Coordinates = Sequence[float]
DistanceFunction = Callable[[Coordinates, Coordinates], float]


def _delta(a: Coordinates, b: Coordinates) -> np.ndarray:
    """Absolute per-axis difference between two coordinates."""
    a_arr = np.asarray(a, dtype=np.float64)
    b_arr = np.asarray(b, dtype=np.float64)
    if a_arr.shape != b_arr.shape:
        raise ValueError(f"Coordinate shapes differ: {a_arr.shape} vs {b_arr.shape}")
    return np.abs(a_arr - b_arr)


def manhattan_distance(a: Coordinates, b: Coordinates) -> float:
    """L1 distance."""
    return float(np.sum(_delta(a, b)))


def euclidean_distance(a: Coordinates, b: Coordinates) -> float:
    """L2 distance."""
    return float(np.linalg.norm(_delta(a, b)))


def chebyshev_distance(a: Coordinates, b: Coordinates) -> float:
    """L-infinity distance."""
    delta = _delta(a, b)
    if delta.size == 0:
        return 0.0
    return float(np.max(delta))


def octile_distance(a: Coordinates, b: Coordinates) -> float:
    """Diagonal distance for 2D grids where diagonal steps cost sqrt(2)."""
    delta = _delta(a, b)
    if delta.shape != (2,):
        raise ValueError(f"octile_distance expects 2D coordinates, got shape {delta.shape}")
    dx, dy = delta
    return float(max(dx, dy) + (math.sqrt(2) - 1) * min(dx, dy))


def make_scaled_heuristic(distance: DistanceFunction, weight: float) -> DistanceFunction:
    """Scale a distance function by a constant weight.

    A weight in (0, 1] keeps an admissible distance admissible. Larger
    weights give a weighted A* that trades optimality for fewer expansions.

    Args:
        distance: Base distance function
        weight: Positive multiplier

    Returns:
        Scaled distance function
    """
    if weight <= 0:
        raise ValueError(f"Heuristic weight must be positive, got {weight}")
    if weight > 1:
        logger.warning(f"Heuristic weight {weight} > 1 makes {distance.__name__} inadmissible")

    def scaled(a: Coordinates, b: Coordinates) -> float:
        return weight * distance(a, b)

    scaled.__name__ = f"scaled_{distance.__name__}"
    return scaled
