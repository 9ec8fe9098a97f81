"""Tests for coordinate distance heuristics."""

import logging
import math

import numpy as np
import pytest

from astar_engine.search.astar import AStarSearcher
from astar_engine.search.heuristics import (
    chebyshev_distance, euclidean_distance, make_scaled_heuristic,
    manhattan_distance, octile_distance
)
from astar_engine.search.provider import FunctionProvider


class TestDistanceFunctions:
    """Test the distance values."""

    def test_manhattan(self):
        """Test L1 distance."""
        assert manhattan_distance((0, 0), (3, 4)) == 7.0
        assert manhattan_distance((1, 2, 3), (1, 2, 3)) == 0.0

    def test_euclidean(self):
        """Test L2 distance."""
        assert euclidean_distance((0, 0), (3, 4)) == pytest.approx(5.0)
        assert euclidean_distance([1.5], [-1.5]) == pytest.approx(3.0)

    def test_chebyshev(self):
        """Test L-infinity distance."""
        assert chebyshev_distance((0, 0), (3, 4)) == 4.0
        assert chebyshev_distance((), ()) == 0.0

    def test_octile(self):
        """Test diagonal distance with sqrt(2) diagonals."""
        assert octile_distance((0, 0), (3, 4)) == pytest.approx(3 * math.sqrt(2) + 1)
        assert octile_distance((2, 2), (2, 7)) == pytest.approx(5.0)

    def test_octile_requires_2d(self):
        """Test that octile distance rejects other dimensions."""
        with pytest.raises(ValueError, match="2D"):
            octile_distance((0, 0, 0), (1, 1, 1))

    def test_numpy_input(self):
        """Test that numpy arrays are accepted."""
        a = np.array([1, 1])
        b = np.array([4, 5])

        assert manhattan_distance(a, b) == 7.0
        assert isinstance(manhattan_distance(a, b), float)

    def test_shape_mismatch(self):
        """Test that coordinates of different dimensions are rejected."""
        with pytest.raises(ValueError, match="shapes differ"):
            manhattan_distance((0, 0), (1, 1, 1))

    def test_ordering_between_metrics(self):
        """Test chebyshev <= octile <= manhattan and euclidean <= octile."""
        a, b = (1, 7), (6, 2)

        assert chebyshev_distance(a, b) <= octile_distance(a, b) <= manhattan_distance(a, b)
        assert euclidean_distance(a, b) <= octile_distance(a, b)


class TestScaledHeuristic:
    """Test weighted heuristics."""

    def test_scaling(self):
        """Test that the weight multiplies the base distance."""
        half = make_scaled_heuristic(manhattan_distance, 0.5)

        assert half((0, 0), (2, 2)) == 2.0
        assert half.__name__ == "scaled_manhattan_distance"

    def test_non_positive_weight(self):
        """Test that a zero or negative weight is rejected."""
        with pytest.raises(ValueError):
            make_scaled_heuristic(manhattan_distance, 0)
        with pytest.raises(ValueError):
            make_scaled_heuristic(manhattan_distance, -1.0)

    def test_inadmissible_weight_warns(self, caplog):
        """Test the warning for weights above one."""
        with caplog.at_level(logging.WARNING, logger="astar_engine.search.heuristics"):
            make_scaled_heuristic(euclidean_distance, 2.0)

        assert "inadmissible" in caplog.text

    def test_admissible_weight_is_silent(self, caplog):
        """Test that weights up to one do not warn."""
        with caplog.at_level(logging.WARNING, logger="astar_engine.search.heuristics"):
            make_scaled_heuristic(euclidean_distance, 1.0)

        assert caplog.text == ""


class TestHeuristicInSearch:
    """Test heuristics plugged into a provider."""

    @staticmethod
    def open_grid_provider(heuristic):
        def find_neighbors(node):
            x, y = node.index
            return [(nx, ny) for nx, ny in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1))
                    if 0 <= nx < 6 and 0 <= ny < 6]

        return FunctionProvider(
            edge_cost=lambda a, b: 0.0 if a is None else 1.0,
            heuristic_distance=heuristic,
            find_neighbors=find_neighbors
        )

    @pytest.mark.parametrize("heuristic", [
        manhattan_distance, euclidean_distance, chebyshev_distance, octile_distance
    ])
    def test_admissible_heuristics_find_optimal_cost(self, heuristic):
        """Test that every admissible metric finds the optimal 4-connected cost."""
        searcher = AStarSearcher(self.open_grid_provider(heuristic))

        assert searcher.compute((0, 0), (5, 3))
        assert searcher.ways_nodes[0].real_cost == 8.0

    def test_weighted_heuristic_still_reaches_goal(self):
        """Test that an inadmissible weight still yields a way to the goal."""
        heuristic = make_scaled_heuristic(manhattan_distance, 3.0)
        searcher = AStarSearcher(self.open_grid_provider(heuristic))

        assert searcher.compute((0, 0), (5, 3))
        assert searcher.next_way()[-1] == (5, 3)
