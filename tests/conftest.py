"""Shared providers and fixtures for the A* engine tests."""

import pytest

from astar_engine.config import reset_config
from astar_engine.core.data_models import INFEASIBLE_COST
from astar_engine.search.provider import NodeProvider


class LineGraphProvider(NodeProvider):
    """Indices 0..size-1 on a line, unit edge cost, |i - goal| heuristic."""

    def __init__(self, size=6, blocked=None):
        super().__init__()
        self.size = size
        # Directed (from, to) edges that cannot be traversed
        self.blocked = set(blocked or ())
        self.edge_cost_calls = []

    def edge_cost(self, from_index, to_index):
        self.edge_cost_calls.append((from_index, to_index))
        if from_index is None:
            return 0.0
        if (from_index, to_index) in self.blocked:
            return INFEASIBLE_COST
        return 1.0

    def heuristic_distance(self, index, goal):
        return float(abs(goal - index))

    def find_neighbors(self, node):
        return [i for i in (node.index - 1, node.index + 1) if 0 <= i < self.size]


class GraphProvider(NodeProvider):
    """Directed weighted graph with a table heuristic."""

    def __init__(self, edges, heuristic, start_cost=0.0):
        super().__init__()
        self.edges = edges
        self.heuristic = heuristic
        self.start_cost = start_cost

    def edge_cost(self, from_index, to_index):
        if from_index is None:
            return self.start_cost
        return self.edges[from_index].get(to_index, INFEASIBLE_COST)

    def heuristic_distance(self, index, goal):
        return self.heuristic.get(index, 0.0)

    def find_neighbors(self, node):
        return list(self.edges.get(node.index, {}))


@pytest.fixture(autouse=True)
def clear_global_config():
    """Keep a configuration loaded by one test from leaking into the next."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def line_provider():
    """Line graph 0..5."""
    return LineGraphProvider(size=6)


@pytest.fixture
def blocked_line_provider():
    """Line graph 0..5 where 3 cannot be entered from 2."""
    return LineGraphProvider(size=6, blocked={(2, 3)})


@pytest.fixture
def diamond_provider():
    """Two disjoint equal-cost routes 0-1-3 and 0-2-3."""
    edges = {
        0: {1: 1.0, 2: 1.0},
        1: {0: 1.0, 3: 1.0},
        2: {0: 1.0, 3: 1.0},
        3: {1: 1.0, 2: 1.0},
    }
    heuristic = {0: 2.0, 1: 1.0, 2: 1.0, 3: 0.0}
    return GraphProvider(edges, heuristic)


@pytest.fixture
def detour_provider():
    """Graph where C is first closed through the expensive route S-A-C.

    The heuristic of B is inflated so that A is expanded first; the cheaper
    route S-B-C is discovered afterwards and replaces the closed entry of C.
    """
    edges = {
        'S': {'A': 1.0, 'B': 1.0},
        'A': {'C': 5.0},
        'B': {'C': 1.0},
        'C': {'G': 10.0},
        'G': {},
    }
    heuristic = {'S': 0.0, 'A': 0.0, 'B': 10.0, 'C': 0.0, 'G': 0.0}
    return GraphProvider(edges, heuristic)


@pytest.fixture
def corridor_provider():
    """Line graph long enough to expose per-expansion costs that grow with depth."""
    return LineGraphProvider(size=5000)
