"""Provider contract consumed by the A* engine.

A provider supplies the three domain callbacks the engine needs: the real
cost of an edge, an admissible estimate of the distance to the goal, and the
neighbors of a node. Concrete maps, grids and graphs implement it.
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Hashable, Iterable, Optional

from astar_engine.core.data_models import Node

logger = logging.getLogger(__name__)


class ProviderConfigurationError(ValueError):
    """Raised when the engine is given a missing or unusable provider."""
    pass


REQUIRED_OPERATIONS = ('edge_cost', 'heuristic_distance', 'find_neighbors')


class NodeProvider(ABC):
    """Abstract base class for cost, heuristic and neighbor providers."""

    def __init__(self) -> None:
        """Initialize provider.

        ``neighbors_lock`` guards the collection returned by
        ``find_neighbors``. A provider that shares and mutates that collection
        from other threads should do so while holding the same lock.
        """
        self.neighbors_lock = threading.RLock()

    @abstractmethod
    def edge_cost(self, from_index: Optional[Hashable], to_index: Hashable) -> float:
        """Compute the real cost of moving between two consecutive indices.

        Args:
            from_index: Index moved from, or None for the cost of occupying
                the start index
            to_index: Index moved to

        Returns:
            Non-negative cost, or INFEASIBLE_COST when ``to_index`` cannot be
            reached from ``from_index``
        """
        pass

    @abstractmethod
    def heuristic_distance(self, index: Hashable, goal: Hashable) -> float:
        """Estimate the remaining cost from ``index`` to ``goal``.

        The estimate must never exceed the true remaining cost for the
        returned paths to be optimal.
        """
        pass

    @abstractmethod
    def find_neighbors(self, node: Node) -> Iterable[Hashable]:
        """Return the indices reachable in one step from ``node.index``."""
        pass


class FunctionProvider(NodeProvider):
    """Provider assembled from three plain callables."""

    def __init__(self,
                 edge_cost: Callable[[Optional[Hashable], Hashable], float],
                 heuristic_distance: Callable[[Hashable, Hashable], float],
                 find_neighbors: Callable[[Node], Iterable[Hashable]]):
        """Initialize function provider.

        Args:
            edge_cost: ``(from_index | None, to_index) -> cost``
            heuristic_distance: ``(index, goal) -> estimate``
            find_neighbors: ``(node) -> iterable of indices``
        """
        super().__init__()
        for name, fn in (('edge_cost', edge_cost),
                         ('heuristic_distance', heuristic_distance),
                         ('find_neighbors', find_neighbors)):
            if not callable(fn):
                raise TypeError(f"{name} must be callable, got {type(fn).__name__}")

        self._edge_cost = edge_cost
        self._heuristic_distance = heuristic_distance
        self._find_neighbors = find_neighbors

    def edge_cost(self, from_index, to_index):
        return self._edge_cost(from_index, to_index)

    def heuristic_distance(self, index, goal):
        return self._heuristic_distance(index, goal)

    def find_neighbors(self, node):
        return self._find_neighbors(node)


def validate_provider(provider: object) -> None:
    """Check that ``provider`` can be used by the engine.

    Raises:
        ProviderConfigurationError: If the provider is None or lacks one of
            the required operations
    """
    if provider is None:
        raise ProviderConfigurationError("A* provider cannot be None")

    missing = [name for name in REQUIRED_OPERATIONS
               if not callable(getattr(provider, name, None))]
    if missing:
        raise ProviderConfigurationError(
            f"{type(provider).__name__} is missing provider operations: {', '.join(missing)}"
        )
