"""Node construction for the A* engine.

The builder is the single place where real costs are accumulated along a
parent chain and where heuristic estimates are requested from the provider.
"""

import logging
from typing import Any, Hashable, Optional

from astar_engine.core.data_models import GoalSurface, Node
from astar_engine.search.provider import NodeProvider

logger = logging.getLogger(__name__)


class NodeBuilder:
    """Builds search nodes from a parent, an index and a goal."""

    def __init__(self, provider: NodeProvider):
        self.provider = provider
        self.nodes_built = 0

    def estimate(self, index: Hashable, goal: Any) -> float:
        """Heuristic distance from ``index`` to a goal index or goal surface.

        For a surface the smallest estimate over its members is used, which
        stays admissible when each member's estimate is.
        """
        if isinstance(goal, GoalSurface):
            return min(self.provider.heuristic_distance(index, member) for member in goal)
        return self.provider.heuristic_distance(index, goal)

    def build(self, parent: Optional[Node], index: Hashable, goal: Any) -> Node:
        """Build a new node with accumulated real cost and heuristic.

        Args:
            parent: Node being expanded, or None for the root
            index: Index of the node to create
            goal: Goal index (or GoalSurface) the heuristic points to

        Returns:
            The new node. An infeasible edge cost is carried over as is.
        """
        if parent is None:
            real_cost = self.provider.edge_cost(None, index)
        else:
            real_cost = parent.real_cost
            # No cost for staying on the same index
            if index != parent.index:
                real_cost += self.provider.edge_cost(parent.index, index)

        heuristic = self.estimate(index, goal)
        self.nodes_built += 1

        return Node(index=index, real_cost=real_cost, heuristic=heuristic, parent=parent)

    def build_neighbor(self, parent: Node, index: Hashable, goal: Any) -> Optional[Node]:
        """Build a child of ``parent``, or None if it cannot be reached."""
        node = self.build(parent, index, goal)
        if not node.is_feasible:
            logger.debug(f"Neighbor {index!r} of {parent.index!r} is unreachable")
            return None
        return node
