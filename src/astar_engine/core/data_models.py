"""Core data models for the A* engine."""

import sys
from dataclasses import dataclass, field
from typing import Any, FrozenSet, Hashable, Iterable, Iterator, List, Optional


# Cost returned by a provider for an edge that cannot be traversed.
INFEASIBLE_COST: float = sys.float_info.max


@dataclass(frozen=True, eq=False)
class Node:
    """Vertex of the A* search tree.

    A node is characterised by:
    - ``real_cost`` (g): accumulated real cost from the start to this node
    - ``heuristic`` (h): estimated cost from this node to the goal
    - ``total_cost`` (f): g + h, the priority key of the open set
    - ``parent``: the node this one was expanded from, None for the root
    - ``index``: the domain position, opaque to the engine

    Nodes compare by identity. Two nodes for the same index are different
    candidates for that index.
    """
    index: Hashable
    real_cost: float
    heuristic: float
    parent: Optional['Node'] = None
    total_cost: float = field(init=False)
    depth: int = field(init=False)  # Parent links between this node and the root

    def __post_init__(self) -> None:
        """Cache f = g + h and the depth in the search tree."""
        object.__setattr__(self, 'total_cost', self.real_cost + self.heuristic)
        object.__setattr__(self, 'depth', 0 if self.parent is None else self.parent.depth + 1)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_feasible(self) -> bool:
        """False once an infeasible edge has been accumulated on the way here."""
        return self.real_cost < INFEASIBLE_COST

    def iter_ancestors(self) -> Iterator['Node']:
        """Yield this node, then each parent up to the root."""
        node: Optional[Node] = self
        while node is not None:
            yield node
            node = node.parent

    def path(self) -> List[Any]:
        """Get the sequence of indices from the root to this node."""
        indices = [node.index for node in self.iter_ancestors()]
        return list(reversed(indices))

    def __repr__(self) -> str:
        return (f"Node(index={self.index!r}, g={self.real_cost:.2f}, "
                f"h={self.heuristic:.2f}, f={self.total_cost:.2f})")


@dataclass(frozen=True)
class GoalSurface:
    """Set of acceptable goal indices, any of which terminates a path."""
    members: FrozenSet[Hashable]

    def __post_init__(self) -> None:
        """Normalise to a frozenset and reject empty surfaces."""
        object.__setattr__(self, 'members', frozenset(self.members))
        if not self.members:
            raise ValueError("Goal surface must contain at least one index")

    @classmethod
    def of(cls, indices: Iterable[Hashable]) -> 'GoalSurface':
        """Build a surface from any iterable of indices."""
        if isinstance(indices, GoalSurface):
            return indices
        return cls(frozenset(indices))

    def __contains__(self, index: object) -> bool:
        return index in self.members

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)
