"""A* search engine.

This module implements a best-first A* search over an opaque index space.
The domain is supplied by a NodeProvider (edge cost, heuristic, neighbors);
the engine owns the open set, the closed set and the list of found ways, and
supports goal surfaces, k-best ways, a cost ceiling and closest/shortest
fallbacks when the goal cannot be reached.

Example:
    searcher = AStarSearcher(provider)
    if searcher.compute(start, goal):
        # Empty when start is already a goal
        for way in searcher.iter_ways():
            print(way)
    elif searcher.to_closest():
        print(searcher.next_way())
"""

import heapq
import itertools
import logging
import math
import threading
import time
from contextlib import nullcontext
from dataclasses import asdict, dataclass, fields
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

from omegaconf import DictConfig

from astar_engine.config import get_config
from astar_engine.core.data_models import GoalSurface, Node
from astar_engine.search.node_builder import NodeBuilder
from astar_engine.search.provider import NodeProvider, validate_provider

logger = logging.getLogger(__name__)


@dataclass
class SearchConfig:
    """Configuration for A* search."""
    max_paths: int = 1  # Ways to find before stopping
    max_cost: float = math.inf  # Total cost ceiling for closing nodes
    max_nodes_expanded: Optional[int] = None  # None means unlimited
    max_computation_time: Optional[float] = None  # Seconds, None means unlimited
    skip_infeasible: bool = True  # Drop neighbors behind an INFEASIBLE_COST edge
    ceiling_on_replacement_only: bool = False  # Legacy ceiling: only gate closed-set replacements

    @classmethod
    def from_config(cls, cfg: Optional[DictConfig]) -> 'SearchConfig':
        """Build a search configuration from the ``search`` section of a Hydra config.

        Args:
            cfg: Loaded configuration, or None for defaults

        Returns:
            SearchConfig with every key present in the section applied
        """
        if cfg is None or 'search' not in cfg or cfg.search is None:
            return cls()

        section = cfg.search
        values: Dict[str, Any] = {}
        for config_field in fields(cls):
            if config_field.name in section:
                values[config_field.name] = section[config_field.name]

        # null in YAML means no ceiling
        if values.get('max_cost') is None:
            values['max_cost'] = math.inf
        else:
            values['max_cost'] = float(values['max_cost'])

        return cls(**values)


@dataclass
class SearchStatistics:
    """Counters collected during one compute() call."""
    nodes_expanded: int = 0
    nodes_generated: int = 0
    nodes_skipped: int = 0
    closed_replacements: int = 0
    ceiling_rejections: int = 0
    ways_found: int = 0
    max_depth_reached: int = 0
    computation_time: float = 0.0
    termination_reason: str = "not_started"

    def to_dict(self) -> Dict[str, Any]:
        """Convert statistics to dictionary."""
        return asdict(self)


class AStarSearcher:
    """A* search with goal surfaces, k-best ways and nearest-way fallbacks.

    A single searcher is not reentrant: each compute() resets the open set,
    the closed set and the found ways of the previous one.
    """

    def __init__(self, provider: NodeProvider,
                 config: Optional[SearchConfig] = None,
                 should_cancel: Optional[Callable[[], bool]] = None):
        """Initialize A* searcher.

        Args:
            provider: Cost, heuristic and neighbor provider (can be replaced
                later through the ``provider`` property)
            config: Search configuration. If None, read from the loaded
                Hydra configuration, or defaults when none is loaded
            should_cancel: Optional callable polled once per iteration; the
                search stops as soon as it returns True
        """
        self.config = config or SearchConfig.from_config(get_config())
        self.provider = provider
        self.should_cancel = should_cancel

        # Open set entries are (total_cost, sequence, node); the sequence
        # makes equal total costs pop in insertion order.
        self._open_set: List[Tuple[float, int, Node]] = []
        self._closed_set: Dict[Hashable, Node] = {}
        self._ways: List[Node] = []
        self._sequence = itertools.count()
        self._max_cost = self.config.max_cost
        self._cancel_event = threading.Event()

        self.statistics = SearchStatistics()

        logger.info(f"A* searcher initialized with provider={type(provider).__name__}, "
                    f"max_paths={self.config.max_paths}, max_cost={self.config.max_cost}")

    @property
    def provider(self) -> NodeProvider:
        """Provider currently used by the searcher."""
        return self._provider

    @provider.setter
    def provider(self, provider: NodeProvider) -> None:
        validate_provider(provider)
        self._provider = provider
        self._builder = NodeBuilder(provider)

    @property
    def ways_nodes(self) -> Tuple[Node, ...]:
        """Terminal nodes of the ways still to be drained.

        ``ways_nodes[0]`` is the tail of the way the next call to next_way()
        returns.
        """
        return tuple(self._ways)

    def cancel(self) -> None:
        """Ask the running compute() to stop at its next iteration."""
        self._cancel_event.set()

    def compute(self, start: Hashable, goal: Any,
                max_paths: Optional[int] = None,
                max_cost: Optional[float] = None,
                surface: Optional[Iterable[Hashable]] = None) -> bool:
        """Compute ways from ``start`` to ``goal``.

        Args:
            start: Starting index
            goal: Goal index, or a GoalSurface
            max_paths: Maximum ways to find (minimum 1), config default if None
            max_cost: Total cost ceiling, config default if None
            surface: Extra indices accepted as goals besides ``goal``

        Returns:
            True if at least one way reached the goal (drain it with
            next_way()), False otherwise (try to_closest() or to_shortest()).
            When ``start`` already satisfies the goal the result is True but
            no way is recorded, so next_way() returns an empty list.
        """
        start_time = time.perf_counter()
        self._reset()

        self._max_cost = self.config.max_cost if max_cost is None else max_cost
        remaining_ways = max(1, self.config.max_paths if max_paths is None else max_paths)
        goal_surface = GoalSurface.of(surface) if surface is not None else None

        logger.debug(f"Starting A* search: {start!r} -> {goal!r}, "
                     f"max_paths={remaining_ways}, max_cost={self._max_cost}")

        if self._is_goal(start, goal, goal_surface):
            self._finish("initial_match", start_time)
            return True

        deadline = None
        if self.config.max_computation_time is not None:
            deadline = start_time + self.config.max_computation_time

        termination_reason = "search_exhausted"
        node = self._builder.build(None, start, goal)

        while self._expand(node, goal):
            stop_reason = self._check_limits(deadline)
            if stop_reason is not None:
                termination_reason = stop_reason
                break

            node = self._pop()

            if self._is_goal(node.index, goal, goal_surface):
                self._ways.append(node)
                logger.debug(f"Goal reached at {node!r}")

                remaining_ways -= 1
                if remaining_ways == 0:
                    termination_reason = "max_paths_reached"
                    break

        # The goal must not come back as a nearest-way candidate
        self._discard_goal_entries(goal, goal_surface)

        self._finish(termination_reason, start_time)
        return bool(self._ways)

    def compute_to_surface(self, start: Hashable, surface: Iterable[Hashable],
                           max_paths: Optional[int] = None,
                           max_cost: Optional[float] = None) -> bool:
        """Compute ways from ``start`` to any index of ``surface``.

        The heuristic of each node is its smallest estimate over the surface.
        """
        return self.compute(start, GoalSurface.of(surface), max_paths=max_paths, max_cost=max_cost)

    def next_way(self) -> List[Any]:
        """Pop the next way.

        Returns:
            Indices from the start to the end of the way, or an empty list
            when no way remains. This includes a search whose start was
            already a goal (``statistics.termination_reason == "initial_match"``).
        """
        if not self._ways:
            return []
        return self._ways.pop(0).path()

    def iter_ways(self) -> Iterator[List[Any]]:
        """Drain every remaining way in order."""
        while self._ways:
            yield self.next_way()

    def to_closest(self) -> bool:
        """Turn the explored nodes into ways ordered by proximity to the goal.

        Call after compute() returned False. Previous ways are discarded.

        Returns:
            True if at least one way is available
        """
        if not self._prepare_to_nearest():
            return False

        self._ways.sort(key=lambda node: (node.heuristic, node.total_cost))
        return True

    def to_shortest(self) -> bool:
        """Turn the explored nodes into ways ordered by total estimated cost.

        Call after compute() returned False. Previous ways are discarded.

        Returns:
            True if at least one way is available
        """
        if not self._prepare_to_nearest():
            return False

        self._ways.sort(key=lambda node: (node.total_cost, node.heuristic))
        return True

    def get_search_stats(self) -> Dict[str, Any]:
        """Get statistics of the last search and the effective configuration."""
        stats = self.statistics.to_dict()
        stats['ways_remaining'] = len(self._ways)
        stats['closed_set_size'] = len(self._closed_set)
        stats['config'] = asdict(self.config)
        return stats

    def _reset(self) -> None:
        self._open_set.clear()
        self._closed_set.clear()
        self._ways.clear()
        self._sequence = itertools.count()
        self._cancel_event.clear()
        self.statistics = SearchStatistics()

    def _is_goal(self, index: Hashable, goal: Any, surface: Optional[GoalSurface]) -> bool:
        if isinstance(goal, GoalSurface):
            return index in goal
        return index == goal or (surface is not None and index in surface)

    def _push(self, node: Node) -> None:
        heapq.heappush(self._open_set, (node.total_cost, next(self._sequence), node))
        self.statistics.nodes_generated += 1

    def _pop(self) -> Node:
        return heapq.heappop(self._open_set)[2]

    def _may_close(self, node: Node, previous: Optional[Node]) -> bool:
        """Decide whether ``node`` becomes the closed-set entry for its index."""
        if previous is not None and node.total_cost >= previous.total_cost:
            return False

        if previous is None and self.config.ceiling_on_replacement_only:
            return True

        if node.total_cost > self._max_cost:
            self.statistics.ceiling_rejections += 1
            logger.debug(f"Ceiling {self._max_cost} rejects {node!r}")
            return False

        return True

    def _expand(self, current: Node, goal: Any) -> bool:
        """Close ``current`` if it improves its index and push its neighbors.

        Args:
            current: Node taken from the open set (or the root)
            goal: Goal index or surface the heuristic points to

        Returns:
            True while the open set is not empty
        """
        previous = self._closed_set.get(current.index)

        if self._may_close(current, previous):
            if previous is not None:
                self.statistics.closed_replacements += 1
                logger.debug(f"Replacing {previous!r} with {current!r}")

            self._closed_set[current.index] = current
            self.statistics.nodes_expanded += 1

            depth = current.depth
            if depth > self.statistics.max_depth_reached:
                self.statistics.max_depth_reached = depth

            parent = current.parent
            for neighbor in self._snapshot_neighbors(current):
                # Never step back to the parent nor stay in place
                if neighbor == current.index or (parent is not None and neighbor == parent.index):
                    self.statistics.nodes_skipped += 1
                    continue

                if self.config.skip_infeasible:
                    child = self._builder.build_neighbor(current, neighbor, goal)
                else:
                    child = self._builder.build(current, neighbor, goal)

                if child is None:
                    self.statistics.nodes_skipped += 1
                    continue

                self._push(child)

        return bool(self._open_set)

    def _snapshot_neighbors(self, node: Node) -> List[Hashable]:
        """Copy the provider's neighbor collection while holding its lock."""
        neighbors = self.provider.find_neighbors(node)
        if neighbors is None:
            return []

        lock = getattr(self.provider, 'neighbors_lock', None)
        with (lock if lock is not None else nullcontext()):
            return list(neighbors)

    def _check_limits(self, deadline: Optional[float]) -> Optional[str]:
        """Return the reason to stop early, or None to keep searching."""
        if self._cancel_event.is_set() or (self.should_cancel is not None and self.should_cancel()):
            return "cancelled"

        limit = self.config.max_nodes_expanded
        if limit is not None and self.statistics.nodes_expanded >= limit:
            return "max_nodes_reached"

        if deadline is not None and time.perf_counter() > deadline:
            return "timeout"

        return None

    def _discard_goal_entries(self, goal: Any, surface: Optional[GoalSurface]) -> None:
        if isinstance(goal, GoalSurface):
            for member in goal:
                self._closed_set.pop(member, None)
        else:
            self._closed_set.pop(goal, None)

        if surface is not None:
            for member in surface:
                self._closed_set.pop(member, None)

    def _prepare_to_nearest(self) -> bool:
        """Replace the ways by every node left in the closed set."""
        self._ways.clear()

        if not self._closed_set:
            logger.debug("No explored node to build nearest ways from")
            return False

        self._ways.extend(self._closed_set.values())
        self._closed_set.clear()
        return True

    def _finish(self, termination_reason: str, start_time: float) -> None:
        self.statistics.termination_reason = termination_reason
        self.statistics.ways_found = len(self._ways)
        self.statistics.computation_time = time.perf_counter() - start_time

        logger.info(f"A* search finished ({termination_reason}): {len(self._ways)} way(s), "
                    f"{self.statistics.nodes_expanded} nodes expanded in "
                    f"{self.statistics.computation_time * 1000:.2f}ms")


def create_astar_searcher(provider: NodeProvider,
                          max_paths: int = 1,
                          max_cost: float = math.inf,
                          max_nodes_expanded: Optional[int] = None,
                          max_computation_time: Optional[float] = None) -> AStarSearcher:
    """Factory function to create A* searcher with custom configuration.

    Args:
        provider: Cost, heuristic and neighbor provider
        max_paths: Default number of ways per compute()
        max_cost: Default total cost ceiling
        max_nodes_expanded: Expansion budget, None for unlimited
        max_computation_time: Time budget in seconds, None for unlimited

    Returns:
        Configured AStarSearcher instance
    """
    config = SearchConfig(
        max_paths=max_paths,
        max_cost=max_cost,
        max_nodes_expanded=max_nodes_expanded,
        max_computation_time=max_computation_time
    )

    return AStarSearcher(provider, config)
