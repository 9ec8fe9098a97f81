"""Search algorithms for the A* engine.

This module implements the A* engine, the provider contract it consumes and
the builder that turns provider answers into search nodes.
"""

from .provider import NodeProvider, FunctionProvider, ProviderConfigurationError, validate_provider
from .node_builder import NodeBuilder
from .astar import AStarSearcher, SearchConfig, SearchStatistics, create_astar_searcher
from .heuristics import (
    manhattan_distance, euclidean_distance, chebyshev_distance, octile_distance,
    make_scaled_heuristic
)

__all__ = [
    'NodeProvider',
    'FunctionProvider',
    'ProviderConfigurationError',
    'validate_provider',
    'NodeBuilder',
    'AStarSearcher',
    'SearchConfig',
    'SearchStatistics',
    'create_astar_searcher',
    'manhattan_distance',
    'euclidean_distance',
    'chebyshev_distance',
    'octile_distance',
    'make_scaled_heuristic'
]
