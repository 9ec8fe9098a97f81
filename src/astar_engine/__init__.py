"""Generic A* search engine over user-defined index spaces."""

from astar_engine.core.data_models import Node, GoalSurface, INFEASIBLE_COST
from astar_engine.search.provider import NodeProvider, FunctionProvider, ProviderConfigurationError
from astar_engine.search.node_builder import NodeBuilder
from astar_engine.search.astar import AStarSearcher, SearchConfig, SearchStatistics, create_astar_searcher

__version__ = "1.0.0"

__all__ = [
    'Node',
    'GoalSurface',
    'INFEASIBLE_COST',
    'NodeProvider',
    'FunctionProvider',
    'ProviderConfigurationError',
    'NodeBuilder',
    'AStarSearcher',
    'SearchConfig',
    'SearchStatistics',
    'create_astar_searcher'
]
