"""Core data models for the A* engine."""

from .data_models import Node, GoalSurface, INFEASIBLE_COST

__all__ = ['Node', 'GoalSurface', 'INFEASIBLE_COST']
