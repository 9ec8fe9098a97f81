"""Configuration validation for the A* engine."""

import logging
from typing import List

from omegaconf import DictConfig

logger = logging.getLogger(__name__)

LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


class ConfigValidationError(Exception):
    """Exception raised when configuration validation fails."""
    pass


def validate_config(config: DictConfig) -> None:
    """Validate the complete configuration.

    Args:
        config: Configuration to validate

    Raises:
        ConfigValidationError: If validation fails
    """
    try:
        validate_search_config(config.get('search', {}))
        validate_logging_config(config.get('logging', {}))
    except ConfigValidationError:
        raise
    except Exception as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e

    for warning in check_config_consistency(config):
        logger.warning(warning)

    logger.info("Configuration validation passed")


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_search_config(search_config: DictConfig) -> None:
    """Validate search configuration section.

    Args:
        search_config: Search configuration section
    """
    if not search_config:
        return

    max_paths = search_config.get('max_paths', 1)
    if not isinstance(max_paths, int) or isinstance(max_paths, bool) or max_paths < 1:
        raise ConfigValidationError(
            f"search.max_paths must be integer >= 1, got {max_paths}"
        )

    max_cost = search_config.get('max_cost', None)
    if max_cost is not None and (not _is_number(max_cost) or max_cost < 0):
        raise ConfigValidationError(
            f"search.max_cost must be null or a non-negative number, got {max_cost}"
        )

    max_nodes = search_config.get('max_nodes_expanded', None)
    if max_nodes is not None and (not isinstance(max_nodes, int) or isinstance(max_nodes, bool)
                                  or max_nodes <= 0):
        raise ConfigValidationError(
            f"search.max_nodes_expanded must be null or a positive integer, got {max_nodes}"
        )

    max_time = search_config.get('max_computation_time', None)
    if max_time is not None and (not _is_number(max_time) or max_time <= 0):
        raise ConfigValidationError(
            f"search.max_computation_time must be null or a positive number, got {max_time}"
        )

    for flag in ('skip_infeasible', 'ceiling_on_replacement_only'):
        value = search_config.get(flag, False)
        if not isinstance(value, bool):
            raise ConfigValidationError(f"search.{flag} must be boolean, got {value}")


def validate_logging_config(logging_config: DictConfig) -> None:
    """Validate logging configuration section."""
    if not logging_config:
        return

    level = logging_config.get('level', 'INFO')
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigValidationError(
            f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {level}"
        )


def check_config_consistency(config: DictConfig) -> List[str]:
    """Check configuration consistency and return issues.

    Args:
        config: Configuration to check

    Returns:
        List of consistency issues
    """
    issues = []

    search_config = config.get('search', {}) or {}
    if search_config.get('ceiling_on_replacement_only', False) and search_config.get('max_cost') is None:
        issues.append("ceiling_on_replacement_only has no effect without search.max_cost")

    if not search_config.get('skip_infeasible', True) and search_config.get('max_cost') is None:
        issues.append(
            "skip_infeasible is disabled and no max_cost is set: unreachable edges "
            "will still be expanded"
        )

    return issues
