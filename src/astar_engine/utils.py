"""Logging helpers for applications embedding the A* engine."""

import logging
from typing import Optional

from omegaconf import DictConfig


def setup_logging(level: int = logging.INFO,
                  format_string: Optional[str] = None) -> None:
    """Setup logging configuration.

    Args:
        level: Logging level
        format_string: Custom format string
    """
    if format_string is None:
        if level <= logging.DEBUG:
            format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_string = "%(levelname)s: %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def setup_logging_from_config(cfg: Optional[DictConfig]) -> int:
    """Setup logging from the ``logging.level`` entry of a loaded configuration.

    Returns:
        The numeric level that was applied
    """
    level_name = 'INFO'
    if cfg is not None and 'logging' in cfg and cfg.logging is not None:
        level_name = str(cfg.logging.get('level', 'INFO')).upper()

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {level_name}")

    setup_logging(level)
    return level
