"""Central logging configuration for the pipeline."""
from __future__ import annotations

import logging
import os
from typing import Optional, Union

LOG_LEVEL_ENV = "MD_IMAGE_PIPELINE_LOG_LEVEL"
_DEFAULT_LEVEL = logging.INFO
_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def parse_level(level: Union[int, str]) -> int:
    """Turn ``"debug"``, ``"WARNING"`` or a numeric level into an int."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def env_level() -> int:
    """Level from the environment; unset or unknown values mean the default."""
    raw = os.environ.get(LOG_LEVEL_ENV)
    if not raw:
        return _DEFAULT_LEVEL
    try:
        return parse_level(raw)
    except ValueError:
        return _DEFAULT_LEVEL


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=env_level(), format=_FORMAT)
    return logger


def set_level(level: Union[int, str]) -> None:
    """Override the root level, e.g. from a ``--log-level`` flag."""
    logging.getLogger().setLevel(parse_level(level))
