"""Mini README: Application-wide logging helpers for the expense tracker.

Structure:
    * configure_root_logger - installs the shared console handler and level.
    * get_logger - factory returning module loggers with baseline configuration.

Usage:
    Modules call ``get_logger(__name__)`` once at import time and keep the
    result in a module-level ``LOGGER``. The CLI and web entry points call
    ``configure_root_logger`` with the configured level; repeated calls only
    adjust the level so handlers are never duplicated on reload.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def configure_root_logger(level: Union[int, str] = logging.INFO) -> None:
    """Configure the root logger once, then only update its level."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    root_logger.setLevel(_resolve_level(level))
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring a handler is installed."""

    if not _LOGGER_INITIALISED:
        configure_root_logger()
    return logging.getLogger(name)
