"""Mini README: Application-wide logging helpers for the expense tracker.

Structure:
    * get_logger - factory returning module loggers on a configured root.
    * configure_root_logger - one-time root handler setup plus level changes.

Usage:
    Modules import ``get_logger`` and keep a module level ``LOGGER``. The
    launcher calls ``configure_root_logger`` with the configured level before
    the web server starts. The handler is attached only once so uvicorn
    reloads do not stack duplicate output; later calls only adjust the level.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def _resolve_level(level: Union[int, str]) -> int:
    """Translate level names such as ``"debug"`` into logging constants."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Configure the root logger, defaulting to INFO on first use."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(_resolve_level(level))
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(_resolve_level(level if level is not None else logging.INFO))
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
