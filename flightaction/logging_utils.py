"""Mini README: Application-wide logging helpers for flightaction.

Structure:
    * get_logger - factory returning module loggers after baseline setup.
    * configure_root_logger - one-time root configuration with level control.

Usage:
    Modules import ``get_logger`` and keep a module-level ``LOGGER``. Command
    completions are delivered on channel worker threads, so the formatter
    records the thread name next to the logger name to keep interleaved
    acknowledgements readable.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(threadName)s] %(name)s - %(message)s"


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Attach the stream handler once; apply ``level`` whenever one is given."""

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    if not _LOGGER_INITIALISED:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root_logger.addHandler(handler)
        root_logger.setLevel(logging.INFO if level is None else level)
        _LOGGER_INITIALISED = True
    elif level is not None:
        root_logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
