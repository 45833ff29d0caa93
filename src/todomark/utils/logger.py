"""Logging helpers for todomark.

Every module logs through ``get_logger(__name__)``, so all records live
under the ``todomark`` namespace. The library never installs handlers on
its own; the command line calls ``configure_logging`` once.

Example:
    >>> from todomark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Compiling keyword pattern")
"""

from __future__ import annotations

import logging
from typing import TextIO

ROOT_LOGGER = "todomark"

# -v count -> level
_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)

# Handler installed by configure_logging
_handler: logging.Handler | None = None


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``todomark`` namespace.

    Example:
        >>> get_logger("mymodule").name
        'todomark.mymodule'
    """
    if not (name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}.")):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(verbosity: int = 0, stream: TextIO | None = None) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Repeated calls only adjust the level while the installed handler is
    still attached.

    Args:
        verbosity: 0 for warnings, 1 for info, 2 or more for debug
        stream: Destination (default: ``sys.stderr``)

    Returns:
        The package root logger.
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(_LEVELS[min(max(verbosity, 0), len(_LEVELS) - 1)])
    if _handler is None or _handler not in root.handlers:
        _handler = logging.StreamHandler(stream)
        _handler.setFormatter(logging.Formatter("todomark: %(levelname)s: %(message)s"))
        root.addHandler(_handler)
    return root
