"""Utility modules for todomark.

Provides:
- logger: get_logger and configure_logging
"""

from todomark.utils.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
