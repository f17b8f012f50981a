"""
ifs-volumes utilities

Logging helpers.
"""

from ifs_volumes.utils.logger import (
    get_logger,
    configure_logging,
    DEFAULT_FORMAT,
)

__all__ = [
    "get_logger",
    "configure_logging",
    "DEFAULT_FORMAT",
]
