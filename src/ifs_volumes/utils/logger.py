"""
ifs-volumes logging utilities

Logging setup for applications embedding the client. The library itself
only creates module loggers and never installs handlers on import.
"""

import logging
from typing import Optional, Union

# Default logging format
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LevelType = Union[int, str]


def _to_level(level: LevelType) -> int:
    if isinstance(level, str):
        value = logging.getLevelName(level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level: {level}")
        return value
    return level


def get_logger(name: str, level: Optional[LevelType] = None) -> logging.Logger:
    """
    Get a logger with a console handler attached.

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override (int or name such as "DEBUG")

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(handler)

    if level is not None:
        logger.setLevel(_to_level(level))
    elif logger.level == logging.NOTSET:
        logger.setLevel(logging.INFO)

    return logger


def configure_logging(
    level: LevelType = logging.INFO,
    format: str = DEFAULT_FORMAT,
    file_path: Optional[str] = None
) -> None:
    """
    Configure the ``ifs_volumes`` logger hierarchy.

    Args:
        level: Log level (int or name, e.g. ClientConfig.log_level)
        format: Log format string
        file_path: Optional file path for file logging
    """
    formatter = logging.Formatter(format)

    package_logger = logging.getLogger("ifs_volumes")
    package_logger.setLevel(_to_level(level))
    package_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if file_path:
        file_handler = logging.FileHandler(file_path)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
