"""
Logging helpers for the choreography package.

Modules log through the standard library; this only wires up handlers and
offers a scoped level override for noisy recording sessions.
"""

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "choreography"


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under the package root."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level (e.g., logging.DEBUG or "DEBUG")
        log_file: Optional file path for logging output

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Avoid stacking handlers on repeated calls
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class LogContext:
    """
    Temporarily change a logger's level.

    Usage:
        with LogContext("choreography.recorder", logging.DEBUG):
            recorder.update(position)
    """

    def __init__(self, name: str, level: Union[int, str]):
        self.logger = get_logger(name)
        self.level = level
        self._previous = None

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.logger.setLevel(self._previous)


__all__ = [
    "get_logger",
    "setup_logging",
    "LogContext",
    "LOG_FORMAT",
]
