"""
Logging utilities for hookhub
"""

import logging
import os
import sys

ROOT_LOGGER_NAME = "hookhub"


def _configure_root() -> logging.Logger:
    """
    Attach the console handler to the package root logger once

    Child loggers ("hookhub.*") propagate to it, so every module shares a
    single handler and format.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)

    if not root.handlers:
        # Create console handler
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)

        # Add handler to logger
        root.addHandler(handler)
        level_name = os.getenv("HOOKHUB_LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))

    return root


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """
    Get logger instance

    Args:
        name: Logger name. Names outside the "hookhub" namespace are nested
              under it so they share its handler.

    Returns:
        Logger instance
    """
    root = _configure_root()
    if name == ROOT_LOGGER_NAME:
        return root
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: str) -> None:
    """
    Change the level of the package root logger

    Args:
        level: Level name such as "DEBUG" or "WARNING"
    """
    root = _configure_root()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["get_logger", "set_log_level", "ROOT_LOGGER_NAME"]
