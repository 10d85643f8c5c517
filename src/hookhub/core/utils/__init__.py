"""Utility helpers for hookhub"""

from hookhub.core.utils.logger import get_logger, set_log_level

__all__ = ["get_logger", "set_log_level"]
