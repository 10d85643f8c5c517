"""
Configuration for global settings

Components read process settings (deployment context, extensions directory)
through this module instead of receiving them through multiple layers.
"""

from hookhub.core.config.registry import (
    ConfigRegistry,
    get_config,
    set_cloud_hosted,
    get_cloud_hosted,
    set_extensions_dir,
    get_extensions_dir,
    clear_config,
)

__all__ = [
    "ConfigRegistry",
    "get_config",
    "set_cloud_hosted",
    "get_cloud_hosted",
    "set_extensions_dir",
    "get_extensions_dir",
    "clear_config",
]
