"""
Global configuration registry for hookhub

This module provides a centralized registry for process settings such as the
deployment context and the extensions directory. Values default to environment
variables (optionally loaded from a .env file by the CLI) and can be
overridden programmatically, e.g. in tests.
"""

import os
from pathlib import Path
from typing import List, Optional

from hookhub.core.utils.logger import get_logger

logger = get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _parse_bool(value: Optional[str]) -> Optional[bool]:
    if value is None or value.strip() == "":
        return None
    return value.strip().lower() in _TRUTHY


def _parse_list(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip().rstrip("/") for item in value.split(",") if item.strip()]


class ConfigRegistry:
    """
    Global configuration registry

    This class manages:
    - The cloud-hosted deployment flag
    - The public URL of this deployment and the URLs that count as cloud-hosted
    - The directory extensions are discovered in

    Explicit overrides take precedence over the environment. Environment
    variables are read on every access so a loaded .env file is picked up.
    """

    def __init__(self):
        """Initialize empty registry"""
        self._cloud_hosted: Optional[bool] = None
        self._url: Optional[str] = None
        self._cloud_urls: Optional[List[str]] = None
        self._extensions_dir: Optional[Path] = None

    def set_cloud_hosted(self, cloud_hosted: Optional[bool]) -> None:
        """
        Force the cloud-hosted flag

        Args:
            cloud_hosted: True/False to override, None to fall back to the environment
        """
        self._cloud_hosted = cloud_hosted
        logger.debug(f"Set cloud hosted override: {cloud_hosted}")

    def get_cloud_hosted(self) -> bool:
        """
        Whether this process runs in the cloud-hosted deployment

        Resolution order:
        1. Explicit override (set_cloud_hosted)
        2. HOOKHUB_CLOUD_HOSTED environment variable
        3. HOOKHUB_URL matching one of the cloud URLs

        Returns:
            True if cloud-hosted
        """
        if self._cloud_hosted is not None:
            return self._cloud_hosted

        from_env = _parse_bool(os.getenv("HOOKHUB_CLOUD_HOSTED"))
        if from_env is not None:
            return from_env

        url = self.get_url()
        return bool(url) and url in self.get_cloud_urls()

    def set_url(self, url: Optional[str]) -> None:
        """Set the public URL of this deployment"""
        self._url = url.rstrip("/") if url else None

    def get_url(self) -> Optional[str]:
        """Get the public URL of this deployment"""
        if self._url is not None:
            return self._url
        url = os.getenv("HOOKHUB_URL")
        return url.rstrip("/") if url else None

    def set_cloud_urls(self, urls: Optional[List[str]]) -> None:
        """Set the URLs that identify the cloud-hosted deployment"""
        self._cloud_urls = [u.rstrip("/") for u in urls] if urls is not None else None

    def get_cloud_urls(self) -> List[str]:
        """Get the URLs that identify the cloud-hosted deployment"""
        if self._cloud_urls is not None:
            return list(self._cloud_urls)
        return _parse_list(os.getenv("HOOKHUB_CLOUD_URLS"))

    def set_extensions_dir(self, path: Optional[Path]) -> None:
        """Set the directory extensions are discovered in"""
        self._extensions_dir = Path(path) if path is not None else None

    def get_extensions_dir(self) -> Path:
        """
        Get the directory extensions are discovered in

        Returns:
            HOOKHUB_EXTENSIONS_DIR, or ./extensions when unset
        """
        if self._extensions_dir is not None:
            return self._extensions_dir
        return Path(os.getenv("HOOKHUB_EXTENSIONS_DIR", "extensions"))

    def clear(self) -> None:
        """Drop all overrides"""
        self._cloud_hosted = None
        self._url = None
        self._cloud_urls = None
        self._extensions_dir = None
        logger.debug("Cleared configuration overrides")


# Global configuration instance
_global_registry = ConfigRegistry()


def get_config() -> ConfigRegistry:
    """
    Get the global configuration registry

    Returns:
        ConfigRegistry instance
    """
    return _global_registry


def set_cloud_hosted(cloud_hosted: Optional[bool]) -> None:
    """Force the cloud-hosted flag (None restores environment lookup)"""
    _global_registry.set_cloud_hosted(cloud_hosted)


def get_cloud_hosted() -> bool:
    """Whether this process runs in the cloud-hosted deployment"""
    return _global_registry.get_cloud_hosted()


def set_extensions_dir(path: Optional[Path]) -> None:
    """Set the directory extensions are discovered in"""
    _global_registry.set_extensions_dir(path)


def get_extensions_dir() -> Path:
    """Get the directory extensions are discovered in"""
    return _global_registry.get_extensions_dir()


def clear_config() -> None:
    """Reset all configuration overrides"""
    _global_registry.clear()


__all__ = [
    "ConfigRegistry",
    "get_config",
    "set_cloud_hosted",
    "get_cloud_hosted",
    "set_extensions_dir",
    "get_extensions_dir",
    "clear_config",
]
