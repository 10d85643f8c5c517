"""
Hook kinds and deployment targets

Hook kinds are the closed set of extension points the host exposes. Each kind
fixes the shape of the value a contribution must supply (see contribution.py).
"""

from enum import Enum


class HookKind(str, Enum):
    """
    Extension points contributions can attach to
    """
    SETTINGS = "settings"
    """
    Settings panels

    Value: SettingsValue (group, icon, lazily built component)
    """

    ICON = "icon"
    """
    Icon providers

    Value: any renderable icon (component callable or glyph)
    """


class DeploymentTarget(str, Enum):
    """
    Deployment labels a contribution can be restricted to

    COMMUNITY and ENTERPRISE both mean "self-hosted" when gating.
    """
    CLOUD = "cloud"
    COMMUNITY = "community"
    ENTERPRISE = "enterprise"


__all__ = ["HookKind", "DeploymentTarget"]
