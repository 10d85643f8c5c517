"""
Core modules for hookhub

- config/: Process settings (deployment context, extensions directory)
- extensions/: Hook kinds, contributions, discovery and the ExtensionRegistry
- utils/: Logging helpers
"""

from hookhub.core.extensions import (
    ExtensionRegistry,
    HookKind,
    DeploymentTarget,
    IconContribution,
    SettingsContribution,
    SettingsValue,
)

__all__ = [
    "ExtensionRegistry",
    "HookKind",
    "DeploymentTarget",
    "IconContribution",
    "SettingsContribution",
    "SettingsValue",
]
