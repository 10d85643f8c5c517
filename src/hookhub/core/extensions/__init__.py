"""
Extension system for hookhub

Extensions contribute typed values to hook kinds (settings panels, icon
providers). The ExtensionRegistry stores contributions, gates them by
deployment, orders them by priority, and loads extension modules found by a
discovery collaborator.
"""

from hookhub.core.extensions.types import HookKind, DeploymentTarget
from hookhub.core.extensions.contribution import (
    BaseContribution,
    Contribution,
    IconContribution,
    SettingsContribution,
    SettingsValue,
    parse_contribution,
)
from hookhub.core.extensions.deployment import (
    ConfigDeployment,
    DeploymentContext,
    StaticDeployment,
    is_enabled_in_deployment,
)
from hookhub.core.extensions.discovery import (
    ChainedDiscovery,
    DirectoryDiscovery,
    EntryPointDiscovery,
    ExtensionDiscovery,
    ModuleLoader,
    StaticDiscovery,
)
from hookhub.core.extensions.registry import ExtensionRegistry

__all__ = [
    "HookKind",
    "DeploymentTarget",
    "BaseContribution",
    "Contribution",
    "IconContribution",
    "SettingsContribution",
    "SettingsValue",
    "parse_contribution",
    "ConfigDeployment",
    "DeploymentContext",
    "StaticDeployment",
    "is_enabled_in_deployment",
    "ChainedDiscovery",
    "DirectoryDiscovery",
    "EntryPointDiscovery",
    "ExtensionDiscovery",
    "ModuleLoader",
    "StaticDiscovery",
    "ExtensionRegistry",
]
