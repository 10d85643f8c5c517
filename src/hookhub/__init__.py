"""
hookhub - Extension registry for host applications

Independently packaged extensions contribute typed hooks (settings panels,
icon providers) to a host application without the host knowing about them at
build time.

Core modules:
- core.extensions: ExtensionRegistry, hook kinds, contributions, discovery
- core.config: Process settings
- core.utils: Logging

Optional:
- cli: Command line inspection of installed extensions
"""

__version__ = "0.1.0"

from hookhub.core.extensions import (
    ExtensionRegistry,
    HookKind,
    DeploymentTarget,
    BaseContribution,
    Contribution,
    IconContribution,
    SettingsContribution,
    SettingsValue,
    parse_contribution,
    ConfigDeployment,
    StaticDeployment,
    DirectoryDiscovery,
    EntryPointDiscovery,
    StaticDiscovery,
)
from hookhub.core.config import (
    get_config,
    set_cloud_hosted,
    get_cloud_hosted,
    clear_config,
)

__all__ = [
    "ExtensionRegistry",
    "HookKind",
    "DeploymentTarget",
    "BaseContribution",
    "Contribution",
    "IconContribution",
    "SettingsContribution",
    "SettingsValue",
    "parse_contribution",
    "ConfigDeployment",
    "StaticDeployment",
    "DirectoryDiscovery",
    "EntryPointDiscovery",
    "StaticDiscovery",
    "get_config",
    "set_cloud_hosted",
    "get_cloud_hosted",
    "clear_config",
    "__version__",
]
