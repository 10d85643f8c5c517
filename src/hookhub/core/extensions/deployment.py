"""
Deployment context and contribution gating

The registry asks a DeploymentContext whether the process runs in the
cloud-hosted deployment every time it gates a contribution.
"""

from typing import Iterable, Optional, Protocol, runtime_checkable

from hookhub.core.config import get_config
from hookhub.core.extensions.types import DeploymentTarget


@runtime_checkable
class DeploymentContext(Protocol):
    """Answers whether this process is the cloud-hosted deployment"""

    @property
    def is_cloud_hosted(self) -> bool:
        ...


class StaticDeployment:
    """Deployment context with a fixed answer"""

    def __init__(self, cloud_hosted: bool = False):
        self._cloud_hosted = cloud_hosted

    @property
    def is_cloud_hosted(self) -> bool:
        return self._cloud_hosted

    def __repr__(self) -> str:
        return f"<StaticDeployment(cloud_hosted={self._cloud_hosted})>"


class ConfigDeployment:
    """
    Deployment context backed by the global ConfigRegistry

    Reads the configuration on every access, so overrides and a freshly
    loaded .env file take effect immediately.
    """

    @property
    def is_cloud_hosted(self) -> bool:
        return get_config().get_cloud_hosted()

    def __repr__(self) -> str:
        return "<ConfigDeployment()>"


def is_enabled_in_deployment(
    deployments: Optional[Iterable[str]],
    cloud_hosted: bool,
) -> bool:
    """
    Decide whether a contribution is active in the current deployment

    Args:
        deployments: Labels the contribution is restricted to; None or empty
                     means enabled everywhere
        cloud_hosted: Whether the current deployment is cloud-hosted

    Returns:
        True if the contribution should be registered

    Note:
        "community" and "enterprise" are both satisfied by any self-hosted
        deployment, so they cannot be told apart here.
    """
    if not deployments:
        return True
    labels = set(deployments)
    return (
        (DeploymentTarget.CLOUD.value in labels and cloud_hosted)
        or (DeploymentTarget.COMMUNITY.value in labels and not cloud_hosted)
        or (DeploymentTarget.ENTERPRISE.value in labels and not cloud_hosted)
    )


__all__ = [
    "DeploymentContext",
    "StaticDeployment",
    "ConfigDeployment",
    "is_enabled_in_deployment",
]
