"""
Contribution models

A contribution is one extension instance attached to a hook kind. Each hook
kind has its own contribution class whose `value` field carries the payload
shape for that kind, so consumers can match on the class:

    for hook in registry.get_hooks(HookKind.SETTINGS):
        match hook:
            case SettingsContribution(value=SettingsValue(group=group)):
                ...

Contributions are frozen pydantic models; once stored they cannot change.
"""

from typing import Any, Callable, Dict, Literal, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, field_validator

from hookhub.core.extensions.types import HookKind


class BaseContribution(BaseModel):
    """
    Fields shared by every contribution

    Attributes:
        id: Identifier supplied by the extension. Not required to be unique.
        name: Display name
        description: Optional short description
        priority: Ordering key, lower sorts earlier. None means 0 once stored.
        deployments: Deployment labels this contribution is enabled for.
                     None or empty means every deployment.
        roles: Role labels, carried as metadata only
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: str
    name: str
    description: Optional[str] = None
    priority: Optional[int] = None
    deployments: Optional[Tuple[str, ...]] = None
    roles: Optional[Tuple[str, ...]] = None

    @field_validator("kind", mode="before", check_fields=False)
    @classmethod
    def _coerce_kind(cls, value: Any) -> HookKind:
        return HookKind(value)

    @property
    def effective_priority(self) -> int:
        """Priority used for ordering"""
        return self.priority if self.priority is not None else 0

    def summary(self) -> Dict[str, Any]:
        """Plain representation without the value payload (for listings)"""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
            "priority": self.effective_priority,
            "deployments": list(self.deployments) if self.deployments else [],
            "roles": list(self.roles) if self.roles else [],
        }


class SettingsValue(BaseModel):
    """
    Payload of a settings contribution

    Attributes:
        group: Settings menu group the panel is listed under
        icon: Icon shown next to the menu entry
        component: Factory building the panel, called lazily by the host
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    group: str
    icon: Any = None
    component: Callable[..., Any]


class SettingsContribution(BaseContribution):
    """Settings panel contribution"""

    kind: Literal[HookKind.SETTINGS] = HookKind.SETTINGS
    value: SettingsValue


class IconContribution(BaseContribution):
    """Icon provider contribution; the value is the icon itself"""

    kind: Literal[HookKind.ICON] = HookKind.ICON
    value: Any


Contribution = Union[SettingsContribution, IconContribution]

CONTRIBUTION_TYPES: Dict[HookKind, Type[BaseContribution]] = {
    HookKind.SETTINGS: SettingsContribution,
    HookKind.ICON: IconContribution,
}


def parse_contribution(data: Mapping[str, Any]) -> Contribution:
    """
    Build a contribution from a plain mapping

    The "kind" key selects the contribution class, which then validates the
    value shape for that kind.

    Args:
        data: Mapping with at least "kind", "id", "name" and "value"

    Returns:
        SettingsContribution or IconContribution

    Raises:
        ValueError: If "kind" is missing or not a known hook kind
        pydantic.ValidationError: If the remaining fields do not fit the kind
    """
    raw_kind = data.get("kind")
    try:
        kind = HookKind(raw_kind)
    except ValueError:
        raise ValueError(
            f"Unknown hook kind {raw_kind!r}; expected one of "
            f"{', '.join(k.value for k in HookKind)}"
        ) from None
    return CONTRIBUTION_TYPES[kind].model_validate(dict(data))


__all__ = [
    "BaseContribution",
    "SettingsValue",
    "SettingsContribution",
    "IconContribution",
    "Contribution",
    "CONTRIBUTION_TYPES",
    "parse_contribution",
]
