"""
Extension registry

Holds the contributions extensions make to each hook kind, gates them by
deployment, and orders them by priority on query. Extension modules are found
by an injected discovery collaborator and loaded once.

Example:
    registry = ExtensionRegistry(
        deployment=ConfigDeployment(),
        discovery=DirectoryDiscovery("extensions"),
    )
    await registry.load_extensions()

    for hook in registry.get_hooks(HookKind.SETTINGS):
        ...

An extension entry module exposes a setup function:

    def setup(registry):
        registry.register({
            "id": "branding",
            "kind": "icon",
            "name": "Branding",
            "value": BrandingIcon,
        })
"""

import asyncio
from types import ModuleType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

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
    is_enabled_in_deployment,
)
from hookhub.core.extensions.discovery import ExtensionDiscovery, ModuleLoader
from hookhub.core.extensions.types import HookKind
from hookhub.core.utils.logger import get_logger

logger = get_logger(__name__)
plugins_logger = get_logger("hookhub.plugins")

ContributionLike = Union[BaseContribution, Mapping[str, Any]]
SETUP_FUNCTION = "setup"


class ExtensionRegistry:
    """
    Registry of hook contributions

    State:
    - kind -> contributions, in the order they were stored
    - loaded flag, set once after load_extensions() settles
    - load errors, per module id

    register() and get_hooks() are synchronous. load_extensions() runs all
    module loaders concurrently on the current event loop; it is meant to be
    awaited once at startup and does not guard against being re-entered while
    a load is still in progress.
    """

    def __init__(
        self,
        deployment: Optional[DeploymentContext] = None,
        discovery: Optional[ExtensionDiscovery] = None,
    ):
        """
        Args:
            deployment: Deployment context consulted on every registration.
                        Defaults to ConfigDeployment (global configuration).
            discovery: Collaborator enumerating extension entry points.
                       Without one, load_extensions() only flips the loaded flag.
        """
        self._deployment = deployment if deployment is not None else ConfigDeployment()
        self._discovery = discovery
        self._hooks: Dict[HookKind, List[BaseContribution]] = {}
        self._loaded = False
        self._load_errors: Dict[str, str] = {}

    @property
    def loaded(self) -> bool:
        """Whether load_extensions() has completed"""
        return self._loaded

    @property
    def load_errors(self) -> Dict[str, str]:
        """Module id -> "ExcType: message" for modules that failed to load"""
        return dict(self._load_errors)

    def register(
        self,
        contributions: Union[ContributionLike, Sequence[ContributionLike]],
    ) -> None:
        """
        Register one contribution or a sequence of them

        Contributions disabled for the current deployment are dropped without
        notice. Enabled ones are stored with priority defaulted to 0.

        Args:
            contributions: A contribution model, a mapping accepted by
                           parse_contribution(), or a list/tuple of either

        Raises:
            ValueError: If a mapping names an unknown hook kind
            pydantic.ValidationError: If a mapping does not fit its kind
            TypeError: If an item is neither a contribution nor a mapping
        """
        if isinstance(contributions, (list, tuple)):
            for contribution in contributions:
                self._register_one(contribution)
            return

        self._register_one(contributions)

    def _register_one(self, item: ContributionLike) -> None:
        if isinstance(item, BaseContribution):
            contribution = item
        elif isinstance(item, Mapping):
            contribution = parse_contribution(item)
        else:
            raise TypeError(
                f"Contribution must be a contribution model or a mapping, "
                f"got {type(item).__name__}"
            )

        if not is_enabled_in_deployment(
            contribution.deployments, self._deployment.is_cloud_hosted
        ):
            return

        if contribution.priority is None:
            contribution = contribution.model_copy(update={"priority": 0})

        self._hooks.setdefault(contribution.kind, []).append(contribution)

        description = f"({contribution.description})" if contribution.description else ""
        plugins_logger.debug(
            f"Plugin(type={contribution.kind.value}) registered {contribution.name} {description}".rstrip()
        )

    def get_hooks(self, kind: Union[HookKind, str]) -> List[Contribution]:
        """
        Get the contributions for a hook kind in priority order

        Lower priority comes first; equal priorities keep registration order.

        Args:
            kind: Hook kind (enum member or its string value)

        Returns:
            New list of contributions, empty if none were registered
        """
        try:
            kind = HookKind(kind)
        except ValueError:
            return []
        return sorted(self._hooks.get(kind, []), key=lambda c: c.effective_priority)

    async def load_extensions(self) -> None:
        """
        Discover and load every extension module once

        Each module is imported by its loader and then its setup(registry)
        function is called. A module that fails to import or set up is logged
        and recorded in load_errors; it does not stop the others. An
        extension calling sys.exit() is treated the same way; KeyboardInterrupt
        still propagates. The loaded flag is set once every load has settled,
        whatever the outcome, and later calls return immediately.
        """
        if self._loaded:
            return

        loaders: Dict[str, ModuleLoader] = {}
        if self._discovery is not None:
            try:
                loaders = self._discovery.discover()
            except Exception as e:
                logger.error(
                    f"Extension discovery failed with {self._discovery!r}: {e}",
                    exc_info=True,
                )

        if loaders:
            logger.debug(f"Loading {len(loaders)} extension module(s)")
            await asyncio.gather(
                *(self._load_module(module_id, loader) for module_id, loader in loaders.items())
            )

        self._loaded = True
        logger.debug(
            f"Extensions loaded ({len(loaders) - len(self._load_errors)} ok, "
            f"{len(self._load_errors)} failed)"
        )

    async def _load_module(self, module_id: str, loader: ModuleLoader) -> None:
        try:
            target = await loader()
            setup = self._resolve_setup(target)
            if setup is not None:
                setup(self)
        except (Exception, SystemExit) as e:
            self._load_errors[module_id] = f"{type(e).__name__}: {e}"
            logger.error(f"Failed to load extension '{module_id}': {e}", exc_info=True)

    @staticmethod
    def _resolve_setup(target: Any) -> Optional[Callable[["ExtensionRegistry"], Any]]:
        if isinstance(target, ModuleType):
            setup = getattr(target, SETUP_FUNCTION, None)
            return setup if callable(setup) else None
        if callable(target):
            return target
        return None

    # Decorator helpers

    def icon(
        self,
        id: str,
        name: str,
        description: Optional[str] = None,
        priority: Optional[int] = None,
        deployments: Optional[Sequence[str]] = None,
        roles: Optional[Sequence[str]] = None,
    ) -> Callable:
        """
        Register the decorated object as an icon contribution

        Usage:
            @registry.icon(id="branding", name="Branding")
            def branding_icon(size: int = 24):
                ...
        """
        def decorator(obj: Any) -> Any:
            self.register(IconContribution(
                id=id,
                name=name,
                description=description,
                priority=priority,
                deployments=deployments,
                roles=roles,
                value=obj,
            ))
            return obj
        return decorator

    def settings(
        self,
        id: str,
        name: str,
        group: str,
        icon: Any = None,
        description: Optional[str] = None,
        priority: Optional[int] = None,
        deployments: Optional[Sequence[str]] = None,
        roles: Optional[Sequence[str]] = None,
    ) -> Callable:
        """
        Register the decorated factory as a settings panel

        Usage:
            @registry.settings(id="webhooks", name="Webhooks", group="Integrations")
            def webhooks_panel():
                ...
        """
        def decorator(component: Callable[..., Any]) -> Callable[..., Any]:
            self.register(SettingsContribution(
                id=id,
                name=name,
                description=description,
                priority=priority,
                deployments=deployments,
                roles=roles,
                value=SettingsValue(group=group, icon=icon, component=component),
            ))
            return component
        return decorator

    def __repr__(self) -> str:
        counts = {kind.value: len(items) for kind, items in self._hooks.items()}
        return f"<ExtensionRegistry(loaded={self._loaded}, hooks={counts})>"


__all__ = [
    "ExtensionRegistry",
    "ContributionLike",
    "SETUP_FUNCTION",
]
