"""
Extension discovery

A discovery collaborator enumerates extension entry points and pairs each with
an async loader. The registry never walks the filesystem or package metadata
itself; it only awaits the loaders it is handed.

Implementations:
- DirectoryDiscovery: entry modules at <root>/<extension>/client/__init__.py
  or <root>/<extension>/client.py
- EntryPointDiscovery: installed distributions exposing the
  "hookhub.extensions" entry point group
- StaticDiscovery: a fixed mapping (bundled builds, tests)
- ChainedDiscovery: several of the above, in order
"""

import hashlib
import importlib
import importlib.util
import sys
from importlib.metadata import EntryPoint, entry_points
from pathlib import Path
from types import ModuleType
from typing import Any, Awaitable, Callable, Dict, Mapping, Protocol, Sequence, Union, runtime_checkable

from hookhub.core.utils.logger import get_logger

logger = get_logger(__name__)

# Resolves to the loaded module (or a setup callable) once fully evaluated
ModuleLoader = Callable[[], Awaitable[Any]]

DEFAULT_ENTRY_PATTERNS = ("*/client/__init__.py", "*/client.py")
ENTRY_POINT_GROUP = "hookhub.extensions"


@runtime_checkable
class ExtensionDiscovery(Protocol):
    """Enumerates available extension entry points"""

    def discover(self) -> Dict[str, ModuleLoader]:
        ...


def _module_name_for(extension: str, path: Path) -> str:
    safe = "".join(c if c.isalnum() else "_" for c in extension)
    digest = hashlib.sha1(str(path.resolve()).encode("utf-8")).hexdigest()[:10]
    return f"hookhub_extension_{safe}_{digest}"


def _purge_modules(module_name: str) -> None:
    prefix = f"{module_name}."
    for name in [n for n in sys.modules if n == module_name or n.startswith(prefix)]:
        del sys.modules[name]


def import_from_path(module_name: str, path: Path) -> ModuleType:
    """
    Import a module from a file path

    Packages (__init__.py) get a search location so relative imports inside
    the extension work. Stale entries for module_name and its submodules are
    dropped before evaluation, and removed again if evaluation fails.

    Args:
        module_name: Name to register the module under
        path: Path to the .py file

    Returns:
        The evaluated module

    Raises:
        ImportError: If no import spec can be built for the path
        Exception: Whatever the module raises while being evaluated
    """
    search_locations = [str(path.parent)] if path.name == "__init__.py" else None
    spec = importlib.util.spec_from_file_location(
        module_name, path, submodule_search_locations=search_locations
    )
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot build import spec for {path}")

    _purge_modules(module_name)
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        _purge_modules(module_name)
        raise
    return module


class DirectoryDiscovery:
    """
    Finds extension entry modules below a root directory

    Layout:
    ```
    <root>/
        branding/
            client/__init__.py   # or client.py
        analytics/
            client.py
    ```

    Module ids are the entry paths relative to root, in POSIX form. Each entry
    is imported under a name derived from its resolved path, so extensions
    with similar directory names, or the same name under different roots,
    never share sys.modules entries.
    """

    def __init__(
        self,
        root: Union[str, Path],
        patterns: Sequence[str] = DEFAULT_ENTRY_PATTERNS,
    ):
        self.root = Path(root)
        self.patterns = tuple(patterns)

    def discover(self) -> Dict[str, ModuleLoader]:
        """
        Enumerate entry modules

        Returns:
            Mapping of module id to loader, sorted by module id. Empty if the
            root does not exist.
        """
        if not self.root.is_dir():
            logger.debug(f"Extensions directory {self.root} does not exist")
            return {}

        found: Dict[str, Path] = {}
        for pattern in self.patterns:
            for path in self.root.glob(pattern):
                extension = path.relative_to(self.root).parts[0]
                if extension.startswith((".", "_")):
                    continue
                found[path.relative_to(self.root).as_posix()] = path

        return {
            module_id: self._loader(module_id, path)
            for module_id, path in sorted(found.items())
        }

    def _loader(self, module_id: str, path: Path) -> ModuleLoader:
        module_name = _module_name_for(module_id.split("/", 1)[0], path)

        async def load() -> ModuleType:
            return import_from_path(module_name, path)

        return load

    def __repr__(self) -> str:
        return f"<DirectoryDiscovery(root='{self.root}')>"


class EntryPointDiscovery:
    """
    Finds extensions published by installed distributions

    A distribution declares, e.g. in its pyproject.toml:

        [project.entry-points."hookhub.extensions"]
        branding = "hookhub_branding.client"

    The entry point may name a module (its setup() is called) or a setup
    callable directly.
    """

    def __init__(self, group: str = ENTRY_POINT_GROUP):
        self.group = group

    def discover(self) -> Dict[str, ModuleLoader]:
        """
        Enumerate entry points in the group

        Returns:
            Mapping of entry point name to loader. The first entry point wins
            when several distributions use the same name.
        """
        loaders: Dict[str, ModuleLoader] = {}
        for ep in entry_points(group=self.group):
            if ep.name in loaders:
                logger.warning(
                    f"Duplicate extension entry point '{ep.name}' in group "
                    f"'{self.group}', ignoring {ep.value}"
                )
                continue
            loaders[ep.name] = self._loader(ep)
        return loaders

    @staticmethod
    def _loader(ep: EntryPoint) -> ModuleLoader:
        async def load() -> Any:
            return ep.load()

        return load

    def __repr__(self) -> str:
        return f"<EntryPointDiscovery(group='{self.group}')>"


class StaticDiscovery:
    """
    Discovery over a fixed set of extensions

    Values may be dotted module names (imported on load), already imported
    modules, or setup callables.
    """

    def __init__(self, modules: Mapping[str, Union[str, ModuleType, Callable[..., Any]]]):
        self.modules = dict(modules)

    def discover(self) -> Dict[str, ModuleLoader]:
        return {
            module_id: self._loader(target)
            for module_id, target in self.modules.items()
        }

    @staticmethod
    def _loader(target: Union[str, ModuleType, Callable[..., Any]]) -> ModuleLoader:
        async def load() -> Any:
            if isinstance(target, str):
                return importlib.import_module(target)
            return target

        return load

    def __repr__(self) -> str:
        return f"<StaticDiscovery(modules={sorted(self.modules)})>"


class ChainedDiscovery:
    """
    Combines several discovery collaborators

    Earlier collaborators win when two of them report the same module id.
    """

    def __init__(self, *discoveries: ExtensionDiscovery):
        self.discoveries = discoveries

    def discover(self) -> Dict[str, ModuleLoader]:
        loaders: Dict[str, ModuleLoader] = {}
        for discovery in self.discoveries:
            for module_id, loader in discovery.discover().items():
                loaders.setdefault(module_id, loader)
        return loaders

    def __repr__(self) -> str:
        return f"<ChainedDiscovery({', '.join(repr(d) for d in self.discoveries)})>"


__all__ = [
    "ModuleLoader",
    "ExtensionDiscovery",
    "DirectoryDiscovery",
    "EntryPointDiscovery",
    "StaticDiscovery",
    "ChainedDiscovery",
    "import_from_path",
    "DEFAULT_ENTRY_PATTERNS",
    "ENTRY_POINT_GROUP",
]
