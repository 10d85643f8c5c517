"""
Test configuration and fixtures for hookhub
"""
import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# Add src directory to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from hookhub.core.config import clear_config
from hookhub.core.extensions import ExtensionRegistry, StaticDeployment
from hookhub.core.extensions.discovery import ModuleLoader

HOOKHUB_ENV_VARS = (
    "HOOKHUB_CLOUD_HOSTED",
    "HOOKHUB_URL",
    "HOOKHUB_CLOUD_URLS",
    "HOOKHUB_EXTENSIONS_DIR",
)


def pytest_configure(config):
    """Configure custom pytest markers"""
    config.addinivalue_line(
        "markers", "integration: mark test as loading real extension modules from disk"
    )


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Isolate every test from configuration overrides and HOOKHUB_* variables"""
    for name in HOOKHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config()
    yield
    clear_config()


@pytest.fixture
def registry() -> ExtensionRegistry:
    """Fresh registry in a self-hosted deployment"""
    return ExtensionRegistry(deployment=StaticDeployment(cloud_hosted=False))


@pytest.fixture
def cloud_registry() -> ExtensionRegistry:
    """Fresh registry in the cloud-hosted deployment"""
    return ExtensionRegistry(deployment=StaticDeployment(cloud_hosted=True))


class FakeDiscovery:
    """
    Discovery collaborator returning a fixed set of loaders

    Records how often discover() is called and the order loaders ran in.
    """

    def __init__(self, modules: Dict[str, Callable[[ExtensionRegistry], Any]]):
        self.modules = modules
        self.discover_calls = 0
        self.loaded: List[str] = []

    def discover(self) -> Dict[str, ModuleLoader]:
        self.discover_calls += 1
        return {module_id: self._loader(module_id, setup) for module_id, setup in self.modules.items()}

    def _loader(self, module_id: str, setup: Callable[[ExtensionRegistry], Any]) -> ModuleLoader:
        async def load():
            self.loaded.append(module_id)
            return setup

        return load


@pytest.fixture
def fake_discovery_factory():
    """Build FakeDiscovery instances"""
    return FakeDiscovery


@pytest.fixture
def write_extension(tmp_path) -> Callable[..., Path]:
    """
    Write an extension entry module below tmp_path/extensions

    Usage:
        write_extension("branding", '''
            def setup(registry):
                ...
        ''')
    """
    root = tmp_path / "extensions"
    root.mkdir(exist_ok=True)

    def write(name: str, source: str, package: bool = True) -> Path:
        ext_dir = root / name
        ext_dir.mkdir(parents=True, exist_ok=True)
        if package:
            entry = ext_dir / "client" / "__init__.py"
            entry.parent.mkdir(exist_ok=True)
        else:
            entry = ext_dir / "client.py"
        entry.write_text(textwrap.dedent(source), encoding="utf-8")
        return entry

    write.root = root
    return write
