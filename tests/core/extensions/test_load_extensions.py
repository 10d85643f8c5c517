"""
Test ExtensionRegistry.load_extensions

Tests the one-shot discovery/load routine:
- idempotence (second call does no discovery work)
- failure isolation between modules
- loaded flag set after all loads settle
- explicit setup(registry) invocation
"""
import asyncio
import logging

import pytest

from hookhub.core.extensions import (
    DirectoryDiscovery,
    ExtensionRegistry,
    HookKind,
    StaticDeployment,
    StaticDiscovery,
)


def icon_setup(id: str, priority=None, **kwargs):
    def setup(registry):
        registry.register({"id": id, "kind": "icon", "name": id.upper(), "value": id, "priority": priority, **kwargs})
    return setup


@pytest.mark.asyncio
class TestLoadExtensions:
    async def test_loads_every_module(self, fake_discovery_factory):
        discovery = fake_discovery_factory({"a": icon_setup("a", 2), "b": icon_setup("b", 1)})
        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=discovery)

        assert registry.loaded is False
        await registry.load_extensions()

        assert registry.loaded is True
        assert sorted(discovery.loaded) == ["a", "b"]
        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == ["b", "a"]

    async def test_second_call_does_no_discovery(self, fake_discovery_factory, caplog):
        discovery = fake_discovery_factory({"a": icon_setup("a")})
        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=discovery)

        await registry.load_extensions()
        state_after_first = [h.id for h in registry.get_hooks(HookKind.ICON)]

        caplog.clear()
        caplog.set_level(logging.DEBUG, logger="hookhub")
        await registry.load_extensions()

        assert discovery.discover_calls == 1
        assert discovery.loaded == ["a"]
        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == state_after_first
        assert caplog.records == []

    async def test_failing_module_does_not_block_others(self, fake_discovery_factory, caplog):
        def broken(registry):
            raise RuntimeError("boom")

        discovery = fake_discovery_factory({
            "good-1": icon_setup("one"),
            "broken": broken,
            "good-2": icon_setup("two"),
        })
        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=discovery)

        await registry.load_extensions()

        assert registry.loaded is True
        assert sorted(h.id for h in registry.get_hooks(HookKind.ICON)) == ["one", "two"]
        assert registry.load_errors == {"broken": "RuntimeError: boom"}
        assert any(
            r.levelno == logging.ERROR and "broken" in r.getMessage() for r in caplog.records
        )

    async def test_partial_registration_before_failure_is_kept(self, fake_discovery_factory):
        def half_broken(registry):
            registry.register({"id": "early", "kind": "icon", "name": "Early", "value": 1})
            raise ValueError("late failure")

        registry = ExtensionRegistry(
            deployment=StaticDeployment(False),
            discovery=fake_discovery_factory({"half": half_broken}),
        )

        await registry.load_extensions()

        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == ["early"]
        assert registry.load_errors == {"half": "ValueError: late failure"}

    async def test_setup_calling_sys_exit_is_isolated(self, fake_discovery_factory):
        def exits(registry):
            raise SystemExit(3)

        registry = ExtensionRegistry(
            deployment=StaticDeployment(False),
            discovery=fake_discovery_factory({"exits": exits, "good": icon_setup("good")}),
        )

        await registry.load_extensions()

        assert registry.loaded is True
        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == ["good"]
        assert registry.load_errors == {"exits": "SystemExit: 3"}

    async def test_failing_loader_is_isolated(self):
        async def failing_loader():
            raise ImportError("missing dependency")

        class Discovery:
            def discover(self):
                return {"bad": failing_loader}

        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=Discovery())

        await registry.load_extensions()

        assert registry.loaded is True
        assert registry.load_errors == {"bad": "ImportError: missing dependency"}

    async def test_discovery_failure_still_marks_loaded(self):
        class Discovery:
            calls = 0

            def discover(self):
                self.calls += 1
                raise OSError("unreadable")

        discovery = Discovery()
        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=discovery)

        await registry.load_extensions()
        await registry.load_extensions()

        assert registry.loaded is True
        assert discovery.calls == 1
        assert registry.get_hooks(HookKind.ICON) == []

    async def test_without_discovery_only_sets_flag(self):
        registry = ExtensionRegistry(deployment=StaticDeployment(False))

        await registry.load_extensions()

        assert registry.loaded is True
        assert registry.load_errors == {}

    async def test_loads_run_concurrently(self):
        started = []
        release = asyncio.Event()

        def make_loader(name):
            async def load():
                started.append(name)
                await release.wait()
                return icon_setup(name)
            return load

        class Discovery:
            def discover(self):
                return {"a": make_loader("a"), "b": make_loader("b")}

        registry = ExtensionRegistry(deployment=StaticDeployment(False), discovery=Discovery())
        task = asyncio.ensure_future(registry.load_extensions())

        for _ in range(5):
            await asyncio.sleep(0)
        assert sorted(started) == ["a", "b"]
        assert registry.loaded is False

        release.set()
        await task

        assert registry.loaded is True
        assert len(registry.get_hooks(HookKind.ICON)) == 2

    async def test_module_without_setup_is_accepted(self):
        registry = ExtensionRegistry(
            deployment=StaticDeployment(False),
            discovery=StaticDiscovery({"json": "json"}),
        )

        await registry.load_extensions()

        assert registry.loaded is True
        assert registry.load_errors == {}

    async def test_gating_applies_to_loaded_modules(self, fake_discovery_factory):
        discovery = fake_discovery_factory({
            "cloud": icon_setup("cloud", deployments=["cloud"]),
            "self": icon_setup("self", deployments=["community"]),
        })
        registry = ExtensionRegistry(deployment=StaticDeployment(True), discovery=discovery)

        await registry.load_extensions()

        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == ["cloud"]


@pytest.mark.integration
@pytest.mark.asyncio
class TestLoadFromDirectory:
    async def test_directory_extensions_register_via_setup(self, write_extension):
        write_extension("branding", """
            def brand_icon():
                return "logo"

            def setup(registry):
                registry.register({
                    "id": "branding",
                    "kind": "icon",
                    "name": "Branding",
                    "description": "Product logo",
                    "value": brand_icon,
                    "priority": 10,
                })
        """)
        write_extension("webhooks", """
            def setup(registry):
                @registry.settings(id="webhooks", name="Webhooks", group="Integrations")
                def panel():
                    return "webhooks panel"

                registry.icon(id="webhooks-icon", name="Webhooks icon")("hook-glyph")
        """, package=False)
        write_extension("broken", "import not_a_real_module_for_hookhub_tests\n")

        registry = ExtensionRegistry(
            deployment=StaticDeployment(False),
            discovery=DirectoryDiscovery(write_extension.root),
        )
        await registry.load_extensions()

        icons = registry.get_hooks(HookKind.ICON)
        assert [h.id for h in icons] == ["webhooks-icon", "branding"]
        assert icons[1].value() == "logo"

        panels = registry.get_hooks(HookKind.SETTINGS)
        assert panels[0].value.component() == "webhooks panel"

        assert list(registry.load_errors) == ["broken/client/__init__.py"]
        assert registry.load_errors["broken/client/__init__.py"].startswith("ModuleNotFoundError")

    async def test_module_exiting_at_import_does_not_stop_load(self, write_extension):
        write_extension("bad", "import sys\nsys.exit(1)\n")
        write_extension("good", """
            def setup(registry):
                registry.register({"id": "good", "kind": "icon", "name": "Good", "value": "ok"})
        """)

        registry = ExtensionRegistry(
            deployment=StaticDeployment(False),
            discovery=DirectoryDiscovery(write_extension.root),
        )
        await registry.load_extensions()

        assert registry.loaded is True
        assert [h.id for h in registry.get_hooks(HookKind.ICON)] == ["good"]
        assert registry.load_errors == {"bad/client/__init__.py": "SystemExit: 1"}

    async def test_bundled_example_extension(self):
        from pathlib import Path

        examples = Path(__file__).resolve().parents[3] / "examples" / "extensions"
        self_hosted = ExtensionRegistry(
            deployment=StaticDeployment(False), discovery=DirectoryDiscovery(examples)
        )
        cloud = ExtensionRegistry(
            deployment=StaticDeployment(True), discovery=DirectoryDiscovery(examples)
        )

        await self_hosted.load_extensions()
        await cloud.load_extensions()

        [branding] = self_hosted.get_hooks(HookKind.ICON)
        assert branding.value()["label"] == "Built with hookhub"
        assert cloud.get_hooks(HookKind.ICON) == []
