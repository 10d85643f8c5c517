"""
Hooks command for inspecting extension contributions
"""
import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table

from hookhub.core.config import get_config
from hookhub.core.extensions import (
    ChainedDiscovery,
    ConfigDeployment,
    DirectoryDiscovery,
    EntryPointDiscovery,
    ExtensionRegistry,
    HookKind,
    SettingsContribution,
    StaticDeployment,
)
from hookhub.core.extensions.discovery import ExtensionDiscovery
from hookhub.core.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(name="hooks", help="Inspect extension hooks")
console = Console()


def build_registry(
    extensions_dir: Optional[Path] = None,
    cloud: Optional[bool] = None,
    entry_points: bool = False,
) -> ExtensionRegistry:
    """
    Build a registry for the given CLI options

    Args:
        extensions_dir: Directory to discover extensions in (default: configured dir)
        cloud: Force the deployment context; None uses configuration
        entry_points: Also discover installed "hookhub.extensions" entry points

    Returns:
        Registry that has not been loaded yet
    """
    directory = extensions_dir or get_config().get_extensions_dir()
    discovery: ExtensionDiscovery = DirectoryDiscovery(directory)
    if entry_points:
        discovery = ChainedDiscovery(discovery, EntryPointDiscovery())

    deployment = StaticDeployment(cloud) if cloud is not None else ConfigDeployment()
    return ExtensionRegistry(deployment=deployment, discovery=discovery)


def _describe_value(hook: Any) -> str:
    if isinstance(hook, SettingsContribution):
        component = getattr(hook.value.component, "__name__", repr(hook.value.component))
        return f"group={hook.value.group} component={component}"
    return getattr(hook.value, "__name__", repr(hook.value))


@app.command("list")
def list_hooks(
    kind: HookKind = typer.Argument(..., help="Hook kind to list"),
    extensions_dir: Optional[Path] = typer.Option(
        None, "--extensions-dir", "-d", help="Directory containing extensions"
    ),
    cloud: Optional[bool] = typer.Option(
        None, "--cloud/--self-hosted", help="Override the deployment context"
    ),
    entry_points: bool = typer.Option(
        False, "--entry-points", help="Also load extensions from installed packages"
    ),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: json or table"),
):
    """
    Load extensions and list the contributions to a hook kind in priority order
    """
    if output_format not in ("json", "table"):
        typer.echo(f"Error: Invalid format '{output_format}'. Must be 'json' or 'table'", err=True)
        raise typer.Exit(1)

    registry = build_registry(extensions_dir, cloud, entry_points)
    asyncio.run(registry.load_extensions())

    hooks = registry.get_hooks(kind)
    errors = registry.load_errors

    if output_format == "json":
        result: Dict[str, Any] = {
            "kind": kind.value,
            "hooks": [hook.summary() for hook in hooks],
            "errors": errors,
        }
        typer.echo(json.dumps(result, indent=2))
        return

    table = Table(title=f"Hooks: {kind.value}")
    table.add_column("Priority", style="magenta", justify="right")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Description", style="dim")
    table.add_column("Deployments")
    table.add_column("Value")

    for hook in hooks:
        table.add_row(
            str(hook.effective_priority),
            hook.id,
            hook.name,
            hook.description or "",
            ", ".join(hook.deployments) if hook.deployments else "all",
            _describe_value(hook),
        )

    console.print(table)

    if errors:
        console.print(f"[yellow]{len(errors)} extension(s) failed to load:[/yellow]")
        for module_id, error in errors.items():
            console.print(f"  [red]{module_id}[/red]: {error}")


@app.command("kinds")
def list_kinds():
    """
    List the available hook kinds
    """
    kinds: List[str] = [kind.value for kind in HookKind]
    typer.echo("\n".join(kinds))
