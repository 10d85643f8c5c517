"""
CLI main entry point for hookhub

Requires: pip install hookhub[cli]
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

try:
    import typer

    from hookhub.cli.commands import hooks
except ImportError as e:
    if e.name in ("typer", "rich"):
        raise ImportError(
            "CLI dependencies are not installed. "
            "Please install them using: pip install hookhub[cli]"
        ) from e
    raise

from hookhub.core.utils.logger import get_logger, set_log_level

logger = get_logger(__name__)


def _load_env_file():
    """
    Load .env file from the working directory or next to the main script
    """
    possible_paths = [Path.cwd() / ".env"]
    if sys.argv and len(sys.argv) > 0:
        try:
            main_script = Path(sys.argv[0]).resolve()
            if main_script.is_file():
                possible_paths.append(main_script.parent / ".env")
        except OSError:
            pass

    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(env_path, override=False)
            logger.debug(f"Loaded environment from {env_path}")
            return


# Create Typer app
app = typer.Typer(
    name="hookhub",
    help="Inspect and load hookhub extensions",
    add_completion=False,
)


@app.callback(invoke_without_command=True)
def cli_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    _load_env_file()
    if verbose:
        set_log_level("DEBUG")
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


app.add_typer(hooks.app, name="hooks", help="Inspect extension hooks")


@app.command()
def version():
    """Show version information."""
    from hookhub import __version__
    typer.echo(f"hookhub version {__version__}")


if __name__ == "__main__":
    app()
