"""
Configuration commands: config-init, version.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from pokthd.cli import app
from pokthd.settings import DATA_DIR_ENV, PoktHDSettings, ensure_config_file
from pokthd.version import get_version


@app.command("config-init")
def config_init(
    ctx: typer.Context,
    data_dir: Annotated[
        Path | None,
        typer.Option(
            "--data-dir",
            "-d",
            envvar=DATA_DIR_ENV,
            help="Data directory for pokthd files",
        ),
    ] = None,
) -> None:
    """Initialize the config file with default settings."""
    settings: PoktHDSettings = ctx.obj

    if data_dir is None:
        data_dir = settings.get_data_dir()

    existed = (data_dir / "config.toml").exists()
    config_path = ensure_config_file(data_dir)

    if existed:
        typer.echo(f"Config file already exists at: {config_path}")
        return

    typer.echo(f"Config file created at: {config_path}")
    typer.echo("\nAll settings are commented out by default.")
    typer.echo("Edit the file to customize your configuration.")
    typer.echo("\nPriority (highest to lowest):")
    typer.echo("  1. CLI arguments")
    typer.echo("  2. Environment variables")
    typer.echo("  3. Config file")
    typer.echo("  4. Built-in defaults")


@app.command()
def version() -> None:
    """Print the pokthd version."""
    typer.echo(f"pokt-hd {get_version()}")
