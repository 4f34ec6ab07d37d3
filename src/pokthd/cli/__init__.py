"""
pokt-hd command line interface.

Commands are organized into submodules and registered via ``@app.command()``
decorators that reference the ``app`` Typer instance defined here.
"""

from __future__ import annotations

from typing import Annotated

import typer

from pokthd.cli.common import setup_cli

app = typer.Typer(
    name="pokt-hd",
    help="Pocket Network HD key derivation",
    add_completion=False,
)


@app.callback()
def callback(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-l",
            help="Log level: TRACE, DEBUG, INFO, WARNING, ERROR (default from settings)",
        ),
    ] = None,
) -> None:
    """Load settings and configure logging before any command runs."""
    ctx.obj = setup_cli(log_level)


def main() -> None:
    """Entry point for the ``pokt-hd`` console script."""
    app()


# ---------------------------------------------------------------------------
# Import submodules to register their ``@app.command()`` decorated functions.
# These imports MUST come after ``app`` is defined above.
# ---------------------------------------------------------------------------
from pokthd.cli import config, keys, mnemonic  # noqa: E402, F401

if __name__ == "__main__":
    main()
