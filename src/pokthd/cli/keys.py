"""
Key commands: derive, inspect, account-path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from pokthd.cli import app
from pokthd.cli.common import resolve_mnemonic
from pokthd.errors import HDKeyError
from pokthd.hdnode import HDNode
from pokthd.path import account_path as build_account_path
from pokthd.settings import PoktHDSettings

JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def _print_fields(fields: dict[str, Any], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(fields, indent=2))
        return

    width = max(len(name) for name in fields)
    for name, value in fields.items():
        typer.echo(f"{name:<{width}}  {value}")


@app.command()
def derive(
    ctx: typer.Context,
    mnemonic_arg: Annotated[str | None, typer.Argument(help="BIP39 mnemonic")] = None,
    mnemonic_file: Annotated[
        Path | None,
        typer.Option("--mnemonic-file", "-f", help="Path to a plain text mnemonic file"),
    ] = None,
    path: Annotated[
        str | None,
        typer.Option("--path", help="Derivation path, e.g. m/44'/635'/0'/0/0"),
    ] = None,
    account: Annotated[
        int | None,
        typer.Option("--account", "-a", help="Account index (default from settings)"),
    ] = None,
    passphrase: Annotated[
        str | None,
        typer.Option("--passphrase", "-p", help="BIP39 passphrase (13th/25th word)"),
    ] = None,
    prompt_passphrase: Annotated[
        bool,
        typer.Option("--prompt-passphrase", help="Prompt for BIP39 passphrase interactively"),
    ] = False,
    locale: Annotated[
        str | None,
        typer.Option("--locale", help="Wordlist locale code (default from settings)"),
    ] = None,
    public_only: Annotated[
        bool, typer.Option("--public-only", help="Omit private key material")
    ] = False,
    as_json: JsonOption = False,
) -> None:
    """Derive a key from a mnemonic and print its public data and extended keys.

    Without --path the first address of the account is derived:
    m/44'/635'/{account}'/0/0.
    """
    settings: PoktHDSettings = ctx.obj

    if path is not None and account is not None:
        typer.echo("Error: --path and --account are mutually exclusive", err=True)
        raise typer.Exit(1)

    locale = locale if locale is not None else settings.wallet.locale

    try:
        if path is None:
            path = build_account_path(account if account is not None else settings.wallet.account)

        resolved = resolve_mnemonic(
            settings,
            mnemonic=mnemonic_arg,
            mnemonic_file=mnemonic_file,
            passphrase=passphrase,
            prompt_passphrase=prompt_passphrase,
        )
        root = HDNode.from_mnemonic(resolved.phrase, resolved.passphrase, locale)
        node = root.derive_path(path)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if settings.logging.sensitive:
        logger.info(f"Derived {node.path} from {resolved.source}")
    else:
        logger.debug(f"Derived {node.path}")

    _print_fields(node.to_dict(include_private=not public_only), as_json)


@app.command()
def inspect(
    extended_key: Annotated[str, typer.Argument(help="xprv or xpub string")],
    as_json: JsonOption = False,
) -> None:
    """Decode an extended key and print its fields."""
    try:
        node = HDNode.from_extended_key(extended_key)
    except HDKeyError as e:
        typer.echo(f"Error: {e} ({e.kind.value})", err=True)
        raise typer.Exit(1)

    fields: dict[str, Any] = {"type": "xpub" if node.is_neutered else "xprv"}
    fields.update(node.to_dict())
    del fields["path"]
    _print_fields(fields, as_json)


@app.command("account-path")
def account_path(
    index: Annotated[int, typer.Argument(help="Account index")],
) -> None:
    """Print the BIP44 path of the first address of an account."""
    try:
        typer.echo(build_account_path(index))
    except HDKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
