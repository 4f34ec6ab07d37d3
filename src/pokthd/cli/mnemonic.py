"""
Mnemonic commands: generate, validate, seed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from pokthd.bip39 import (
    generate_mnemonic,
    mnemonic_to_entropy,
    mnemonic_to_seed,
    normalize_mnemonic,
)
from pokthd.cli import app
from pokthd.cli.common import resolve_mnemonic
from pokthd.errors import HDKeyError, MnemonicError
from pokthd.settings import PoktHDSettings
from pokthd.wordlist import get_wordlist

LocaleOption = Annotated[
    str | None,
    typer.Option("--locale", help="Wordlist locale code (default from settings)"),
]
MnemonicFileOption = Annotated[
    Path | None,
    typer.Option("--mnemonic-file", "-f", help="Path to a plain text mnemonic file"),
]


@app.command()
def generate(
    ctx: typer.Context,
    word_count: Annotated[
        int | None,
        typer.Option("--words", "-w", help="Number of words (12, 15, 18, 21, or 24)"),
    ] = None,
    locale: LocaleOption = None,
) -> None:
    """Generate a new BIP39 mnemonic phrase with secure entropy."""
    settings: PoktHDSettings = ctx.obj
    word_count = word_count if word_count is not None else settings.wallet.word_count
    locale = locale if locale is not None else settings.wallet.locale

    try:
        phrase = generate_mnemonic(word_count, locale)
    except HDKeyError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    logger.info(f"Generated {word_count}-word {locale} mnemonic")
    typer.echo("WRITE THIS DOWN AND KEEP IT SAFE!", err=True)
    typer.echo(phrase)


@app.command()
def validate(
    ctx: typer.Context,
    mnemonic_arg: Annotated[str | None, typer.Argument(help="Mnemonic to validate")] = None,
    mnemonic_file: MnemonicFileOption = None,
    locale: LocaleOption = None,
) -> None:
    """Validate a BIP39 mnemonic phrase."""
    settings: PoktHDSettings = ctx.obj
    locale = locale if locale is not None else settings.wallet.locale

    try:
        resolved = resolve_mnemonic(settings, mnemonic=mnemonic_arg, mnemonic_file=mnemonic_file)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        wordlist = get_wordlist(locale)
        mnemonic_to_entropy(resolved.phrase, wordlist)
    except MnemonicError as e:
        print(f"Mnemonic is INVALID: {e}")
        raise typer.Exit(1)

    print("Mnemonic is VALID")
    print(f"Word count: {len(wordlist.split(resolved.phrase))}")


@app.command()
def seed(
    ctx: typer.Context,
    mnemonic_arg: Annotated[str | None, typer.Argument(help="BIP39 mnemonic")] = None,
    mnemonic_file: MnemonicFileOption = None,
    passphrase: Annotated[
        str | None,
        typer.Option("--passphrase", "-p", help="BIP39 passphrase (13th/25th word)"),
    ] = None,
    prompt_passphrase: Annotated[
        bool,
        typer.Option("--prompt-passphrase", help="Prompt for BIP39 passphrase interactively"),
    ] = False,
    locale: LocaleOption = None,
) -> None:
    """Print the hex encoded 64-byte BIP39 seed of a mnemonic."""
    settings: PoktHDSettings = ctx.obj
    locale = locale if locale is not None else settings.wallet.locale

    try:
        resolved = resolve_mnemonic(
            settings,
            mnemonic=mnemonic_arg,
            mnemonic_file=mnemonic_file,
            passphrase=passphrase,
            prompt_passphrase=prompt_passphrase,
        )
        phrase = normalize_mnemonic(resolved.phrase, locale)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(mnemonic_to_seed(phrase, resolved.passphrase).hex())
