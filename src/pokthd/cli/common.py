"""
Shared CLI helpers: logging setup, settings loading and mnemonic resolution.

Kept free of typer imports except for interactive prompts, so the resolvers
can be unit tested without a CLI runner.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from pokthd.settings import PoktHDSettings, get_settings, reset_settings

MNEMONIC_ENV = "MNEMONIC"

# =============================================================================
# Resolved Values
# =============================================================================


@dataclass
class ResolvedMnemonic:
    """Resolved mnemonic and BIP39 passphrase.

    Note: passphrase is the optional BIP39 passphrase (13th/25th word).
    """

    phrase: str
    passphrase: str
    source: str  # Where the phrase came from (for logging)

    def __repr__(self) -> str:
        return f"ResolvedMnemonic(source={self.source!r})"


# =============================================================================
# Setup Functions
# =============================================================================


def setup_logging(level: str = "INFO") -> None:
    """
    Configure loguru logging with consistent format.

    Args:
        level: Log level (TRACE, DEBUG, INFO, WARNING, ERROR)
    """
    logger.remove()
    logger.add(
        sys.stderr,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        level=level.upper(),
        colorize=True,
    )


def setup_cli(log_level: str | None = None) -> PoktHDSettings:
    """
    Common CLI setup: reset settings cache, configure logging, return settings.

    Log level priority: CLI argument > settings (env/config) > default "INFO"

    Args:
        log_level: Log level override from CLI (None means use settings)

    Returns:
        PoktHDSettings instance with all sources loaded
    """
    reset_settings()
    settings = get_settings()

    effective_log_level = log_level if log_level is not None else settings.logging.level
    setup_logging(effective_log_level)

    return settings


# =============================================================================
# Mnemonic Loading
# =============================================================================


def load_mnemonic_from_file(path: Path) -> str:
    """
    Load a plain text mnemonic file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty
    """
    if not path.exists():
        raise FileNotFoundError(f"Mnemonic file not found: {path}")

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        raise ValueError(f"Mnemonic file is empty: {path}")
    return text


def resolve_mnemonic(
    settings: PoktHDSettings,
    *,
    mnemonic: str | None = None,
    mnemonic_file: Path | None = None,
    passphrase: str | None = None,
    prompt_passphrase: bool = False,
    prompt: bool = True,
) -> ResolvedMnemonic:
    """
    Resolve the mnemonic and passphrase from the available sources.

    Mnemonic priority:
    1. Positional phrase argument
    2. --mnemonic-file argument
    3. MNEMONIC environment variable
    4. Interactive prompt (hidden input), when prompt is True

    Passphrase priority:
    1. --passphrase argument
    2. Settings wallet.passphrase (env WALLET__PASSPHRASE or config)
    3. Interactive prompt, when prompt_passphrase is True
    4. Empty string

    Raises:
        ValueError: If no phrase is available, or the file cannot be read
    """
    phrase: str | None = None
    source = ""

    if mnemonic:
        phrase = mnemonic
        source = "argument"
    elif mnemonic_file:
        phrase = load_mnemonic_from_file(mnemonic_file)
        source = f"--mnemonic-file ({mnemonic_file})"
    elif env_mnemonic := os.environ.get(MNEMONIC_ENV):
        phrase = env_mnemonic
        source = f"{MNEMONIC_ENV} env"
    elif prompt:
        import typer

        phrase = typer.prompt("Enter mnemonic", hide_input=True)
        source = "prompt"

    if not phrase:
        raise ValueError(
            f"No mnemonic provided. Pass it as an argument, use --mnemonic-file "
            f"or set {MNEMONIC_ENV}."
        )

    if passphrase is not None:
        resolved_passphrase = passphrase
    elif secret := settings.wallet.passphrase.get_secret_value():
        resolved_passphrase = secret
    elif prompt_passphrase:
        import typer

        resolved_passphrase = typer.prompt(
            "Enter BIP39 passphrase (leave empty for none)",
            default="",
            hide_input=True,
            show_default=False,
        )
    else:
        resolved_passphrase = ""

    if settings.logging.sensitive:
        logger.debug(f"Mnemonic loaded from {source}")
    else:
        logger.debug("Mnemonic loaded")

    return ResolvedMnemonic(phrase=phrase, passphrase=resolved_passphrase, source=source)


__all__ = [
    "MNEMONIC_ENV",
    "ResolvedMnemonic",
    "setup_logging",
    "setup_cli",
    "load_mnemonic_from_file",
    "resolve_mnemonic",
]
