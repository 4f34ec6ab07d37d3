"""
Pytest configuration and fixtures for pokthd tests.
"""

from __future__ import annotations

import pytest
from loguru import logger

from pokthd.settings import reset_settings


@pytest.fixture
def test_mnemonic() -> str:
    """Test mnemonic (BIP39 test vector)"""
    return (
        "abandon abandon abandon abandon abandon abandon "
        "abandon abandon abandon abandon abandon about"
    )


@pytest.fixture
def slip10_seed() -> bytes:
    """Seed of SLIP-0010 test vector 1"""
    return bytes.fromhex("000102030405060708090a0b0c0d0e0f")


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the user's config, mnemonic and settings cache out of every test."""
    monkeypatch.setenv("POKTHD_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "POKTHD_CONFIG_FILE",
        "MNEMONIC",
        "DATA_DIR",
        "WALLET__LOCALE",
        "WALLET__WORD_COUNT",
        "WALLET__ACCOUNT",
        "WALLET__PASSPHRASE",
        "LOGGING__LEVEL",
        "LOGGING__SENSITIVE",
    ):
        monkeypatch.delenv(name, raising=False)

    reset_settings()
    yield
    reset_settings()
    # CLI runs bind a sink to the runner's stderr, which is closed afterwards
    logger.remove()
