"""
Settings management for pokthd using pydantic-settings.

Sources, highest priority first:
1. Constructor overrides (CLI arguments)
2. Environment variables
3. TOML config file (~/.pokthd/config.toml)
4. Default values

Usage:
    from pokthd.settings import get_settings

    settings = get_settings()
    print(settings.wallet.locale)

Environment Variable Naming:
    - Use uppercase with double underscore for nested settings
    - Examples: WALLET__LOCALE, WALLET__ACCOUNT, LOGGING__LEVEL
    - Maps to TOML sections: WALLET__LOCALE -> [wallet] locale
    - POKTHD_DATA_DIR and POKTHD_CONFIG_FILE locate the config file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field, SecretStr, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from pokthd.bip39 import WORD_COUNTS
from pokthd.crypto import HARDENED_BIT
from pokthd.wordlist import DEFAULT_LOCALE

DATA_DIR_ENV = "POKTHD_DATA_DIR"
CONFIG_FILE_ENV = "POKTHD_CONFIG_FILE"
DEFAULT_DATA_DIR_NAME = ".pokthd"


def get_default_data_dir() -> Path:
    """
    Get the default data directory.

    Returns ~/.pokthd or $POKTHD_DATA_DIR if set. Does not create it.
    """
    env_path = os.getenv(DATA_DIR_ENV)
    return Path(env_path) if env_path else Path.home() / DEFAULT_DATA_DIR_NAME


class WalletSettings(BaseModel):
    """Mnemonic and derivation defaults."""

    locale: str = Field(
        default=DEFAULT_LOCALE,
        description="Wordlist locale code (en, es, fr, it, ja, ko, zh_cn, zh_tw, cz, pt)",
    )
    word_count: int = Field(
        default=24,
        description="Number of words for newly generated mnemonics (12, 15, 18, 21 or 24)",
    )
    account: int = Field(
        default=0,
        ge=0,
        lt=HARDENED_BIT,
        description="Default account index for m/44'/635'/{account}'/0/0",
    )
    passphrase: SecretStr = Field(
        default=SecretStr(""),
        description="BIP39 passphrase (13th/25th word). Prefer the CLI prompt.",
    )

    @field_validator("locale")
    @classmethod
    def normalize_locale(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("word_count")
    @classmethod
    def validate_word_count(cls, v: int) -> int:
        if v not in WORD_COUNTS:
            raise ValueError("word_count must be 12, 15, 18, 21, or 24")
        return v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Log level: TRACE, DEBUG, INFO, WARNING, ERROR",
    )
    sensitive: bool = Field(
        default=False,
        description="Enable sensitive logging (mnemonic sources, derived paths)",
    )


class PoktHDSettings(BaseSettings):
    """
    Main settings class.

    Loads configuration from multiple sources with the following priority:
    1. Constructor arguments
    2. Environment variables
    3. TOML config file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Data directory (defaults to ~/.pokthd)",
    )

    wallet: WalletSettings = Field(default_factory=WalletSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_source = TomlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            toml_source,
        )

    def get_data_dir(self) -> Path:
        """Get the data directory, using default if not set."""
        if self.data_dir is not None:
            return self.data_dir
        return get_default_data_dir()


def get_config_path() -> Path:
    """Get the path to the config file."""
    env_path = os.environ.get(CONFIG_FILE_ENV)
    if env_path:
        return Path(env_path)
    return get_default_data_dir() / "config.toml"


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Settings source that reads the TOML config file, if there is one."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._config: dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        import tomllib

        config_path = get_config_path()

        if not config_path.exists():
            logger.debug(f"Config file not found at {config_path}, using defaults")
            return

        try:
            with open(config_path, "rb") as f:
                self._config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"Invalid TOML syntax in config file {config_path}")
            logger.error("Tip: Make sure section headers like [wallet] are uncommented")
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

        logger.debug(f"Loaded config from {config_path}")

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        value = self._config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._config


def generate_config_template() -> str:
    """
    Generate a config file template with all settings commented out.

    Users uncomment only the settings they want to change, so defaults can
    evolve with new releases.
    """
    lines: list[str] = [
        "# pokthd Configuration",
        "#",
        "# All settings are commented out - uncomment to override.",
        "#",
        "# Priority (highest to lowest):",
        "#   1. CLI arguments",
        "#   2. Environment variables (WALLET__LOCALE=en, LOGGING__LEVEL=DEBUG)",
        "#   3. This config file",
        "#   4. Built-in defaults",
        "",
    ]

    def add_section(title: str, model_cls: type[BaseModel], prefix: str) -> None:
        lines.append(f"# {'=' * 60}")
        lines.append(f"# {title}")
        lines.append(f"# {'=' * 60}")
        lines.append(f"[{prefix}]")
        lines.append("")

        for field_name, field_info in model_cls.model_fields.items():
            if field_info.description:
                lines.append(f"# {field_info.description}")

            default = field_info.default
            if isinstance(default, bool):
                value_str = str(default).lower()
            elif isinstance(default, str):
                value_str = f'"{default}"'
            elif isinstance(default, SecretStr):
                value_str = '""'
            else:
                value_str = str(default)

            lines.append(f"# {field_name} = {value_str}")
            lines.append("")

    add_section("Wallet Settings", WalletSettings, "wallet")
    add_section("Logging Settings", LoggingSettings, "logging")

    return "\n".join(lines)


def ensure_config_file(data_dir: Path | None = None) -> Path:
    """
    Ensure the config file exists, creating a template if it doesn't.

    Args:
        data_dir: Optional data directory path. Uses default if not provided.

    Returns:
        Path to the config file.
    """
    if data_dir is None:
        data_dir = get_default_data_dir()

    config_path = data_dir / "config.toml"

    if not config_path.exists():
        logger.info(f"Creating config file template at {config_path}")
        data_dir.mkdir(parents=True, exist_ok=True)
        config_path.write_text(generate_config_template())

    return config_path


# Lazily loaded, see get_settings()
_settings: PoktHDSettings | None = None


def get_settings(**overrides: Any) -> PoktHDSettings:
    """
    Get the settings instance.

    On first call, loads settings from all sources. Subsequent calls
    return the cached instance unless reset_settings() is called.

    Args:
        **overrides: Optional settings overrides (highest priority)
    """
    global _settings
    if _settings is None or overrides:
        _settings = PoktHDSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Reset the cached settings instance (useful for testing)."""
    global _settings
    _settings = None


__all__ = [
    "PoktHDSettings",
    "WalletSettings",
    "LoggingSettings",
    "get_default_data_dir",
    "get_settings",
    "reset_settings",
    "get_config_path",
    "generate_config_template",
    "ensure_config_file",
]
