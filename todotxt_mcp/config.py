"""Settings: data directory from the environment, sync sources from config.toml."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from todotxt_mcp.exceptions import ConfigurationError
from todotxt_mcp.models.config import AppConfig

ENV_PREFIX = "TODOTXT_MCP"
CONFIG_FILE = "config.toml"
DEFAULT_DATA_DIR = Path("~/.todotxt")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def get_data_dir() -> Path:
    raw = os.getenv(_k("DIR"))
    if raw is None or raw.strip() == "":
        return DEFAULT_DATA_DIR.expanduser()
    return Path(raw).expanduser()


def get_log_level() -> str:
    return (os.getenv(_k("LOG_LEVEL")) or "INFO").upper()


def load_config(directory: str | Path | None = None) -> AppConfig:
    """
    Load config.toml from the data directory.

    A missing file gives the default config (no sync sources).

    Raises:
        ConfigurationError: if the file is not valid TOML or has invalid values
    """
    path = Path(directory or get_data_dir()) / CONFIG_FILE
    try:
        with path.open("rb") as fh:
            raw = tomllib.load(fh)
    except FileNotFoundError:
        return AppConfig()
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"failed to parse config file {path}: {e}") from e

    try:
        return AppConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"invalid config file {path}: {e}") from e
