"""Config Loader - loads client configuration from YAML.

Credentials should not live in config files, so every string value may
reference environment variables as ``${VAR_NAME}``; they are substituted
before validation.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pagseguro_client.models import ClientConfig


class ConfigError(Exception):
    """Raised when configuration loading fails."""


_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def load_client_config(config_path: Path) -> ClientConfig:
    """Load client configuration from YAML with ${ENV_VAR} substitution."""
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError("Config file must be a YAML mapping")

    return parse_client_config(raw_config)


def parse_client_config(raw_config: dict[str, Any]) -> ClientConfig:
    """Validate an already-loaded mapping.

    ``${VAR}`` references are expanded in every string value, including the
    values of ``headers``, before validation.
    """
    try:
        expanded = {key: _expand(value) for key, value in raw_config.items()}
        return ClientConfig.model_validate(expanded)
    except ValidationError as e:
        raise ConfigError(f"Invalid config structure: {e}") from e


def _expand(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _expand(item) for key, item in value.items()}
    if isinstance(value, str):
        return _ENV_VAR_PATTERN.sub(_env_value, value)
    return value


def _env_value(match: re.Match[str]) -> str:
    name = match.group(1)
    if name not in os.environ:
        raise ConfigError(f"Environment variable '{name}' is not set")
    return os.environ[name]
