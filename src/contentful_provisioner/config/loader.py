"""Read ``contentful-provisioner.yaml`` and fill provider settings from the environment.

Provider settings resolve per field, first hit wins:

1. the ``provider:`` block of the YAML file
2. process environment variables
3. a ``.env`` file next to the YAML file
"""

from __future__ import annotations

import logging
import os
from collections import ChainMap
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import dotenv_values
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from contentful_provisioner.config.schema import Config

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "contentful-provisioner.yaml"


class ConfigError(Exception):
    """The configuration file or environment is unusable."""


PROVIDER_ENV_VARS: dict[str, str] = {
    "cma_token": "CONTENTFUL_MANAGEMENT_TOKEN",
    "organization_id": "CONTENTFUL_ORGANIZATION_ID",
    "base_url": "CONTENTFUL_BASE_URL",
}


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        logger.debug("%s not found, configuring from the environment", path)
        return {}
    try:
        data = YAML(typ="safe").load(path)
    except (OSError, YAMLError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at the top level, got {type(data).__name__}")
    return data


def _environment(config_dir: Path) -> Mapping[str, str | None]:
    env_file = config_dir / ".env"
    dotenv = dotenv_values(env_file, encoding="utf-8-sig") if env_file.is_file() else {}
    return ChainMap(dict(os.environ), dotenv)


def _resolve_provider(block: Any, environment: Mapping[str, str | None]) -> dict[str, Any]:
    if not isinstance(block, dict):
        raise ConfigError("provider: expected a mapping")
    unknown = sorted(set(block) - set(PROVIDER_ENV_VARS))
    if unknown:
        raise ConfigError(f"Unknown provider field(s): {', '.join(unknown)}")

    resolved: dict[str, Any] = {}
    for field, env_var in PROVIDER_ENV_VARS.items():
        value = block.get(field)
        if value is None:
            value = environment.get(env_var)
        if value is not None:
            resolved[field] = value
    return resolved


def load_config(path: Path | str) -> Config:
    """Build a ``Config`` from *path*; a missing file means environment only.

    Relative ``state_path`` values are taken relative to the file's directory.

    Raises:
        ConfigError: Unreadable YAML, unknown provider fields or invalid values.
    """
    path = Path(path)
    config_dir = path.parent
    raw = _read_yaml(path)
    raw["provider"] = _resolve_provider(raw.get("provider") or {}, _environment(config_dir))

    try:
        config = Config.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {path}:\n{exc}") from exc

    if not config.state_path.is_absolute():
        config.state_path = config_dir / config.state_path
    logger.info("Configuration loaded from %s (state: %s)", path, config.state_path)
    return config
