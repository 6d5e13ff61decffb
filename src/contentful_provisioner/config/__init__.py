"""Configuration loading and convenience state API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import SecretStr

from contentful_provisioner.config.loader import ConfigError, load_config
from contentful_provisioner.config.schema import Config, ProviderConfig
from contentful_provisioner.core.provider import ContentfulProvider
from contentful_provisioner.engine.engine import ContentfulEngine
from contentful_provisioner.engine.registry import ResourceTypeRegistry, default_registry

if TYPE_CHECKING:
    from pathlib import Path

    from contentful_provisioner.core.state import ResourceInstance, State
    from contentful_provisioner.engine.types import ResourceChange

__all__ = [
    "Config",
    "ConfigError",
    "ProviderConfig",
    "drift",
    "engine_from_config",
    "forget",
    "import_resource",
    "load",
    "load_config",
    "provider_from_config",
    "refresh",
    "save_state",
]


def load(path: Path | str) -> Config:
    """Load a YAML configuration file."""
    return load_config(path)


def provider_from_config(config: Config) -> ContentfulProvider:
    """Build a ``ContentfulProvider`` from a ``Config`` instance."""
    if not config.provider.cma_token:
        raise ConfigError(
            "provider.cma_token is required (set CONTENTFUL_MANAGEMENT_TOKEN env var)"
        )
    return ContentfulProvider(
        cma_token=SecretStr(config.provider.cma_token),
        organization_id=config.provider.organization_id,
        base_url=config.provider.base_url,
    )


def engine_from_config(config: Config) -> ContentfulEngine:
    """Build a ``ContentfulEngine`` from a ``Config`` instance."""
    provider = provider_from_config(config)
    return ContentfulEngine(state_path=config.state_path, registry=default_registry(provider))


def refresh(config: Config) -> tuple[list[ResourceChange], State]:
    """Refresh state from Contentful (not persisted).

    Returns the list of drift changes and the new state. Call
    :func:`save_state` to persist the returned state to disk.
    """
    from contentful_provisioner.engine.engine import build_drift_changes

    before, after = engine_from_config(config).refresh()
    return build_drift_changes(before, after), after


def save_state(config: Config, state: State) -> None:
    """Persist state to disk."""
    state.serial += 1
    state.save(config.state_path)


def drift(config: Config) -> list[ResourceChange]:
    """Detect drift between state file and Contentful."""
    return engine_from_config(config).drift()


def import_resource(
    config: Config, resource_type: str, name: str, import_id: str
) -> ResourceInstance:
    """Import an existing Contentful entity into state."""
    return engine_from_config(config).import_resource(resource_type, name, import_id)


def forget(config: Config, address: str) -> ResourceInstance:
    """Remove a record from state without touching Contentful."""
    engine = ContentfulEngine(state_path=config.state_path, registry=ResourceTypeRegistry())
    return engine.forget(address)
