"""Configuration models for YAML-based provisioning."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from contentful_provisioner.client import DEFAULT_BASE_URL


class ProviderConfig(BaseSettings):
    """Contentful provider connection settings.

    Fields can be set via YAML (constructor kwargs) or environment variables
    with the ``CONTENTFUL_`` prefix.  Constructor kwargs take precedence.

    ``cma_token`` is typically provided via the ``CONTENTFUL_MANAGEMENT_TOKEN``
    environment variable rather than YAML to avoid committing secrets.
    """

    model_config = SettingsConfigDict(env_prefix="CONTENTFUL_")

    cma_token: str | None = None
    organization_id: str | None = None
    base_url: str = DEFAULT_BASE_URL


class Config(BaseModel):
    """Top-level configuration file contents."""

    provider: ProviderConfig
    state_path: Path = Path(".contentful-state.json")
