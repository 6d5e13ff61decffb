"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from contentful_provisioner.client import APIKey, Space

_CONTENTFUL_ENV_VARS = (
    "CONTENTFUL_MANAGEMENT_TOKEN",
    "CONTENTFUL_ORGANIZATION_ID",
    "CONTENTFUL_BASE_URL",
    "CONTENTFUL_CMA_TOKEN",
    "CONTENTFUL_LOG",
)


@pytest.fixture(autouse=True)
def _clean_contentful_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove CONTENTFUL_* env vars so unit tests don't leak real credentials."""
    for var in _CONTENTFUL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def mock_client() -> MagicMock:
    return MagicMock()


def make_space(space_id: str = "sp1", *, name: str = "Marketing", version: int = 1) -> Space:
    """Build a Space as returned by the Management API (no defaultLocale)."""
    return Space.model_validate(
        {"name": name, "sys": {"type": "Space", "id": space_id, "version": version}}
    )


def make_api_key(
    key_id: str = "k1",
    *,
    space_id: str = "sp1",
    name: str = "Delivery",
    description: str | None = "Website",
    version: int = 1,
    access_token: str = "remote-token",
) -> APIKey:
    """Build an APIKey as returned by the Management API."""
    data = {
        "name": name,
        "accessToken": access_token,
        "environments": [{"sys": {"type": "Link", "linkType": "Environment", "id": "master"}}],
        "policies": [{"effect": "allow", "actions": "all"}],
        "sys": {
            "type": "ApiKey",
            "id": key_id,
            "version": version,
            "space": {"sys": {"type": "Link", "linkType": "Space", "id": space_id}},
        },
    }
    if description is not None:
        data["description"] = description
    return APIKey.model_validate(data)
