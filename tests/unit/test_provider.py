"""Unit tests for ContentfulProvider."""

from unittest.mock import MagicMock

import pytest
from pydantic import SecretStr

from contentful_provisioner.client import ContentfulClient
from contentful_provisioner.core import ContentfulProvider


def test_provider_from_client() -> None:
    """Injected clients are used as-is."""
    mock_client = MagicMock()

    provider = ContentfulProvider.from_client(mock_client)

    assert provider.client is mock_client


def test_provider_handlers_use_same_client() -> None:
    mock_client = MagicMock()
    provider = ContentfulProvider.from_client(mock_client)

    assert provider.spaces.client is mock_client
    assert provider.api_keys.client is mock_client
    assert provider.spaces is provider.spaces


def test_provider_requires_token() -> None:
    provider = ContentfulProvider.model_construct()

    with pytest.raises(ValueError, match="cma_token"):
        _ = provider.client


def test_provider_builds_client_from_token() -> None:
    provider = ContentfulProvider(
        cma_token=SecretStr("CFPAT-test"),
        organization_id="org1",
    )

    client = provider.client

    assert isinstance(client, ContentfulClient)
    assert client.organization_id == "org1"
    assert "CFPAT-test" not in repr(provider)
