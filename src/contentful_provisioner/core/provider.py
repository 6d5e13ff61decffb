"""Contentful provider - connection configuration for the Management API."""

from functools import cached_property
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, SecretStr

from contentful_provisioner.client import DEFAULT_BASE_URL, ContentfulClient

if TYPE_CHECKING:
    from contentful_provisioner.engine.api_key_handler import ApiKeyHandler
    from contentful_provisioner.engine.space_handler import SpaceHandler


class ContentfulProvider(BaseModel):
    """Connection configuration for the Contentful Management API.

    Provide a content management token, or inject a ready client with
    ``from_client``.

    Examples:
        provider = ContentfulProvider(
            cma_token=SecretStr("CFPAT-..."),
            organization_id="0abcDEF",
        )

        # Tests / embedding
        provider = ContentfulProvider.from_client(MagicMock())
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    cma_token: SecretStr | None = None
    organization_id: str | None = None
    base_url: str = DEFAULT_BASE_URL

    # Injected client (for embedding / testing)
    _injected_client: ContentfulClient | None = None

    @classmethod
    def from_client(cls, client: ContentfulClient) -> Self:
        """Create a provider with an injected client.

        Args:
            client: A pre-configured ContentfulClient instance
        """
        provider = cls.model_construct()
        provider._injected_client = client
        return provider

    @cached_property
    def client(self) -> ContentfulClient:
        """Get the Management API client."""
        if self._injected_client is not None:
            return self._injected_client

        if self.cma_token is None:
            raise ValueError(
                "Either provide cma_token, or use ContentfulProvider.from_client() "
                "to inject a client"
            )

        return ContentfulClient(
            self.cma_token.get_secret_value(),
            organization_id=self.organization_id,
            base_url=self.base_url,
        )

    # Handlers for each Contentful entity
    @cached_property
    def spaces(self) -> "SpaceHandler":
        from contentful_provisioner.engine.space_handler import SpaceHandler

        return SpaceHandler(self.client)

    @cached_property
    def api_keys(self) -> "ApiKeyHandler":
        from contentful_provisioner.engine.api_key_handler import ApiKeyHandler

        return ApiKeyHandler(self.client)
