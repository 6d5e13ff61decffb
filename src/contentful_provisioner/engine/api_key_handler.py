"""API key handler implementing CRUD via the space-scoped api_keys API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from contentful_provisioner.client import APIKey
from contentful_provisioner.engine.errors import EngineError, ImportFormatError
from contentful_provisioner.engine.handlers import RemoteEntityHandler
from contentful_provisioner.resources.api_key import ApiKeyResource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from contentful_provisioner.core.state import ResourceInstance


class ApiKeyHandler(RemoteEntityHandler[ApiKeyResource, APIKey]):
    """CRUD handler for Contentful delivery API keys.

    Keys live inside a space, so every remote call carries the space id.
    Import ids take the form ``spaceId/keyId``.
    """

    resource_type: ClassVar[str] = ApiKeyResource.resource_type
    import_id_format: ClassVar[str] = "spaceId/keyId"

    @staticmethod
    def _space_id(prior: ResourceInstance) -> str:
        space_id = prior.attributes.get("space_id")
        if not space_id:
            raise EngineError(f"{prior.address} has no space_id")
        return space_id

    def _fetch(self, prior: ResourceInstance) -> APIKey:
        return self.client.api_keys.get(self._space_id(prior), prior.id)

    def _new_entity(self, desired: ApiKeyResource) -> APIKey:
        return APIKey(name=desired.name, description=desired.description)

    def _apply_desired(self, entity: APIKey, desired: ApiKeyResource) -> None:
        entity.name = desired.name
        entity.description = desired.description

    def _submit(self, entity: APIKey, desired: ApiKeyResource) -> APIKey:
        return self.client.api_keys.upsert(desired.space_id, entity)

    def _remove(self, entity: APIKey, prior: ResourceInstance) -> None:
        self.client.api_keys.delete(self._space_id(prior), entity)

    def _to_attrs(self, entity: APIKey, fallback: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "id": entity.id,
            "space_id": entity.space_id or fallback.get("space_id", ""),
            "name": entity.name,
            "description": entity.description or "",
            "version": entity.version,
            "access_token": entity.access_token,
        }

    def parse_import_id(self, import_id: str) -> dict[str, Any]:
        space_id, sep, key_id = import_id.partition("/")
        if not sep or not space_id or not key_id:
            raise ImportFormatError(import_id, self.import_id_format)
        return {"id": key_id, "space_id": space_id}
