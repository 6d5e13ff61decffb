"""Space handler implementing CRUD via the spaces API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from contentful_provisioner.client import Space
from contentful_provisioner.engine.handlers import RemoteEntityHandler
from contentful_provisioner.resources.space import SpaceResource

if TYPE_CHECKING:
    from collections.abc import Mapping

    from contentful_provisioner.core.state import ResourceInstance

_DEFAULT_LOCALE = "en"


class SpaceHandler(RemoteEntityHandler[SpaceResource, Space]):
    """CRUD handler for Contentful spaces. Import id is the bare space id."""

    resource_type: ClassVar[str] = SpaceResource.resource_type
    import_id_format: ClassVar[str] = "spaceId"

    def _fetch(self, prior: ResourceInstance) -> Space:
        return self.client.spaces.get(prior.id)

    def _new_entity(self, desired: SpaceResource) -> Space:
        return Space(name=desired.name, default_locale=desired.default_locale)

    def _apply_desired(self, entity: Space, desired: SpaceResource) -> None:
        # The default locale cannot be changed through the space itself.
        entity.name = desired.name

    def _submit(self, entity: Space, desired: SpaceResource) -> Space:
        _ = desired
        return self.client.spaces.upsert(entity)

    def _remove(self, entity: Space, prior: ResourceInstance) -> None:
        _ = prior
        self.client.spaces.delete(entity)

    def _to_attrs(self, entity: Space, fallback: Mapping[str, Any]) -> dict[str, Any]:
        # Reads do not return defaultLocale; keep the last known value.
        default_locale = entity.default_locale or fallback.get("default_locale") or _DEFAULT_LOCALE
        return {
            "id": entity.id,
            "name": entity.name,
            "default_locale": default_locale,
            "version": entity.version,
        }
