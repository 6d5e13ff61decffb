"""Engine-facing handler interfaces."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from contentful_provisioner.client import Entity, NotFoundError
from contentful_provisioner.core.state import ResourceInstance
from contentful_provisioner.engine.errors import (
    EngineError,
    ImmutableAttributeError,
    ImportFormatError,
)
from contentful_provisioner.resources.base import Resource
from contentful_provisioner.resources.markers import collect_immutable_fields

if TYPE_CHECKING:
    from collections.abc import Mapping

    from contentful_provisioner.client import ContentfulClient

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=Resource)
E = TypeVar("E", bound=Entity)


class ResourceHandler(Generic[R]):
    """Base class for resource handlers.

    Handlers translate declarative resources into Management API calls and
    map remote entities back into stored attributes. Subclass and override
    the CRUD methods.
    """

    resource_type: ClassVar[str]
    import_id_format: ClassVar[str] = "id"

    def read(self, prior: ResourceInstance) -> dict[str, Any] | None:
        """Read the record from Contentful. Return None if it no longer exists."""
        raise NotImplementedError

    def create(self, desired: R) -> dict[str, Any]:
        """Create the entity in Contentful. Return stored attributes."""
        raise NotImplementedError

    def update(self, desired: R, prior: ResourceInstance) -> dict[str, Any]:
        """Update the entity in Contentful. Return stored attributes."""
        raise NotImplementedError

    def delete(self, prior: ResourceInstance) -> None:
        """Delete the entity from Contentful."""
        raise NotImplementedError

    def parse_import_id(self, import_id: str) -> dict[str, Any]:
        """Turn an import identifier into the attributes needed for ``read``.

        The default format is the bare remote id.
        """
        if not import_id:
            raise ImportFormatError(import_id, self.import_id_format)
        return {"id": import_id}

    def import_state(self, import_id: str) -> dict[str, Any] | None:
        """Parse *import_id* and read the record. Return None if it does not exist."""
        attrs = self.parse_import_id(import_id)
        logger.debug("Importing %s %r", self.resource_type, import_id)
        prior = ResourceInstance(
            address=f"{self.resource_type}.{attrs['id']}",
            resource_type=self.resource_type,
            name=attrs["id"],
            attributes=attrs,
        )
        return self.read(prior)


class RemoteEntityHandler(ResourceHandler[R], Generic[R, E]):
    """Lifecycle shared by every entity backed by an upsert-style API.

    Subclasses supply the entity hooks; this class owns the control flow:

    - ``create``: build entity, submit, map back
    - ``read``: fetch and map back; not-found means the record is gone
    - ``update``: fetch current entity, apply desired fields, submit, map back
    - ``delete``: fetch and remove; not-found at either step counts as deleted
    """

    def __init__(self, client: ContentfulClient) -> None:
        self.client = client

    # -- entity hooks --------------------------------------------------

    def _fetch(self, prior: ResourceInstance) -> E:
        raise NotImplementedError

    def _new_entity(self, desired: R) -> E:
        raise NotImplementedError

    def _apply_desired(self, entity: E, desired: R) -> None:
        raise NotImplementedError

    def _submit(self, entity: E, desired: R) -> E:
        raise NotImplementedError

    def _remove(self, entity: E, prior: ResourceInstance) -> None:
        raise NotImplementedError

    def _to_attrs(self, entity: E, fallback: Mapping[str, Any]) -> dict[str, Any]:
        """Map a remote entity to stored attributes.

        *fallback* holds known values for fields the API does not echo back.
        """
        raise NotImplementedError

    # -- lifecycle -----------------------------------------------------

    def _check_immutable(self, desired: R, prior: ResourceInstance) -> None:
        for field in collect_immutable_fields(desired):
            current = prior.attributes.get(field)
            wanted = getattr(desired, field)
            if current and current != wanted:
                raise ImmutableAttributeError(self.resource_type, field, current, wanted)

    def create(self, desired: R) -> dict[str, Any]:
        entity = self._submit(self._new_entity(desired), desired)
        logger.info("Created %s %s (version %s)", self.resource_type, entity.id, entity.version)
        return self._to_attrs(entity, desired.configured_attrs())

    def read(self, prior: ResourceInstance) -> dict[str, Any] | None:
        if not prior.id:
            return None
        try:
            entity = self._fetch(prior)
        except NotFoundError:
            logger.debug("%s %s no longer exists", self.resource_type, prior.id)
            return None
        return self._to_attrs(entity, prior.attributes)

    def update(self, desired: R, prior: ResourceInstance) -> dict[str, Any]:
        return self.reconcile(desired, prior)

    def reconcile(self, desired: R, prior: ResourceInstance) -> dict[str, Any]:
        """Fetch-modify-write: the current version is required by the API."""
        if not prior.id:
            raise EngineError(f"Cannot update {prior.address}: record has no id")
        self._check_immutable(desired, prior)

        current = self._fetch(prior)
        self._apply_desired(current, desired)
        entity = self._submit(current, desired)
        logger.info("Updated %s %s (version %s)", self.resource_type, entity.id, entity.version)
        return self._to_attrs(entity, desired.configured_attrs())

    def delete(self, prior: ResourceInstance) -> None:
        if not prior.id:
            return
        try:
            entity = self._fetch(prior)
            self._remove(entity, prior)
        except NotFoundError:
            logger.info("%s %s already deleted", self.resource_type, prior.id)
            return
        logger.info("Deleted %s %s", self.resource_type, prior.id)
