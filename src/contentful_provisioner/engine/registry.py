"""Lookup from resource type name to its model class and handler."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from contentful_provisioner.engine.errors import UnknownResourceTypeError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from contentful_provisioner.core.provider import ContentfulProvider
    from contentful_provisioner.engine.handlers import ResourceHandler
    from contentful_provisioner.resources.base import Resource


@dataclass(frozen=True)
class ResourceTypeRegistration:
    resource_type: str
    model: type[Resource]
    handler: ResourceHandler[Any]


class ResourceTypeRegistry:
    """Known resource types, each bound to one handler instance."""

    def __init__(self) -> None:
        self._by_type: dict[str, ResourceTypeRegistration] = {}

    def __contains__(self, resource_type: object) -> bool:
        return resource_type in self._by_type

    def __iter__(self) -> Iterator[ResourceTypeRegistration]:
        return iter(self._by_type[name] for name in self.resource_types())

    def register(self, model: type[Resource], handler: ResourceHandler[Any]) -> None:
        """Bind *model* to *handler*. Both must name the same resource type."""
        name = getattr(model, "resource_type", "")
        if not name:
            raise ValueError(f"{model.__name__} does not declare a resource_type")
        if handler.resource_type != name:
            raise ValueError(
                f"{type(handler).__name__} handles {handler.resource_type!r}, "
                f"not {model.__name__}'s {name!r}"
            )
        if name in self._by_type:
            raise ValueError(f"{name} is already registered")
        self._by_type[name] = ResourceTypeRegistration(name, model, handler)

    def get(self, resource_type: str) -> ResourceTypeRegistration:
        registration = self._by_type.get(resource_type)
        if registration is None:
            raise UnknownResourceTypeError(resource_type)
        return registration

    def resource_types(self) -> list[str]:
        return sorted(self._by_type)


def default_registry(provider: ContentfulProvider) -> ResourceTypeRegistry:
    """Registry for spaces and API keys, backed by *provider*'s handlers."""
    from contentful_provisioner.resources.api_key import ApiKeyResource
    from contentful_provisioner.resources.space import SpaceResource

    registry = ResourceTypeRegistry()
    registry.register(SpaceResource, provider.spaces)
    registry.register(ApiKeyResource, provider.api_keys)
    return registry
