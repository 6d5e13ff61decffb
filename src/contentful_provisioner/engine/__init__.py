"""Resource handlers and state maintenance engine."""

from contentful_provisioner.engine.api_key_handler import ApiKeyHandler
from contentful_provisioner.engine.engine import ContentfulEngine
from contentful_provisioner.engine.errors import (
    EngineError,
    ImmutableAttributeError,
    ImportFormatError,
    ImportNotFoundError,
    ResourceAlreadyManagedError,
    ResourceNotTrackedError,
    UnknownResourceTypeError,
)
from contentful_provisioner.engine.handlers import RemoteEntityHandler, ResourceHandler
from contentful_provisioner.engine.registry import (
    ResourceTypeRegistration,
    ResourceTypeRegistry,
    default_registry,
)
from contentful_provisioner.engine.space_handler import SpaceHandler
from contentful_provisioner.engine.types import Action, AttributeChange, ResourceChange

__all__ = [
    "Action",
    "ApiKeyHandler",
    "AttributeChange",
    "ContentfulEngine",
    "EngineError",
    "ImmutableAttributeError",
    "ImportFormatError",
    "ImportNotFoundError",
    "RemoteEntityHandler",
    "ResourceAlreadyManagedError",
    "ResourceChange",
    "ResourceHandler",
    "ResourceNotTrackedError",
    "ResourceTypeRegistration",
    "ResourceTypeRegistry",
    "SpaceHandler",
    "UnknownResourceTypeError",
    "default_registry",
]
