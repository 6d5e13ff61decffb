"""Engine error types."""

from __future__ import annotations


class EngineError(Exception):
    """Base exception for engine errors."""


class UnknownResourceTypeError(EngineError):
    """Raised when a resource type has no registration/handler."""

    def __init__(self, resource_type: str) -> None:
        super().__init__(f"Unknown resource type: {resource_type}")
        self.resource_type = resource_type


class ImportFormatError(EngineError):
    """Raised when an import identifier cannot be parsed."""

    def __init__(self, import_id: str, expected: str) -> None:
        super().__init__(
            f"invalid id {import_id!r} specified, should be in format \"{expected}\" for import"
        )
        self.import_id = import_id
        self.expected = expected


class ImportNotFoundError(EngineError):
    """Raised when the object to import does not exist remotely."""

    def __init__(self, resource_type: str, import_id: str) -> None:
        super().__init__(f"Cannot import non-existent remote object {resource_type} {import_id!r}")
        self.resource_type = resource_type
        self.import_id = import_id


class ImmutableAttributeError(EngineError):
    """Raised when an update would change an attribute fixed at creation."""

    def __init__(self, resource_type: str, attribute: str, current: object, desired: object) -> None:
        super().__init__(
            f"{resource_type}.{attribute} cannot be changed after creation "
            f"(current {current!r}, desired {desired!r})"
        )
        self.resource_type = resource_type
        self.attribute = attribute


class ResourceAlreadyManagedError(EngineError):
    """Raised when importing to an address that is already tracked."""

    def __init__(self, address: str) -> None:
        super().__init__(f"Resource already managed: {address}")
        self.address = address


class ResourceNotTrackedError(EngineError):
    """Raised when an address is not present in state."""

    def __init__(self, address: str) -> None:
        super().__init__(f"No such resource in state: {address}")
        self.address = address

