"""Base resource class for Contentful resources."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict

from contentful_provisioner.resources.markers import collect_computed_fields


class Resource(BaseModel):
    """Base class for all Contentful resources.

    Resources are pure data - they define the desired configuration.
    Handlers know how to CRUD them against the Management API.
    """

    model_config = ConfigDict(extra="forbid")

    resource_type: ClassVar[str]

    def configured_attrs(self) -> dict[str, Any]:
        """User-settable values; ``Computed`` fields are dropped."""
        return self.model_dump(exclude=set(collect_computed_fields(self)))
