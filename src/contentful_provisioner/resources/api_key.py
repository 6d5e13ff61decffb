"""API key resource model."""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import Field

from contentful_provisioner.resources.base import Resource
from contentful_provisioner.resources.markers import Computed, Immutable


class ApiKeyResource(Resource):
    """A content delivery API key belonging to a space.

    The key cannot be moved to another space; ``access_token`` is generated
    by Contentful and any local value is ignored.
    """

    resource_type: ClassVar[str] = "contentful_apikey"

    space_id: Annotated[str, Immutable()] = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str = ""
    version: Annotated[int | None, Computed()] = None
    access_token: Annotated[str | None, Computed()] = None
