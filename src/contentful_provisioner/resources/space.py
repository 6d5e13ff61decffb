"""Space resource model."""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import Field

from contentful_provisioner.resources.base import Resource
from contentful_provisioner.resources.markers import Computed


class SpaceResource(Resource):
    """A Contentful space, the top-level container for content.

    ``default_locale`` only takes effect when the space is created.
    """

    resource_type: ClassVar[str] = "contentful_space"

    name: str = Field(min_length=1)
    default_locale: str = "en"
    version: Annotated[int | None, Computed()] = None
