"""Contentful Management API entity models."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class Sys(BaseModel):
    """System metadata attached to every Contentful entity and link."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = ""
    type: str | None = None
    link_type: str | None = Field(default=None, alias="linkType")
    version: int | None = None
    space: Link | None = None


class Link(BaseModel):
    """Reference to another entity, e.g. the space owning an API key."""

    model_config = ConfigDict(extra="allow")

    sys: Sys


class Entity(BaseModel):
    """Base for top-level entities.

    Unknown remote fields are retained so a fetched entity can be re-submitted
    without dropping data this package does not manage.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    read_only_fields: ClassVar[frozenset[str]] = frozenset({"sys"})

    sys: Sys = Field(default_factory=Sys)

    @property
    def id(self) -> str:
        return self.sys.id

    @property
    def version(self) -> int | None:
        return self.sys.version

    def payload(self) -> dict[str, Any]:
        """Request body for create/update calls."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude=set(self.read_only_fields))


class Space(Entity):
    name: str = ""
    default_locale: str | None = Field(default=None, alias="defaultLocale")


class APIKey(Entity):
    """Content delivery API key."""

    read_only_fields: ClassVar[frozenset[str]] = frozenset(
        {"sys", "access_token", "policies", "preview_api_key"}
    )

    name: str = ""
    description: str | None = None
    access_token: str | None = Field(default=None, alias="accessToken")

    @property
    def space_id(self) -> str:
        if self.sys.space is None:
            return ""
        return self.sys.space.sys.id


Sys.model_rebuild()
Link.model_rebuild()
