"""Drift description types."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class Action(str, Enum):
    """What happened to a tracked entity outside of this tool."""

    UPDATE = "update"
    DELETE = "delete"


class AttributeChange(BaseModel):
    before: Any = None
    after: Any = None


class ResourceChange(BaseModel):
    """Difference between the stored record and Contentful for one address."""

    address: str
    resource_type: str
    action: Action
    prior: dict[str, Any] = Field(default_factory=dict)
    current: dict[str, Any] | None = None
    diff: dict[str, AttributeChange] = Field(default_factory=dict)
