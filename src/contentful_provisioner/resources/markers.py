"""Declarative field markers for resource models.

Two markers attach to Pydantic fields via ``Annotated``:

- ``Computed``: value is generated by Contentful; never sent, always overwritten
- ``Immutable``: value may not change once the record exists

Helper functions introspect these markers at runtime so handlers do not
repeat per-resource field lists.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar

if TYPE_CHECKING:
    from pydantic.fields import FieldInfo

M = TypeVar("M")


@dataclass(frozen=True, slots=True)
class Computed:
    """Read-only field populated from the remote entity."""


@dataclass(frozen=True, slots=True)
class Immutable:
    """Field fixed at creation time."""


def _find_marker(field_info: FieldInfo, marker_type: type[M]) -> M | None:
    """Return the first marker of *marker_type* on a field, or ``None``."""
    return next((m for m in field_info.metadata if isinstance(m, marker_type)), None)


def _marked_field_names(model_or_cls: Any, marker_type: type[M]) -> list[str]:
    cls = model_or_cls if isinstance(model_or_cls, type) else type(model_or_cls)
    return [
        name
        for name, fi in cls.model_fields.items()
        if _find_marker(fi, marker_type) is not None
    ]


def collect_computed_fields(model_or_cls: Any) -> list[str]:
    """Names of ``Computed`` fields."""
    return _marked_field_names(model_or_cls, Computed)


def collect_immutable_fields(model_or_cls: Any) -> list[str]:
    """Names of ``Immutable`` fields."""
    return _marked_field_names(model_or_cls, Immutable)
