"""Local record of the Contentful entities this tool tracks.

The state file is a single JSON document keyed by resource address
(``<resource_type>.<name>``). Each entry stores the attributes last read
from Contentful together with a hash used to detect drift.
"""

from __future__ import annotations

import contextlib
import hashlib
import json
import logging
import os
import tempfile
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = 1


class StateError(Exception):
    """Raised when a state file cannot be read."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def compute_attributes_hash(attrs: Mapping[str, Any]) -> str:
    """SHA-256 of the attributes as canonical JSON (sorted keys, no whitespace)."""
    payload = json.dumps(attrs, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class ResourceInstance(BaseModel):
    """One tracked Contentful entity.

    Attributes:
        address: ``<resource_type>.<name>``, e.g. ``contentful_space.marketing``
        resource_type: ``contentful_space`` or ``contentful_apikey``
        name: Local name chosen at import time
        attributes: Last-known remote field values, including ``id``
        attributes_hash: Hash of ``attributes`` when they were last stored
        created_at: When the entity started being tracked
        updated_at: When ``attributes`` last changed
    """

    address: str
    resource_type: str
    name: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    attributes_hash: str = ""
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @classmethod
    def from_attributes(
        cls, resource_type: str, name: str, attributes: Mapping[str, Any]
    ) -> ResourceInstance:
        return cls(
            address=f"{resource_type}.{name}",
            resource_type=resource_type,
            name=name,
            attributes=dict(attributes),
            attributes_hash=compute_attributes_hash(attributes),
        )

    @property
    def id(self) -> str:
        """Remote identifier, empty while the entity is absent."""
        return self.attributes.get("id") or ""

    def apply_remote(self, attributes: Mapping[str, Any]) -> bool:
        """Store freshly read attributes. Returns True if anything changed."""
        new_hash = compute_attributes_hash(attributes)
        if attributes == self.attributes and new_hash == self.attributes_hash:
            return False
        self.attributes = dict(attributes)
        self.attributes_hash = new_hash
        self.updated_at = _utcnow()
        return True


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    finally:
        with contextlib.suppress(FileNotFoundError):
            tmp_path.unlink()


class State(BaseModel):
    """All tracked entities plus file bookkeeping.

    ``serial`` grows by one on every persisted change; ``lineage`` stays
    fixed for the life of the file.
    """

    version: int = STATE_FORMAT_VERSION
    serial: int = 0
    lineage: str = Field(default_factory=lambda: str(uuid.uuid4()))
    resources: dict[str, ResourceInstance] = Field(default_factory=dict)

    def track(self, instance: ResourceInstance) -> None:
        self.resources[instance.address] = instance

    def untrack(self, address: str) -> ResourceInstance | None:
        return self.resources.pop(address, None)

    def sorted_instances(self) -> list[ResourceInstance]:
        return [self.resources[address] for address in sorted(self.resources)]

    def save(self, path: Path) -> None:
        """Write the state atomically, keeping the previous file as ``<path>.backup``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with contextlib.suppress(FileNotFoundError):
            path.with_name(path.name + ".backup").write_bytes(path.read_bytes())

        content = json.dumps(self.model_dump(mode="json"), indent=2, sort_keys=True) + "\n"
        _write_atomic(path, content)
        logger.debug("State saved: serial=%d path=%s", self.serial, path)

    @classmethod
    def load(cls, path: Path) -> State:
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise StateError(f"Cannot read state file {path}: {exc}") from exc
        try:
            state = cls.model_validate_json(raw)
        except (ValidationError, UnicodeDecodeError) as exc:
            raise StateError(f"State file {path} is corrupt: {exc}") from exc
        if state.version > STATE_FORMAT_VERSION:
            raise StateError(
                f"State file {path} has format version {state.version}; "
                f"this version of contentful-provisioner reads up to {STATE_FORMAT_VERSION}"
            )
        return state

    @classmethod
    def load_or_create(cls, path: Path) -> State:
        if path.exists():
            return cls.load(path)
        logger.debug("No state at %s, starting empty", path)
        return cls()
