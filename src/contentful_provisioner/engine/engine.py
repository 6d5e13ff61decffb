"""State maintenance engine: refresh, drift detection and import."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from contentful_provisioner.core.state import ResourceInstance, State
from contentful_provisioner.engine.errors import (
    ImportNotFoundError,
    ResourceAlreadyManagedError,
    ResourceNotTrackedError,
)
from contentful_provisioner.engine.types import Action, AttributeChange, ResourceChange

if TYPE_CHECKING:
    from pathlib import Path

    from contentful_provisioner.engine.registry import ResourceTypeRegistry

logger = logging.getLogger(__name__)


def _attribute_diff(old: dict[str, Any], new: dict[str, Any]) -> dict[str, AttributeChange]:
    return {
        key: AttributeChange(before=old.get(key), after=new.get(key))
        for key in sorted(set(old) | set(new))
        if old.get(key) != new.get(key)
    }


def build_drift_changes(old_state: State, new_state: State) -> list[ResourceChange]:
    """Describe what changed between two snapshots of the same state file.

    Addresses present in both with different attributes become ``UPDATE``;
    addresses that disappeared become ``DELETE``. Output is sorted by address
    within each group.
    """
    changes: list[ResourceChange] = []
    for inst in new_state.sorted_instances():
        old_inst = old_state.resources.get(inst.address)
        if old_inst is None or old_inst.attributes == inst.attributes:
            continue
        changes.append(
            ResourceChange(
                address=inst.address,
                resource_type=inst.resource_type,
                action=Action.UPDATE,
                prior=dict(old_inst.attributes),
                current=dict(inst.attributes),
                diff=_attribute_diff(old_inst.attributes, inst.attributes),
            )
        )
    for old_inst in old_state.sorted_instances():
        if old_inst.address in new_state.resources:
            continue
        changes.append(
            ResourceChange(
                address=old_inst.address,
                resource_type=old_inst.resource_type,
                action=Action.DELETE,
                prior=dict(old_inst.attributes),
            )
        )
    return changes


class ContentfulEngine:
    """Keeps a local state file in line with Contentful.

    Lifecycle calls go straight to the handlers; the engine only tracks the
    resulting records (refresh, drift, import, forget).
    """

    def __init__(self, *, state_path: Path, registry: ResourceTypeRegistry) -> None:
        self._state_path = state_path
        self._registry = registry

    @property
    def state_path(self) -> Path:
        return self._state_path

    def load_state(self) -> State:
        state = State.load_or_create(self._state_path)
        logger.debug("State loaded: serial=%d, %d resources", state.serial, len(state.resources))
        return state

    def _save(self, state: State) -> None:
        state.serial += 1
        state.save(self._state_path)

    def _refresh_state_in_place(self, state: State) -> bool:
        logger.debug("Refreshing state from Contentful")
        changed = False

        for address, inst in list(state.resources.items()):
            handler = self._registry.get(inst.resource_type).handler
            attrs = handler.read(inst)
            if attrs is None:
                logger.warning("%s was deleted outside of this tool", address)
                state.untrack(address)
                changed = True
                continue

            if inst.apply_remote(attrs):
                changed = True

        logger.info("Refreshed %d resources, changed=%s", len(state.resources), changed)
        return changed

    def refresh(self, *, persist: bool = False) -> tuple[State, State]:
        """Refresh state from Contentful. Returns (pre_refresh, post_refresh)."""
        state = self.load_state()
        snapshot = state.model_copy(deep=True)
        changed = self._refresh_state_in_place(state)
        if changed and persist:
            self._save(state)
        return snapshot, state

    def drift(self) -> list[ResourceChange]:
        """Detect drift between the state file and Contentful without persisting."""
        before, after = self.refresh()
        return build_drift_changes(before, after)

    def import_resource(self, resource_type: str, name: str, import_id: str) -> ResourceInstance:
        """Adopt an existing remote entity under ``<resource_type>.<name>``."""
        address = f"{resource_type}.{name}"
        handler = self._registry.get(resource_type).handler
        state = self.load_state()
        if address in state.resources:
            raise ResourceAlreadyManagedError(address)

        attrs = handler.import_state(import_id)
        if attrs is None:
            raise ImportNotFoundError(resource_type, import_id)

        inst = ResourceInstance.from_attributes(resource_type, name, attrs)
        state.track(inst)
        self._save(state)
        logger.info("Imported %s from %r", address, import_id)
        return inst

    def forget(self, address: str) -> ResourceInstance:
        """Remove a record from state without touching Contentful."""
        state = self.load_state()
        inst = state.untrack(address)
        if inst is None:
            raise ResourceNotTrackedError(address)
        self._save(state)
        logger.info("Removed %s from state", address)
        return inst
