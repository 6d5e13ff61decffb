from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from contentful_provisioner.core.state import (
    ResourceInstance,
    State,
    StateError,
    compute_attributes_hash,
)

if TYPE_CHECKING:
    from pathlib import Path


def _inst(**attrs: object) -> ResourceInstance:
    return ResourceInstance(
        address="contentful_space.marketing",
        resource_type="contentful_space",
        name="marketing",
        attributes=dict(attrs),
    )


def test_id_defaults_to_empty() -> None:
    assert _inst().id == ""
    assert _inst(id=None).id == ""
    assert _inst(id="sp1").id == "sp1"


def test_attributes_hash_is_order_insensitive() -> None:
    assert compute_attributes_hash({"a": 1, "b": "x"}) == compute_attributes_hash(
        {"b": "x", "a": 1}
    )
    assert compute_attributes_hash({"a": 1}) != compute_attributes_hash({"a": 2})


def test_save_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    state = State(serial=4)
    state.resources["contentful_space.marketing"] = _inst(id="sp1", version=2)

    state.save(path)
    loaded = State.load(path)

    assert loaded.serial == 4
    assert loaded.lineage == state.lineage
    assert loaded.resources["contentful_space.marketing"].attributes == {"id": "sp1", "version": 2}
    assert not (tmp_path / "nested" / "state.json.backup").exists()


def test_save_writes_backup(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    State(serial=1).save(path)
    State(serial=2).save(path)

    assert State.load(path).serial == 2
    assert State.load(tmp_path / "state.json.backup").serial == 1


def test_load_or_create(tmp_path: Path) -> None:
    state = State.load_or_create(tmp_path / "missing.json")

    assert state.serial == 0
    assert state.resources == {}


def test_from_attributes_sets_address_and_hash() -> None:
    inst = ResourceInstance.from_attributes("contentful_apikey", "delivery", {"id": "k1"})

    assert inst.address == "contentful_apikey.delivery"
    assert inst.attributes_hash == compute_attributes_hash({"id": "k1"})
    assert inst.created_at.tzinfo is not None


def test_apply_remote_reports_changes() -> None:
    inst = ResourceInstance.from_attributes("contentful_space", "marketing", {"id": "sp1"})
    stamp = inst.updated_at

    assert inst.apply_remote({"id": "sp1"}) is False
    assert inst.updated_at == stamp

    assert inst.apply_remote({"id": "sp1", "name": "Renamed"}) is True
    assert inst.attributes == {"id": "sp1", "name": "Renamed"}
    assert inst.attributes_hash == compute_attributes_hash(inst.attributes)
    assert inst.updated_at >= stamp


def test_track_untrack_and_sorting() -> None:
    state = State()
    state.track(ResourceInstance.from_attributes("contentful_space", "b", {"id": "2"}))
    state.track(ResourceInstance.from_attributes("contentful_apikey", "a", {"id": "1"}))

    assert [i.address for i in state.sorted_instances()] == [
        "contentful_apikey.a",
        "contentful_space.b",
    ]
    assert state.untrack("contentful_space.b") is not None
    assert state.untrack("contentful_space.b") is None


def test_load_rejects_newer_format(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    State(version=99).save(path)

    with pytest.raises(StateError, match="format version 99"):
        State.load(path)


@pytest.mark.parametrize(
    "content",
    [b'{"serial": "not a number"}', b"\xff\xfe{", b"[]"],
    ids=["bad-field", "not-utf8", "not-an-object"],
)
def test_load_rejects_corrupt_file(tmp_path: Path, content: bytes) -> None:
    path = tmp_path / "state.json"
    path.write_bytes(content)

    with pytest.raises(StateError, match="corrupt"):
        State.load(path)


def test_load_wraps_read_errors(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.mkdir()

    with pytest.raises(StateError, match="Cannot read state file"):
        State.load(path)
