from __future__ import annotations

import json

import pytest

from pyvehold.exceptions import HoldStorageError
from pyvehold.storage import JsonFileSlot, KeyValueSlot, MemorySlot, SqliteSlot, open_slot


def test_slots_satisfy_protocol(tmp_path) -> None:
    assert isinstance(MemorySlot(), KeyValueSlot)
    assert isinstance(JsonFileSlot(tmp_path / "s.json"), KeyValueSlot)
    with SqliteSlot() as slot:
        assert isinstance(slot, KeyValueSlot)


def test_memory_slot_get_set() -> None:
    slot = MemorySlot({"a": "1"})

    assert slot.get("a") == "1"
    assert slot.get("b") is None
    slot.set("b", "2")
    assert slot.get("b") == "2"


def test_json_file_slot_persists_across_instances(tmp_path) -> None:
    path = tmp_path / "nested" / "slots.json"
    JsonFileSlot(path).set("k", '{"version":1}')
    JsonFileSlot(path).set("other", "x")

    slot = JsonFileSlot(path)
    assert slot.get("k") == '{"version":1}'
    assert slot.get("other") == "x"
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": '{"version":1}', "other": "x"}
    assert [p.name for p in path.parent.iterdir()] == ["slots.json"]


def test_json_file_slot_missing_file_reads_none(tmp_path) -> None:
    assert JsonFileSlot(tmp_path / "absent.json").get("k") is None


@pytest.mark.parametrize("content", ["not json", "[1, 2]", "   "])
def test_json_file_slot_corrupt_file_reads_empty(tmp_path, content: str) -> None:
    path = tmp_path / "slots.json"
    path.write_text(content, encoding="utf-8")
    slot = JsonFileSlot(path)

    assert slot.get("k") is None
    slot.set("k", "v")
    assert slot.get("k") == "v"


def test_json_file_slot_reserializes_inline_objects(tmp_path) -> None:
    path = tmp_path / "slots.json"
    path.write_text(json.dumps({"k": {"version": 1, "holds": {}}}), encoding="utf-8")

    assert json.loads(JsonFileSlot(path).get("k")) == {"version": 1, "holds": {}}


def test_json_file_slot_write_failure_raises(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    slot = JsonFileSlot(blocker / "slots.json")

    with pytest.raises(HoldStorageError) as excinfo:
        slot.set("k", "v")
    assert excinfo.value.key == "k"
    assert excinfo.value.backend == "json"


def test_sqlite_slot_upsert_and_persist(tmp_path) -> None:
    db = str(tmp_path / "slots.sqlite")
    with SqliteSlot(db) as slot:
        slot.set("k", "1")
        slot.set("k", "2")
        assert slot.get("k") == "2"
        assert slot.get("missing") is None

    with SqliteSlot(db) as reopened:
        assert reopened.get("k") == "2"


def test_sqlite_slot_closed_connection_raises() -> None:
    slot = SqliteSlot()
    slot.close()

    with pytest.raises(HoldStorageError):
        slot.set("k", "v")


@pytest.mark.parametrize(
    ("name", "expected"),
    [("holds.json", JsonFileSlot), ("holds.db", SqliteSlot), ("holds.SQLITE3", SqliteSlot), ("holds", JsonFileSlot)],
)
def test_open_slot_picks_backend(tmp_path, name: str, expected: type) -> None:
    assert isinstance(open_slot(tmp_path / name), expected)


def test_open_slot_defaults_to_memory() -> None:
    assert isinstance(open_slot(None), MemorySlot)
    assert isinstance(open_slot(""), MemorySlot)
    assert isinstance(open_slot(":memory:"), SqliteSlot)
