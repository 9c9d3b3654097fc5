from __future__ import annotations

import json
from datetime import datetime

from adapters.checkpoint_store import CHECKPOINTS_KEY, CheckpointStore
from adapters.group_store import GROUPS_KEY, GroupStore
from adapters.sqlite_storage import SQLiteStorage


def test_sqlite_storage_upserts(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "exportdiff.db"))
    storage.init_db()
    assert storage.get_value("missing") is None
    storage.set_value("k", "one")
    storage.set_value("k", "two")
    assert storage.get_value("k") == "two"


def test_checkpoints_round_trip_on_sqlite(tmp_path) -> None:
    storage = SQLiteStorage(str(tmp_path / "exportdiff.db"))
    storage.init_db()
    store = CheckpointStore(storage)
    assert store.load() == {}
    store.save({"Family": "2024-01-01T09:05:00"})
    assert CheckpointStore(storage).load() == {"Family": "2024-01-01T09:05:00"}


def test_corrupt_checkpoints_read_as_empty(storage, checkpoint_store) -> None:
    storage.values[CHECKPOINTS_KEY] = "{not json"
    assert checkpoint_store.load() == {}
    storage.values[CHECKPOINTS_KEY] = "[1, 2]"
    assert checkpoint_store.load() == {}


def test_add_group_is_idempotent_by_name(group_store) -> None:
    first = group_store.add_group("Family")
    again = group_store.add_group("Family")
    other = group_store.add_group("Work")
    assert first.id == again.id
    assert other.id != first.id
    assert [g.name for g in group_store.load()] == ["Family", "Work"]


def test_update_group_sync_persists(group_store) -> None:
    group = group_store.add_group("Family")
    synced_at = datetime(2024, 1, 1, 9, 5)
    group_store.update_group_sync(group.id, synced_at, "see you")
    (loaded,) = group_store.load()
    assert loaded.last_synced_at == synced_at
    assert loaded.last_synced_message_preview == "see you"


def test_update_group_sync_ignores_unknown_id(storage, group_store) -> None:
    group_store.add_group("Family")
    before = storage.values[GROUPS_KEY]
    group_store.update_group_sync("g-missing", datetime(2024, 1, 1), None)
    assert storage.values[GROUPS_KEY] == before


def test_groups_seed_from_checkpoints(storage, checkpoint_store, group_store) -> None:
    checkpoint_store.save({"Family": "2024-01-01T09:05:00", "Work": "2024-01-02T10:00:00"})
    groups = group_store.load()
    assert [(g.id, g.name) for g in groups] == [("g-seed-0", "Family"), ("g-seed-1", "Work")]
    assert groups[0].last_synced_at == datetime(2024, 1, 1, 9, 5)
    assert GROUPS_KEY in storage.values


def test_corrupt_groups_reseed_from_checkpoints(storage, checkpoint_store, group_store) -> None:
    checkpoint_store.save({"Family": "2024-01-01T09:05:00"})
    storage.values[GROUPS_KEY] = "{oops"
    assert [g.name for g in group_store.load()] == ["Family"]
    assert json.loads(storage.values[GROUPS_KEY])[0]["id"] == "g-seed-0"


def test_empty_registry_without_checkpoints(storage, group_store) -> None:
    assert group_store.load() == []
    assert GROUPS_KEY not in storage.values
