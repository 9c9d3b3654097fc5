from __future__ import annotations

from typing import Optional

import pytest

from adapters.checkpoint_store import CheckpointStore
from adapters.group_store import GroupStore


class FakeStorage:
    """In-memory stand-in for the SQLite key-value storage."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def get_value(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set_value(self, key: str, value: str) -> None:
        self.values[key] = value


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def checkpoint_store(storage: FakeStorage) -> CheckpointStore:
    return CheckpointStore(storage)


@pytest.fixture
def group_store(storage: FakeStorage, checkpoint_store: CheckpointStore) -> GroupStore:
    return GroupStore(storage, checkpoint_store)
