"""Ports (interfaces) used by the core session.

Ports define the minimal contracts for the checkpoint and group stores so
that the core can be reused with different persistence backends.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from core.models import Group


class CheckpointStorePort(Protocol):
    """Chat name -> last synced instant (ISO-8601 string)."""

    def load(self) -> dict[str, str]:
        ...

    def save(self, checkpoints: dict[str, str]) -> None:
        ...


class GroupStorePort(Protocol):
    """Registry of named groups with optional last-synced metadata."""

    def load(self) -> list[Group]:
        ...

    def save(self, groups: list[Group]) -> None:
        ...

    def add_group(self, name: str) -> Group:
        ...

    def update_group_sync(
        self, group_id: str, synced_at: datetime, preview: Optional[str]
    ) -> None:
        ...


class KeyValueStoragePort(Protocol):
    """Flat key -> blob persistence the stores are built on."""

    def get_value(self, key: str) -> Optional[str]:
        ...

    def set_value(self, key: str, value: str) -> None:
        ...
