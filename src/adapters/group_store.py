"""Group store adapter.

Implements the core GroupStorePort as one JSON array blob. When no readable
group blob exists yet, the registry is seeded from the chat checkpoints.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime
from typing import Optional

from adapters.checkpoint_store import CheckpointStore
from core.groups import group_from_dict, group_to_dict, parse_instant
from core.models import Group
from core.ports import KeyValueStoragePort

LOGGER = logging.getLogger(__name__)

GROUPS_KEY = "wsd:groups"


def _new_group_id() -> str:
    return f"g-{uuid.uuid4().hex[:12]}"


class GroupStore:
    """Read-modify-write registry of named groups."""

    def __init__(self, storage: KeyValueStoragePort, checkpoints: CheckpointStore) -> None:
        self._storage = storage
        self._checkpoints = checkpoints

    def load(self) -> list[Group]:
        raw = self._storage.get_value(GROUPS_KEY)
        if raw:
            try:
                loaded = json.loads(raw)
            except json.JSONDecodeError:
                LOGGER.warning("Ignoring corrupt group blob, reseeding from checkpoints")
            else:
                if isinstance(loaded, list):
                    groups = [group_from_dict(item) for item in loaded if isinstance(item, dict)]
                    return [group for group in groups if group is not None]
                LOGGER.warning("Ignoring group blob that is not a list")
        return self._seed_from_checkpoints()

    def save(self, groups: list[Group]) -> None:
        payload = [group_to_dict(group) for group in groups]
        self._storage.set_value(GROUPS_KEY, json.dumps(payload, ensure_ascii=False))

    def add_group(self, name: str) -> Group:
        """Create a group, or return the existing one with the same name."""

        groups = self.load()
        existing = next((group for group in groups if group.name == name), None)
        if existing is not None:
            return existing

        group = Group(id=_new_group_id(), name=name)
        groups.append(group)
        self.save(groups)
        LOGGER.info("Added group %s (%s)", name, group.id)
        return group

    def update_group_sync(
        self, group_id: str, synced_at: datetime, preview: Optional[str]
    ) -> None:
        """Set last-synced metadata on a group; unknown ids are ignored."""

        groups = self.load()
        for group in groups:
            if group.id == group_id:
                group.last_synced_at = synced_at
                group.last_synced_message_preview = preview
                self.save(groups)
                return
        LOGGER.warning("update_group_sync: unknown group id %s", group_id)

    def _seed_from_checkpoints(self) -> list[Group]:
        groups = [
            Group(
                id=f"g-seed-{index}",
                name=name,
                last_synced_at=parse_instant(iso_value),
            )
            for index, (name, iso_value) in enumerate(self._checkpoints.load().items())
        ]
        if groups:
            self.save(groups)
            LOGGER.info("Seeded %s groups from checkpoints", len(groups))
        return groups
