"""Checkpoint store adapter.

Implements the core CheckpointStorePort as one JSON object blob mapping chat
name to an ISO-8601 instant.
"""

from __future__ import annotations

import json
import logging

from core.ports import KeyValueStoragePort

LOGGER = logging.getLogger(__name__)

CHECKPOINTS_KEY = "wsd:lastSyncedAtByChat"


class CheckpointStore:
    """Read-modify-write store for per-chat checkpoints."""

    def __init__(self, storage: KeyValueStoragePort) -> None:
        self._storage = storage

    def load(self) -> dict[str, str]:
        """Return all checkpoints; a missing or corrupt blob reads as empty."""

        raw = self._storage.get_value(CHECKPOINTS_KEY)
        if not raw:
            return {}
        try:
            loaded = json.loads(raw)
        except json.JSONDecodeError:
            LOGGER.warning("Ignoring corrupt checkpoint blob")
            return {}
        if not isinstance(loaded, dict):
            LOGGER.warning("Ignoring checkpoint blob that is not an object")
            return {}
        return {str(name): value for name, value in loaded.items() if isinstance(value, str)}

    def save(self, checkpoints: dict[str, str]) -> None:
        self._storage.set_value(CHECKPOINTS_KEY, json.dumps(checkpoints, ensure_ascii=False))
