"""Export diff session.

This module is presentation-agnostic. It only relies on ports for the
checkpoint and group stores, so the CLI and the TUI drive the same logic.
Nothing derived is cached: every view is rebuilt from the parsed messages,
the current overrides and the stores at the moment it is requested.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from core.attachments import extract_attachments, list_attachment_filenames, to_display_message
from core.config import SyncConfig
from core.cutoff import resolve_cutoff
from core.dedup import build_partition
from core.errors import NoGroupSelectedError, NothingToSyncError, UnknownGroupError
from core.groups import find_group, format_instant, parse_instant, suggest_group
from core.models import Attachment, CutoffResolution, ExportSummary, Group, ParsedMessage, Partition
from core.parser import parse_export_text
from core.ports import CheckpointStorePort, GroupStorePort

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportView:
    """Everything the presentation layer shows for one state of the session."""

    resolution: CutoffResolution
    partition: Partition
    attachments: list[Attachment]
    attachment_filenames: list[str]
    summary: Optional[ExportSummary]


def summarize(partition: Partition, attachments: list[Attachment]) -> Optional[ExportSummary]:
    """Return summary stats, or ``None`` when there is nothing new."""

    if not partition.new:
        return None
    return ExportSummary(
        new_message_count=len(partition.new),
        previous_message_count=len(partition.previous),
        attachment_count=len(attachments),
        date_range_start=partition.new[0].timestamp,
        date_range_end=partition.new[-1].timestamp,
    )


class ExportSession:
    """Holds one loaded export plus the user's selections for it."""

    def __init__(
        self,
        checkpoint_store: CheckpointStorePort,
        group_store: GroupStorePort,
        sync_config: Optional[SyncConfig] = None,
    ) -> None:
        self._checkpoints = checkpoint_store
        self._groups = group_store
        self._sync = sync_config or SyncConfig()
        self._messages: list[ParsedMessage] = []
        self.filename: Optional[str] = None
        self.suggested_group_id: Optional[str] = None
        self.selected_group_id: Optional[str] = None
        self.text_override = ""
        self.picker_value = ""

    @property
    def parsed_count(self) -> int:
        return len(self._messages)

    def groups(self) -> list[Group]:
        return self._groups.load()

    def add_group(self, name: str) -> Group:
        return self._groups.add_group(name)

    def load_export(self, content: str, filename: Optional[str] = None) -> int:
        """Parse export text and pick a group suggestion from the file name."""

        self._messages = parse_export_text(content)
        self.filename = filename
        self.suggested_group_id = suggest_group(filename, self.groups()) if filename else None
        if self.suggested_group_id is not None:
            self.selected_group_id = self.suggested_group_id
            LOGGER.info("Suggested group %s for %s", self.suggested_group_id, filename)
        return len(self._messages)

    def select_group(self, group_id: Optional[str]) -> None:
        self.selected_group_id = group_id

    def clear_overrides(self) -> None:
        self.text_override = ""
        self.picker_value = ""

    def current_group(self) -> Optional[Group]:
        return find_group(self.groups(), self.selected_group_id)

    def stored_cutoff(self) -> Optional[datetime]:
        """Last synced instant from the group, else from the chat checkpoint."""

        group = self.current_group()
        if group is None:
            return None
        if group.last_synced_at is not None:
            return group.last_synced_at
        return parse_instant(self._checkpoints.load().get(group.name))

    def resolve(self) -> CutoffResolution:
        return resolve_cutoff(self.text_override, self.picker_value, self.stored_cutoff())

    def view(self) -> ExportView:
        resolution = self.resolve()
        partition = build_partition(self._messages, resolution.cutoff)
        attachments = extract_attachments(partition.new)
        return ExportView(
            resolution=resolution,
            partition=partition,
            attachments=attachments,
            attachment_filenames=list_attachment_filenames(partition.new),
            summary=summarize(partition, attachments),
        )

    def pending_sync(self) -> tuple[datetime, Optional[str]]:
        """Return the instant and preview a sync would record right now.

        Raises ``NothingToSyncError`` when there is neither a new message nor
        an active cutoff. Nothing is written.
        """

        view = self.view()
        if view.partition.new:
            last = view.partition.new[-1]
            preview = to_display_message(last).content[: self._sync.preview_chars] or None
            return last.timestamp, preview
        if view.resolution.cutoff is not None:
            return view.resolution.cutoff, None
        raise NothingToSyncError("No messages or cutoff to mark as synced.")

    def mark_synced(self) -> datetime:
        """Record the newest message (or the active cutoff) as synced.

        Updates the group registry and the chat checkpoint, then clears the
        overrides so the stored value becomes the active cutoff.
        """

        if self.selected_group_id is None:
            raise NoGroupSelectedError("Select a group before marking as synced.")
        group = self.current_group()
        if group is None:
            raise UnknownGroupError(f"Group {self.selected_group_id!r} no longer exists.")

        synced_at, preview = self.pending_sync()
        self._groups.update_group_sync(group.id, synced_at, preview)
        checkpoints = self._checkpoints.load()
        checkpoints[group.name] = format_instant(synced_at)
        self._checkpoints.save(checkpoints)
        self.clear_overrides()

        LOGGER.info("Marked %s as synced through %s", group.name, synced_at.isoformat())
        return synced_at
