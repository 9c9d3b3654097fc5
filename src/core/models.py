"""Core domain models.

These dataclasses are shared across the core, adapters and frontend so that
no layer depends on storage or UI specific types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ParsedMessage:
    """One message recognized in a chat export.

    ``id`` is the identity key used for deduplication, not a random id.
    """

    id: str
    raw_timestamp: str
    timestamp: datetime
    sender: str
    text: str


@dataclass
class Group:
    """A named chat/group tracked in the group registry."""

    id: str
    name: str
    last_synced_at: Optional[datetime] = None
    last_synced_message_preview: Optional[str] = None


@dataclass(frozen=True)
class DisplayMessage:
    """A message prepared for display with its attachment tag split out."""

    id: str
    sender: str
    timestamp: datetime
    content: str
    media_filename: Optional[str]


@dataclass(frozen=True)
class Attachment:
    """An attachment reference found in a message body."""

    filename: str
    message_id: str
    sender: str
    timestamp: datetime


@dataclass(frozen=True)
class Partition:
    """Messages split around a cutoff, both sides in chronological order."""

    new: list[ParsedMessage] = field(default_factory=list)
    previous: list[ParsedMessage] = field(default_factory=list)


@dataclass(frozen=True)
class ExportSummary:
    """Summary statistics for the new side of a partition."""

    new_message_count: int
    previous_message_count: int
    attachment_count: int
    date_range_start: Optional[datetime]
    date_range_end: Optional[datetime]


@dataclass(frozen=True)
class CutoffResolution:
    """Effective cutoff plus where it came from and any input warnings."""

    cutoff: Optional[datetime]
    source: Optional[str]
    text_warning: Optional[str] = None
    picker_warning: Optional[str] = None
