"""Group registry helpers (core domain)."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Optional

from core.models import Group


def parse_instant(value: Any) -> Optional[datetime]:
    """Parse a stored ISO-8601 instant into a naive local datetime.

    Accepts naive values as written by this tool and UTC values with an
    offset or trailing ``Z``. Anything else is treated as missing.
    """

    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_instant(value: datetime) -> str:
    """Serialize an instant the way the stores persist it."""

    return value.isoformat()


def group_from_dict(raw: dict[str, Any]) -> Optional[Group]:
    """Build a Group from its stored form, or ``None`` if the shape is wrong."""

    group_id = raw.get("id")
    name = raw.get("name")
    if not isinstance(group_id, str) or not isinstance(name, str):
        return None
    preview = raw.get("lastSyncedMessagePreview")
    return Group(
        id=group_id,
        name=name,
        last_synced_at=parse_instant(raw.get("lastSyncedAt")),
        last_synced_message_preview=preview if isinstance(preview, str) else None,
    )


def group_to_dict(group: Group) -> dict[str, Any]:
    return {
        "id": group.id,
        "name": group.name,
        "lastSyncedAt": format_instant(group.last_synced_at) if group.last_synced_at else None,
        "lastSyncedMessagePreview": group.last_synced_message_preview,
    }


def find_group(groups: Iterable[Group], group_id: Optional[str]) -> Optional[Group]:
    if group_id is None:
        return None
    return next((group for group in groups if group.id == group_id), None)


def suggest_group(filename: str, groups: Iterable[Group]) -> Optional[str]:
    """Return the id of the first group whose name appears in the file name.

    Matching is a case-insensitive substring test in registry order.
    """

    lowered = filename.lower()
    for group in groups:
        if group.name and group.name.lower() in lowered:
            return group.id
    return None
