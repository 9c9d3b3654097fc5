"""Attachment tag extraction (core domain).

Exports reference media with an inline tag such as ``<attached: IMG-001.jpg>``.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

from core.models import Attachment, DisplayMessage, ParsedMessage

ATTACHMENT_TAG_RE = re.compile(r"<attached:\s*([^>]+)>", re.IGNORECASE)


def extract_attachment_filename(text: str) -> Optional[str]:
    """Return the file name of the first attachment tag, if any."""

    match = ATTACHMENT_TAG_RE.search(text)
    return match.group(1).strip() if match else None


def strip_attachment_tags(text: str) -> str:
    return ATTACHMENT_TAG_RE.sub("", text).strip()


def to_display_message(message: ParsedMessage) -> DisplayMessage:
    """Split a message into display body and attachment file name."""

    filename = extract_attachment_filename(message.text)
    content = strip_attachment_tags(message.text) if filename else message.text
    return DisplayMessage(
        id=message.id,
        sender=message.sender,
        timestamp=message.timestamp,
        content=content,
        media_filename=filename,
    )


def extract_attachments(messages: Iterable[ParsedMessage]) -> list[Attachment]:
    """One record per distinct file name, from the first message naming it."""

    seen: set[str] = set()
    attachments: list[Attachment] = []
    for message in messages:
        display = to_display_message(message)
        filename = display.media_filename
        if not filename or filename in seen:
            continue
        seen.add(filename)
        attachments.append(
            Attachment(
                filename=filename,
                message_id=message.id,
                sender=message.sender,
                timestamp=message.timestamp,
            )
        )
    return attachments


def list_attachment_filenames(messages: Iterable[ParsedMessage]) -> list[str]:
    """Every tagged file name across the messages, first occurrence order."""

    filenames: list[str] = []
    seen: set[str] = set()
    for message in messages:
        for match in ATTACHMENT_TAG_RE.finditer(message.text):
            filename = match.group(1).strip()
            if filename and filename not in seen:
                seen.add(filename)
                filenames.append(filename)
    return filenames
