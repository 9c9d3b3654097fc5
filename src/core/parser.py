"""Chat export parser (core domain).

Turns the raw text of one export into ``ParsedMessage`` records in file
order. A message starts on a header line::

    [25/02/26, 7:03:37 PM] Sender Name: first line of the body

and every following line that is not a header is a continuation of the
message body. Lines before the first header are ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator, Optional

from core.dedup import build_identity_key
from core.models import ParsedMessage
from core.timestamps import normalize_timestamp, parse_export_timestamp, strip_leading_invisible

LOGGER = logging.getLogger(__name__)

HEADER_RE = re.compile(
    r"^\[([0-9]{1,2}/[0-9]{1,2}/[0-9]{2},\s*[0-9]{1,2}:[0-9]{2}:[0-9]{2}\s*[AaPp][Mm])\]\s([^:]+):\s?(.*)$"
)
_LINE_BREAK_RE = re.compile(r"\r?\n")


@dataclass
class _PendingMessage:
    raw_timestamp: str
    sender: str
    text: str


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` and ``\\r\\n`` only; other separators stay in the text."""

    return _LINE_BREAK_RE.split(content)


def _finalize(pending: _PendingMessage) -> Optional[ParsedMessage]:
    timestamp = parse_export_timestamp(pending.raw_timestamp)
    if timestamp is None:
        LOGGER.debug("Dropping message with unparseable timestamp %r", pending.raw_timestamp)
        return None

    raw_timestamp = normalize_timestamp(pending.raw_timestamp)
    sender = pending.sender.strip()
    text = pending.text.strip()
    return ParsedMessage(
        id=build_identity_key(raw_timestamp, sender, text),
        raw_timestamp=raw_timestamp,
        timestamp=timestamp,
        sender=sender,
        text=text,
    )


def iter_export_messages(content: str) -> Iterator[ParsedMessage]:
    """Yield messages in file order as their headers close them off."""

    pending: Optional[_PendingMessage] = None
    for line in split_lines(content):
        match = HEADER_RE.match(strip_leading_invisible(line))
        if match:
            if pending is not None:
                message = _finalize(pending)
                if message is not None:
                    yield message
            raw_timestamp, sender, text = match.groups()
            pending = _PendingMessage(raw_timestamp, sender, text or "")
        elif pending is not None:
            pending.text += f"\n{line}"

    if pending is not None:
        message = _finalize(pending)
        if message is not None:
            yield message


def parse_export_text(content: str) -> list[ParsedMessage]:
    """Parse a full export into messages (not deduplicated, not sorted)."""

    messages = list(iter_export_messages(content))
    LOGGER.info("Parsed %s messages from export", len(messages))
    return messages
