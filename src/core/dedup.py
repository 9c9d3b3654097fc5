"""Deduplication and partition helpers (core domain)."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from core.models import ParsedMessage, Partition

IDENTITY_SEPARATOR = "|"


def build_identity_key(normalized_timestamp: str, sender: str, text: str) -> str:
    """Return the composite key that identifies a message across exports."""

    return IDENTITY_SEPARATOR.join((normalized_timestamp, sender.strip(), text.strip()))


def dedupe_messages(messages: Iterable[ParsedMessage]) -> list[ParsedMessage]:
    """Collapse messages sharing an identity key, last occurrence wins.

    A replaced key keeps the position of its first occurrence.
    """

    by_key: dict[str, ParsedMessage] = {}
    for message in messages:
        by_key[message.id] = message
    return list(by_key.values())


def order_messages(messages: Iterable[ParsedMessage]) -> list[ParsedMessage]:
    """Sort ascending by timestamp; equal timestamps keep their input order."""

    return sorted(messages, key=lambda message: message.timestamp)


def partition_messages(
    ordered: Iterable[ParsedMessage], cutoff: Optional[datetime]
) -> Partition:
    """Split ordered messages into new (strictly after cutoff) and previous."""

    ordered = list(ordered)
    if cutoff is None:
        return Partition(new=ordered, previous=[])

    new: list[ParsedMessage] = []
    previous: list[ParsedMessage] = []
    for message in ordered:
        if message.timestamp > cutoff:
            new.append(message)
        else:
            previous.append(message)
    return Partition(new=new, previous=previous)


def build_partition(
    messages: Iterable[ParsedMessage], cutoff: Optional[datetime]
) -> Partition:
    """Dedup, order and partition in one pass over the current inputs."""

    return partition_messages(order_messages(dedupe_messages(messages)), cutoff)
