from __future__ import annotations

from datetime import datetime

from core.dedup import build_identity_key, build_partition, dedupe_messages, order_messages, partition_messages
from core.models import ParsedMessage


def _message(ts: datetime, sender: str, text: str) -> ParsedMessage:
    raw = ts.strftime("%d/%m/%y, %H:%M:%S")
    return ParsedMessage(
        id=build_identity_key(raw, sender, text),
        raw_timestamp=raw,
        timestamp=ts,
        sender=sender,
        text=text,
    )


def test_identity_key_trims_sender_and_text() -> None:
    assert build_identity_key("1/1/24, 9:00:00 AM", " Alice ", " hi \n") == "1/1/24, 9:00:00 AM|Alice|hi"


def test_duplicates_collapse_to_one() -> None:
    first = _message(datetime(2024, 1, 1, 9), "Alice", "hello")
    again = _message(datetime(2024, 1, 1, 9), "Alice", "hello")
    other = _message(datetime(2024, 1, 1, 9), "Bob", "hello")
    deduped = dedupe_messages([first, other, again])
    assert [m.sender for m in deduped] == ["Alice", "Bob"]


def test_order_is_stable_for_equal_timestamps() -> None:
    ts = datetime(2024, 1, 1, 9)
    later = _message(datetime(2024, 1, 1, 10), "Zed", "late")
    a = _message(ts, "Alice", "one")
    b = _message(ts, "Bob", "two")
    ordered = order_messages([later, b, a])
    assert [m.sender for m in ordered] == ["Bob", "Alice", "Zed"]


def test_no_cutoff_means_everything_is_new() -> None:
    messages = [_message(datetime(2024, 1, 1, 9), "Alice", "hello")]
    partition = partition_messages(messages, None)
    assert partition.new == messages
    assert partition.previous == []


def test_cutoff_boundary_is_exclusive_for_new() -> None:
    at_cutoff = _message(datetime(2024, 1, 1, 9, 0, 0), "Alice", "synced")
    after = _message(datetime(2024, 1, 1, 9, 0, 1), "Bob", "fresh")
    before = _message(datetime(2024, 1, 1, 8, 59, 59), "Carol", "old")
    partition = partition_messages([before, at_cutoff, after], datetime(2024, 1, 1, 9, 0, 0))
    assert [m.sender for m in partition.new] == ["Bob"]
    assert [m.sender for m in partition.previous] == ["Carol", "Alice"]


def test_build_partition_dedups_and_sorts_before_splitting() -> None:
    late = _message(datetime(2024, 1, 2, 9), "Bob", "late")
    early = _message(datetime(2024, 1, 1, 9), "Alice", "early")
    partition = build_partition([late, early, late], datetime(2024, 1, 1, 12))
    assert partition.previous == [early]
    assert partition.new == [late]
