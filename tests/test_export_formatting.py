from __future__ import annotations

from datetime import datetime

from adapters.export_formatting import format_cutoff, format_filenames, format_messages, format_stats
from core.models import CutoffResolution, ExportSummary, ParsedMessage


def _message(text: str) -> ParsedMessage:
    return ParsedMessage(
        id=f"x|Alice|{text}",
        raw_timestamp="01/01/24, 9:00:00 AM",
        timestamp=datetime(2024, 1, 1, 9, 0),
        sender="Alice",
        text=text,
    )


def test_messages_keep_embedded_newlines() -> None:
    text = format_messages([_message("one\ntwo"), _message("three")])
    assert text == (
        "[01/01/24, 9:00:00 AM] Alice: one\ntwo\n"
        "[01/01/24, 9:00:00 AM] Alice: three"
    )


def test_filenames_one_per_line() -> None:
    assert format_filenames(["a.jpg", "b.pdf"]) == "a.jpg\nb.pdf"
    assert format_filenames([]) == ""


def test_format_cutoff() -> None:
    assert format_cutoff(CutoffResolution(cutoff=None, source=None)) == "none"
    resolution = CutoffResolution(cutoff=datetime(2026, 2, 25, 19, 3, 37), source="text override")
    assert format_cutoff(resolution) == "2026-02-25T19:03 (text override)"


def test_format_stats_with_same_day_range() -> None:
    summary = ExportSummary(
        new_message_count=2,
        previous_message_count=1,
        attachment_count=1,
        date_range_start=datetime(2024, 1, 1, 9, 0),
        date_range_end=datetime(2024, 1, 1, 9, 5),
    )
    assert format_stats(2, 1, 1, summary) == (
        "Fresh: 2  Previous: 1  Attachments: 1  Range: Jan 1 09:00 - 09:05"
    )


def test_format_stats_without_summary() -> None:
    assert format_stats(0, 3, 0) == "Fresh: 0  Previous: 3  Attachments: 0"
