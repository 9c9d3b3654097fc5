from __future__ import annotations

from datetime import datetime

from core.attachments import (
    extract_attachment_filename,
    extract_attachments,
    list_attachment_filenames,
    strip_attachment_tags,
    to_display_message,
)
from core.models import ParsedMessage


def _message(minute: int, text: str, sender: str = "Alice") -> ParsedMessage:
    return ParsedMessage(
        id=f"{minute}|{sender}|{text}",
        raw_timestamp=f"01/01/24, 9:{minute:02d}:00 AM",
        timestamp=datetime(2024, 1, 1, 9, minute, 0),
        sender=sender,
        text=text,
    )


def test_extracts_filename_and_strips_tag() -> None:
    display = to_display_message(_message(0, "<attached: IMG-001.jpg>"))
    assert display.media_filename == "IMG-001.jpg"
    assert display.content == ""
    assert "attached" not in display.content


def test_tag_is_case_insensitive_and_caption_survives() -> None:
    display = to_display_message(_message(0, "look <ATTACHED:  report.pdf > here"))
    assert display.media_filename == "report.pdf"
    assert display.content == "look  here"


def test_message_without_tag_is_unchanged() -> None:
    display = to_display_message(_message(0, "just text  "))
    assert display.media_filename is None
    assert display.content == "just text  "


def test_strip_removes_every_tag() -> None:
    assert strip_attachment_tags("<attached: a.jpg>\n<Attached: b.jpg> ok") == "ok"


def test_first_tag_wins_for_display() -> None:
    assert extract_attachment_filename("<attached: a.jpg> <attached: b.jpg>") == "a.jpg"


def test_extract_attachments_dedups_by_filename() -> None:
    messages = [
        _message(0, "<attached: a.jpg>"),
        _message(1, "<attached: a.jpg>", sender="Bob"),
        _message(2, "<attached: b.opus>", sender="Bob"),
        _message(3, "no media"),
    ]
    attachments = extract_attachments(messages)
    assert [a.filename for a in attachments] == ["a.jpg", "b.opus"]
    assert attachments[0].sender == "Alice"
    assert attachments[0].message_id == messages[0].id
    assert attachments[1].timestamp == datetime(2024, 1, 1, 9, 2, 0)


def test_filename_listing_finds_every_occurrence() -> None:
    messages = [
        _message(0, "<attached: a.jpg>\n<attached: b.jpg>"),
        _message(1, "<attached: b.jpg> <attached: c.pdf>"),
    ]
    assert list_attachment_filenames(messages) == ["a.jpg", "b.jpg", "c.pdf"]
