"""Shared text formatting for clipboard output and status lines.

Keeping formatting here prevents drift between the CLI and the TUI so both
copy exactly the same text.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from core.models import CutoffResolution, ExportSummary, ParsedMessage
from core.timestamps import to_datetime_local_value


def format_message_line(message: ParsedMessage) -> str:
    """Render one message as ``[raw timestamp] sender: text``.

    Embedded newlines in the text are kept, so continuation lines stay
    visually attached to their message.
    """

    return f"[{message.raw_timestamp}] {message.sender}: {message.text}"


def format_messages(messages: Iterable[ParsedMessage]) -> str:
    return "\n".join(format_message_line(message) for message in messages)


def format_filenames(filenames: Iterable[str]) -> str:
    return "\n".join(filenames)


def format_cutoff(resolution: CutoffResolution) -> str:
    """Return the active-cutoff line, e.g. ``2026-02-25T19:03 (text override)``."""

    if resolution.cutoff is None:
        return "none"
    value = to_datetime_local_value(resolution.cutoff)
    if resolution.source:
        return f"{value} ({resolution.source})"
    return value


def _format_range(start: datetime, end: datetime) -> str:
    if start.date() == end.date():
        return f"{start:%b} {start.day} {start:%H:%M} - {end:%H:%M}"
    return f"{start:%b} {start.day} - {end:%b} {end.day}"


def format_stats(
    new_count: int,
    previous_count: int,
    attachment_count: int,
    summary: Optional[ExportSummary] = None,
) -> str:
    """One-line counters, plus the new-message date range when known."""

    line = f"Fresh: {new_count}  Previous: {previous_count}  Attachments: {attachment_count}"
    if summary and summary.date_range_start and summary.date_range_end:
        line += f"  Range: {_format_range(summary.date_range_start, summary.date_range_end)}"
    return line
