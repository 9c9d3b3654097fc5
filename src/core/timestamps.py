"""Timestamp normalization and date resolvers (core domain).

Every resolver is total: malformed input yields ``None`` rather than an
exception, so callers decide whether a non-empty field that resolves to
nothing deserves a warning.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

# LRM, RLM, ZWSP, ZWNJ, ZWJ and BOM show up in exports from some locales.
INVISIBLE_MARKS = "\u200e\u200f\u200b\u200c\u200d\ufeff"
NARROW_NO_BREAK_SPACE = "\u202f"

_INVISIBLE_RE = re.compile(f"[{INVISIBLE_MARKS}]")
_LEADING_INVISIBLE_RE = re.compile(f"^[{INVISIBLE_MARKS}]+")

# Digits are ASCII only; whitespace is any Unicode space, matching HEADER_RE.
EXPORT_TIMESTAMP_RE = re.compile(
    r"([0-9]{1,2})/([0-9]{1,2})/([0-9]{2}),\s*([0-9]{1,2}):([0-9]{2}):([0-9]{2})\s*(AM|PM)",
    re.IGNORECASE,
)
DATETIME_LOCAL_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})", re.ASCII)
_BRACKETED_RE = re.compile(r"\[(.*)\]")


def normalize_timestamp(raw: str) -> str:
    """Drop invisible marks, turn narrow no-break spaces into spaces, trim."""

    return _INVISIBLE_RE.sub("", raw).replace(NARROW_NO_BREAK_SPACE, " ").strip()


def strip_leading_invisible(line: str) -> str:
    """Remove invisible marks at the start of a line only."""

    return _LEADING_INVISIBLE_RE.sub("", line)


def parse_export_timestamp(raw: str) -> Optional[datetime]:
    """Parse ``D/M/YY, H:MM:SS AM|PM`` into a naive local datetime.

    Years are always 2000 + YY. Out-of-range calendar values (31/04, hour 13
    with a PM marker, minute 75) resolve to ``None``.
    """

    match = EXPORT_TIMESTAMP_RE.fullmatch(normalize_timestamp(raw))
    if not match:
        return None

    day, month, year, hour, minute, second, meridiem = match.groups()
    hour_value = int(hour)
    meridiem = meridiem.upper()
    if meridiem == "PM" and hour_value != 12:
        hour_value += 12
    elif meridiem == "AM" and hour_value == 12:
        hour_value = 0

    try:
        return datetime(
            2000 + int(year),
            int(month),
            int(day),
            hour_value,
            int(minute),
            int(second),
        )
    except ValueError:
        return None


def parse_datetime_local(value: str) -> Optional[datetime]:
    """Parse a ``YYYY-MM-DDTHH:MM`` date-time input value (seconds are 0)."""

    match = DATETIME_LOCAL_RE.fullmatch(value)
    if not match:
        return None

    year, month, day, hour, minute = (int(part) for part in match.groups())
    try:
        return datetime(year, month, day, hour, minute, 0)
    except ValueError:
        return None


def parse_override(raw: str) -> Optional[datetime]:
    """Parse freeform override text.

    Accepts a (optionally bracketed) export-native timestamp, falling back to
    a date-time input value on the trimmed, non-unwrapped text.
    """

    trimmed = raw.strip()
    if not trimmed:
        return None

    bracketed = _BRACKETED_RE.fullmatch(trimmed)
    unwrapped = bracketed.group(1).strip() if bracketed else trimmed

    parsed = parse_export_timestamp(unwrapped)
    if parsed is not None:
        return parsed
    return parse_datetime_local(trimmed)


def format_export_timestamp(value: datetime) -> str:
    """Render a datetime in the export-native textual shape."""

    hour = value.hour % 12 or 12
    meridiem = "PM" if value.hour >= 12 else "AM"
    return (
        f"{value.day:02d}/{value.month:02d}/{value.year % 100:02d}, "
        f"{hour}:{value.minute:02d}:{value.second:02d} {meridiem}"
    )


def to_datetime_local_value(value: datetime) -> str:
    return value.strftime("%Y-%m-%dT%H:%M")
