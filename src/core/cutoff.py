"""Effective cutoff resolution (core domain).

Cutoff sources are evaluated in priority order and the first one that yields
an instant wins:

1. freeform override text
2. date-time picker value
3. stored checkpoint (group or chat checkpoint)

An override that is filled in but does not parse is skipped and reported as a
field warning; it never blocks the sources below it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from core.models import CutoffResolution
from core.timestamps import parse_datetime_local, parse_override

SOURCE_TEXT = "text override"
SOURCE_PICKER = "picker override"
SOURCE_STORED = "stored checkpoint"

TEXT_WARNING = "Invalid timestamp. Use format like [25/02/26, 7:03:37 PM]"
PICKER_WARNING = "Invalid date format."

Resolver = Callable[[], Optional[datetime]]


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _field_warning(
    value: Optional[str], parser: Callable[[str], Optional[datetime]], warning: str
) -> Optional[str]:
    if _is_blank(value):
        return None
    return warning if parser(value) is None else None


def resolve_cutoff(
    text_override: Optional[str],
    picker_value: Optional[str],
    stored: Optional[datetime],
) -> CutoffResolution:
    """Resolve the single cutoff used to partition messages."""

    resolvers: list[tuple[str, Resolver]] = [
        (SOURCE_TEXT, lambda: parse_override(text_override or "")),
        (SOURCE_PICKER, lambda: parse_datetime_local((picker_value or "").strip())),
        (SOURCE_STORED, lambda: stored),
    ]

    cutoff: Optional[datetime] = None
    source: Optional[str] = None
    for label, resolve in resolvers:
        cutoff = resolve()
        if cutoff is not None:
            source = label
            break

    return CutoffResolution(
        cutoff=cutoff,
        source=source,
        text_warning=_field_warning(text_override, parse_override, TEXT_WARNING),
        picker_warning=_field_warning(
            picker_value, lambda value: parse_datetime_local(value.strip()), PICKER_WARNING
        ),
    )
