"""Validation helpers for TUI form input."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class ExportPathInfo:
    path: Path | None
    error: str | None = None


@dataclass
class GroupNameInfo:
    name: str | None
    error: str | None = None


def parse_export_path(raw_value: str) -> ExportPathInfo:
    raw_value = raw_value.strip()
    if not raw_value:
        return ExportPathInfo(None, "export path is required")

    path = Path(raw_value).expanduser()
    if not path.exists():
        return ExportPathInfo(None, f"file not found: {path}")
    if path.is_dir():
        return ExportPathInfo(None, "path is a directory")
    if path.suffix.lower() != ".txt":
        return ExportPathInfo(None, "export must be a .txt file")
    return ExportPathInfo(path)


def parse_group_name(raw_value: str) -> GroupNameInfo:
    name = raw_value.strip()
    if not name:
        return GroupNameInfo(None, "group name is required")
    return GroupNameInfo(name)
