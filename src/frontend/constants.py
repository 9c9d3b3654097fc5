"""Shared constants for the Textual UI."""

from __future__ import annotations

ACCENT_GREEN = "#25D366"
GROUP_PROMPT = "Select a group..."
