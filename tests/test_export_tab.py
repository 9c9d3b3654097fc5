from __future__ import annotations

from types import SimpleNamespace

import pytest

from frontend.tabs.export import ExportTab


class FakeTab:
    """Just enough of the tab for the clipboard helper."""

    def __init__(self, error: Exception | None = None) -> None:
        self.copied: list[str] = []
        self.statuses: list[str] = []
        self._error = error
        self.app = SimpleNamespace(copy_to_clipboard=self._copy_to_clipboard)

    def _copy_to_clipboard(self, text: str) -> None:
        if self._error is not None:
            raise self._error
        self.copied.append(text)

    def _set_status(self, message: str) -> None:
        self.statuses.append(message)


def test_copy_reports_success() -> None:
    tab = FakeTab()
    ExportTab._copy(tab, "[01/01/24, 9:00:00 AM] Alice: hi", "fresh messages")
    assert tab.copied == ["[01/01/24, 9:00:00 AM] Alice: hi"]
    assert tab.statuses == ["Copied fresh messages to clipboard."]


def test_copy_skips_empty_text() -> None:
    tab = FakeTab()
    ExportTab._copy(tab, "", "attachment names")
    assert tab.copied == []
    assert tab.statuses == ["No attachment names to copy."]


def test_copy_reports_terminal_write_failure() -> None:
    tab = FakeTab(OSError("broken pipe"))
    ExportTab._copy(tab, "text", "fresh messages")
    assert tab.statuses == ["copy failed: broken pipe"]


def test_copy_does_not_hide_programming_errors() -> None:
    tab = FakeTab(RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        ExportTab._copy(tab, "text", "fresh messages")
