"""Main Textual app for the export diff viewer."""

from __future__ import annotations

from typing import Any, Optional

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Center, Container, Horizontal, Vertical
from textual.widgets import ContentSwitcher, Footer, Static, Tab, Tabs

from core.processor import ExportSession

from .constants import ACCENT_GREEN
from .tabs.export import ExportTab
from .tabs.groups import GroupsTab


class ExportDiffApp(App):
    """Export diff viewer with an export tab and a groups tab."""

    BINDINGS = [
        ("ctrl+r", "reload_groups", "Reload groups"),
        ("q", "quit", "Quit"),
        ("ctrl+c", "quit", "Quit"),
    ]

    CSS = """
    Screen {
        background: #0f1a21;
        color: #e8eef5;
    }

    #header {
        height: 5;
        padding: 1 4;
        border-bottom: solid #2a3a46;
    }

    #header-left, #header-right {
        width: 1fr;
    }

    #header-right {
        content-align: right top;
        text-align: right;
    }

    #title {
        text-style: bold;
    }

    .subtle {
        color: #c6d2dd;
    }

    #tabs-bar {
        height: 5;
        padding: 0 4;
        border-bottom: solid #2a3a46;
        align: center middle;
    }

    #tabs-center {
        width: 100%;
        height: 4;
        align: center middle;
    }

    #tabs {
        width: auto;
        min-width: 0;
    }

    Tab {
        height: 3;
        text-style: bold;
    }

    #export-panel, #groups-panel {
        padding: 1 4;
        height: auto;
    }

    #groups-panel {
        height: 1fr;
    }

    .form-label {
        color: #8fa3b3;
        margin-top: 1;
    }

    #export-load-row, #override-row, .section-header {
        height: auto;
    }

    #export-path {
        width: 1fr;
    }

    .override-field {
        width: 1fr;
        height: auto;
    }

    .field-error, .modal-error {
        color: #ff6b6b;
    }

    #override-title, .section-title, #groups-title {
        text-style: bold;
        margin-top: 1;
        width: 1fr;
    }

    #stats-line {
        margin-top: 1;
        text-style: bold;
    }

    #fresh-messages {
        height: 16;
    }

    #fresh-attachments {
        height: 6;
    }

    #mark-synced {
        margin-top: 1;
    }

    .modal-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round #2a3a46;
        background: #13222c;
    }

    ModalScreen {
        align: center middle;
    }

    .modal-title {
        text-style: bold;
    }

    .modal-actions {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, session: ExportSession, initial_path: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session = session
        self._initial_path = initial_path

    def compose(self) -> ComposeResult:
        with Container(id="header"):
            with Horizontal(id="header-row"):
                with Vertical(id="header-left"):
                    yield Static(self._title_text(), id="title")
                    yield Static("what's new since the last sync", classes="subtle")
                with Vertical(id="header-right"):
                    yield Static("store: sqlite", classes="subtle")

        with Container(id="tabs-bar"):
            with Center(id="tabs-center"):
                yield Tabs(
                    Tab("Export", id="export"),
                    Tab("Groups", id="groups"),
                    id="tabs",
                )

        with ContentSwitcher(id="content"):
            yield ExportTab(id="export")
            yield GroupsTab(id="groups")
        yield Footer()

    def on_mount(self) -> None:
        self._set_active_tab("export")
        if self._initial_path:
            self.query_one(ExportTab).load_path(self._initial_path)

    def on_tabs_tab_activated(self, event: Tabs.TabActivated) -> None:
        tab_id = event.tab.id or ""
        if not tab_id:
            label = event.tab.label
            if hasattr(label, "plain"):
                label = label.plain
            tab_id = str(label).strip().lower()
        self._set_active_tab(tab_id)

    def _set_active_tab(self, tab_id: str) -> None:
        switcher = self.query_one("#content", ContentSwitcher)
        switcher.current = tab_id

    def action_reload_groups(self) -> None:
        self.groups_changed()

    def groups_changed(self) -> None:
        """Refresh every view that shows group data."""
        self.query_one(GroupsTab).reload_groups()
        self.query_one(ExportTab).reload_groups()

    def select_group(self, group_id: str) -> None:
        self.session.select_group(group_id)
        export_tab = self.query_one(ExportTab)
        export_tab.reload_groups()
        self.query_one("#tabs", Tabs).active = "export"

    @staticmethod
    def _title_text() -> Text:
        return Text.assemble(
            ("EXPORT", ACCENT_GREEN),
            ("DIFF > Viewer", "bold"),
        )
