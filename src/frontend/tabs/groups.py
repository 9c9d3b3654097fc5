"""Groups tab for browsing the group registry."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Button, DataTable, Static

from ..modals import AddGroupScreen


class GroupsTab(Container):
    """Lists groups with their last sync point; selecting a row picks it for export."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._table_ready = False

    def compose(self):
        with Vertical(id="groups-panel"):
            yield Static("Groups", id="groups-title")
            yield DataTable(id="groups-table", cursor_type="row")
            with Horizontal(id="groups-actions"):
                yield Button("Add", id="add-group", variant="success")
            yield Static("", id="groups-output")

    def on_mount(self) -> None:
        table = self.query_one("#groups-table", DataTable)
        table.add_column("name", key="name", width=24)
        table.add_column("last synced", key="last_synced_at", width=18)
        table.add_column("preview", key="preview", width=42)
        table.add_column("id", key="id", width=16)
        table.zebra_stripes = True
        table.styles.height = "1fr"
        self.query_one("#groups-actions").styles.height = 3
        self._table_ready = True
        self.reload_groups()

    def reload_groups(self) -> None:
        if not self._table_ready:
            return
        table = self.query_one("#groups-table", DataTable)
        table.clear()
        groups = self.app.session.groups()
        for group in groups:
            synced = group.last_synced_at.strftime("%Y-%m-%d %H:%M") if group.last_synced_at else "never"
            table.add_row(
                group.name,
                synced,
                self._clip_text((group.last_synced_message_preview or "").replace("\n", " ")),
                group.id,
                key=group.id,
            )
        self._set_output(f"{len(groups)} groups")

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        group_id = event.row_key.value
        if group_id is None:
            return
        self.app.select_group(str(group_id))
        self._set_output(f"selected {group_id} for the export tab")

    @on(Button.Pressed, "#add-group")
    def _on_add_group(self) -> None:
        self.app.push_screen(AddGroupScreen(), self._handle_add_result)

    def _handle_add_result(self, name: Optional[str]) -> None:
        if not name:
            return
        group = self.app.session.add_group(name)
        self.app.groups_changed()
        self._set_output(f"group ready: {group.name} ({group.id})")

    def _set_output(self, message: str) -> None:
        self.query_one("#groups-output", Static).update(message)

    @staticmethod
    def _clip_text(value: str, limit: int = 40) -> str:
        if len(value) <= limit:
            return value
        return value[: limit - 3] + "..."
