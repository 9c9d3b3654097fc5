"""Modal dialogs for the export diff TUI."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from .validators import parse_group_name


class ConfirmSyncScreen(ModalScreen[bool]):
    """Confirm recording a sync point for a group."""

    def __init__(self, group_name: str, detail: str) -> None:
        super().__init__()
        self._group_name = group_name
        self._detail = detail

    def compose(self) -> ComposeResult:
        yield Container(
            Static(f"Mark {self._group_name} as synced?", classes="modal-title"),
            Static(self._detail, classes="modal-body"),
            Horizontal(
                Button("Mark synced", id="sync-confirm", variant="success"),
                Button("Cancel", id="sync-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--confirm",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "sync-confirm")


class AddGroupScreen(ModalScreen[str | None]):
    """Modal form for adding a new group."""

    def compose(self) -> ComposeResult:
        yield Container(
            Static("Add group", classes="modal-title"),
            Static("", id="add-error", classes="modal-error"),
            Static("name", classes="form-label"),
            Input(placeholder="Family chat", id="add-group-name"),
            Horizontal(
                Button("Add", id="add-confirm", variant="success"),
                Button("Cancel", id="add-cancel"),
                classes="modal-actions",
            ),
            classes="modal-dialog modal-dialog--form",
        )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "add-cancel":
            self.dismiss(None)
            return
        if event.button.id != "add-confirm":
            return
        info = parse_group_name(self.query_one("#add-group-name", Input).value)
        if info.error or info.name is None:
            self.query_one("#add-error", Static).update(info.error or "invalid name")
            return
        self.dismiss(info.name)
