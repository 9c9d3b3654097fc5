"""Export tab: load an export, pick the cutoff and copy what is new."""

from __future__ import annotations

from typing import Any, Optional

from textual import on
from textual.containers import Horizontal, ScrollableContainer, Vertical
from textual.widgets import Button, Input, Select, Static, TextArea

from adapters.export_formatting import format_cutoff, format_filenames, format_messages, format_stats
from core.errors import SyncError
from core.processor import ExportSession
from core.timestamps import to_datetime_local_value

from ..constants import GROUP_PROMPT
from ..modals import ConfirmSyncScreen
from ..validators import parse_export_path


class ExportTab(ScrollableContainer):
    """Main workflow tab backed by the app's ExportSession."""

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._ready = False

    def compose(self):
        with Vertical(id="export-panel"):
            yield Static("export file (.txt)", classes="form-label")
            with Horizontal(id="export-load-row"):
                yield Input(placeholder="~/Downloads/WhatsApp Chat - Family.txt", id="export-path")
                yield Button("Load", id="load-export", variant="success")
            yield Static("", id="export-loaded", classes="subtle")

            yield Static("group", classes="form-label")
            yield Select([], prompt=GROUP_PROMPT, id="group-select")

            yield Static("Sync point override", id="override-title")
            with Horizontal(id="override-row"):
                with Vertical(classes="override-field"):
                    yield Static("already synced through", classes="form-label")
                    yield Input(placeholder="2026-02-25T19:03", id="picker-input")
                    yield Static("", id="picker-error", classes="field-error")
                with Vertical(classes="override-field"):
                    yield Static("or paste a chat timestamp", classes="form-label")
                    yield Input(placeholder="[25/02/26, 7:03:37 PM]", id="text-override-input")
                    yield Static("", id="text-error", classes="field-error")
            yield Static("", id="cutoff-line", classes="subtle")

            yield Static("", id="stats-line")

            with Horizontal(classes="section-header"):
                yield Static("Fresh messages", classes="section-title")
                yield Button("Copy", id="copy-messages")
            yield TextArea(id="fresh-messages", read_only=True)

            with Horizontal(classes="section-header"):
                yield Static("Fresh attachment files", classes="section-title")
                yield Button("Copy", id="copy-attachments")
            yield TextArea(id="fresh-attachments", read_only=True)

            yield Button("Mark as Synced", id="mark-synced", variant="success")
            yield Static("", id="export-status")

    def on_mount(self) -> None:
        self._ready = True
        self.reload_groups()

    @property
    def session(self) -> ExportSession:
        return self.app.session

    def load_path(self, raw_path: str) -> None:
        self.query_one("#export-path", Input).value = raw_path
        self._load_export()

    def reload_groups(self) -> None:
        """Rebuild group options from the store and restore the selection."""

        if not self._ready:
            return
        groups = self.session.groups()
        select = self.query_one("#group-select", Select)
        select.set_options([(group.name, group.id) for group in groups])
        selected = self.session.selected_group_id
        if selected and any(group.id == selected for group in groups):
            select.value = selected
        self.refresh_view()

    def refresh_view(self) -> None:
        """Recompute every derived panel from the session's current inputs."""

        if not self._ready:
            return
        session = self.session
        view = session.view()
        resolution = view.resolution

        self.query_one("#text-error", Static).update(resolution.text_warning or "")
        self.query_one("#picker-error", Static).update(resolution.picker_warning or "")
        self.query_one("#cutoff-line", Static).update(f"Active cutoff: {format_cutoff(resolution)}")

        stats = ""
        if session.parsed_count:
            stats = format_stats(
                len(view.partition.new),
                len(view.partition.previous),
                len(view.attachments),
                view.summary,
            )
        self.query_one("#stats-line", Static).update(stats)

        self.query_one("#fresh-messages", TextArea).text = format_messages(view.partition.new)
        self.query_one("#fresh-attachments", TextArea).text = format_filenames(
            view.attachment_filenames
        )

        can_sync = session.selected_group_id is not None and (
            bool(view.partition.new) or resolution.cutoff is not None
        )
        self.query_one("#mark-synced", Button).disabled = not can_sync

    @on(Button.Pressed, "#load-export")
    @on(Input.Submitted, "#export-path")
    def _on_load_requested(self) -> None:
        self._load_export()

    @on(Select.Changed, "#group-select")
    def _on_group_changed(self) -> None:
        # Read the widget rather than the event so queued changes settle on the final value.
        value = self.query_one("#group-select", Select).value
        self.session.select_group(None if value is Select.BLANK else str(value))
        self.refresh_view()

    @on(Input.Changed, "#text-override-input")
    def _on_text_override_changed(self, event: Input.Changed) -> None:
        self.session.text_override = event.value
        self.refresh_view()

    @on(Input.Changed, "#picker-input")
    def _on_picker_changed(self, event: Input.Changed) -> None:
        self.session.picker_value = event.value
        self.refresh_view()

    @on(Button.Pressed, "#copy-messages")
    def _on_copy_messages(self) -> None:
        self._copy(self.query_one("#fresh-messages", TextArea).text, "fresh messages")

    @on(Button.Pressed, "#copy-attachments")
    def _on_copy_attachments(self) -> None:
        self._copy(self.query_one("#fresh-attachments", TextArea).text, "attachment names")

    @on(Button.Pressed, "#mark-synced")
    def _on_mark_synced(self) -> None:
        group = self.session.current_group()
        if group is None:
            self._set_status("Select a group before marking as synced.")
            return
        view = self.session.view()
        if view.partition.new:
            detail = f"Through the newest fresh message ({view.partition.new[-1].raw_timestamp})."
        elif view.resolution.cutoff is not None:
            detail = f"Through the active cutoff ({to_datetime_local_value(view.resolution.cutoff)})."
        else:
            detail = "There is nothing to record yet."
        self.app.push_screen(ConfirmSyncScreen(group.name, detail), self._handle_sync_choice)

    def _handle_sync_choice(self, confirmed: Optional[bool]) -> None:
        if not confirmed:
            return
        try:
            synced_at = self.session.mark_synced()
        except SyncError as exc:
            self._set_status(str(exc))
            return
        self.query_one("#text-override-input", Input).value = ""
        self.query_one("#picker-input", Input).value = ""
        self._set_status(f"Marked as synced through {to_datetime_local_value(synced_at)}")
        self.app.groups_changed()

    def _load_export(self) -> None:
        info = parse_export_path(self.query_one("#export-path", Input).value)
        if info.error or info.path is None:
            self._set_status(info.error or "invalid path")
            return
        try:
            content = info.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            self._set_status(f"read failed: {exc}")
            return

        count = self.session.load_export(content, filename=info.path.name)
        self.query_one("#export-loaded", Static).update(
            f"Loaded: {info.path.name} - {count} messages parsed"
        )
        self._set_status("")
        self.reload_groups()

    def _copy(self, text: str, label: str) -> None:
        if not text:
            self._set_status(f"No {label} to copy.")
            return
        try:
            self.app.copy_to_clipboard(text)
        except OSError as exc:
            self._set_status(f"copy failed: {exc}")
            return
        self._set_status(f"Copied {label} to clipboard.")

    def _set_status(self, message: str) -> None:
        self.query_one("#export-status", Static).update(message)
