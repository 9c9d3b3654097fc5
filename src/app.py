"""Application entry point for exportdiff."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from art import tprint

import settings
from adapters.checkpoint_store import CheckpointStore
from adapters.export_formatting import format_cutoff, format_filenames, format_messages, format_stats
from adapters.group_store import GroupStore
from adapters.sqlite_storage import SQLiteStorage
from core.config import SyncConfig
from core.errors import ExportDiffError
from core.models import Group
from core.processor import ExportSession

NAME = "EXPORTDIFF"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/exportdiff.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def build_session() -> ExportSession:
    """Wire the SQLite-backed stores into a fresh session."""

    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    checkpoints = CheckpointStore(storage)
    groups = GroupStore(storage, checkpoints)
    return ExportSession(
        checkpoint_store=checkpoints,
        group_store=groups,
        sync_config=SyncConfig(preview_chars=settings.PREVIEW_CHARS),
    )


def _status(message: str) -> None:
    print(message, file=sys.stderr)


def _find_group(session: ExportSession, name: str) -> Optional[Group]:
    wanted = name.strip().lower()
    return next((g for g in session.groups() if g.name.lower() == wanted), None)


def _load_session(args: argparse.Namespace) -> ExportSession:
    session = build_session()
    path = Path(args.file)
    session.load_export(path.read_text(encoding="utf-8"), filename=path.name)

    if args.group:
        match = _find_group(session, args.group)
        if match is None:
            _status(f"Unknown group: {args.group}")
        session.select_group(match.id if match else None)

    session.text_override = args.since or ""
    session.picker_value = args.synced_through or ""
    return session


def _diff(args: argparse.Namespace) -> None:
    session = _load_session(args)
    view = session.view()

    for warning in (view.resolution.text_warning, view.resolution.picker_warning):
        if warning:
            _status(warning)

    group = session.current_group()
    _status(f"Loaded {args.file}: {session.parsed_count} messages parsed")
    _status(f"Group: {group.name if group else 'none'}")
    _status(f"Active cutoff: {format_cutoff(view.resolution)}")
    _status(
        format_stats(
            len(view.partition.new),
            len(view.partition.previous),
            len(view.attachments),
            view.summary,
        )
    )

    fresh_text = format_messages(view.partition.new)
    attachments_text = format_filenames(view.attachment_filenames)
    if args.messages_out:
        Path(args.messages_out).write_text(fresh_text, encoding="utf-8")
        _status(f"Wrote fresh messages to {args.messages_out}")
    else:
        print(fresh_text)
    if args.attachments_out:
        Path(args.attachments_out).write_text(attachments_text, encoding="utf-8")
        _status(f"Wrote attachment names to {args.attachments_out}")


def _mark_synced(args: argparse.Namespace) -> None:
    session = build_session()
    path = Path(args.file)
    session.load_export(path.read_text(encoding="utf-8"), filename=path.name)
    session.text_override = args.since or ""
    session.picker_value = args.synced_through or ""

    group = _find_group(session, args.group)
    if group is None:
        # Marking through the CLI registers the group on first use, but only
        # once there is something to record.
        session.select_group(None)
        session.pending_sync()
        group = session.add_group(args.group.strip())
    session.select_group(group.id)

    synced_at = session.mark_synced()
    _status(f"Marked {group.name} as synced through {synced_at.isoformat(sep=' ')}")



def _groups(args: argparse.Namespace) -> None:
    session = build_session()
    if args.add:
        group = session.add_group(args.add.strip())
        _status(f"Group ready: {group.name} ({group.id})")
        return

    groups = session.groups()
    if not groups:
        print("No groups yet. Add one with: exportdiff groups --add NAME")
        return
    for index, group in enumerate(groups, start=1):
        synced = group.last_synced_at.isoformat(sep=" ") if group.last_synced_at else "never"
        print(f"{index}. {group.name} | {group.id} | last synced: {synced}")


def _view(args: argparse.Namespace) -> None:
    _print_banner()
    from frontend.app import ExportDiffApp

    ExportDiffApp(build_session(), initial_path=args.file).run()


def _add_cutoff_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Path to the .txt chat export")
    parser.add_argument(
        "--since",
        help="Override cutoff, e.g. '[25/02/26, 7:03:37 PM]' or 2026-02-25T19:03",
    )
    parser.add_argument(
        "--synced-through",
        help="Override cutoff as a date-time value, e.g. 2026-02-25T19:03",
    )


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="exportdiff")
    subparsers = parser.add_subparsers(dest="command")

    view_parser = subparsers.add_parser("view", help="Launch the export diff TUI")
    view_parser.add_argument("file", nargs="?", help="Export to load on start")

    diff_parser = subparsers.add_parser("diff", help="Print messages newer than the checkpoint")
    _add_cutoff_arguments(diff_parser)
    diff_parser.add_argument("--group", help="Group whose checkpoint is the cutoff")
    diff_parser.add_argument("--messages-out", help="Write fresh messages here instead of stdout")
    diff_parser.add_argument("--attachments-out", help="Write fresh attachment names here")

    sync_parser = subparsers.add_parser("mark-synced", help="Record the newest message as synced")
    _add_cutoff_arguments(sync_parser)
    sync_parser.add_argument("--group", required=True, help="Group to mark as synced")

    groups_parser = subparsers.add_parser("groups", help="List or add groups")
    groups_parser.add_argument("--add", metavar="NAME", help="Add a group (idempotent by name)")

    args = parser.parse_args(argv)

    handlers = {
        "diff": _diff,
        "mark-synced": _mark_synced,
        "groups": _groups,
    }
    handler = handlers.get(args.command)
    if handler is None:
        if args.command is None:
            args.file = None
        _view(args)
        return

    # The TUI owns the terminal, so logging is only wired for batch commands.
    _configure_logging()
    try:
        handler(args)
    except (ExportDiffError, OSError, UnicodeDecodeError) as exc:
        _status(f"Error: {exc}")
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
