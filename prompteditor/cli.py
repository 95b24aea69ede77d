"""
PromptEditor CLI — command-line trigger layer for the document core.

Commands:
- prompteditor show          — Print the current content and status
- prompteditor edit          — Replace the content (argument, --file, or stdin)
- prompteditor save          — Snapshot the content as a new version
- prompteditor versions      — List versions, newest first
- prompteditor rename        — Name a version
- prompteditor delete        — Delete a version
- prompteditor restore       — Restore a version's content into the editor
- prompteditor reset         — Remove the stored document
- prompteditor logs show     — Print recent event log entries
- prompteditor logs cleanup  — Delete event logs past retention

Version ids may be abbreviated to any unique prefix.
"""

from __future__ import annotations

import argparse
import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from prompteditor.documents import (
    VERSION_CAP,
    DocumentPersistence,
    DocumentStore,
    EditorSession,
)
from prompteditor.engine.config import EditorConfig, load_config
from prompteditor.engine.errors import EditorStorageError
from prompteditor.engine.logging import (
    OBJECT_TYPE_CATEGORIES,
    LogRetentionManager,
    configure_logging,
    get_file_logger,
    init_logging,
    log,
    log_system_event,
)
from prompteditor.storage import create_store
from prompteditor.utilities.utils import format_timestamp

logger = logging.getLogger("prompteditor.cli")


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="prompteditor",
        description="PromptEditor — single-document editor with version history",
    )
    parser.add_argument("--config", help="Path to prompteditor.yaml (default: auto-discover)")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("show", help="Print the current content and status")

    edit_parser = subparsers.add_parser("edit", help="Replace the editor content")
    edit_source = edit_parser.add_mutually_exclusive_group(required=True)
    edit_source.add_argument("text", nargs="?", help="New content ('-' reads stdin)")
    edit_source.add_argument("--file", help="Read new content from a file")

    subparsers.add_parser("save", help="Save the content as a new version")
    subparsers.add_parser("versions", help="List versions, newest first")

    rename_parser = subparsers.add_parser("rename", help="Rename a version")
    rename_parser.add_argument("version_id", help="Version id or unique prefix")
    rename_parser.add_argument("name", help="New name (1-40 characters, unique)")

    delete_parser = subparsers.add_parser("delete", help="Delete a version")
    delete_parser.add_argument("version_id", help="Version id or unique prefix")

    restore_parser = subparsers.add_parser("restore", help="Restore a version into the editor")
    restore_parser.add_argument("version_id", help="Version id or unique prefix")

    subparsers.add_parser("reset", help="Remove the stored document")

    logs_parser = subparsers.add_parser("logs", help="Event log maintenance")
    logs_sub = logs_parser.add_subparsers(dest="logs_command")
    logs_show = logs_sub.add_parser("show", help="Print recent event log entries")
    logs_show.add_argument("--type", dest="object_type", default="versions",
                           choices=sorted(OBJECT_TYPE_CATEGORIES), help="Object type (default: versions)")
    logs_show.add_argument("--category", default="execution", help="Log category (default: execution)")
    logs_show.add_argument("--event", help="Only entries with this event name")
    logs_show.add_argument("--limit", type=int, default=20, help="Max entries (default: 20)")
    logs_sub.add_parser("cleanup", help="Delete event logs past retention")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"[ERROR] Failed to load config: {e}", file=sys.stderr)
        return 1
    configure_logging(config.logging.level)
    init_logging(config.logging.directory)

    handlers = {
        "show": cmd_show,
        "edit": cmd_edit,
        "save": cmd_save,
        "versions": cmd_versions,
        "rename": cmd_rename,
        "delete": cmd_delete,
        "restore": cmd_restore,
        "reset": cmd_reset,
        "logs": cmd_logs,
    }
    try:
        return handlers[args.command](args, config)
    except EditorStorageError as e:
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return 1


@contextmanager
def open_session(config: EditorConfig) -> Iterator[EditorSession]:
    """
    Create the store backend and session described by *config*, and close
    the backend on exit.

    Raises EditorStorageError if the backend cannot be created.
    """
    try:
        store = create_store(config.storage)
    except Exception as e:
        logger.error(f"Storage backend '{config.storage.backend}' unavailable: {e}")
        raise EditorStorageError(
            f"Storage backend '{config.storage.backend}' unavailable: {e}",
            backend=config.storage.backend,
        ) from e

    try:
        yield EditorSession(
            DocumentPersistence(store, key=config.storage.key),
            document_id=config.editor.document_id,
            on_storage_error=lambda e: logger.error(f"Storage write failed: {e}"),
        )
    finally:
        store.close()


def resolve_version_id(store: DocumentStore, ref: str) -> Optional[str]:
    """Match *ref* against version ids: exact match first, then unique prefix."""
    ids = [v.id for v in store.document.versions]
    if ref in ids:
        return ref
    matches = [i for i in ids if i.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        print(f"Ambiguous version id '{ref}' matches {len(matches)} versions", file=sys.stderr)
    return None


def _finish(session: EditorSession) -> int:
    if session.last_error:
        print(f"Heads up: {session.last_error}", file=sys.stderr)
        return 1
    return 0


def cmd_show(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        doc = session.open().document
    print(f"Document: {doc.id}  Updated {format_timestamp(doc.updated_at.isoformat())}")
    print(f"Versions: {len(doc.versions)}/{VERSION_CAP}")
    print("-" * 40)
    print(doc.content or "(Nothing to preview yet.)")
    return 0


def cmd_edit(args: argparse.Namespace, config: EditorConfig) -> int:
    if args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        except FileNotFoundError:
            print(f"[ERROR] File not found: {args.file}", file=sys.stderr)
            return 1
        except (OSError, UnicodeDecodeError) as e:
            print(f"[ERROR] Cannot read {args.file}: {e}", file=sys.stderr)
            return 1
    elif args.text == "-":
        text = sys.stdin.read()
    else:
        text = args.text

    with open_session(config) as session:
        session.open().edit_content(text)
        print(f"Content updated ({len(text)} characters)")
        return _finish(session)


def cmd_save(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        store = session.open()
        version = store.save_version()
        print(f"Saved version {version.id} ({len(store.document.versions)}/{VERSION_CAP})")
        return _finish(session)


def cmd_versions(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        versions = session.open().document.versions
    if not versions:
        print("No versions yet. Create your first snapshot with 'prompteditor save'.")
        return 0

    print(f"Versions {len(versions)}/{VERSION_CAP}")
    for v in versions:
        created = format_timestamp(v.created_at.isoformat())
        print(f"{v.id[:8]}  {v.display_name:<40}  {created}")
        print(f"          {v.summary or '(empty)'}")
    return 0


def cmd_rename(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        store = session.open()
        version_id = resolve_version_id(store, args.version_id) or args.version_id
        result = store.rename_version(version_id, args.name)
        if not result.ok:
            print(f"Heads up: {result.message}", file=sys.stderr)
            return 1
        print(f"Renamed {version_id[:8]} to '{result.name}'")
        return _finish(session)


def cmd_delete(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        store = session.open()
        version_id = resolve_version_id(store, args.version_id) or args.version_id
        store.delete_version(version_id)
        print(f"Deleted {version_id[:8]} ({len(store.document.versions)}/{VERSION_CAP} remain)")
        return _finish(session)


def cmd_restore(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        store = session.open()
        version_id = resolve_version_id(store, args.version_id)
        if store.select_version(version_id) is None:
            print(f"Version '{args.version_id}' not found", file=sys.stderr)
            return 1
        store.restore_selected()
        print(f"Restored {version_id[:8]} to the editor")
        return _finish(session)


def cmd_reset(args: argparse.Namespace, config: EditorConfig) -> int:
    with open_session(config) as session:
        try:
            session.persistence.clear()
        except Exception as e:
            print(f"[ERROR] Could not remove the stored document: {e}", file=sys.stderr)
            return 1
    log(log_system_event("document_reset", level="WARNING", details={"key": config.storage.key}))
    print("Stored document removed")
    return 0


def cmd_logs(args: argparse.Namespace, config: EditorConfig) -> int:
    if args.logs_command == "show":
        return _show_logs(args)
    if args.logs_command != "cleanup":
        print("Usage: prompteditor logs {show,cleanup}", file=sys.stderr)
        return 1
    mgr = LogRetentionManager(
        log_dir=config.logging.directory,
        retention_days=config.logging.retention_days,
    )
    result = mgr.cleanup()
    print(f"Deleted {result['deleted']} log files, kept {result['kept']}")
    return 0


def _show_logs(args: argparse.Namespace) -> int:
    if args.category not in OBJECT_TYPE_CATEGORIES[args.object_type]:
        allowed = ", ".join(OBJECT_TYPE_CATEGORIES[args.object_type])
        print(f"[ERROR] Category for '{args.object_type}' must be one of: {allowed}", file=sys.stderr)
        return 1

    filters = {"event": args.event} if args.event else None
    entries = get_file_logger().query(args.object_type, args.category, filters=filters, limit=args.limit)
    if not entries:
        print("No log entries in the last 7 days.")
        return 0

    for entry in entries:
        target = entry.get("version_id") or entry.get("key") or ""
        print(f"{format_timestamp(entry['timestamp'])}  {entry['level']:<7}  {entry['event']:<14}  {target}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
