"""Command-line front door for gmux.

Without a subcommand the interactive screen starts. Subcommands manage the
registered directory list directly and exit.
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .config import AppConfig, ConfigStore, EntryConfig
from .editor import launch_editor
from .errors import EntryNotFoundError, GmuxError
from .git_status import GitProber, branch_status_for
from .logs import configure_logging
from .paths import display_path, expand_path, same_path, validate_directory


def _editor_arg(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def resolve_target(entries: list[EntryConfig], target: str) -> int:
    """Return the index for a 1-based number or a registered path.

    Raises ``EntryNotFoundError`` when nothing matches.
    """
    if not entries:
        raise EntryNotFoundError("no entries registered")
    text = target.strip()
    if text.isdecimal():
        number = int(text)
        if 1 <= number <= len(entries):
            return number - 1
    wanted = expand_path(text)
    for idx, entry in enumerate(entries):
        if same_path(entry.path, wanted):
            return idx
    raise EntryNotFoundError(f"entry not found: {target}")


def list_rows(config: AppConfig, prober: GitProber) -> list[dict[str, object]]:
    return [
        {
            "index": idx + 1,
            "path": display_path(entry.path),
            "branch": branch_status_for(entry.path, prober).text(),
            "editor": entry.editor,
        }
        for idx, entry in enumerate(config.entries)
    ]


def cmd_list(store: ConfigStore, as_json: bool) -> None:
    rows = list_rows(store.load(), GitProber())
    if as_json:
        print(json.dumps(rows, indent=2))
        return
    if not rows:
        print("No directories registered.")
        return
    for row in rows:
        line = f"{row['index']:>2}. {row['path']:<40} {row['branch']:<15}"
        if row["editor"]:
            line += f" {row['editor']}"
        print(line.rstrip())


def cmd_add(store: ConfigStore, raw_path: str, editor: str | None) -> None:
    path = validate_directory(raw_path)
    editor = _editor_arg(editor)
    config = store.load()
    if editor is not None:
        config.default_editor = editor

    shown = display_path(path)
    for idx, entry in enumerate(config.entries):
        if same_path(entry.path, path):
            config.entries[idx] = EntryConfig(path=path, editor=editor)
            message = f"Updated {shown}"
            break
    else:
        config.entries.append(EntryConfig(path=path, editor=editor))
        message = f"Added {shown}"
    store.save(config)
    print(message)


def cmd_edit(store: ConfigStore, target: str, new_path: str | None, editor: str | None) -> None:
    config = store.load()
    idx = resolve_target(config.entries, target)
    if new_path is None and editor is None:
        raise GmuxError("nothing to update")

    entry = config.entries[idx]
    if new_path is not None:
        entry = replace(entry, path=validate_directory(new_path))
    if editor is not None:
        normalized = _editor_arg(editor)
        if normalized is not None:
            config.default_editor = normalized
        entry = replace(entry, editor=normalized)
    config.entries[idx] = entry
    store.save(config)
    print(f"Updated {display_path(entry.path)}")


def cmd_remove(store: ConfigStore, target: str) -> None:
    config = store.load()
    idx = resolve_target(config.entries, target)
    removed = config.entries.pop(idx)
    store.save(config)
    print(f"Removed {display_path(removed.path)}")


def cmd_open(store: ConfigStore, target: str, editor: str | None) -> None:
    config = store.load()
    entry = config.entries[resolve_target(config.entries, target)]
    command = _editor_arg(editor) or entry.editor or config.default_editor
    launch_editor(command, entry.path)
    print(f"Opening {display_path(entry.path)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gmux",
        description="Jump into registered project directories with their git branch at a glance.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at debug level.")
    sub = parser.add_subparsers(dest="command")

    list_parser = sub.add_parser("list", help="List registered directories.")
    list_parser.add_argument("--json", action="store_true", help="Print entries as JSON.")

    add_parser = sub.add_parser("add", help="Register a directory.")
    add_parser.add_argument("path", help="Directory to register.")
    add_parser.add_argument("-e", "--editor", default=None, help="Editor command override.")

    edit_parser = sub.add_parser("edit", help="Edit an entry by index or path.")
    edit_parser.add_argument("target", help="Entry index (1-based) or path.")
    edit_parser.add_argument("--path", dest="new_path", default=None, help="New directory path.")
    edit_parser.add_argument("-e", "--editor", default=None, help="New editor command.")

    remove_parser = sub.add_parser("remove", help="Remove an entry by index or path.")
    remove_parser.add_argument("target", help="Entry index (1-based) or path.")

    open_parser = sub.add_parser("open", help="Launch the editor for an entry.")
    open_parser.add_argument("target", help="Entry index (1-based) or path.")
    open_parser.add_argument("-e", "--editor", default=None, help="Temporary editor override.")
    return parser


def run_command(args: argparse.Namespace, store: ConfigStore) -> None:
    if args.command == "list":
        cmd_list(store, args.json)
    elif args.command == "add":
        cmd_add(store, args.path, args.editor)
    elif args.command == "edit":
        cmd_edit(store, args.target, args.new_path, args.editor)
    elif args.command == "remove":
        cmd_remove(store, args.target)
    elif args.command == "open":
        cmd_open(store, args.target, args.editor)
    else:
        raise ValueError(f"unknown command: {args.command}")


def main(argv: list[str] | None = None, store: ConfigStore | None = None) -> int:
    """Parse arguments and run a subcommand or the interactive screen.

    Returns the process exit status. ``store`` is primarily for tests.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, args.verbose)
    store = store if store is not None else ConfigStore()

    try:
        if args.command is None:
            from .runtime import run_tui

            run_tui(store)
        else:
            run_command(args, store)
    except GmuxError as exc:
        print(f"gmux: {exc}", file=sys.stderr)
        return 1
    return 0
