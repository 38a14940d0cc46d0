"""Rendering engine for the directory list screen.

Builds fully composed ANSI frames from a ``SessionSnapshot`` and writes them
to the terminal. Nothing here mutates session state.
"""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from ..ansi import display_width, fit_ansi_line, sanitize_terminal_text, style
from ..git_status import (
    BranchError,
    BranchMissing,
    BranchNotGit,
    BranchReady,
    BranchStatus,
    BranchUnknown,
)
from ..paths import display_path
from ..session.state import (
    FLOW_ADD,
    FLOW_EDIT,
    MAX_HOTKEYS,
    STEP_DIRECTORY,
    STEP_EDITOR,
    ConfirmDeleteMode,
    Entry,
    InputMode,
    NormalMode,
    SessionSnapshot,
)

BOTTOM_PANEL_ROWS = 5
MIN_LIST_ROWS = 3

TITLE_SGR = "1;37"
ACCENT_SGR = "38;2;120;170;255"
MUTED_SGR = "38;2;150;150;150"
ADDED_SGR = "32"
REMOVED_SGR = "31"
WARNING_SGR = "33"
UNKNOWN_SGR = "90"
INFO_PREFIX = style("✔ ", "92")
ERROR_PREFIX = style("✖ ", "31")

HEADER_HINT = "  numbers open • j/k or ctrl-n/p move • a add • e edit • d delete (enter) • r refresh"
NORMAL_HINT = "Press number to open • j/k or ctrl-n/p move • a add • e edit • d delete (enter to confirm) • q quit"
INPUT_PANELS = {
    (FLOW_ADD, STEP_DIRECTORY): ("Add Directory", "Enter to confirm • Esc/Ctrl+G to cancel"),
    (FLOW_ADD, STEP_EDITOR): ("Editor Command", "Enter to accept • Ctrl+A/E/B/F etc. • Esc/Ctrl+G cancels"),
    (FLOW_EDIT, STEP_DIRECTORY): ("Edit Directory", "Update path • Enter to confirm • Esc/Ctrl+G cancels"),
    (FLOW_EDIT, STEP_EDITOR): ("Edit Editor Command", "Enter to accept • Ctrl+A/E/B/F etc. • Esc/Ctrl+G cancels"),
}


def _shown_path(path: Path) -> str:
    return sanitize_terminal_text(display_path(path))


def branch_label(status: BranchStatus) -> str:
    if isinstance(status, BranchReady):
        label = style(sanitize_terminal_text(status.name), ACCENT_SGR)
        parts: list[str] = []
        if status.additions > 0:
            parts.append(style(f"+{status.additions}", ADDED_SGR))
        if status.deletions > 0:
            parts.append(style(f"-{status.deletions}", REMOVED_SGR))
        if parts:
            label += f" ({' '.join(parts)})"
        return label
    if isinstance(status, BranchMissing):
        return style(status.text(), REMOVED_SGR)
    if isinstance(status, BranchNotGit):
        return style(status.text(), WARNING_SGR)
    if isinstance(status, BranchError):
        return style(sanitize_terminal_text(status.text()), REMOVED_SGR)
    if isinstance(status, BranchUnknown):
        return style(status.text(), UNKNOWN_SGR)
    raise TypeError(f"unhandled branch status: {status!r}")


def format_entry_line(index: int, entry: Entry, selected: bool) -> str:
    hotkey = f"{index + 1}." if index < MAX_HOTKEYS else "·"
    parts = [
        style(hotkey, ACCENT_SGR if selected else ""),
        " ",
        _shown_path(entry.path),
        "  ",
        branch_label(entry.status),
    ]
    if entry.editor:
        parts.extend(["  ", style(sanitize_terminal_text(entry.editor), MUTED_SGR)])
    if selected:
        parts.extend(["  ", style("*", ACCENT_SGR)])
    return "".join(parts)


def _box(title: str, body: list[str], width: int, height: int) -> list[str]:
    inner = max(0, width - 2)
    title_text = f" {title} "
    filler = max(0, inner - 1 - display_width(title_text))
    rows = [f"┌─{style(title_text, TITLE_SGR)}{'─' * filler}┐"]
    for row in range(max(0, height - 2)):
        line = body[row] if row < len(body) else ""
        rows.append(f"│{fit_ansi_line(line, inner)}│")
    rows.append(f"└{'─' * inner}┘")
    return rows


def list_panel_rows(snapshot: SessionSnapshot, width: int, height: int) -> list[str]:
    visible = max(1, height - 2)
    if not snapshot.entries:
        body = ["No directories registered yet (press 'a' to add)"]
    else:
        start = max(0, snapshot.selected - visible + 1)
        body = [
            format_entry_line(idx, snapshot.entries[idx], idx == snapshot.selected)
            for idx in range(start, min(len(snapshot.entries), start + visible))
        ]
    return _box("Registered directories", body, width, height)


def _input_view(text: str, cursor: int, width: int) -> tuple[str, int]:
    """Scroll the input horizontally so the cursor stays visible."""
    start = 0
    while start < cursor and display_width(text[start:cursor]) > max(0, width - 1):
        start += 1
    return text[start:], display_width(text[start:cursor])


def bottom_panel(snapshot: SessionSnapshot, width: int) -> tuple[list[str], tuple[int, int] | None]:
    """Return panel rows and the cursor cell (row, column) within the panel."""
    mode = snapshot.mode
    inner = max(0, width - 2)
    if isinstance(mode, NormalMode):
        status = snapshot.status
        if status is None:
            body = [NORMAL_HINT]
        else:
            prefix = ERROR_PREFIX if status.is_error else INFO_PREFIX
            body = [f"{prefix}{sanitize_terminal_text(status.text)}"]
        return _box("Status", body, width, BOTTOM_PANEL_ROWS), None
    if isinstance(mode, InputMode):
        title, hint = INPUT_PANELS[(mode.flow, mode.step)]
        visible_text, cursor_col = _input_view(snapshot.buffer_text, snapshot.buffer_cursor, inner)
        body = [style(hint, MUTED_SGR), visible_text]
        if snapshot.status is not None and snapshot.status.is_error:
            body.append(f"{ERROR_PREFIX}{sanitize_terminal_text(snapshot.status.text)}")
        cursor = (2, 1 + min(cursor_col, max(0, inner - 1)))
        return _box(title, body, width, BOTTOM_PANEL_ROWS), cursor
    if isinstance(mode, ConfirmDeleteMode):
        if 0 <= mode.index < len(snapshot.entries):
            shown = _shown_path(snapshot.entries[mode.index].path)
        else:
            shown = "<unknown>"
        body = [f"Remove {shown}?", style("Press Enter to confirm or Esc to cancel", MUTED_SGR)]
        return _box("Confirm Removal", body, width, BOTTOM_PANEL_ROWS), None
    raise TypeError(f"unhandled mode: {mode!r}")


def build_frame(snapshot: SessionSnapshot, width: int, height: int) -> str:
    """Compose one full-screen frame, including cursor placement."""
    width = max(4, width)
    list_rows = max(MIN_LIST_ROWS, height - 1 - BOTTOM_PANEL_ROWS)
    header = fit_ansi_line(f"{style('gmux', TITLE_SGR)}{HEADER_HINT}", width)
    rows = [header, *list_panel_rows(snapshot, width, list_rows)]
    panel_top = len(rows)
    panel, cursor = bottom_panel(snapshot, width)
    rows.extend(panel)

    out = ["\033[H\033[J", "\r\n".join(rows)]
    if cursor is not None:
        row, col = cursor
        out.append(f"\033[{panel_top + row + 1};{col + 1}H\033[?25h")
    else:
        out.append("\033[?25l")
    return "".join(out)


def render_screen(snapshot: SessionSnapshot, stdout_fd: int | None = None) -> None:
    term = shutil.get_terminal_size((80, 24))
    fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    frame = build_frame(snapshot, term.columns, term.lines)
    os.write(fd, frame.encode("utf-8", errors="replace"))
