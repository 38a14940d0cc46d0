"""Interactive session state machine.

Owns the entry list, selection, mode, edit buffer, flow context, and status
message. Every key event enters through ``Session.handle_key``; the mode
decides which key chain receives it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from ..config import AppConfig, ConfigStore
from ..editor import editor_from_environment, launch_editor
from ..errors import GmuxError, SpawnError
from ..git_status import GitProber, branch_status_for
from ..input.keys import CTRL, KeyEvent
from ..line_editor import EditBuffer
from ..paths import display_path, same_path
from .flows import FlowOrchestrator
from .keymap import build_confirm_chain, build_input_chain, build_normal_chain
from .state import (
    STATUS_ERROR,
    STATUS_INFO,
    ConfirmDeleteMode,
    Entry,
    FlowContext,
    InputMode,
    Mode,
    NormalMode,
    SessionSnapshot,
    StatusMessage,
)

logger = logging.getLogger(__name__)


def _is_interrupt(event: KeyEvent) -> bool:
    return event.has(CTRL) and event.code.lower() == "c"


class Session:
    """Mode state machine driven one key event at a time."""

    def __init__(
        self,
        store: ConfigStore,
        prober: GitProber,
        config: AppConfig | None = None,
        *,
        launcher: Callable[[str | None, Path], None] = launch_editor,
        env_editor: Callable[[], str | None] = editor_from_environment,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.store = store
        self.prober = prober
        self.launcher = launcher
        self.env_editor = env_editor
        self.clock = clock
        self.config = config if config is not None else AppConfig()
        self.entries: list[Entry] = []
        self.selected = 0
        self.mode: Mode = NormalMode()
        self.buffer = EditBuffer()
        self.flow_context = FlowContext()
        self.status: StatusMessage | None = None
        self.should_quit = False
        self.flows = FlowOrchestrator(self)
        self._sync_entries()
        self._normal_keys = build_normal_chain(self)
        self._input_keys = build_input_chain(self)
        self._confirm_keys = build_confirm_chain(self)

    # Status messages

    def set_status(self, kind: str, text: str) -> None:
        self.status = StatusMessage(text=text, kind=kind, created_at=self.clock())

    def clear_status(self) -> None:
        self.status = None

    def expire_status(self, timeout_seconds: float, now: float | None = None) -> bool:
        """Drop a stale status message; only Normal mode messages expire."""
        if self.status is None or not isinstance(self.mode, NormalMode):
            return False
        if now is None:
            now = self.clock()
        if now - self.status.created_at < timeout_seconds:
            return False
        self.status = None
        return True

    # Key dispatch

    def handle_key(self, event: KeyEvent) -> None:
        if _is_interrupt(event):
            self.request_quit()
            return
        mode = self.mode
        if isinstance(mode, NormalMode):
            self._normal_keys.dispatch(event)
        elif isinstance(mode, InputMode):
            self._input_keys.dispatch(event)
        elif isinstance(mode, ConfirmDeleteMode):
            self._confirm_keys.dispatch(event)
        else:
            raise TypeError(f"unhandled mode: {mode!r}")

    def request_quit(self) -> None:
        self.should_quit = True

    def submit_flow_step(self) -> None:
        mode = self.mode
        if isinstance(mode, InputMode):
            self.flows.submit(mode.flow, mode.step)

    # Selection

    def move_selection_up(self) -> None:
        if not self.entries:
            return
        self.selected = (self.selected - 1) % len(self.entries)

    def move_selection_down(self) -> None:
        if not self.entries:
            return
        self.selected = (self.selected + 1) % len(self.entries)

    def _clamp_selection(self) -> None:
        if not self.entries:
            self.selected = 0
        else:
            self.selected = max(0, min(self.selected, len(self.entries) - 1))

    def _reselect(self, path: Path | None, fallback_index: int | None) -> None:
        if not self.entries:
            self.selected = 0
            return
        if path is not None:
            for idx, entry in enumerate(self.entries):
                if same_path(entry.path, path):
                    self.selected = idx
                    return
        if fallback_index is not None and 0 <= fallback_index < len(self.entries):
            self.selected = fallback_index
            return
        self._clamp_selection()

    # Entries

    def _sync_entries(self) -> None:
        self.entries = [Entry(config=entry) for entry in self.config.entries]
        self._clamp_selection()

    def refresh_statuses(self) -> None:
        """Recompute every entry's branch status in registration order."""
        for idx, entry in enumerate(self.entries):
            self.entries[idx] = entry.with_status(branch_status_for(entry.path, self.prober))

    def commit_config(
        self,
        config: AppConfig,
        select_path: Path | None = None,
        fallback_index: int | None = None,
    ) -> None:
        """Persist ``config`` and rebuild the entry projection from it.

        A failed save raises ``PersistenceError`` and leaves the session's
        config and entries untouched.
        """
        self.store.save(config)
        self.config = config
        self._sync_entries()
        self.refresh_statuses()
        self._reselect(select_path, fallback_index)

    def request_remove(self) -> None:
        if not self.entries:
            return
        idx = min(self.selected, len(self.entries) - 1)
        self.mode = ConfirmDeleteMode(index=idx)
        shown = display_path(self.entries[idx].path)
        self.set_status(STATUS_INFO, f"Press Enter to remove {shown} or Esc to cancel")

    def remove_entry(self, index: int) -> Path:
        if not 0 <= index < len(self.config.entries):
            raise GmuxError("invalid entry index")
        config = self.config.copy()
        removed = config.entries.pop(index)
        self.commit_config(config)
        logger.info("removed %s", removed.path)
        return removed.path

    def confirm_remove(self) -> None:
        mode = self.mode
        if not isinstance(mode, ConfirmDeleteMode):
            return
        try:
            removed = self.remove_entry(mode.index)
        except GmuxError as exc:
            self.set_status(STATUS_ERROR, str(exc))
        else:
            self.set_status(STATUS_INFO, f"Removed {display_path(removed)}")
        self.mode = NormalMode()

    def cancel_remove(self) -> None:
        self.mode = NormalMode()
        self.clear_status()

    # Launching

    def launch_index(self, index: int) -> None:
        if not 0 <= index < len(self.entries):
            return
        entry = self.entries[index]
        command = entry.editor or self.config.default_editor
        try:
            self.launcher(command, entry.path)
        except SpawnError as exc:
            logger.warning("launch failed for %s: %s", entry.path, exc)
            self.set_status(STATUS_ERROR, str(exc))
            return
        self.set_status(STATUS_INFO, f"Opened {display_path(entry.path)}")

    def launch_selected(self) -> None:
        self.launch_index(self.selected)

    def launch_hotkey(self, slot: int) -> None:
        if slot >= len(self.entries):
            return
        self.selected = slot
        self.launch_index(slot)

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            mode=self.mode,
            entries=tuple(self.entries),
            selected=self.selected,
            buffer_text=self.buffer.text,
            buffer_cursor=self.buffer.cursor,
            status=self.status,
        )
