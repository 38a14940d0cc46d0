"""Add/edit flows: capture a directory, then an editor command.

A flow owns no state of its own; it drives the session's mode, edit buffer,
and flow context, and commits the result through the session's store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import EntryConfig
from ..errors import GmuxError
from ..paths import display_path, same_path, validate_directory
from .state import (
    FLOW_ADD,
    FLOW_EDIT,
    STATUS_ERROR,
    STATUS_INFO,
    STEP_DIRECTORY,
    STEP_EDITOR,
    InputMode,
    NormalMode,
)

if TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger(__name__)


class FlowOrchestrator:
    """Two-step capture sequence shared by the add and edit flows."""

    def __init__(self, owner: Session) -> None:
        self.owner = owner

    def start_add(self) -> None:
        session = self.owner
        session.mode = InputMode(flow=FLOW_ADD, step=STEP_DIRECTORY)
        session.buffer.clear(kill_ring=True)
        session.flow_context.clear()
        session.set_status(STATUS_INFO, "Enter directory path")

    def start_edit(self) -> None:
        session = self.owner
        if not session.entries:
            return
        idx = min(session.selected, len(session.entries) - 1)
        entry = session.entries[idx]
        session.mode = InputMode(flow=FLOW_EDIT, step=STEP_DIRECTORY)
        session.buffer.clear(kill_ring=True)
        session.buffer.set_text(str(entry.path))
        session.flow_context.clear()
        session.flow_context.pending_path = entry.path
        session.flow_context.editing_index = idx
        session.set_status(STATUS_INFO, "Edit directory path and press enter")

    def cancel(self) -> None:
        session = self.owner
        session.mode = NormalMode()
        session.buffer.clear(kill_ring=True)
        session.flow_context.clear()
        session.clear_status()

    def editor_prefill(self, flow: str) -> str:
        """Initial editor-step text: entry override, stored default, then environment."""
        session = self.owner
        if flow == FLOW_EDIT:
            idx = session.flow_context.editing_index
            if idx is not None and 0 <= idx < len(session.config.entries):
                override = session.config.entries[idx].editor
                if override:
                    return override
        if session.config.default_editor:
            return session.config.default_editor
        return session.env_editor() or ""

    def complete_directory_step(self, flow: str) -> None:
        session = self.owner
        path = validate_directory(session.buffer.text)
        session.flow_context.pending_path = path
        session.mode = InputMode(flow=flow, step=STEP_EDITOR)
        session.buffer.set_text(self.editor_prefill(flow))
        if flow == FLOW_ADD:
            message = "Set editor command (enter to accept current value)"
        else:
            message = "Edit editor command (enter to accept current value)"
        session.set_status(STATUS_INFO, message)

    def complete_editor_step(self, flow: str) -> None:
        session = self.owner
        path = session.flow_context.pending_path
        if path is None:
            raise GmuxError("no directory captured")

        command = session.buffer.text.strip()
        editor = command if command else None
        config = session.config.copy()
        if editor is not None:
            config.default_editor = editor
        entry = EntryConfig(path=path, editor=editor)

        if flow == FLOW_ADD:
            match_idx = next(
                (idx for idx, existing in enumerate(config.entries) if same_path(existing.path, path)),
                None,
            )
            if match_idx is None:
                config.entries.append(entry)
            else:
                config.entries[match_idx] = entry
            session.commit_config(config, select_path=path)
            message = f"Registered {display_path(path)}"
        else:
            idx = session.flow_context.editing_index
            if idx is None:
                raise GmuxError("no entry selected to edit")
            if not 0 <= idx < len(config.entries):
                raise GmuxError("invalid entry index")
            config.entries[idx] = entry
            session.commit_config(config, select_path=path, fallback_index=idx)
            message = f"Updated {display_path(path)}"

        logger.info("%s flow committed %s", flow, path)
        session.mode = NormalMode()
        session.buffer.clear()
        session.flow_context.clear()
        session.set_status(STATUS_INFO, message)

    def submit(self, flow: str, step: str) -> None:
        """Complete the current step, reporting failures in place."""
        try:
            if step == STEP_DIRECTORY:
                self.complete_directory_step(flow)
            else:
                self.complete_editor_step(flow)
        except GmuxError as exc:
            self.owner.set_status(STATUS_ERROR, str(exc))
