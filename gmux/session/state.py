"""Session data model: modes, entries, flow context, and status messages.

Modes are a tagged union of frozen dataclasses; dispatch sites match on the
concrete type so impossible flag combinations cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Union

from ..config import EntryConfig
from ..git_status import BranchStatus, BranchUnknown

FLOW_ADD = "add"
FLOW_EDIT = "edit"
STEP_DIRECTORY = "directory"
STEP_EDITOR = "editor"

STATUS_INFO = "info"
STATUS_ERROR = "error"

MAX_HOTKEYS = 9


@dataclass(frozen=True)
class NormalMode:
    pass


@dataclass(frozen=True)
class InputMode:
    flow: str
    step: str


@dataclass(frozen=True)
class ConfirmDeleteMode:
    index: int


Mode = Union[NormalMode, InputMode, ConfirmDeleteMode]


@dataclass(frozen=True)
class Entry:
    """Registered directory plus its most recently probed branch status."""

    config: EntryConfig
    status: BranchStatus = field(default_factory=BranchUnknown)

    @property
    def path(self) -> Path:
        return self.config.path

    @property
    def editor(self) -> str | None:
        return self.config.editor

    def with_status(self, status: BranchStatus) -> Entry:
        return replace(self, status=status)


@dataclass
class FlowContext:
    """Values captured by an in-progress add/edit flow."""

    pending_path: Path | None = None
    editing_index: int | None = None

    def clear(self) -> None:
        self.pending_path = None
        self.editing_index = None


@dataclass(frozen=True)
class StatusMessage:
    text: str
    kind: str
    created_at: float

    @property
    def is_error(self) -> bool:
        return self.kind == STATUS_ERROR


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of everything the renderer draws."""

    mode: Mode
    entries: tuple[Entry, ...]
    selected: int
    buffer_text: str
    buffer_cursor: int
    status: StatusMessage | None
