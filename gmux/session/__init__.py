"""Interactive session engine: modes, flows, and key dispatch."""

from .flows import FlowOrchestrator
from .session import Session
from .state import (
    FLOW_ADD,
    FLOW_EDIT,
    STATUS_ERROR,
    STATUS_INFO,
    STEP_DIRECTORY,
    STEP_EDITOR,
    ConfirmDeleteMode,
    Entry,
    FlowContext,
    InputMode,
    Mode,
    NormalMode,
    SessionSnapshot,
    StatusMessage,
)

__all__ = [
    "Session",
    "FlowOrchestrator",
    "FLOW_ADD",
    "FLOW_EDIT",
    "STEP_DIRECTORY",
    "STEP_EDITOR",
    "STATUS_INFO",
    "STATUS_ERROR",
    "NormalMode",
    "InputMode",
    "ConfirmDeleteMode",
    "Mode",
    "Entry",
    "FlowContext",
    "StatusMessage",
    "SessionSnapshot",
]
