"""Error hierarchy shared by the session engine and the one-shot CLI."""

from __future__ import annotations


class GmuxError(RuntimeError):
    """Base error for gmux."""


class ValidationError(GmuxError):
    """Raised when user input fails validation."""


class PersistenceError(GmuxError):
    """Raised when the config file cannot be read or written."""


class ProbeError(GmuxError):
    """Raised when a git status query fails."""


class SpawnError(GmuxError):
    """Raised when the editor command cannot be started."""


class EntryNotFoundError(GmuxError):
    """Raised when a CLI target matches no registered entry."""


__all__ = [
    "GmuxError",
    "ValidationError",
    "PersistenceError",
    "ProbeError",
    "SpawnError",
    "EntryNotFoundError",
]
