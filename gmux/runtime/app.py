"""Interactive runtime bootstrap.

Loads the stored config, builds the session with its collaborators, and
hands control to the main loop inside a raw-mode terminal.
"""

from __future__ import annotations

import logging
import sys

from ..config import ConfigStore
from ..errors import PersistenceError
from ..git_status import GitProber
from ..render import render_screen
from ..session import STATUS_ERROR, Session
from .loop import RuntimeLoopCallbacks, RuntimeLoopTiming, run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_session(store: ConfigStore, prober: GitProber | None = None) -> Session:
    """Create a session from ``store``; an unreadable config starts empty."""
    prober = prober if prober is not None else GitProber()
    try:
        config = store.load()
    except PersistenceError as exc:
        logger.warning("starting with empty config: %s", exc)
        session = Session(store, prober)
        session.set_status(STATUS_ERROR, str(exc))
        return session
    return Session(store, prober, config)


def run_tui(store: ConfigStore | None = None) -> None:
    """Run the interactive screen until the user quits."""
    if not sys.stdin.isatty():
        raise SystemExit("gmux: interactive mode requires a terminal")
    session = build_session(store if store is not None else ConfigStore())
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    run_main_loop(
        session,
        terminal,
        stdin_fd,
        RuntimeLoopTiming(),
        RuntimeLoopCallbacks(render=lambda snapshot: render_screen(snapshot, stdout_fd)),
    )
