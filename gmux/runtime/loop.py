"""Main interactive event loop for the terminal UI.

Interleaves key handling with the periodic branch-status refresh on a single
thread. The only blocking point is the wait for input, bounded by the time
left until the next refresh tick.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyEvent, read_key
from ..session import Session, SessionSnapshot
from .terminal import TerminalController

logger = logging.getLogger(__name__)

BRANCH_REFRESH_SECONDS = 0.5
STATUS_TIMEOUT_SECONDS = 3.0


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    refresh_interval_seconds: float = BRANCH_REFRESH_SECONDS
    status_timeout_seconds: float = STATUS_TIMEOUT_SECONDS


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected I/O used by ``run_main_loop``."""

    render: Callable[[SessionSnapshot], None]
    read_key: Callable[[int, float | None], KeyEvent | None] = read_key


def run_main_loop(
    session: Session,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until the session asks to quit.

    Each iteration expires stale status text, renders, waits for one key up
    to the next tick deadline, dispatches it, and refreshes branch statuses
    once the tick interval has elapsed.
    """
    session.refresh_statuses()
    last_tick = time.monotonic()
    logger.info("interactive session started with %d entries", len(session.entries))

    with terminal.raw_mode():
        while True:
            session.expire_status(timing.status_timeout_seconds, now=time.monotonic())
            callbacks.render(session.snapshot())

            remaining = timing.refresh_interval_seconds - (time.monotonic() - last_tick)
            try:
                event = callbacks.read_key(stdin_fd, max(0.0, remaining) * 1000.0)
            except KeyboardInterrupt:
                session.request_quit()
                event = None
            if event is not None:
                session.handle_key(event)
            if session.should_quit:
                break

            if time.monotonic() - last_tick >= timing.refresh_interval_seconds:
                session.refresh_statuses()
                last_tick = time.monotonic()

    logger.info("interactive session ended")
