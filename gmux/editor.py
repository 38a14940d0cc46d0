"""Editor command resolution and launch.

The editor is started detached from the TUI's terminal and is never waited
on. Launch problems raise ``SpawnError`` for UI-friendly reporting.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

from .errors import SpawnError
from .paths import display_path

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS: tuple[str, ...] = ("GMUX_EDITOR", "QUICKSWITCH_EDITOR", "EDITOR", "VISUAL")


def editor_from_environment() -> str | None:
    """Return the first non-empty editor command from ``EDITOR_ENV_VARS``."""
    for name in EDITOR_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def resolve_editor_command(override: str | None) -> str | None:
    if override:
        return override
    return editor_from_environment()


def launch_editor(command: str | None, path: Path) -> None:
    """Start ``command`` with ``path`` appended as its last argument."""
    command_string = resolve_editor_command(command)
    if not command_string:
        raise SpawnError(
            "no editor set. provide one in the entry or set "
            + "/".join(EDITOR_ENV_VARS[:-1])
        )
    try:
        parts = shlex.split(command_string)
    except ValueError as exc:
        raise SpawnError(f"failed to parse editor command: {command_string}") from exc
    if not parts:
        raise SpawnError("editor command is empty")

    program = parts[0]
    try:
        subprocess.Popen(
            [*parts, str(path)],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as exc:
        raise SpawnError(f"failed to launch editor `{program}` for {display_path(path)}: {exc}") from exc
    logger.info("launched %s for %s", program, path)
