"""Interactive runtime: terminal control, main loop, and TUI bootstrap.

Names resolve on first access so ``gmux.cli`` can import this package
without pulling in termios or the session engine.
"""

from __future__ import annotations

from importlib import import_module

_EXPORTS = {
    "run_tui": ".app",
    "build_session": ".app",
    "run_main_loop": ".loop",
    "RuntimeLoopCallbacks": ".loop",
    "RuntimeLoopTiming": ".loop",
    "TerminalController": ".terminal",
}


def __getattr__(name: str):
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    return getattr(import_module(module_name, __name__), name)


__all__ = sorted(_EXPORTS)
