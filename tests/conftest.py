"""Pytest bootstrap for local source imports.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure ``import gmux`` resolves to the local package, and
keep user-level config and editor settings out of every test.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    for name in ("GMUX_EDITOR", "QUICKSWITCH_EDITOR", "EDITOR", "VISUAL", "GMUX_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("GMUX_CONFIG", str(tmp_path / "gmux-config.json"))
