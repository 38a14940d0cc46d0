"""Persistent JSON config for registered directories.

Stores the ordered entry list and the default editor command. Reads fall back
to the legacy ``quickswitch`` location; writes always go to the primary path.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from .errors import PersistenceError

logger = logging.getLogger(__name__)

APP_NAME = "gmux"
LEGACY_APP_NAME = "quickswitch"
CONFIG_FILENAME = "config.json"
CONFIG_PATH_ENV = "GMUX_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
LEGACY_CONFIG_PATH = Path(user_config_dir(LEGACY_APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class EntryConfig:
    path: Path
    editor: str | None = None


@dataclass
class AppConfig:
    entries: list[EntryConfig] = field(default_factory=list)
    default_editor: str | None = None

    def copy(self) -> AppConfig:
        return AppConfig(entries=list(self.entries), default_editor=self.default_editor)


def _optional_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def config_from_json(data: object) -> AppConfig:
    """Build ``AppConfig`` from decoded JSON.

    Entries without a string ``path`` are dropped; a non-string ``editor`` is
    treated as unset.
    """
    if not isinstance(data, dict):
        raise ValueError("top-level JSON value must be an object")
    raw_entries = data.get("entries", [])
    if not isinstance(raw_entries, list):
        raise ValueError("'entries' must be a list")

    entries: list[EntryConfig] = []
    for raw_entry in raw_entries:
        if not isinstance(raw_entry, dict):
            continue
        raw_path = raw_entry.get("path")
        if not isinstance(raw_path, str) or not raw_path:
            continue
        entries.append(EntryConfig(path=Path(raw_path), editor=_optional_str(raw_entry.get("editor"))))
    return AppConfig(entries=entries, default_editor=_optional_str(data.get("default_editor")))


def config_to_json(config: AppConfig) -> dict[str, object]:
    return {
        "entries": [{"path": str(entry.path), "editor": entry.editor} for entry in config.entries],
        "default_editor": config.default_editor,
    }


class ConfigStore:
    """Load and save ``AppConfig`` at a fixed location."""

    def __init__(self, path: Path | None = None, legacy_path: Path | None = LEGACY_CONFIG_PATH) -> None:
        if path is None:
            env_value = os.environ.get(CONFIG_PATH_ENV, "").strip()
            path = Path(env_value).expanduser() if env_value else DEFAULT_CONFIG_PATH
            if env_value:
                legacy_path = None
        self.path = path
        self.legacy_path = legacy_path

    def _read_path(self) -> Path | None:
        if self.path.exists():
            return self.path
        if self.legacy_path is not None and self.legacy_path.exists():
            return self.legacy_path
        return None

    def load(self) -> AppConfig:
        """Return the stored config, or an empty one when no file exists yet.

        Raises ``PersistenceError`` when the file cannot be read or parsed.
        """
        read_path = self._read_path()
        if read_path is None:
            return AppConfig()
        try:
            text = read_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PersistenceError(f"failed to read config at {read_path}: {exc}") from exc
        if not text.strip():
            return AppConfig()
        try:
            config = config_from_json(json.loads(text))
        except ValueError as exc:
            raise PersistenceError(f"failed to parse config at {read_path}: {exc}") from exc
        logger.debug("loaded %d entries from %s", len(config.entries), read_path)
        return config

    def save(self, config: AppConfig) -> None:
        """Write ``config`` as pretty-printed JSON, creating parent directories."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(config_to_json(config), indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"failed to write config at {self.path}: {exc}") from exc
        logger.debug("saved %d entries to %s", len(config.entries), self.path)
