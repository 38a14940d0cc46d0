"""Path helpers for user-entered directories.

Handles ``~`` expansion, canonical identity for deduplication, and the
home-relative form used in every user-facing message.
"""

from __future__ import annotations

from pathlib import Path

from .errors import ValidationError


def expand_path(raw: str) -> Path:
    """Expand a leading ``~/`` (or a bare ``~``) to the user's home directory."""
    if raw == "~":
        return Path.home()
    if raw.startswith("~/"):
        return Path.home() / raw[2:]
    return Path(raw)


def canonical_path(path: Path) -> Path:
    """Return the resolved path, or ``path`` unchanged when it does not exist."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path


def same_path(left: Path, right: Path) -> bool:
    return canonical_path(left) == canonical_path(right)


def _home_relative(path: Path, home: Path) -> str | None:
    try:
        relative = path.relative_to(home)
    except ValueError:
        return None
    text = relative.as_posix()
    if text in {"", "."}:
        return "~"
    return f"~/{text}"


def display_path(path: Path) -> str:
    """Render ``path`` relative to home when it lives under it."""
    home = Path.home()
    shown = _home_relative(path, home)
    if shown is not None:
        return shown
    canonical = canonical_path(path)
    if canonical != path:
        shown = _home_relative(canonical, canonical_path(home))
        if shown is not None:
            return shown
    return str(path)


def validate_directory(raw: str) -> Path:
    """Trim, expand, and check that ``raw`` names an existing directory.

    Raises ``ValidationError`` for blank input, missing paths, and paths that
    exist but are not directories.
    """
    text = raw.strip()
    if not text:
        raise ValidationError("directory path cannot be empty")
    path = expand_path(text)
    shown = display_path(path)
    if not path.exists():
        raise ValidationError(f"{shown} does not exist")
    if not path.is_dir():
        raise ValidationError(f"{shown} is not a directory")
    return path
