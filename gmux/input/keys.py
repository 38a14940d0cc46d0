"""Normalized key events produced by the terminal reader."""

from __future__ import annotations

from dataclasses import dataclass

CTRL = "ctrl"
ALT = "alt"
SHIFT = "shift"
SUPER = "super"
META = "meta"

MODIFIER_ORDER: tuple[str, ...] = (CTRL, SUPER, META, ALT, SHIFT)

ENTER = "ENTER"
ESC = "ESC"
TAB = "TAB"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
INSERT = "INSERT"
LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"


@dataclass(frozen=True)
class KeyEvent:
    """One key press: a code plus the set of held modifiers.

    ``code`` is either a single character or one of the upper-case key names
    defined in this module.
    """

    code: str
    modifiers: frozenset[str] = frozenset()

    def has(self, modifier: str) -> bool:
        return modifier in self.modifiers

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    @property
    def is_plain(self) -> bool:
        """True when no modifier other than shift is held."""
        return not (self.modifiers - {SHIFT})

    def token(self) -> str:
        mods = [mod for mod in MODIFIER_ORDER if mod in self.modifiers]
        return "+".join([*mods, self.code])

    @classmethod
    def parse(cls, token: str) -> KeyEvent:
        """Build an event from ``"ctrl+a"``-style tokens (used by bindings and tests)."""
        if token.endswith("++") or token == "+":
            head, code = token[:-2], "+"
        else:
            head, _, code = token.rpartition("+")
        modifiers = frozenset(part for part in head.split("+") if part)
        unknown = modifiers - set(MODIFIER_ORDER)
        if unknown:
            raise ValueError(f"unknown modifier(s) in {token!r}: {', '.join(sorted(unknown))}")
        return cls(code=code, modifiers=modifiers)


def key(code: str, *modifiers: str) -> KeyEvent:
    return KeyEvent(code=code, modifiers=frozenset(modifiers))
