"""Per-mode key dispatch chains.

Each mode gets an ordered list of matchers, one per modifier class. The first
matcher whose class applies to the event and which has a binding for its code
wins; later classes are only consulted when earlier ones did not handle it.
Input mode checks ctrl, then super/meta, then alt, then plain keys.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING

from ..input.key_registry import KeyComboBinding, KeyComboRegistry, fold_char_case
from ..input.keys import (
    ALT,
    BACKSPACE,
    CTRL,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    LEFT,
    META,
    RIGHT,
    SUPER,
    UP,
    KeyEvent,
)
from .state import MAX_HOTKEYS

if TYPE_CHECKING:
    from .session import Session


def _has_ctrl(event: KeyEvent) -> bool:
    return event.has(CTRL)


def _has_super_or_meta(event: KeyEvent) -> bool:
    return event.has(SUPER) or event.has(META)


def _has_alt(event: KeyEvent) -> bool:
    return event.has(ALT)


def _is_plain(event: KeyEvent) -> bool:
    return event.is_plain


@dataclass(frozen=True)
class ModifierMatcher:
    """Bindings that apply only when ``applies(event)`` holds."""

    name: str
    applies: Callable[[KeyEvent], bool]
    registry: KeyComboRegistry


class KeyChain:
    """Ordered matcher chain with an optional catch-all for unbound keys."""

    def __init__(
        self,
        matchers: list[ModifierMatcher],
        fallback: Callable[[KeyEvent], bool] | None = None,
    ) -> None:
        self.matchers = matchers
        self.fallback = fallback

    def matcher_for(self, event: KeyEvent) -> str | None:
        """Name of the matcher class that would handle ``event``, if any."""
        for matcher in self.matchers:
            if matcher.applies(event) and event.code in matcher.registry:
                return matcher.name
        return None

    def dispatch(self, event: KeyEvent) -> bool:
        for matcher in self.matchers:
            if not matcher.applies(event):
                continue
            if matcher.registry.dispatch(event.code):
                return True
        if self.fallback is not None:
            return self.fallback(event)
        return False


def _registry(*bindings: KeyComboBinding) -> KeyComboRegistry:
    return KeyComboRegistry(normalize=fold_char_case).register_bindings(*bindings)


def build_normal_chain(session: Session) -> KeyChain:
    """Browsing keys: selection, hotkeys, launch, and flow entry points."""
    ctrl = _registry(
        KeyComboBinding(("n",), session.move_selection_down),
        KeyComboBinding(("p",), session.move_selection_up),
    )
    plain = KeyComboRegistry().register_bindings(
        KeyComboBinding(("q", ESC), session.request_quit),
        KeyComboBinding(("r",), session.refresh_statuses),
        KeyComboBinding(("d",), session.request_remove),
        KeyComboBinding(("a",), session.flows.start_add),
        KeyComboBinding(("e",), session.flows.start_edit),
        KeyComboBinding(("j", DOWN), session.move_selection_down),
        KeyComboBinding(("k", UP), session.move_selection_up),
        KeyComboBinding((ENTER,), session.launch_selected),
    )
    for slot in range(MAX_HOTKEYS):
        plain.register_binding(KeyComboBinding((str(slot + 1),), partial(session.launch_hotkey, slot)))
    return KeyChain(
        [
            ModifierMatcher("ctrl", _has_ctrl, ctrl),
            ModifierMatcher("plain", _is_plain, plain),
        ]
    )


def build_input_chain(session: Session) -> KeyChain:
    """Line-editing keys for the add/edit prompts."""
    buffer = session.buffer
    ctrl = _registry(
        KeyComboBinding(("a", HOME), buffer.move_to_start),
        KeyComboBinding(("e", END), buffer.move_to_end),
        KeyComboBinding(("b",), buffer.move_left),
        KeyComboBinding(("f",), buffer.move_right),
        KeyComboBinding(("d",), buffer.delete_after),
        KeyComboBinding(("h",), buffer.delete_before),
        KeyComboBinding(("k",), buffer.kill_to_end),
        KeyComboBinding(("u",), buffer.kill_to_start),
        KeyComboBinding(("w", BACKSPACE), buffer.kill_word_backward),
        KeyComboBinding(("y",), buffer.yank),
        KeyComboBinding(("g",), session.flows.cancel),
        KeyComboBinding(("j", "m", ENTER), session.submit_flow_step),
        KeyComboBinding((LEFT,), buffer.move_word_left),
        KeyComboBinding((RIGHT,), buffer.move_word_right),
        KeyComboBinding((DELETE,), buffer.kill_word_forward),
    )
    super_meta = _registry(
        KeyComboBinding((BACKSPACE,), buffer.kill_to_start),
    )
    alt = _registry(
        KeyComboBinding(("b", LEFT), buffer.move_word_left),
        KeyComboBinding(("f", RIGHT), buffer.move_word_right),
        KeyComboBinding(("d", DELETE), buffer.kill_word_forward),
        KeyComboBinding((BACKSPACE,), buffer.kill_word_backward),
    )
    plain = KeyComboRegistry().register_bindings(
        KeyComboBinding((ESC,), session.flows.cancel),
        KeyComboBinding((ENTER,), session.submit_flow_step),
        KeyComboBinding((BACKSPACE,), buffer.delete_before),
        KeyComboBinding((DELETE,), buffer.delete_after),
        KeyComboBinding((LEFT,), buffer.move_left),
        KeyComboBinding((RIGHT,), buffer.move_right),
        KeyComboBinding((HOME,), buffer.move_to_start),
        KeyComboBinding((END,), buffer.move_to_end),
    )

    def insert_char(event: KeyEvent) -> bool:
        if not (event.is_plain and event.is_char and event.code.isprintable()):
            return False
        buffer.insert(event.code)
        return True

    return KeyChain(
        [
            ModifierMatcher("ctrl", _has_ctrl, ctrl),
            ModifierMatcher("super", _has_super_or_meta, super_meta),
            ModifierMatcher("alt", _has_alt, alt),
            ModifierMatcher("plain", _is_plain, plain),
        ],
        fallback=insert_char,
    )


def build_confirm_chain(session: Session) -> KeyChain:
    """Yes/no keys while a removal awaits confirmation."""
    ctrl = _registry(
        KeyComboBinding(("j", "m"), session.confirm_remove),
    )
    plain = KeyComboRegistry().register_bindings(
        KeyComboBinding((ENTER,), session.confirm_remove),
        KeyComboBinding((ESC,), session.cancel_remove),
    )
    return KeyChain(
        [
            ModifierMatcher("ctrl", _has_ctrl, ctrl),
            ModifierMatcher("plain", _is_plain, plain),
        ]
    )
