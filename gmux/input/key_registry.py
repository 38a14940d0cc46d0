"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key codes to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


def fold_char_case(code: str) -> str:
    """Lower-case single-character codes; named keys pass through."""
    return code.lower() if len(code) == 1 else code


class KeyComboRegistry:
    """Small key-dispatch table with optional key normalization strategy."""

    def __init__(self, normalize: Callable[[str], str] | None = None) -> None:
        """Initialize empty registry with optional code normalizer."""
        self._normalize = normalize if normalize is not None else self._identity
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    @staticmethod
    def _identity(code: str) -> str:
        """Return code unchanged for exact-match dispatch registries."""
        return code

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def __contains__(self, code: str) -> bool:
        return self._normalize(code) in self._handlers

    def dispatch(self, code: str) -> bool | None:
        """Invoke bound handler for ``code``.

        Returns ``None`` when nothing is bound, otherwise the handler result
        with a bare ``None`` promoted to ``True`` (handled).
        """
        handler = self._handlers.get(self._normalize(code))
        if handler is None:
            return None
        result = handler()
        return True if result is None else result
