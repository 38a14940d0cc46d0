"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into ``KeyEvent`` values.
Handles ESC-sequence timing, CSI modifier parameters, the kitty ``CSI u``
keyboard protocol, and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

from .keys import (
    ALT,
    BACKSPACE,
    CTRL,
    DELETE,
    DOWN,
    END,
    ENTER,
    ESC,
    HOME,
    INSERT,
    LEFT,
    META,
    PAGE_DOWN,
    PAGE_UP,
    RIGHT,
    SHIFT,
    SUPER,
    TAB,
    UP,
    KeyEvent,
    key,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
CSI_MAX_LENGTH = 32
_PENDING_BYTES: list[bytes] = []

_CSI_FINAL_KEYS = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
    b"H": HOME,
    b"F": END,
}
_CSI_TILDE_KEYS = {
    1: HOME,
    2: INSERT,
    3: DELETE,
    4: END,
    5: PAGE_UP,
    6: PAGE_DOWN,
    7: HOME,
    8: END,
}
_CSI_U_KEYS = {
    9: TAB,
    13: ENTER,
    27: ESC,
    127: BACKSPACE,
}
_MODIFIER_BITS = (
    (1, SHIFT),
    (2, ALT),
    (4, CTRL),
    (8, SUPER),
    (32, META),
)


def _read_ready_byte(fd: int, timeout_ms: float) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_char(fd: int, first: bytes) -> str:
    data = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        if nxt[0] & 0xC0 != 0x80:
            _PENDING_BYTES.insert(0, nxt)
            break
        data += nxt
    return bytes(data).decode("utf-8", errors="replace")


def _decode_modifiers(param: str) -> frozenset[str]:
    """Decode an xterm modifier parameter (``1 + bitmask``)."""
    try:
        value = int(param.split(":", 1)[0]) - 1
    except ValueError:
        return frozenset()
    if value <= 0:
        return frozenset()
    return frozenset(name for bit, name in _MODIFIER_BITS if value & bit)


def _decode_control_byte(value: int) -> KeyEvent:
    if value == 0x0D:
        return key(ENTER)
    if value == 0x09:
        return key(TAB)
    if value == 0x7F:
        return key(BACKSPACE)
    if value == 0x00:
        return key(" ", CTRL)
    if value <= 0x1A:
        return key(chr(value + 0x60), CTRL)
    return key(chr(value + 0x40), CTRL)


def _decode_csi(fd: int) -> KeyEvent | None:
    params = bytearray()
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return key(ESC)
        if 0x40 <= part[0] <= 0x7E:
            final = part
            break
        params += part
        if len(params) > CSI_MAX_LENGTH:
            return None

    fields = params.decode("ascii", errors="replace").split(";")
    modifiers = _decode_modifiers(fields[1]) if len(fields) > 1 else frozenset()

    if final in _CSI_FINAL_KEYS:
        return KeyEvent(_CSI_FINAL_KEYS[final], modifiers)
    if final == b"~":
        try:
            code = _CSI_TILDE_KEYS.get(int(fields[0]))
        except ValueError:
            return None
        return KeyEvent(code, modifiers) if code is not None else None
    if final == b"u":
        try:
            codepoint = int(fields[0].split(":", 1)[0])
        except ValueError:
            return None
        name = _CSI_U_KEYS.get(codepoint)
        if name is not None:
            return KeyEvent(name, modifiers)
        if codepoint < 32:
            return None
        char = chr(codepoint)
        if CTRL in modifiers or ALT in modifiers:
            char = char.lower()
        return KeyEvent(char, modifiers)
    return None


def _decode_escape(fd: int) -> KeyEvent | None:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return key(ESC)
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return key("O", ALT)
        code = _CSI_FINAL_KEYS.get(final)
        return key(code) if code is not None else None
    if seq == b"\x1b":
        _PENDING_BYTES.insert(0, seq)
        return key(ESC)
    if seq in {b"\x7f", b"\x08"}:
        return key(BACKSPACE, ALT)
    if seq[0] < 0x20:
        base = _decode_control_byte(seq[0])
        return KeyEvent(base.code, base.modifiers | {ALT})
    return key(_read_char(fd, seq), ALT)


def read_key(fd: int, timeout_ms: float | None = None) -> KeyEvent | None:
    """Read one key event from ``fd``.

    Returns ``None`` when ``timeout_ms`` elapses without input, at EOF, and
    for sequences that do not map to a key this application understands.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(fd, 1)
        if not ch:
            return None

    value = ch[0]
    if value == 0x1B:
        return _decode_escape(fd)
    if value < 0x20 or value == 0x7F:
        return _decode_control_byte(value)
    return key(_read_char(fd, ch))
