"""Low-level terminal input decoding.

Raw reads are at most three bytes: enough for an arrow-key escape sequence.
Each chunk decodes to one action token (or nothing). Printable characters
decode to themselves; everything else is an upper-case token name.
"""

from __future__ import annotations

import os

READ_SIZE = 3

CANCEL = "CANCEL"
CONFIRM = "CONFIRM"
BACKSPACE = "BACKSPACE"
TOGGLE_MARK = "TOGGLE_MARK"
UP = "UP"
DOWN = "DOWN"

_SINGLE_BYTE_ACTIONS: dict[int, str] = {
    0: TOGGLE_MARK,  # Ctrl+Space
    3: CANCEL,  # Ctrl+C
    27: CANCEL,  # lone ESC
    10: CONFIRM,
    13: CONFIRM,
    127: BACKSPACE,
}

_ARROW_ACTIONS: dict[int, str] = {
    65: UP,
    66: DOWN,
}


def decode_input(chunk: bytes) -> str | None:
    """Decode one raw read into an action token.

    Unrecognized bytes and escape sequences (Left/Right, Home/End, function
    keys, pastes) return ``None`` and must be ignored by the caller.
    """
    if len(chunk) == 1:
        byte = chunk[0]
        action = _SINGLE_BYTE_ACTIONS.get(byte)
        if action is not None:
            return action
        if 32 <= byte <= 126:
            return chr(byte)
        return None
    if len(chunk) == 3 and chunk[0] == 27 and chunk[1] == 91:
        return _ARROW_ACTIONS.get(chunk[2])
    return None


def read_chunk(fd: int, size: int = READ_SIZE) -> bytes:
    """Block for one read from ``fd``.

    Raises ``EOFError`` when the device reports end of input; ``OSError``
    from the read itself propagates unchanged.
    """
    chunk = os.read(fd, size)
    if not chunk:
        raise EOFError("input device closed")
    return chunk
