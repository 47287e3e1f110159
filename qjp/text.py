"""Terminal cell measurement and shaping for display strings.

Display values are single logical lines. Tabs are expanded and control bytes
escaped up front so that width math and painted output always agree.
"""

from __future__ import annotations

import re
import unicodedata

TAB_STOP = 8
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, and East Asian wide/fullwidth
    characters consume two.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    if text.isascii():
        return len(text)
    return sum(char_display_width(ch) for ch in text)


def clip_to_width(text: str, max_cols: int) -> str:
    """Trim ``text`` to at most ``max_cols`` display columns."""
    if max_cols <= 0 or not text:
        return ""
    if text.isascii():
        return text[:max_cols]

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch)
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
    return "".join(out)


def pad_to_width(text: str, cols: int) -> str:
    """Right-pad ``text`` with spaces up to ``cols`` display columns."""
    missing = cols - display_width(text)
    if missing <= 0:
        return text
    return text + " " * missing


def sanitize_terminal_text(source: str) -> str:
    """Expand tabs and escape control bytes as ``\\xNN``.

    Newlines are escaped too: a display value always occupies one logical line.
    """
    if "\t" in source:
        source = source.expandtabs(TAB_STOP)
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)
