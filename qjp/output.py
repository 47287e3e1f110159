"""Formatting of chosen records for stdout.

JSON output can be syntax highlighted with Pygments when stdout is a
terminal; plain attribute values are always printed verbatim.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import JsonLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .errors import OutputError
from .records import ListValue, MapValue, Record, TextValue, Value

DEFAULT_STYLE = "monokai"

_FORMATTERS: dict[str, Terminal256Formatter] = {}


def format_output_value(value: Value) -> str:
    """Text printed for one attribute value.

    Text is printed raw, lists and objects as compact JSON, everything else
    in its display form (integral numbers without a fraction).
    """
    if isinstance(value, TextValue):
        return value.value
    if isinstance(value, (ListValue, MapValue)):
        return value.to_json()
    return value.display()


def selected_output(
    records: Sequence[Record],
    positions: Sequence[int],
    output_attr: str | None = None,
) -> list[tuple[str, bool]]:
    """Return ``(line, is_json)`` pairs for the chosen records, in order.

    Raises ``OutputError`` when ``output_attr`` is missing from a chosen record.
    """
    lines: list[tuple[str, bool]] = []
    for position in positions:
        record = records[position]
        if output_attr is None:
            lines.append((record.to_json(), True))
            continue
        value = record.get(output_attr)
        if value is None:
            raise OutputError(f"attribute '{output_attr}' not found in selected object")
        lines.append((format_output_value(value), isinstance(value, (ListValue, MapValue))))
    return lines


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = Terminal256Formatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_json(text: str, style: str = DEFAULT_STYLE) -> str:
    rendered = highlight(text, JsonLexer(), _formatter_for_style(normalize_style(style)))
    return rendered.rstrip("\n")


def write_output(
    lines: Sequence[tuple[str, bool]],
    stream: TextIO,
    *,
    colorize: bool = False,
    style: str = DEFAULT_STYLE,
) -> None:
    for text, is_json in lines:
        if colorize and is_json:
            text = highlight_json(text, style)
        stream.write(text + "\n")
    stream.flush()
