"""Projection of records into display strings.

``DisplaySpec`` describes which fields to show and how to join them. A
``DisplayIndex`` computes every record's display string once per session;
filtering, layout, and rendering all read from it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .records import Record
from .text import display_width, pad_to_width, sanitize_terminal_text

DEFAULT_SEPARATOR = " - "
TABLE_SEPARATOR = "  "


@dataclass(frozen=True)
class DisplaySpec:
    """How a record becomes one line of display text.

    An empty ``fields`` tuple shows the whole record as compact JSON.
    ``table_mode`` pads every projected field but the last to its column
    width and joins with two spaces instead of ``separator``.
    """

    fields: tuple[str, ...] = ()
    separator: str = DEFAULT_SEPARATOR
    table_mode: bool = False
    truncate: bool = False


def field_text(record: Record, name: str) -> str:
    """Display text of one field; absent fields contribute an empty string."""
    value = record.get(name)
    if value is None:
        return ""
    return sanitize_terminal_text(value.display())


def column_widths(records: Sequence[Record], fields: Sequence[str]) -> tuple[int, ...]:
    widths = [0] * len(fields)
    for record in records:
        for col, name in enumerate(fields):
            widths[col] = max(widths[col], display_width(field_text(record, name)))
    return tuple(widths)


def display_value(record: Record, spec: DisplaySpec, widths: Sequence[int] = ()) -> str:
    """Render ``record`` according to ``spec``.

    ``widths`` is only consulted in table mode and must come from
    :func:`column_widths` over the same record sequence.
    """
    if not spec.fields:
        return sanitize_terminal_text(record.to_json())

    values: list[str] = []
    last = len(spec.fields) - 1
    for col, name in enumerate(spec.fields):
        text = field_text(record, name)
        if spec.table_mode and col < last and col < len(widths):
            text = pad_to_width(text, widths[col])
        values.append(text)

    if spec.table_mode:
        return TABLE_SEPARATOR.join(values)
    return spec.separator.join(values)


class DisplayIndex:
    """Precomputed display strings for one session's records."""

    def __init__(self, records: Sequence[Record], spec: DisplaySpec) -> None:
        self.records = tuple(records)
        self.spec = spec
        widths: tuple[int, ...] = ()
        if spec.table_mode and spec.fields:
            widths = column_widths(self.records, spec.fields)
        self.column_widths = widths
        self.values: tuple[str, ...] = tuple(display_value(record, spec, widths) for record in self.records)
        self.folded: tuple[str, ...] = tuple(value.lower() for value in self.values)
        self._widths: tuple[int, ...] = tuple(display_width(value) for value in self.values)

    def __len__(self) -> int:
        return len(self.records)

    def value(self, position: int) -> str:
        return self.values[position]

    def width(self, position: int) -> int:
        return self._widths[position]
