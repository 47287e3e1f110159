"""Literal, case-insensitive substring filtering over display values."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .display import DisplayIndex, DisplaySpec
from .records import Record


def match_positions(
    index: DisplayIndex,
    filter_text: str,
    within: Iterable[int] | None = None,
) -> tuple[int, ...]:
    """Return positions whose display value contains ``filter_text``.

    Order follows ``within`` (the full record order by default). Passing the
    previous matches is valid whenever ``filter_text`` extends the text that
    produced them, since a longer query can only narrow the result.
    """
    candidates = range(len(index)) if within is None else within
    if not filter_text:
        return tuple(candidates)
    query = filter_text.lower()
    folded = index.folded
    return tuple(position for position in candidates if query in folded[position])


def apply_filter(records: Sequence[Record], spec: DisplaySpec, filter_text: str) -> tuple[int, ...]:
    """One-shot filter of ``records`` rendered with ``spec``."""
    return match_positions(DisplayIndex(records, spec), filter_text)
