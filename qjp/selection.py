"""Cursor and multi-select marks.

``cursor`` indexes the current match list; ``marked`` holds record positions,
so marks survive any change to the filter.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class Selection:
    cursor: int = 0
    marked: frozenset[int] = field(default_factory=frozenset)


def clamp_cursor(selection: Selection, matches: Sequence[int]) -> Selection:
    cursor = min(selection.cursor, max(0, len(matches) - 1))
    if cursor == selection.cursor:
        return selection
    return replace(selection, cursor=cursor)


def move_up(selection: Selection, matches: Sequence[int]) -> Selection:
    if selection.cursor <= 0:
        return selection
    return replace(selection, cursor=selection.cursor - 1)


def move_down(selection: Selection, matches: Sequence[int]) -> Selection:
    if selection.cursor >= len(matches) - 1:
        return selection
    return replace(selection, cursor=selection.cursor + 1)


def toggle_mark(selection: Selection, matches: Sequence[int]) -> Selection:
    """Flip the mark under the cursor, then step to the next match if any."""
    if not matches or selection.cursor >= len(matches):
        return selection
    position = matches[selection.cursor]
    marked = selection.marked ^ {position}
    cursor = selection.cursor
    if cursor < len(matches) - 1:
        cursor += 1
    return Selection(cursor=cursor, marked=frozenset(marked))


def current_selection(selection: Selection, matches: Sequence[int]) -> tuple[int, ...]:
    """Record positions a confirm would return.

    Marked positions come back in ascending record order regardless of the
    order they were marked in; without marks, the position under the cursor.
    """
    if selection.marked:
        return tuple(sorted(selection.marked))
    if not matches or selection.cursor >= len(matches):
        return ()
    return (matches[selection.cursor],)
