"""Visible-window selection over a list of variable-height items.

The window grows outward from the cursor. Upward growth is capped at half
the row budget before the cursor's own rows are counted; whatever remains
goes to the items below. With a tall cursor item this can leave part of
the budget unused.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence


def compute_window(
    matches: Sequence[int],
    cursor: int,
    available_rows: int,
    rows_for: Callable[[int], int],
) -> tuple[int, int]:
    """Return the half-open ``(start, end)`` slice of ``matches`` to paint.

    ``rows_for`` maps a record position to its row cost. The result always
    contains ``cursor`` when ``matches`` is non-empty and is ``(0, 0)``
    otherwise.
    """
    if not matches:
        return 0, 0
    budget = max(1, available_rows)
    cursor = max(0, min(cursor, len(matches) - 1))

    used = 0
    start = cursor
    while start > 0:
        cost = rows_for(matches[start - 1])
        if used + cost > budget // 2:
            break
        start -= 1
        used += cost

    used += rows_for(matches[cursor])

    end = cursor + 1
    while end < len(matches):
        cost = rows_for(matches[end])
        if used + cost > budget:
            break
        used += cost
        end += 1

    return start, end
