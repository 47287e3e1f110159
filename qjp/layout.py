"""Row accounting for list items.

Every item is painted behind a two-column prefix (``"> "`` or ``"  "``), so
the usable text width is always ``width - 2``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .text import clip_to_width, display_width

PREFIX_WIDTH = 2
ELLIPSIS = "..."
CHROME_ROWS = 4
DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


@dataclass(frozen=True)
class Geometry:
    """Terminal size in cells, captured once per session."""

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT

    @property
    def text_width(self) -> int:
        return self.width - PREFIX_WIDTH

    @property
    def available_rows(self) -> int:
        """Rows left for items after the filter prompt and margin, at least 1."""
        return max(1, self.height - CHROME_ROWS)


def rows_for(display: str, width: int, truncate: bool) -> int:
    """Return how many terminal rows ``display`` occupies at ``width``."""
    if not display or truncate:
        return 1
    effective_width = width - PREFIX_WIDTH
    if effective_width <= 0:
        return 1
    cells = display_width(display)
    return max(1, -(-cells // effective_width))


def truncate_display(display: str, width: int) -> str:
    """Shorten ``display`` to fit ``width - 2`` columns, ending in ``...``.

    Left untouched when it already fits or when there is no room for more
    than the ellipsis itself.
    """
    max_width = width - PREFIX_WIDTH
    if max_width <= len(ELLIPSIS) or display_width(display) <= max_width:
        return display
    return clip_to_width(display, max_width - len(ELLIPSIS)) + ELLIPSIS
