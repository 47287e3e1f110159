"""Frame rendering for the picker screen.

``render_frame`` is pure: it turns picker state into styled lines. Only
``write_frame`` touches the terminal.
"""

from __future__ import annotations

from typing import Protocol

from .display import DisplayIndex
from .layout import Geometry, rows_for, truncate_display
from .state import PickerState
from .text import pad_to_width
from .ui_theme import DEFAULT_THEME, UITheme
from .viewport import compute_window

CLEAR_SCREEN = "\033[2J"
CURSOR_HOME = "\033[H"
NO_MATCHES_LINE = "  (no matches)"


class FrameWriter(Protocol):
    def write(self, text: str) -> None: ...


def frame_window(state: PickerState, index: DisplayIndex, geometry: Geometry) -> tuple[int, int]:
    """Slice of ``state.matches`` visible at ``geometry``."""
    truncate = index.spec.truncate

    def cost(position: int) -> int:
        return rows_for(index.value(position), geometry.width, truncate)

    return compute_window(state.matches, state.selection.cursor, geometry.available_rows, cost)


def render_frame(
    state: PickerState,
    index: DisplayIndex,
    geometry: Geometry,
    theme: UITheme = DEFAULT_THEME,
) -> list[str]:
    """Build the filter header plus one line per visible match.

    Cursor and marked rows are padded to the widest visible item so their
    background forms an even block. In wrap mode the padding is skipped for
    the whole frame once any visible item is wider than the text area, since
    wrapped backgrounds cannot line up anyway.
    """
    lines = [f"{theme.filter_label}Filter:{theme.reset} {state.filter_text}"]
    if not state.matches:
        lines.append(NO_MATCHES_LINE)
        return lines

    truncate = index.spec.truncate
    text_width = geometry.text_width
    start, end = frame_window(state, index, geometry)
    visible = state.matches[start:end]

    pad_width = max(index.width(position) for position in visible)
    if truncate:
        pad_width = min(pad_width, max(1, text_width))
        should_pad = True
    else:
        should_pad = pad_width <= text_width

    cursor = state.selection.cursor
    marked = state.selection.marked
    for offset, position in enumerate(visible):
        text = index.value(position)
        if truncate:
            text = truncate_display(text, geometry.width)
        styled_text = pad_to_width(text, pad_width) if should_pad else text
        is_marked = position in marked
        if start + offset == cursor:
            background = theme.marked if is_marked else ""
            lines.append(f"{theme.reverse}{background}> {styled_text}{theme.reset}")
        elif is_marked:
            lines.append(f"{theme.marked}  {styled_text}{theme.reset}")
        else:
            lines.append(f"  {text}")
    return lines


def write_frame(writer: FrameWriter, lines: list[str]) -> None:
    """Clear the screen and paint ``lines`` from the top-left corner."""
    writer.write(CLEAR_SCREEN + CURSOR_HOME + "".join(f"{line}\r\n" for line in lines))
