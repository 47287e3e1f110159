"""Main interactive event loop for the picker.

One blocking read per iteration, decoded to at most one action, folded into
the picker state, then a repaint when the state changed. The loop ends on
confirm or cancel; read errors propagate after the terminal is restored.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from .display import DisplayIndex, DisplaySpec
from .input import CANCEL, CONFIRM, decode_input
from .layout import Geometry
from .records import Record
from .render import render_frame, write_frame
from .selection import current_selection
from .state import apply_action, initial_state
from .ui_theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)


class PickerTerminal(Protocol):
    def raw_mode(self): ...

    def read_chunk(self) -> bytes: ...

    def write(self, text: str) -> None: ...

    def geometry(self) -> Geometry: ...


def run_picker(
    records: Sequence[Record],
    spec: DisplaySpec,
    terminal: PickerTerminal,
    theme: UITheme = DEFAULT_THEME,
) -> tuple[int, ...]:
    """Run one picker session and return the chosen record positions.

    An empty tuple means the session was cancelled.
    """
    index = DisplayIndex(records, spec)
    geometry = terminal.geometry()
    state = initial_state(index)
    logger.debug(
        "session start: %d records, geometry %dx%d, %d item rows",
        len(index),
        geometry.width,
        geometry.height,
        geometry.available_rows,
    )

    with terminal.raw_mode():
        write_frame(terminal, render_frame(state, index, geometry, theme))
        while True:
            try:
                chunk = terminal.read_chunk()
            except (EOFError, OSError) as exc:
                logger.debug("input read failed: %s", exc)
                raise

            action = decode_input(chunk)
            if action is None:
                continue
            if action == CANCEL:
                logger.debug("session cancelled")
                return ()
            if action == CONFIRM:
                result = current_selection(state.selection, state.matches)
                logger.debug("session confirmed with %d record(s)", len(result))
                return result

            next_state = apply_action(state, action, index)
            if next_state == state:
                continue
            state = next_state
            write_frame(terminal, render_frame(state, index, geometry, theme))
