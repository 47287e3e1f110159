from __future__ import annotations

from dataclasses import dataclass, field, replace

from .display import DisplayIndex
from .filtering import match_positions
from .input import BACKSPACE, DOWN, TOGGLE_MARK, UP
from .selection import Selection, clamp_cursor, move_down, move_up, toggle_mark


@dataclass(frozen=True)
class PickerState:
    """Everything one frame needs besides the records and terminal size.

    ``matches`` is always the result of filtering with ``filter_text``.
    """

    filter_text: str = ""
    matches: tuple[int, ...] = ()
    selection: Selection = field(default_factory=Selection)


def initial_state(index: DisplayIndex) -> PickerState:
    return PickerState(matches=match_positions(index, ""))


def _with_filter(state: PickerState, index: DisplayIndex, filter_text: str, narrowing: bool) -> PickerState:
    within = state.matches if narrowing else None
    matches = match_positions(index, filter_text, within)
    return PickerState(
        filter_text=filter_text,
        matches=matches,
        selection=clamp_cursor(state.selection, matches),
    )


def apply_action(state: PickerState, action: str, index: DisplayIndex) -> PickerState:
    """Return the state after one decoded action.

    Confirm/cancel and unknown tokens leave the state unchanged; ending the
    session is the caller's job.
    """
    if action == UP:
        return replace(state, selection=move_up(state.selection, state.matches))
    if action == DOWN:
        return replace(state, selection=move_down(state.selection, state.matches))
    if action == TOGGLE_MARK:
        return replace(state, selection=toggle_mark(state.selection, state.matches))
    if action == BACKSPACE:
        if not state.filter_text:
            return state
        return _with_filter(state, index, state.filter_text[:-1], narrowing=False)
    if len(action) == 1 and action.isprintable():
        return _with_filter(state, index, state.filter_text + action, narrowing=True)
    return state
