"""Terminal control helpers for the picker session.

Owns the controlling-tty handle, raw-mode lifecycle, alternate-screen
switching, and cursor visibility. Records arrive on stdin and results leave
on stdout, so the picker itself talks to ``/dev/tty``.
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty
from collections.abc import Iterator

from .input import read_chunk
from .layout import DEFAULT_HEIGHT, DEFAULT_WIDTH, Geometry

TTY_PATH = "/dev/tty"
ALT_SCREEN_ON = "\033[?1049h"
ALT_SCREEN_OFF = "\033[?1049l"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def open_tty(path: str = TTY_PATH) -> Iterator[int]:
    """Open the controlling terminal read/write and close it on exit."""
    fd = os.open(path, os.O_RDWR)
    try:
        yield fd
    finally:
        os.close(fd)


class TerminalController:
    """Manage terminal mode transitions and raw I/O on one tty descriptor."""

    def __init__(self, tty_fd: int) -> None:
        """Capture tty state so it can be restored after raw mode."""
        self.tty_fd = tty_fd
        try:
            self._saved_tty_state = termios.tcgetattr(tty_fd)
        except termios.error as exc:
            # termios.error is not an OSError; callers only handle the latter.
            raise OSError(*exc.args) from exc

    def enable_tui_mode(self) -> None:
        """Enter raw mode, switch to the alternate screen, and hide the cursor."""
        tty.setraw(self.tty_fd, termios.TCSAFLUSH)
        self.write(ALT_SCREEN_ON + HIDE_CURSOR)

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, and restore tty state."""
        try:
            self.write(SHOW_CURSOR + ALT_SCREEN_OFF)
        finally:
            termios.tcsetattr(self.tty_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write(self, text: str) -> None:
        data = text.encode("utf-8")
        while data:
            written = os.write(self.tty_fd, data)
            data = data[written:]

    def read_chunk(self) -> bytes:
        return read_chunk(self.tty_fd)

    def geometry(self) -> Geometry:
        """Return the terminal size, or 80x24 when it cannot be determined."""
        try:
            size = os.get_terminal_size(self.tty_fd)
        except OSError as exc:
            logger.debug("terminal size unavailable (%s); using %dx%d", exc, DEFAULT_WIDTH, DEFAULT_HEIGHT)
            return Geometry()
        if size.columns <= 0 or size.lines <= 0:
            logger.debug("terminal reported %dx%d; using defaults", size.columns, size.lines)
            return Geometry()
        return Geometry(width=size.columns, height=size.lines)

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
