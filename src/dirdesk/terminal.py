"""Terminal output sink.

The update engine only needs the handful of operations on
:class:`TerminalSink`.  :class:`CursesTerminal` maps them onto a curses
window; relative moves are resolved against the window's own cursor.
"""

from __future__ import annotations

import curses
from typing import Protocol, Tuple


class TerminalSink(Protocol):
    def clear_screen(self) -> None:
        ...

    def move_cursor(self, dx: int, dy: int) -> None:
        ...

    def move_cursor_absolute(self, col: int, row: int) -> None:
        ...

    def clear_to_line_end(self) -> None:
        ...

    def write(self, text: str) -> None:
        ...

    def flush(self) -> None:
        ...

    def query_window_size(self) -> Tuple[int, int]:
        """Return ``(columns, rows)`` of the terminal window."""
        ...


class CursesTerminal:
    """Sink drawing into a curses window."""

    def __init__(self, stdscr: "curses._CursesWindow") -> None:  # type: ignore[name-defined]
        self._stdscr = stdscr

    def clear_screen(self) -> None:
        self._stdscr.erase()

    def move_cursor(self, dx: int, dy: int) -> None:
        y, x = self._stdscr.getyx()
        self.move_cursor_absolute(x + dx, y + dy)

    def move_cursor_absolute(self, col: int, row: int) -> None:
        height, width = self._stdscr.getmaxyx()
        row = max(0, min(row, height - 1))
        col = max(0, min(col, width - 1))
        try:
            self._stdscr.move(row, col)
        except curses.error:
            pass

    def clear_to_line_end(self) -> None:
        try:
            self._stdscr.clrtoeol()
        except curses.error:
            pass

    def write(self, text: str) -> None:
        # Writing into the bottom-right cell raises even though the text lands.
        try:
            self._stdscr.addstr(text)
        except curses.error:
            pass

    def flush(self) -> None:
        self._stdscr.refresh()

    def query_window_size(self) -> Tuple[int, int]:
        height, width = self._stdscr.getmaxyx()
        return width, height


__all__ = ["CursesTerminal", "TerminalSink"]
