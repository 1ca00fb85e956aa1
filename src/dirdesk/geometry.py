"""Terminal geometry: usable rows and columns and the listing/menu split.

All layout numbers are derived from one window-size measurement and held
until a resize invalidates them.  The menu column width is computed once per
layout pass from the first listing line (the parent entry with its prompt
marker) so that every row of the screen shares the same column boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Protocol, Tuple

from dirdesk.render_utils import PARENT_LABEL, PROMPT, ROW_CHARACTER, ROW_PADDING

# Terminal space that is never drawn on
UNUSED_TERMINAL_ROWS = 7
UNUSED_TERMINAL_COLUMNS = 1

# Share of the padding after the first listing line given to the action menu
DESK_FRACTION = Fraction(1, 3)
LABEL_MARGIN = 6

# Terminal size limits
MIN_TERMINAL_WIDTH = 40
MIN_TERMINAL_HEIGHT = 21

FIRST_LISTING_LINE = f"{ROW_CHARACTER}{ROW_PADDING}{PROMPT}{PARENT_LABEL}"


class GeometryError(AssertionError):
    """Raised when layout values are needed before the terminal was measured."""


class _SizeSource(Protocol):
    def query_window_size(self) -> Tuple[int, int]:
        ...


@dataclass(frozen=True)
class TerminalGeometry:
    window_columns: int
    window_rows: int
    columns: int
    rows: int
    menu_column_width: int

    @classmethod
    def from_window_size(cls, window_columns: int, window_rows: int) -> "TerminalGeometry":
        columns = window_columns - UNUSED_TERMINAL_COLUMNS
        rows = window_rows - UNUSED_TERMINAL_ROWS
        available_padding = columns - len(FIRST_LISTING_LINE)
        menu_column_width = max(math.ceil(available_padding * DESK_FRACTION), 0)
        return cls(
            window_columns=window_columns,
            window_rows=window_rows,
            columns=columns,
            rows=rows,
            menu_column_width=menu_column_width,
        )

    @property
    def fits(self) -> bool:
        """Whether the window is large enough for the two-pane layout."""
        return (
            self.window_columns >= MIN_TERMINAL_WIDTH
            and self.window_rows >= MIN_TERMINAL_HEIGHT
        )

    @property
    def pane_height(self) -> int:
        """Number of body lines produced by the listing generator."""
        return max(self.rows - 2, 0)

    @property
    def listing_width(self) -> int:
        return self.columns - self.menu_column_width - 2

    @property
    def menu_line_width(self) -> int:
        return self.menu_column_width + 2

    @property
    def menu_column_start(self) -> int:
        """Screen column where the menu pane's left border is drawn."""
        return self.listing_width

    @property
    def label_budget(self) -> int:
        """Maximum length of an entry label before it gets truncated."""
        return (
            self.window_columns
            - math.floor(self.window_columns * DESK_FRACTION)
            - LABEL_MARGIN
        )

    @property
    def page_range(self) -> int:
        """Distance between the first and last index of a full page."""
        return max(self.pane_height // 2 - 2, 1)


class GeometryModel:
    """Process-wide holder of the current :class:`TerminalGeometry`."""

    def __init__(self, source: _SizeSource) -> None:
        self._source = source
        self._current: Optional[TerminalGeometry] = None

    @property
    def is_measured(self) -> bool:
        return self._current is not None

    @property
    def current(self) -> TerminalGeometry:
        if self._current is None:
            raise GeometryError("Terminal geometry requested before it was measured.")
        return self._current

    def measure(self) -> TerminalGeometry:
        """Return the geometry, querying the terminal if it is not known yet."""
        if self._current is None:
            window_columns, window_rows = self._source.query_window_size()
            self._current = TerminalGeometry.from_window_size(window_columns, window_rows)
        return self._current

    def invalidate(self) -> None:
        """Forget every derived value; the next :meth:`measure` starts over."""
        self._current = None


__all__ = [
    "DESK_FRACTION",
    "GeometryError",
    "GeometryModel",
    "LABEL_MARGIN",
    "MIN_TERMINAL_HEIGHT",
    "MIN_TERMINAL_WIDTH",
    "TerminalGeometry",
    "UNUSED_TERMINAL_COLUMNS",
    "UNUSED_TERMINAL_ROWS",
]
