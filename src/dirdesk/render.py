"""Convert a browser snapshot into fixed-width lines for both panes.

Both generators read the same :class:`RenderSnapshot`, so their output pairs
line for line: body line ``k`` of the screen is
``listing_line[k] + menu_line[k]``.  Neither generator looks at the other
pane's state directly.

The listing side always yields exactly ``geometry.pane_height`` lines.  The
menu side is capped by a caller-supplied line budget and fills everything
after the last menu item with blank bordered lines.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from dirdesk.geometry import TerminalGeometry
from dirdesk.modes import FocusState
from dirdesk.render_utils import (
    COLUMN_CHARACTER,
    PAGINATION_HINT,
    PROMPT,
    ROW_CHARACTER,
    ROW_PADDING,
    bordered,
    fit_width,
)
from dirdesk.state import ActiveMenuContext, DirectoryEntry

# Screen rows between two consecutive entries (entry line + blank line)
ENTRY_ROW_STRIDE = 2
# Extra width of a menu item box around its longest label
MENU_ITEM_PADDING = 4
# Columns reserved for the prompt marker on the selected menu item
MENU_PROMPT_RESERVE = 4


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of everything the line generators need."""

    geometry: TerminalGeometry
    entries: Tuple[DirectoryEntry, ...]
    selection: int
    focus: FocusState
    menu_context: Optional[ActiveMenuContext] = None
    menu_selection: int = 0
    show_pagination_hint: bool = False
    status_message: Optional[str] = None


def listing_line(geometry: TerminalGeometry, content: str, *, is_target: bool = False) -> str:
    """Return a bordered listing line padded up to the menu column boundary."""
    line = f"{ROW_CHARACTER}{ROW_PADDING}{PROMPT if is_target else ''}{content}"
    return fit_width(line, geometry.listing_width)


def empty_listing_line(geometry: TerminalGeometry) -> str:
    return fit_width(ROW_CHARACTER, geometry.listing_width)


def pagination_hint_line(geometry: TerminalGeometry) -> str:
    return listing_line(geometry, PAGINATION_HINT)


def iter_listing_lines(snapshot: RenderSnapshot) -> Iterator[str]:
    """Yield the listing pane: each entry followed by a blank line, then filler."""
    geometry = snapshot.geometry
    is_listing_focused = snapshot.focus is FocusState.LISTING
    produced = 0

    for index, entry in enumerate(snapshot.entries):
        is_target = is_listing_focused and index == snapshot.selection
        yield listing_line(geometry, entry.display_label, is_target=is_target)
        yield empty_listing_line(geometry)
        produced += ENTRY_ROW_STRIDE

    for _ in range(geometry.pane_height - produced):
        yield empty_listing_line(geometry)


def centred_menu_item(item: str, total_width: int, *, is_target: bool = False) -> str:
    """Centre ``item`` inside ``total_width`` columns.

    The selected item reserves four columns for the prompt marker and hands
    two of them back to the right padding, which keeps its borders in line
    with the unselected rows.
    """
    if is_target:
        total_width -= MENU_PROMPT_RESERVE

    item_start_position = math.ceil(total_width / 2)
    item_start_index = math.ceil(len(item) / 2)
    left_padding = item_start_position - item_start_index
    right_padding = total_width - len(item) - left_padding

    if is_target:
        right_padding += 2

    return f"{' ' * left_padding}{PROMPT if is_target else ''}{item}{' ' * right_padding}"


def blank_menu_line(geometry: TerminalGeometry) -> str:
    return bordered(" " * geometry.menu_column_width)


def iter_menu_lines(snapshot: RenderSnapshot, line_budget: int) -> Iterator[str]:
    """Yield at most ``line_budget`` menu lines.

    With an active menu context every item takes three lines (top border,
    label, bottom border); the rest of the budget is blank bordered filler.
    """
    geometry = snapshot.geometry
    width = geometry.menu_column_width
    produced = 0

    context = snapshot.menu_context
    if context is not None:
        items = context.items
        longest = max(len(item.label) for item in items)
        horizontal_border = COLUMN_CHARACTER * (longest + MENU_ITEM_PADDING)
        border_line = bordered(fit_width(centred_menu_item(horizontal_border, width), width))
        is_menu_focused = snapshot.focus is FocusState.ACTION_MENU

        for index, item in enumerate(items):
            inner_padding = " " * math.ceil((len(horizontal_border) - len(item.label) - 2) / 2)
            item_box = bordered(f"{inner_padding}{item.label}{inner_padding}")
            is_target = is_menu_focused and index == snapshot.menu_selection
            item_line = bordered(
                fit_width(centred_menu_item(item_box, width, is_target=is_target), width)
            )

            for line in (border_line, item_line, border_line):
                if produced >= line_budget:
                    return
                yield line
                produced += 1

    while produced < line_budget:
        yield blank_menu_line(geometry)
        produced += 1


def menu_line_count(snapshot: RenderSnapshot) -> int:
    """Number of lines the menu column rewrite touches for this snapshot."""
    if snapshot.menu_context is not None:
        return len(snapshot.menu_context.items) * 3
    return snapshot.geometry.pane_height


def entry_row(index: int) -> int:
    """Screen row of entry ``index`` (row 0 is the top border)."""
    return 1 + index * ENTRY_ROW_STRIDE


__all__ = [
    "ENTRY_ROW_STRIDE",
    "RenderSnapshot",
    "blank_menu_line",
    "centred_menu_item",
    "empty_listing_line",
    "entry_row",
    "iter_listing_lines",
    "iter_menu_lines",
    "listing_line",
    "menu_line_count",
    "pagination_hint_line",
]
