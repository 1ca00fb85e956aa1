"""Incremental screen updates.

Between repaints the terminal cursor rests at column 0 of the row right
below the bottom border (the *rest row*).  Every repaint path starts and ends
there: cursor movements are relative and each path nets to zero vertical
and horizontal displacement, so partial updates can be chained without
walking back from the screen origin.

Three paths exist:

* full repaint (:meth:`ScreenUpdater.write_interface`) for structural
  changes: directory change, deletion, pagination, resize, first paint;
* selection-delta repaint (:meth:`ScreenUpdater.update_selection`) which
  rewrites only the rows of the old and new listing selection;
* menu-column repaint (:meth:`ScreenUpdater.rewrite_menu_column`) which
  rewrites the right-hand column only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from dirdesk.modes import FocusState
from dirdesk.render import (
    ENTRY_ROW_STRIDE,
    RenderSnapshot,
    entry_row,
    iter_listing_lines,
    iter_menu_lines,
    menu_line_count,
    pagination_hint_line,
)
from dirdesk.render_utils import COLUMN_CHARACTER, END_LINE
from dirdesk.terminal import TerminalSink

logger = logging.getLogger(__name__)

TOO_SMALL_MESSAGE = "Terminal too small for browser."


class UpdateType(Enum):
    CHANGE_TARGET_CONTENT = "change_target_content"
    CHANGE_TARGET_SPACE = "change_target_space"
    OPEN_DIR = "open_dir"
    REMOVE_CONTENT = "remove_content"
    PAGINATE = "paginate"
    RESIZE = "resize"
    NOTICE = "notice"


class RepaintPath(Enum):
    FULL = "full"
    SELECTION_DELTA = "selection_delta"
    MENU_COLUMN = "menu_column"


class SelectionMove(Enum):
    NONE = "none"
    FORWARD = "forward"
    BACKWARD = "backward"
    WRAP_TO_TOP = "wrap_to_top"
    WRAP_TO_BOTTOM = "wrap_to_bottom"


def repaint_path(update_type: UpdateType, focus: FocusState) -> RepaintPath:
    """Pick the repaint path for an update given the pane that has focus."""
    if update_type is UpdateType.CHANGE_TARGET_CONTENT:
        if focus is FocusState.LISTING:
            return RepaintPath.SELECTION_DELTA
        return RepaintPath.MENU_COLUMN
    if update_type is UpdateType.CHANGE_TARGET_SPACE:
        return RepaintPath.MENU_COLUMN
    return RepaintPath.FULL


def classify_move(old: int, new: int, length: int) -> SelectionMove:
    """Name the kind of selection change; wrap-arounds win over plain steps."""
    if old == new:
        return SelectionMove.NONE
    if new == 0 and old == length - 1:
        return SelectionMove.WRAP_TO_TOP
    if new == length - 1 and old == 0:
        return SelectionMove.WRAP_TO_BOTTOM
    if new > old:
        return SelectionMove.FORWARD
    return SelectionMove.BACKWARD


@dataclass(frozen=True)
class ScreenLayout:
    body_height: int
    hint_lines: int

    @classmethod
    def from_snapshot(cls, snapshot: RenderSnapshot) -> "ScreenLayout":
        return cls(
            body_height=snapshot.geometry.pane_height,
            hint_lines=1 if snapshot.show_pagination_hint else 0,
        )

    @property
    def rest_row(self) -> int:
        """Row the cursor parks on: below top border, body, hint and bottom border."""
        return self.body_height + self.hint_lines + 2


@dataclass(frozen=True)
class SelectionPlan:
    """Vertical moves of a selection-delta repaint.

    Each of the two rewritten lines ends with a newline, which advances the
    cursor by one row on its own; :attr:`net` accounts for both.
    """

    move: SelectionMove
    to_old: int
    to_new: int
    to_rest: int

    @property
    def net(self) -> int:
        return self.to_old + 1 + self.to_new + 1 + self.to_rest


def plan_selection_update(layout: ScreenLayout, old: int, new: int, length: int) -> SelectionPlan:
    """Compute the cursor offsets needed to move the highlight from old to new."""
    move = classify_move(old, new, length)
    if move is SelectionMove.WRAP_TO_TOP:
        delta = -(length - 1) * ENTRY_ROW_STRIDE
    elif move is SelectionMove.WRAP_TO_BOTTOM:
        delta = (length - 1) * ENTRY_ROW_STRIDE
    else:
        delta = (new - old) * ENTRY_ROW_STRIDE

    old_row = entry_row(old)
    to_old = old_row - layout.rest_row
    to_new = delta - 1
    to_rest = layout.rest_row - (old_row + delta) - 1
    return SelectionPlan(move=move, to_old=to_old, to_new=to_new, to_rest=to_rest)


class ScreenUpdater:
    """Emit terminal operations that bring the screen in line with a snapshot."""

    def __init__(self, sink: TerminalSink) -> None:
        self._sink = sink

    def update(
        self,
        update_type: UpdateType,
        snapshot: RenderSnapshot,
        *,
        old: Optional[int] = None,
        new: Optional[int] = None,
    ) -> RepaintPath:
        """Route an update to its repaint path and return the path taken."""
        path = repaint_path(update_type, snapshot.focus)
        logger.debug("Update %s in %s focus -> %s repaint", update_type.value, snapshot.focus.value, path.value)
        if path is RepaintPath.SELECTION_DELTA:
            if old is None or new is None:
                raise ValueError("A selection update needs both the old and new index.")
            self.update_selection(snapshot, old, new)
        elif path is RepaintPath.MENU_COLUMN:
            self.rewrite_menu_column(snapshot)
        else:
            self.write_interface(snapshot)
        return path

    def write_interface(self, snapshot: RenderSnapshot) -> None:
        """Clear the screen and paint every line, leaving the cursor at rest."""
        sink = self._sink
        geometry = snapshot.geometry
        sink.clear_screen()
        sink.move_cursor_absolute(0, 0)

        if not geometry.fits:
            sink.write(TOO_SMALL_MESSAGE)
            sink.flush()
            return

        layout = ScreenLayout.from_snapshot(snapshot)
        horizontal_border = COLUMN_CHARACTER * geometry.columns
        listing = list(iter_listing_lines(snapshot))
        menu = list(iter_menu_lines(snapshot, len(listing) + layout.hint_lines))

        parts: List[str] = [f"{horizontal_border}{END_LINE}"]
        for listing_text, menu_text in zip(listing, menu):
            parts.append(f"{listing_text}{menu_text}{END_LINE}")
        if layout.hint_lines:
            parts.append(f"{pagination_hint_line(geometry)}{menu[-1]}{END_LINE}")
        parts.append(f"{horizontal_border}{END_LINE}")
        sink.write("".join(parts))

        if snapshot.status_message:
            status = snapshot.status_message[: geometry.columns]
            sink.write(status)
            sink.move_cursor(-len(status), 0)
        sink.flush()

    def update_selection(self, snapshot: RenderSnapshot, old: int, new: int) -> None:
        """Rewrite the rows of the old and new selection and return to rest."""
        if not snapshot.geometry.fits or old == new:
            return
        sink = self._sink
        layout = ScreenLayout.from_snapshot(snapshot)
        plan = plan_selection_update(layout, old, new, len(snapshot.entries))
        logger.debug("Selection %d -> %d (%s)", old, new, plan.move.value)

        listing = list(iter_listing_lines(snapshot))
        menu = list(iter_menu_lines(snapshot, len(listing)))
        old_line = old * ENTRY_ROW_STRIDE
        new_line = new * ENTRY_ROW_STRIDE

        sink.move_cursor(0, plan.to_old)
        sink.clear_to_line_end()
        sink.write(f"{listing[old_line]}{menu[old_line]}{END_LINE}")

        sink.move_cursor(0, plan.to_new)
        sink.clear_to_line_end()
        sink.write(f"{listing[new_line]}{menu[new_line]}{END_LINE}")

        sink.move_cursor(0, plan.to_rest)
        sink.flush()

    def rewrite_menu_column(self, snapshot: RenderSnapshot) -> None:
        """Rewrite the menu column from its top line and return to rest."""
        if not snapshot.geometry.fits:
            return
        sink = self._sink
        layout = ScreenLayout.from_snapshot(snapshot)
        dx = snapshot.geometry.menu_column_start
        count = menu_line_count(snapshot)

        sink.move_cursor(dx, 1 - layout.rest_row)
        for line in iter_menu_lines(snapshot, count):
            sink.clear_to_line_end()
            sink.write(line)
            sink.move_cursor(-len(line), 1)
        sink.move_cursor(-dx, layout.rest_row - 1 - count)
        sink.flush()


__all__ = [
    "RepaintPath",
    "ScreenLayout",
    "ScreenUpdater",
    "SelectionMove",
    "SelectionPlan",
    "TOO_SMALL_MESSAGE",
    "UpdateType",
    "classify_move",
    "plan_selection_update",
    "repaint_path",
]
