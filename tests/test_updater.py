"""Tests for repaint path selection and cursor bookkeeping."""

from pathlib import Path

import pytest

from dirdesk.geometry import TerminalGeometry
from dirdesk.modes import FocusState
from dirdesk.render import RenderSnapshot
from dirdesk.state import PARENT_ENTRY, ActiveMenuContext, DirectoryEntry
from dirdesk.updater import (
    TOO_SMALL_MESSAGE,
    RepaintPath,
    ScreenLayout,
    ScreenUpdater,
    SelectionMove,
    UpdateType,
    classify_move,
    plan_selection_update,
    repaint_path,
)
from tests.virtual_terminal import VirtualTerminal

GEOMETRY = TerminalGeometry.from_window_size(80, 24)
FILE_CONTEXT = ActiveMenuContext(Path("/desk/f0.txt"), is_directory=False)


def _entries(count: int):
    files = tuple(
        DirectoryEntry(f"f{index}.txt", f"Mar 05 14:07 1B f{index}.txt", is_directory=False)
        for index in range(count - 1)
    )
    return (PARENT_ENTRY,) + files


def _snapshot(count: int = 4, **overrides) -> RenderSnapshot:
    values = dict(geometry=GEOMETRY, entries=_entries(count), selection=0, focus=FocusState.LISTING)
    values.update(overrides)
    return RenderSnapshot(**values)


def _painted(snapshot: RenderSnapshot, columns: int = 80, rows: int = 24) -> VirtualTerminal:
    terminal = VirtualTerminal(columns, rows)
    ScreenUpdater(terminal).write_interface(snapshot)
    return terminal


def test_repaint_path_table():
    assert repaint_path(UpdateType.CHANGE_TARGET_CONTENT, FocusState.LISTING) is RepaintPath.SELECTION_DELTA
    assert repaint_path(UpdateType.CHANGE_TARGET_CONTENT, FocusState.ACTION_MENU) is RepaintPath.MENU_COLUMN
    assert repaint_path(UpdateType.CHANGE_TARGET_SPACE, FocusState.LISTING) is RepaintPath.MENU_COLUMN
    for update_type in (UpdateType.OPEN_DIR, UpdateType.REMOVE_CONTENT, UpdateType.PAGINATE, UpdateType.RESIZE):
        assert repaint_path(update_type, FocusState.LISTING) is RepaintPath.FULL


def test_classify_move():
    assert classify_move(2, 2, 4) is SelectionMove.NONE
    assert classify_move(1, 2, 4) is SelectionMove.FORWARD
    assert classify_move(2, 1, 4) is SelectionMove.BACKWARD
    assert classify_move(3, 0, 4) is SelectionMove.WRAP_TO_TOP
    assert classify_move(0, 3, 4) is SelectionMove.WRAP_TO_BOTTOM


def test_selection_plan_nets_to_zero():
    """Every one-step move, including wrap-arounds, returns the cursor to rest."""
    for hint_lines in (0, 1):
        layout = ScreenLayout(body_height=15, hint_lines=hint_lines)
        for length in range(2, 8):
            for old in range(length):
                for new in ((old + 1) % length, (old - 1) % length):
                    assert plan_selection_update(layout, old, new, length).net == 0


def test_full_repaint_leaves_cursor_at_rest():
    snapshot = _snapshot()
    terminal = _painted(snapshot)
    assert terminal.cursor == (0, ScreenLayout.from_snapshot(snapshot).rest_row)
    assert terminal.line(0) == "-" * 79 + " "
    assert terminal.line(16).startswith("-" * 79)
    assert terminal.flush_count == 1


def test_full_repaint_shows_pagination_hint():
    snapshot = _snapshot(show_pagination_hint=True)
    terminal = _painted(snapshot)
    assert terminal.screen()[16].startswith('|  "b" to <--  "f" to -->')
    assert terminal.screen()[16].endswith("|")
    assert terminal.cursor == (0, 18)


def test_status_message_does_not_move_rest_position():
    snapshot = _snapshot(status_message="Deleted f1.txt.")
    terminal = _painted(snapshot)
    assert terminal.screen()[17] == "Deleted f1.txt."
    assert terminal.cursor == (0, 17)


def test_too_small_terminal_shows_message_only():
    geometry = TerminalGeometry.from_window_size(30, 24)
    terminal = _painted(_snapshot(geometry=geometry), columns=30)
    assert terminal.screen()[0] == TOO_SMALL_MESSAGE[:30]


@pytest.mark.parametrize("hint", [False, True])
def test_selection_delta_matches_full_repaint(hint):
    """Incremental repaints leave the same screen as a full repaint would."""
    count = 5
    terminal = _painted(_snapshot(count, show_pagination_hint=hint))
    updater = ScreenUpdater(terminal)
    rest = terminal.cursor

    selection = 0
    for delta in (1, 1, -1, -1, -1, 1, 1, 1, 1, 1):
        old, selection = selection, (selection + delta) % count
        snapshot = _snapshot(count, selection=selection, show_pagination_hint=hint)
        path = updater.update(UpdateType.CHANGE_TARGET_CONTENT, snapshot, old=old, new=selection)
        assert path is RepaintPath.SELECTION_DELTA
        assert terminal.cursor == rest
        assert terminal.screen() == _painted(snapshot).screen()


def test_selection_update_requires_indices():
    terminal = _painted(_snapshot())
    with pytest.raises(ValueError):
        ScreenUpdater(terminal).update(UpdateType.CHANGE_TARGET_CONTENT, _snapshot())


def test_selection_update_without_change_writes_nothing():
    terminal = _painted(_snapshot())
    terminal.clear_operations()
    ScreenUpdater(terminal).update_selection(_snapshot(), 2, 2)
    assert terminal.operations == []


def test_menu_rewrite_opens_and_closes_the_menu():
    listing_snapshot = _snapshot(selection=1)
    terminal = _painted(listing_snapshot)
    updater = ScreenUpdater(terminal)
    rest = terminal.cursor
    boundary = GEOMETRY.menu_column_start

    menu_snapshot = _snapshot(
        selection=1, focus=FocusState.ACTION_MENU, menu_context=FILE_CONTEXT
    )
    assert updater.update(UpdateType.CHANGE_TARGET_SPACE, menu_snapshot) is RepaintPath.MENU_COLUMN
    assert terminal.cursor == rest
    expected = _painted(menu_snapshot)
    for row in range(terminal.rows):
        assert terminal.line(row)[boundary:] == expected.line(row)[boundary:]
    # the listing column keeps its marker
    assert terminal.screen()[3].startswith("|  > ")

    moved = _snapshot(
        selection=1, focus=FocusState.ACTION_MENU, menu_context=FILE_CONTEXT, menu_selection=2
    )
    updater.update(UpdateType.CHANGE_TARGET_CONTENT, moved)
    assert terminal.cursor == rest
    assert "> |  BACK  |" in terminal.text()

    updater.update(UpdateType.CHANGE_TARGET_SPACE, listing_snapshot)
    assert terminal.cursor == rest
    assert terminal.screen() == _painted(listing_snapshot).screen()
