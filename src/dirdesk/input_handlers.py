"""Keyboard input: decoding, resize debouncing and the routed-action handlers."""

from __future__ import annotations

import curses
import logging
from enum import Enum
from typing import Optional, Union

from dirdesk.focus import Action, ActionKind, Event, EventKind
from dirdesk.modes import FocusState
from dirdesk.state import ActiveMenuContext
from dirdesk.updater import UpdateType

logger = logging.getLogger(__name__)

KEY_INTERRUPT = 3  # Ctrl+C in raw mode
ENTER_KEYS = (curses.KEY_ENTER, ord("\n"), ord("\r"))
DEFAULT_RESIZE_DEBOUNCE_MS = 100


class Signal(Enum):
    RESIZE = "resize"
    INTERRUPT = "interrupt"


InputItem = Union[Event, Signal]


def decode_key(key_code: int) -> Optional[InputItem]:
    """Translate a curses key code; unknown keys yield ``None``."""
    if key_code == KEY_INTERRUPT:
        return Signal.INTERRUPT
    if key_code == curses.KEY_UP:
        return Event(EventKind.UP)
    if key_code == curses.KEY_DOWN:
        return Event(EventKind.DOWN)
    if key_code in ENTER_KEYS:
        return Event(EventKind.ENTER)
    if key_code == ord("f"):
        return Event(EventKind.FORWARD)
    if key_code == ord("b"):
        return Event(EventKind.BACKWARD)
    return None


class InputSource:
    """Read decoded input from a curses window.

    Resize notifications are debounced: after a ``KEY_RESIZE`` the window is
    polled with a timeout, later resizes restart the wait, and a single
    :data:`Signal.RESIZE` is reported once the terminal has been quiet for the
    whole delay.  A key pressed during the wait is reported right after the
    resize.
    """

    def __init__(self, window: "curses._CursesWindow", debounce_ms: int = DEFAULT_RESIZE_DEBOUNCE_MS) -> None:  # type: ignore[name-defined]
        self._window = window
        self._debounce_ms = debounce_ms
        self._resize_pending = False
        self._stashed_key: Optional[int] = None

    def read(self) -> InputItem:
        """Block until an event or signal is available."""
        while True:
            if self._stashed_key is not None:
                key, self._stashed_key = self._stashed_key, None
            else:
                key = self._window.getch()

            if key == curses.KEY_RESIZE:
                self._resize_pending = True
                self._window.timeout(self._debounce_ms)
                continue
            if key == -1:
                if self._resize_pending:
                    self._settle()
                    return Signal.RESIZE
                continue
            if self._resize_pending:
                self._settle()
                self._stashed_key = key
                return Signal.RESIZE

            decoded = decode_key(key)
            if decoded is None:
                continue
            return decoded

    def _settle(self) -> None:
        self._resize_pending = False
        self._window.timeout(-1)


class InputHandlersMixin:
    """Mixin turning routed actions into state changes and repaints."""

    def _handle_event(self, event: Event) -> bool:
        """Route ``event`` through focus and perform the resulting action."""
        action = self.router.dispatch(event)
        handler = {
            ActionKind.MOVE_SELECTION: self._move_listing_selection,
            ActionKind.MOVE_MENU_SELECTION: self._move_menu_selection,
            ActionKind.CONFIRM_ENTRY: self._confirm_entry,
            ActionKind.ACTIVATE_MENU_ITEM: self._activate_menu_item,
            ActionKind.PAGINATE: self._paginate,
        }.get(action.kind)
        if handler is None:
            return False
        handler(action)
        return True

    def _move_listing_selection(self, action: Action) -> None:
        old, new = self.listing.move_selection(action.delta)
        self.updater.update(
            UpdateType.CHANGE_TARGET_CONTENT, self.snapshot(), old=old, new=new
        )

    def _move_menu_selection(self, action: Action) -> None:
        if self.menu_context is None:
            return
        item_count = len(self.menu_context.items)
        self.menu_selection = (self.menu_selection + action.delta) % item_count
        self.updater.update(UpdateType.CHANGE_TARGET_CONTENT, self.snapshot())

    def _confirm_entry(self, action: Action) -> None:
        """Open the action menu for the selected entry."""
        entry = self.listing.selected_entry()
        resolved = self.listing.resolve_path(entry)
        if self.menu_context is not None and self.menu_context.resolved_path == resolved:
            return
        self.menu_context = ActiveMenuContext(
            resolved_path=resolved, is_directory=entry.is_directory, entry=entry
        )
        self.menu_selection = 0
        self.router.change_focus(FocusState.ACTION_MENU)
        self.updater.update(UpdateType.CHANGE_TARGET_SPACE, self.snapshot())

    def _paginate(self, action: Action) -> None:
        if self.menu_context is not None:
            return
        if self.listing.paginate(action.delta):
            self.updater.update(UpdateType.PAGINATE, self.snapshot())


__all__ = ["DEFAULT_RESIZE_DEBOUNCE_MS", "InputHandlersMixin", "InputSource", "Signal", "decode_key"]
