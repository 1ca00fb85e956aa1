"""Focus routing between the listing pane and the action menu.

:func:`route` is a pure function from ``(FocusState, Event)`` to
``(FocusState, Action)``.  :class:`FocusRouter` keeps the current focus and
is the only place that changes it.  Middleware such as :func:`guard_reentry`
wraps the event handler at the dispatch boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from dirdesk.modes import FocusState

logger = logging.getLogger(__name__)
key_logger = logging.getLogger("dirdesk.keyevents")


class EventKind(Enum):
    UP = "up"
    DOWN = "down"
    ENTER = "enter"
    CHANGE_FOCUS = "change_focus"
    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    target: Optional[FocusState] = None


class ActionKind(Enum):
    MOVE_SELECTION = "move_selection"
    MOVE_MENU_SELECTION = "move_menu_selection"
    CONFIRM_ENTRY = "confirm_entry"
    ACTIVATE_MENU_ITEM = "activate_menu_item"
    PAGINATE = "paginate"
    NONE = "none"


@dataclass(frozen=True)
class Action:
    kind: ActionKind
    delta: int = 0


NO_ACTION = Action(ActionKind.NONE)

_LISTING_ACTIONS = {
    EventKind.UP: Action(ActionKind.MOVE_SELECTION, -1),
    EventKind.DOWN: Action(ActionKind.MOVE_SELECTION, 1),
    EventKind.ENTER: Action(ActionKind.CONFIRM_ENTRY),
    EventKind.FORWARD: Action(ActionKind.PAGINATE, 1),
    EventKind.BACKWARD: Action(ActionKind.PAGINATE, -1),
}

_MENU_ACTIONS = {
    EventKind.UP: Action(ActionKind.MOVE_MENU_SELECTION, -1),
    EventKind.DOWN: Action(ActionKind.MOVE_MENU_SELECTION, 1),
    EventKind.ENTER: Action(ActionKind.ACTIVATE_MENU_ITEM),
    EventKind.FORWARD: NO_ACTION,
    EventKind.BACKWARD: NO_ACTION,
}


def route(focus: FocusState, event: Event) -> Tuple[FocusState, Action]:
    """Return the focus after ``event`` and the action it asks for."""
    if event.kind is EventKind.CHANGE_FOCUS:
        if event.target is None:
            raise ValueError("CHANGE_FOCUS needs a target focus.")
        return event.target, NO_ACTION
    table = _LISTING_ACTIONS if focus is FocusState.LISTING else _MENU_ACTIONS
    return focus, table[event.kind]


class FocusRouter:
    """Hold the current focus and translate events into actions."""

    def __init__(self, focus: FocusState = FocusState.LISTING) -> None:
        self._focus = focus

    @property
    def focus(self) -> FocusState:
        return self._focus

    def dispatch(self, event: Event) -> Action:
        new_focus, action = route(self._focus, event)
        if new_focus is not self._focus:
            logger.debug("Focus %s -> %s", self._focus.value, new_focus.value)
        self._focus = new_focus
        return action

    def change_focus(self, target: FocusState) -> None:
        self.dispatch(Event(EventKind.CHANGE_FOCUS, target))


EventHandler = Callable[[Event], bool]
Middleware = Callable[[EventHandler], EventHandler]


def guard_reentry(handler: EventHandler) -> EventHandler:
    """Drop events that arrive while a previous event is still being handled.

    Only nested dispatch is dropped; keys queued by the terminal are handled
    one after another and never coalesced.
    """
    busy = False

    def guarded(event: Event) -> bool:
        nonlocal busy
        if busy:
            logger.debug("Dropped %s while a repaint was in flight", event.kind.value)
            return False
        busy = True
        try:
            return handler(event)
        finally:
            busy = False

    return guarded


def trace_keys(handler: EventHandler) -> EventHandler:
    """Log every event to the ``dirdesk.keyevents`` logger."""

    def traced(event: Event) -> bool:
        key_logger.debug("event=%s", event.kind.value)
        return handler(event)

    return traced


def chain(handler: EventHandler, *middleware: Middleware) -> EventHandler:
    """Wrap ``handler`` so the first middleware listed runs outermost."""
    for wrap in reversed(middleware):
        handler = wrap(handler)
    return handler


__all__ = [
    "Action",
    "ActionKind",
    "Event",
    "EventHandler",
    "EventKind",
    "FocusRouter",
    "Middleware",
    "NO_ACTION",
    "chain",
    "guard_reentry",
    "route",
    "trace_keys",
]
