"""Tests for focus routing and the dispatch middleware."""

import logging

import pytest

from dirdesk.focus import (
    NO_ACTION,
    Action,
    ActionKind,
    Event,
    EventKind,
    FocusRouter,
    chain,
    guard_reentry,
    route,
    trace_keys,
)
from dirdesk.modes import FocusState


def test_listing_routes():
    assert route(FocusState.LISTING, Event(EventKind.UP)) == (
        FocusState.LISTING,
        Action(ActionKind.MOVE_SELECTION, -1),
    )
    assert route(FocusState.LISTING, Event(EventKind.ENTER))[1].kind is ActionKind.CONFIRM_ENTRY
    assert route(FocusState.LISTING, Event(EventKind.FORWARD))[1] == Action(ActionKind.PAGINATE, 1)
    assert route(FocusState.LISTING, Event(EventKind.BACKWARD))[1] == Action(ActionKind.PAGINATE, -1)


def test_menu_routes():
    assert route(FocusState.ACTION_MENU, Event(EventKind.DOWN)) == (
        FocusState.ACTION_MENU,
        Action(ActionKind.MOVE_MENU_SELECTION, 1),
    )
    assert route(FocusState.ACTION_MENU, Event(EventKind.ENTER))[1].kind is ActionKind.ACTIVATE_MENU_ITEM
    assert route(FocusState.ACTION_MENU, Event(EventKind.FORWARD))[1] is NO_ACTION


def test_change_focus_needs_a_target():
    with pytest.raises(ValueError):
        route(FocusState.LISTING, Event(EventKind.CHANGE_FOCUS))
    assert route(FocusState.LISTING, Event(EventKind.CHANGE_FOCUS, FocusState.ACTION_MENU)) == (
        FocusState.ACTION_MENU,
        NO_ACTION,
    )


def test_router_tracks_focus():
    router = FocusRouter()
    assert router.focus is FocusState.LISTING
    router.change_focus(FocusState.ACTION_MENU)
    assert router.focus is FocusState.ACTION_MENU
    assert router.dispatch(Event(EventKind.UP)).kind is ActionKind.MOVE_MENU_SELECTION


def test_guard_reentry_drops_nested_events():
    handled = []

    def handler(event):
        handled.append(event.kind)
        if event.kind is EventKind.UP:
            assert guarded(Event(EventKind.DOWN)) is False
        return True

    guarded = guard_reentry(handler)
    assert guarded(Event(EventKind.UP)) is True
    assert guarded(Event(EventKind.DOWN)) is True
    assert handled == [EventKind.UP, EventKind.DOWN]


def test_guard_reentry_releases_after_error():
    def handler(event):
        raise RuntimeError("boom")

    guarded = guard_reentry(handler)
    with pytest.raises(RuntimeError):
        guarded(Event(EventKind.UP))
    with pytest.raises(RuntimeError):
        guarded(Event(EventKind.UP))


def test_chain_runs_first_middleware_outermost():
    calls = []

    def named(name):
        def middleware(handler):
            def wrapped(event):
                calls.append(name)
                return handler(event)

            return wrapped

        return middleware

    handler = chain(lambda event: calls.append("handler") or True, named("outer"), named("inner"))
    assert handler(Event(EventKind.ENTER)) is True
    assert calls == ["outer", "inner", "handler"]


def test_trace_keys_logs_each_event(caplog):
    caplog.set_level(logging.DEBUG, logger="dirdesk.keyevents")
    traced = trace_keys(lambda event: True)
    traced(Event(EventKind.FORWARD))
    assert [record.getMessage() for record in caplog.records] == ["event=forward"]
    assert caplog.records[0].name == "dirdesk.keyevents"
