"""Enumerations for pane focus and the contextual action menu."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class FocusState(Enum):
    LISTING = "listing"
    ACTION_MENU = "action_menu"

    @property
    def label(self) -> str:
        if self is FocusState.LISTING:
            return "Listing"
        return "Action menu"


class MenuItem(Enum):
    RENAME = "RENAME"
    DELETE = "DELETE"
    BACK = "BACK"
    OPEN = "OPEN"

    @property
    def label(self) -> str:
        return self.value


FILE_MENU: Tuple[MenuItem, ...] = (MenuItem.RENAME, MenuItem.DELETE, MenuItem.BACK)
DIRECTORY_MENU: Tuple[MenuItem, ...] = FILE_MENU + (MenuItem.OPEN,)


def menu_items_for(is_directory: bool) -> Tuple[MenuItem, ...]:
    """Return the menu shown for a file or a directory entry."""
    return DIRECTORY_MENU if is_directory else FILE_MENU


__all__ = ["FocusState", "MenuItem", "FILE_MENU", "DIRECTORY_MENU", "menu_items_for"]
