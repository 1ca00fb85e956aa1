"""Action menu items: what happens when an item is confirmed."""

from __future__ import annotations

import logging
from typing import Callable, Dict

from dirdesk.focus import Action
from dirdesk.modes import FocusState, MenuItem
from dirdesk.state import ListingError, RemovalError
from dirdesk.updater import UpdateType

logger = logging.getLogger(__name__)

RENAME_NOT_IMPLEMENTED = "Rename is not implemented yet."


class FileOperationsMixin:
    """Mixin providing the action menu's Open, Delete, Back and Rename."""

    def _menu_handlers(self) -> Dict[MenuItem, Callable[[], None]]:
        return {
            MenuItem.BACK: self._menu_back,
            MenuItem.OPEN: self._menu_open,
            MenuItem.DELETE: self._menu_delete,
            MenuItem.RENAME: self._menu_rename,
        }

    def _activate_menu_item(self, action: Action) -> None:
        context = self.menu_context
        if context is None:
            return
        item = context.items[self.menu_selection]
        logger.debug("Menu item %s on %s", item.label, context.resolved_path)
        self._menu_handlers()[item]()

    def _close_menu(self) -> None:
        self.menu_context = None
        self.menu_selection = 0
        self.router.change_focus(FocusState.LISTING)

    def _menu_back(self) -> None:
        self._close_menu()
        self.updater.update(UpdateType.CHANGE_TARGET_SPACE, self.snapshot())

    def _menu_open(self) -> None:
        context = self.menu_context
        if context is None or not context.is_directory:
            return
        try:
            self.listing.load_directory(context.resolved_path, self.geometry.current)
        except ListingError as err:
            logger.warning("Open failed: %s", err)
            self.status_message = f"Cannot open {context.resolved_path}: {err.__cause__ or err}"
        self._close_menu()
        self._repaint(UpdateType.OPEN_DIR)

    def _menu_delete(self) -> None:
        entry = self.menu_context.entry
        if entry is None or entry.is_parent:
            self.status_message = "Nothing to delete."
        else:
            try:
                self.listing.remove(entry.raw_name)
                self.status_message = f"Deleted {entry.display_name}."
            except RemovalError as err:
                logger.warning("Delete failed: %s", err)
                self.status_message = f"Delete failed: {err.__cause__ or err}"
        self._close_menu()
        self._repaint(UpdateType.REMOVE_CONTENT)

    def _menu_rename(self) -> None:
        logger.warning("Rename requested for %s but is not implemented", self.menu_context.resolved_path)
        self.status_message = RENAME_NOT_IMPLEMENTED
        self._repaint(UpdateType.NOTICE)


__all__ = ["FileOperationsMixin", "RENAME_NOT_IMPLEMENTED"]
