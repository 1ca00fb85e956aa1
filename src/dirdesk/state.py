"""Directory listing state: entries, pagination window and selection."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dirdesk.filesystem import FilesystemProvider
from dirdesk.formatting import DEFAULT_TIMESTAMP_FORMAT, build_display_label, placeholder_label
from dirdesk.geometry import TerminalGeometry
from dirdesk.modes import MenuItem, menu_items_for
from dirdesk.render_utils import PARENT_LABEL

logger = logging.getLogger(__name__)


class ListingError(Exception):
    """Raised when a directory cannot be read."""


class RemovalError(Exception):
    """Raised when an entry cannot be removed from disk."""


@dataclass(frozen=True)
class DirectoryEntry:
    raw_name: str
    display_label: str
    is_directory: bool
    is_parent: bool = False

    @property
    def display_name(self) -> str:
        """Return the name as shown on screen, with a slash for directories."""
        if self.is_parent:
            return PARENT_LABEL
        suffix = "/" if self.is_directory else ""
        return f"{self.raw_name}{suffix}"


PARENT_ENTRY = DirectoryEntry(
    raw_name="..", display_label=PARENT_LABEL, is_directory=True, is_parent=True
)


@dataclass
class PaginationWindow:
    """Inclusive slice ``[start_index, end_index]`` of the full name list."""

    start_index: int = 0
    end_index: int = 0
    range: int = 1
    total: int = 0

    @classmethod
    def first_page(cls, total: int, page_range: int) -> "PaginationWindow":
        window = cls(start_index=0, end_index=0, range=page_range, total=total)
        window.reclamp(total)
        return window

    @property
    def last_index(self) -> int:
        return max(self.total - 1, 0)

    @property
    def covers_all(self) -> bool:
        """True when every name of the directory is inside the window."""
        return self.start_index == 0 and self.end_index >= self.last_index

    def shift(self, direction: int) -> bool:
        """Move the window one range forward (>0) or backward (<0).

        Returns False, leaving the window untouched, when it already sits at
        the requested edge.
        """
        if direction > 0:
            if self.end_index >= self.last_index:
                return False
            self.end_index = min(self.end_index + self.range, self.last_index)
            self.start_index = self.end_index - self.range
            return True
        if direction < 0:
            if self.start_index == 0:
                return False
            self.start_index = max(self.start_index - self.range, 0)
            self.end_index = self.start_index + self.range
            return True
        return False

    def reclamp(self, total: int, page_range: Optional[int] = None) -> None:
        """Fit the window to a new name count and optionally a new range."""
        if page_range is not None:
            self.range = page_range
        self.total = total
        if self.last_index <= self.range:
            self.start_index = 0
            self.end_index = self.last_index
            return
        self.end_index = min(self.start_index + self.range, self.last_index)
        self.start_index = self.end_index - self.range


@dataclass(frozen=True)
class ActiveMenuContext:
    resolved_path: Path
    is_directory: bool
    # entry the menu was opened on; the listing selection may move under it
    entry: Optional[DirectoryEntry] = None

    @property
    def items(self) -> Tuple[MenuItem, ...]:
        return menu_items_for(self.is_directory)


class ListingState:
    """Paginated view over one directory plus the synthetic parent entry."""

    def __init__(
        self,
        provider: FilesystemProvider,
        current_dir: Path,
        *,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
    ) -> None:
        self.provider = provider
        self.current_dir = Path(current_dir)
        self.timestamp_format = timestamp_format
        self.names: List[str] = []
        self.entries: List[DirectoryEntry] = [PARENT_ENTRY]
        self.window = PaginationWindow()
        self.selection = 0
        self._label_budget = 0

    @property
    def has_hidden_entries(self) -> bool:
        """Whether the pagination window leaves names off screen."""
        return not self.window.covers_all

    def load_directory(self, path: Path, geometry: TerminalGeometry) -> None:
        """Read ``path`` and show its first page with the parent entry selected.

        The current directory only changes when the read succeeds, so callers
        can stay where they were after a :class:`ListingError`.
        """
        path = Path(path)
        try:
            names = list(self.provider.list_names(path))
        except OSError as err:
            raise ListingError(f"Cannot read directory {path}: {err}") from err

        self.current_dir = path
        self.names = names
        self.window = PaginationWindow.first_page(len(names), geometry.page_range)
        self._label_budget = geometry.label_budget
        self._materialize()
        self.selection = 0
        logger.debug("Loaded %s: %d names, window %s", path, len(names), self.window)

    def relayout(self, geometry: TerminalGeometry) -> None:
        """Re-derive the window and labels for a new geometry without re-reading."""
        self.window.reclamp(len(self.names), geometry.page_range)
        self._label_budget = geometry.label_budget
        self._materialize()
        self._clamp_selection()

    def resolve_entry_metadata(self, name: str) -> DirectoryEntry:
        """Build the entry for ``name``; unreadable entries get a placeholder."""
        try:
            info = self.provider.stat_entry(self.current_dir / name)
        except OSError as err:
            logger.debug("Metadata unavailable for %s: %s", name, err)
            return DirectoryEntry(
                raw_name=name, display_label=placeholder_label(name), is_directory=False
            )
        label = build_display_label(
            name,
            created=info.created_at,
            size=info.size_bytes,
            is_directory=info.is_directory,
            budget=self._label_budget,
            timestamp_format=self.timestamp_format,
        )
        return DirectoryEntry(raw_name=name, display_label=label, is_directory=info.is_directory)

    def paginate(self, direction: int) -> bool:
        """Shift the window; returns True when a new page was materialized."""
        if not self.window.shift(direction):
            return False
        self._materialize()
        self._clamp_selection()
        logger.debug("Paginated %s to window %s", self.current_dir, self.window)
        return True

    def move_selection(self, delta: int) -> Tuple[int, int]:
        """Move the selection with wrap-around; returns ``(old, new)``."""
        old = self.selection
        self.selection = (old + delta) % len(self.entries)
        return old, self.selection

    def remove(self, name: str) -> None:
        """Delete ``name`` from disk, then drop it from the listing.

        Nothing in memory changes when the removal fails.
        """
        path = self.current_dir / name
        try:
            self.provider.remove_recursive(path)
        except OSError as err:
            raise RemovalError(f"Cannot remove {path}: {err}") from err

        if name in self.names:
            self.names.remove(name)
        self.window.reclamp(len(self.names))
        self._materialize()
        self.selection = max(self.selection - 1, 0)
        self._clamp_selection()

    def selected_entry(self) -> DirectoryEntry:
        return self.entries[self.selection]

    def resolve_path(self, entry: DirectoryEntry) -> Path:
        """Return the normalised absolute path of ``entry``."""
        return Path(os.path.normpath(self.current_dir / entry.raw_name))

    def _materialize(self) -> None:
        """Rebuild ``entries`` from the names inside the window.

        Metadata is resolved alternating from both ends of the page toward
        its centre; each entry lands in its own slot so the on-screen order
        matches the provider order.
        """
        page = self.names[self.window.start_index : self.window.end_index + 1]
        slots: List[Optional[DirectoryEntry]] = [None] * (len(page) + 1)
        slots[0] = PARENT_ENTRY

        for offset in range(math.ceil(len(page) / 2)):
            first_slot = offset + 1
            last_slot = len(slots) - 1 - offset
            slots[first_slot] = self.resolve_entry_metadata(page[offset])
            if last_slot != first_slot:
                slots[last_slot] = self.resolve_entry_metadata(page[-1 - offset])

        self.entries = [entry for entry in slots if entry is not None]

    def _clamp_selection(self) -> None:
        self.selection = min(self.selection, len(self.entries) - 1)


__all__ = [
    "ActiveMenuContext",
    "DirectoryEntry",
    "ListingError",
    "ListingState",
    "PARENT_ENTRY",
    "PaginationWindow",
    "RemovalError",
]
