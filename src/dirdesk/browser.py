"""Core directory browser logic."""

from __future__ import annotations

import curses
import logging
from pathlib import Path
from typing import Optional

from .file_operations import FileOperationsMixin
from .filesystem import FilesystemProvider, LocalFilesystem
from .focus import FocusRouter, chain, guard_reentry, trace_keys
from .formatting import DEFAULT_TIMESTAMP_FORMAT
from .geometry import GeometryModel
from .input_handlers import DEFAULT_RESIZE_DEBOUNCE_MS, InputHandlersMixin, InputSource, Signal
from .modes import FocusState
from .render import RenderSnapshot
from .state import ActiveMenuContext, ListingError, ListingState
from .terminal import CursesTerminal, TerminalSink
from .updater import ScreenUpdater, UpdateType

logger = logging.getLogger(__name__)


class DirectoryBrowserError(Exception):
    """Raised when the directory browser cannot start."""


class DirectoryBrowser(InputHandlersMixin, FileOperationsMixin):
    """Browse one directory with a contextual action menu beside it.

    This class owns the event loop and the shared state; responsibilities are
    split across mixins:
    - InputHandlersMixin: routed listing and menu navigation
    - FileOperationsMixin: the action menu's Open, Delete, Back and Rename
    """

    def __init__(
        self,
        start_dir: Path,
        *,
        provider: Optional[FilesystemProvider] = None,
        timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT,
        resize_debounce_ms: int = DEFAULT_RESIZE_DEBOUNCE_MS,
    ) -> None:
        self.listing = ListingState(
            provider or LocalFilesystem(),
            Path(start_dir).expanduser().resolve(),
            timestamp_format=timestamp_format,
        )
        self.router = FocusRouter()
        self.menu_context: Optional[ActiveMenuContext] = None
        self.menu_selection = 0
        self.status_message: Optional[str] = None
        self.resize_debounce_ms = resize_debounce_ms
        self.geometry: Optional[GeometryModel] = None
        self.updater: Optional[ScreenUpdater] = None
        self.handle_event = chain(self._handle_event, trace_keys, guard_reentry)

    @property
    def focus(self) -> FocusState:
        return self.router.focus

    def attach(self, sink: TerminalSink) -> None:
        """Connect the browser to a terminal sink."""
        self.geometry = GeometryModel(sink)
        self.updater = ScreenUpdater(sink)

    def start(self) -> None:
        """Measure the terminal, read the start directory and paint everything."""
        geometry = self.geometry.measure()
        try:
            self.listing.load_directory(self.listing.current_dir, geometry)
        except ListingError as err:
            raise DirectoryBrowserError(str(err)) from err
        self._repaint(UpdateType.OPEN_DIR)

    def handle_resize(self) -> None:
        """Re-measure after a settled resize and repaint from scratch."""
        self.geometry.invalidate()
        geometry = self.geometry.measure()
        logger.debug("Resized to %dx%d", geometry.window_columns, geometry.window_rows)
        self.listing.relayout(geometry)
        self._repaint(UpdateType.RESIZE)

    def snapshot(self) -> RenderSnapshot:
        """Freeze the state both line generators read for one repaint."""
        return RenderSnapshot(
            geometry=self.geometry.current,
            entries=tuple(self.listing.entries),
            selection=self.listing.selection,
            focus=self.router.focus,
            menu_context=self.menu_context,
            menu_selection=self.menu_selection,
            show_pagination_hint=self.listing.has_hidden_entries,
            status_message=self.status_message,
        )

    def _repaint(self, update_type: UpdateType) -> None:
        """Run a structural update; a pending status message is shown once."""
        self.updater.update(update_type, self.snapshot())
        self.status_message = None

    def browse(self) -> Path:
        """Launch the UI and return the directory the user ended up in."""
        try:
            return curses.wrapper(self._loop)
        except curses.error as err:
            raise DirectoryBrowserError("Failed to initialise curses UI.") from err

    def _loop(self, stdscr: "curses._CursesWindow") -> Path:  # type: ignore[name-defined]
        """Main curses event loop."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        curses.raw()
        stdscr.keypad(True)
        stdscr.nodelay(False)

        self.attach(CursesTerminal(stdscr))
        self.start()
        source = InputSource(stdscr, self.resize_debounce_ms)

        while True:
            item = source.read()
            if item is Signal.INTERRUPT:
                break
            if item is Signal.RESIZE:
                self.handle_resize()
                continue
            self.handle_event(item)

        return self.listing.current_dir


__all__ = ["DirectoryBrowser", "DirectoryBrowserError"]
