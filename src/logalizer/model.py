"""
DataModel: the thread-safe facade over the log viewer components.

This module wires FilterEngine, TabRegistry, LineStore, CursorEngine,
Annotator and NotificationHub together behind one lock:
- Line sources call add_line() from their own threads
- The renderer calls the cursor and tab methods from the render thread
- Configuration calls add_source/add_filter/bind_command at startup

Locking discipline:
- One exclusive lock guards every component, readers included
- Bound commands run outside the lock and block only the source thread
  that ingested the line
- The new-data listener runs outside the lock, after the comment has
  been recorded, so a redraw triggered by it sees the comment
"""

import logging
import threading

from logalizer.annotator import Annotator
from logalizer.cursor import CursorEngine
from logalizer.errors import PreconditionViolation
from logalizer.filters import FilterEngine
from logalizer.notify import Listener, NotificationHub
from logalizer.runner import CommandRunner
from logalizer.store import LineStore
from logalizer.tabs import TabRegistry
from logalizer.types import Filter, LineView, Tab

logger = logging.getLogger(__name__)


class DataModel:
    """
    Shared model for line ingestion, tab bookkeeping and scrolling.

    Example:
        model = DataModel(runner=ShellCommandRunner())
        source = model.add_source("/var/log/syslog")
        model.add_filter("kernel", ".*kernel.*")
        model.add_line("Jan 1 kernel: boot", source)

        model.prepare_lines()
        while (line := model.next_line()) is not None:
            print(line.id, line.text)
    """

    def __init__(self, runner: CommandRunner) -> None:
        """
        Initialize an empty model.

        Args:
            runner: Command runner used for command-bound filters
        """
        self._lock = threading.Lock()
        self._filters = FilterEngine()
        self._tabs = TabRegistry()
        self._store = LineStore()
        self._cursor = CursorEngine(self._store, self._tabs)
        self._annotator = Annotator(runner, record=self._record_comment)
        self._hub = NotificationHub()

    # --- Configuration ---

    def add_source(self, name: str) -> int:
        """
        Register a tab for a raw input.

        Returns:
            Tab id to pass to add_line() for lines read from this input
        """
        with self._lock:
            return self._tabs.add(name)

    def add_filter(self, name: str, pattern: str) -> int:
        """
        Register a filter and its tab.

        Args:
            name: Unique filter name
            pattern: Regex that must match a whole line

        Returns:
            Tab id of the new filter

        Raises:
            ConfigurationError: If the pattern is invalid or the name is taken
        """
        regex = FilterEngine.compile(name, pattern)
        with self._lock:
            tab_id = len(self._tabs)
            self._filters.add(Filter(tab_id=tab_id, name=name, regex=regex))
            self._tabs.add(name, is_filter=True)
        return tab_id

    def bind_command(self, filter_name: str, command: str) -> None:
        """
        Run command for every later line that lands in the named filter.

        Lines already ingested are not annotated.

        Raises:
            FilterNotFoundError: If no filter has that name
        """
        with self._lock:
            self._filters.bind_command(filter_name, command)
        logger.debug(f"Command for {filter_name}: {command}")

    def register_listener(self, listener: Listener | None) -> None:
        """Register the single new-data listener, replacing any previous one."""
        self._hub.register(listener)

    # --- Ingestion ---

    def add_line(self, text: str, origin_tab_id: int) -> int:
        """
        Ingest a line read from a source.

        The first matching filter takes the line; otherwise it stays in
        origin_tab_id. If that filter has a command, it runs before this
        method returns. The new-data listener fires last.

        Args:
            text: Line text without trailing newline
            origin_tab_id: Tab id returned by add_source()

        Returns:
            Id of the stored line

        Raises:
            PreconditionViolation: If origin_tab_id is not a registered tab
        """
        command = None
        with self._lock:
            if origin_tab_id not in self._tabs:
                raise PreconditionViolation(origin_tab_id, len(self._tabs))

            tab_id = origin_tab_id
            flt = self._filters.classify(text)
            if flt is not None:
                tab_id = flt.tab_id
                command = flt.command

            line = self._store.append(text, tab_id)
            self._tabs.record_line(tab_id, line.id)

        if command:
            self._annotator.annotate(line.id, command, text)

        self._hub.notify()
        return line.id

    def _record_comment(self, line_id: int, comment: str) -> None:
        with self._lock:
            self._store.set_comment(line_id, comment)

    # --- Tabs ---

    def toggle_tab(self, tab_id: int) -> bool:
        """
        Show or hide a tab.

        Returns:
            True if the tab exists, False if the id is unknown
        """
        with self._lock:
            toggled = self._tabs.toggle(tab_id)
        if not toggled:
            logger.debug(f"Ignoring toggle of unknown tab {tab_id}")
        return toggled

    def get_tab(self, tab_id: int) -> Tab | None:
        """Return a snapshot of a tab, or None if the id is unknown."""
        with self._lock:
            return self._tabs.get(tab_id)

    def get_tab_count(self) -> int:
        with self._lock:
            return len(self._tabs)

    def get_tabs(self) -> list[Tab]:
        """Return snapshots of all tabs taken under one lock."""
        with self._lock:
            return [self._tabs.get(i) for i in range(len(self._tabs))]

    def get_line_count(self) -> int:
        with self._lock:
            return len(self._store)

    def get_comment(self, line_id: int) -> str | None:
        with self._lock:
            return self._store.get_comment(line_id)

    # --- Cursor ---

    @property
    def anchor(self) -> int:
        with self._lock:
            return self._cursor.anchor

    def scroll_up(self) -> bool:
        with self._lock:
            return self._cursor.scroll_up()

    def scroll_down(self) -> bool:
        with self._lock:
            return self._cursor.scroll_down()

    def prepare_lines(self) -> None:
        """Start a render pass. Only one pass may be active at a time."""
        with self._lock:
            self._cursor.prepare_lines()

    def next_line(self) -> LineView | None:
        """Return the next visible line of the pass, or None at the end."""
        with self._lock:
            return self._cursor.next_line()
