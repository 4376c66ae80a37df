"""
CursorEngine: scroll anchor and filtered traversal for render passes.

The anchor is the id of the first line the renderer should show. Scrolling
moves it to the nearest line in an enabled tab. A render pass clamps the
anchor to the id range of enabled tabs and then walks forward through
enabled lines one call at a time.

Searches are linear in the number of disabled lines skipped.

CursorEngine is not thread-safe on its own, and at most one render pass may
be active at a time. DataModel holds the lock for each call; the renderer
serialises passes.
"""

from logalizer.store import LineStore
from logalizer.tabs import TabRegistry
from logalizer.types import LineView


class CursorEngine:
    """
    Scroll anchor plus the transient iteration cursor of one render pass.

    Example:
        cursor.prepare_lines()
        while (line := cursor.next_line()) is not None:
            draw(line)
    """

    def __init__(self, store: LineStore, tabs: TabRegistry) -> None:
        self._store = store
        self._tabs = tabs
        self._anchor = 0
        self._cursor: int | None = None

    @property
    def anchor(self) -> int:
        return self._anchor

    def _visible(self, line_id: int) -> bool:
        return self._tabs.is_enabled(self._store.tab_of(line_id))

    def _seek(self, start: int, step: int) -> int | None:
        """Find the nearest visible line id from start, moving by step."""
        i = start
        while 0 <= i < len(self._store):
            if self._visible(i):
                return i
            i += step
        return None

    def scroll_up(self) -> bool:
        """
        Move the anchor to the previous visible line.

        Returns:
            True if the anchor moved, False if there is no visible line before it
        """
        found = self._seek(self._anchor - 1, -1)
        if found is None:
            return False
        self._anchor = found
        return True

    def scroll_down(self) -> bool:
        """
        Move the anchor to the next visible line.

        Returns:
            True if the anchor moved, False if there is no visible line after it
        """
        found = self._seek(self._anchor + 1, 1)
        if found is None:
            return False
        self._anchor = found
        return True

    def prepare_lines(self) -> None:
        """
        Begin a render pass.

        The pass starts at the anchor clamped into the id range of enabled
        tabs. If the clamped id belongs to a disabled tab, the pass starts at
        the next visible line, which always exists inside the range. With
        nothing visible the pass is empty.

        The anchor itself is never changed here, so hiding and showing a tab
        again brings back the same view.
        """
        bounds = self._tabs.enabled_range()
        if bounds is None:
            self._cursor = None
            return

        low, high = bounds
        start = min(max(self._anchor, low), high)
        self._cursor = self._seek(start, 1)

    def next_line(self) -> LineView | None:
        """
        Return the next visible line of the current pass.

        Returns:
            The line at the iteration cursor, or None once the pass is exhausted
        """
        if self._cursor is None:
            return None
        view = self._store.view(self._cursor)
        self._cursor = self._seek(self._cursor + 1, 1)
        return view
