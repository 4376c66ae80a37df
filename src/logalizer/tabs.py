"""
TabRegistry for per-source and per-filter visibility buckets.

Sources and filters share one index space assigned in registration order.
Tabs are never removed or reindexed, so a tab id stays valid for the
lifetime of the process.

TabRegistry is not thread-safe on its own; DataModel calls it while holding
the model lock.
"""

import logging
from dataclasses import dataclass

from logalizer.types import Tab

logger = logging.getLogger(__name__)


@dataclass
class _TabState:
    """Mutable tab record. Only ever exposed through Tab snapshots."""

    name: str
    enabled: bool = True
    count: int = 0
    min_line_id: int | None = None
    max_line_id: int | None = None
    is_filter: bool = False


class TabRegistry:
    """
    Ordered, append-only collection of tabs.

    Tracks per-tab line counts and the id range of lines routed to each tab.
    The id range lets the cursor clamp to visible lines without scanning
    the whole line store.
    """

    def __init__(self) -> None:
        self._tabs: list[_TabState] = []

    def add(self, name: str, is_filter: bool = False) -> int:
        """
        Register a new enabled tab.

        Args:
            name: Display name
            is_filter: True when the tab belongs to a filter

        Returns:
            The new tab id
        """
        tab_id = len(self._tabs)
        self._tabs.append(_TabState(name=name, is_filter=is_filter))
        kind = "filter" if is_filter else "source"
        logger.debug(f"Tab {tab_id}: {kind} {name}")
        return tab_id

    def __contains__(self, tab_id: int) -> bool:
        return 0 <= tab_id < len(self._tabs)

    def __len__(self) -> int:
        return len(self._tabs)

    def toggle(self, tab_id: int) -> bool:
        """
        Flip a tab's enabled state.

        Returns:
            True if the tab exists, False otherwise (no change)
        """
        if tab_id not in self:
            return False
        state = self._tabs[tab_id]
        state.enabled = not state.enabled
        return True

    def is_enabled(self, tab_id: int) -> bool:
        return self._tabs[tab_id].enabled

    def get(self, tab_id: int) -> Tab | None:
        """Return a snapshot of a tab, or None if the id is unknown."""
        if tab_id not in self:
            return None
        state = self._tabs[tab_id]
        return Tab(
            tab_id=tab_id,
            name=state.name,
            enabled=state.enabled,
            count=state.count,
            min_line_id=state.min_line_id,
            max_line_id=state.max_line_id,
            is_filter=state.is_filter,
        )

    def record_line(self, tab_id: int, line_id: int) -> None:
        """
        Account for a line routed to a tab.

        Increments the count, sets the minimum id on the first line,
        and moves the maximum id forward.
        """
        state = self._tabs[tab_id]
        state.count += 1
        if state.min_line_id is None:
            state.min_line_id = line_id
        state.max_line_id = line_id

    def enabled_range(self) -> tuple[int, int] | None:
        """
        Get the smallest and largest line id among enabled tabs.

        Returns:
            (min_id, max_id), or None if no enabled tab has any line
        """
        lows = []
        highs = []
        for state in self._tabs:
            if state.enabled and state.min_line_id is not None:
                lows.append(state.min_line_id)
                highs.append(state.max_line_id)
        if not lows:
            return None
        return min(lows), max(highs)
