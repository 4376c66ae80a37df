"""
Core data structures for the log viewer.

This module defines the records shared between the model and its readers:
- Line: One ingested line as stored by LineStore
- LineView: A line handed to the renderer, including its comment
- Filter: A named regex that claims matching lines for its own tab
- Tab: Read-only snapshot of a tab's state

Lines are referenced everywhere else by id. Tab and LineView values are
copies, so holding one never exposes mutable model state to another thread.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Line:
    """
    A single ingested line.

    Attributes:
        id: Sequential id assigned at append, starting at 0
        timestamp: time.monotonic() at ingestion
        text: Raw line text without trailing newline
        tab_id: Tab the line was classified into
    """

    id: int
    timestamp: float
    text: str
    tab_id: int


@dataclass(frozen=True)
class LineView:
    """A visible line as returned by a render pass."""

    id: int
    timestamp: float
    text: str
    tab_id: int
    comment: str | None = None


@dataclass
class Filter:
    """
    A named pattern with an optional bound command.

    Attributes:
        tab_id: Tab that receives matching lines
        name: Unique filter name
        regex: Compiled pattern, matched against the whole line
        command: Command run for each matching line, if bound
    """

    tab_id: int
    name: str
    regex: re.Pattern[str]
    command: str | None = None

    def matches(self, text: str) -> bool:
        """Return True if the pattern matches the entire text."""
        return self.regex.fullmatch(text) is not None


@dataclass(frozen=True)
class Tab:
    """
    Snapshot of a tab.

    Attributes:
        tab_id: Stable index shared by sources and filters
        name: Source path or filter name
        enabled: Whether lines in this tab are visible
        count: Number of lines routed to this tab
        min_line_id: First line id routed here, None before any line
        max_line_id: Last line id routed here, None before any line
        is_filter: True for filter tabs, False for source tabs
    """

    tab_id: int
    name: str
    enabled: bool
    count: int = 0
    min_line_id: int | None = None
    max_line_id: int | None = None
    is_filter: bool = False
