"""
LineStore for ingested lines and their comments.

Lines are kept in an append-only list indexed by line id. There is no size
bound: history grows for the lifetime of the process. Comments live in a
separate index keyed by line id because they arrive after the line itself.

LineStore is not thread-safe on its own; DataModel calls it while holding
the model lock.
"""

import time

from logalizer.types import Line, LineView


class LineStore:
    """
    Append-only line history with a comment index.

    Example:
        store = LineStore()
        line = store.append("hello", tab_id=0)
        store.set_comment(line.id, "greeting")
        store.view(line.id).comment  # "greeting"
    """

    def __init__(self) -> None:
        self._lines: list[Line] = []
        self._comments: dict[int, str] = {}

    def append(self, text: str, tab_id: int) -> Line:
        """
        Store a new line under the next sequential id.

        Args:
            text: Line text
            tab_id: Tab the line was classified into

        Returns:
            The stored line
        """
        line = Line(
            id=len(self._lines),
            timestamp=time.monotonic(),
            text=text,
            tab_id=tab_id,
        )
        self._lines.append(line)
        return line

    def tab_of(self, line_id: int) -> int:
        return self._lines[line_id].tab_id

    def set_comment(self, line_id: int, comment: str) -> bool:
        """
        Attach a comment to a line.

        Each line keeps its first comment; later writes are ignored.

        Returns:
            True if the comment was stored
        """
        if line_id in self._comments:
            return False
        self._comments[line_id] = comment
        return True

    def get_comment(self, line_id: int) -> str | None:
        return self._comments.get(line_id)

    def view(self, line_id: int) -> LineView:
        """Build a renderer-facing copy of a line with its comment."""
        line = self._lines[line_id]
        return LineView(
            id=line.id,
            timestamp=line.timestamp,
            text=line.text,
            tab_id=line.tab_id,
            comment=self._comments.get(line_id),
        )

    def __len__(self) -> int:
        """Return number of stored lines."""
        return len(self._lines)
