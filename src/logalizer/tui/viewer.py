"""
Viewer: render loop, redraw gate and key dispatch for the log viewer.

The viewer owns the screen and registers itself as the model's new-data
listener. Two things trigger a redraw:
- The render loop, after every key and on every poll timeout
- Source threads, through the listener, when a line is ingested while the
  lines panel still has free rows

Both go through one non-blocking gate. A redraw requested while another is
in progress is dropped rather than queued; the next poll timeout picks up
whatever it missed. The gate also guarantees that at most one render pass
(prepare_lines/next_line) runs at a time.

Shutdown is driven by a stop token shared with the line sources. The 'q'
key sets it; Ctrl+C is turned into the same by the CLI.
"""

import logging
import threading

from rich.console import Console
from rich.live import Live
from rich.text import Text

from logalizer.config import Settings
from logalizer.model import DataModel
from logalizer.tui.keyboard import KEY_DOWN, KEY_UP, KeyReader
from logalizer.tui.layout import (
    FOOTER_SIZE,
    PANEL_CHROME,
    TAB_BAR_SIZE,
    create_layout,
    make_comment_text,
    make_footer,
    make_line_text,
    make_lines_panel,
    make_panel,
    make_tab_bar,
)

logger = logging.getLogger(__name__)

DIGIT_KEYS = "0123456789"


class Viewer:
    """
    Interactive terminal front end for a DataModel.

    Example:
        viewer = Viewer(model, settings, stop)
        viewer.run()  # Returns after 'q' or once stop is set
    """

    def __init__(
        self,
        model: DataModel,
        settings: Settings,
        stop: threading.Event,
        console: Console | None = None,
    ) -> None:
        """
        Initialize viewer and register it as the model's listener.

        Args:
            model: Model to display
            settings: Refresh interval, comment display, tab name width
            stop: Shared cancellation token
            console: Rich Console to use (creates default if None)
        """
        self.model = model
        self.settings = settings
        self.stop = stop
        self.console = console if console is not None else Console()
        self.show_comments = settings.show_comments
        self._layout = create_layout()
        self._drawing = threading.Lock()
        self._live: Live | None = None
        # Set by each render pass; True once the lines panel has no free row
        self.screen_filled = False

        model.register_listener(self.on_new_data)

    def run(self, keys: KeyReader | None = None) -> None:
        """
        Run the render loop until the stop token is set.

        Args:
            keys: Key source, a KeyReader on stdin if None
        """
        keys = keys if keys is not None else KeyReader()
        with keys, Live(
            self._layout,
            console=self.console,
            auto_refresh=False,
            screen=True,
        ) as live:
            self._live = live
            try:
                while not self.stop.is_set():
                    self.request_redraw()
                    key = keys.read(self.settings.refresh_interval)
                    if key is not None:
                        self.handle_key(key)
            finally:
                # Wait out a redraw in flight on a source thread
                with self._drawing:
                    self._live = None
        logger.info("Render loop exited")

    def handle_key(self, key: str) -> None:
        """
        Dispatch a keypress.

        - 0-9: toggle that tab
        - Up / k: scroll up
        - Down / j: scroll down
        - c: show or hide comments
        - q: quit
        """
        if len(key) == 1 and key in DIGIT_KEYS:
            self.model.toggle_tab(int(key))
        elif key in (KEY_UP, "k"):
            self.model.scroll_up()
        elif key in (KEY_DOWN, "j"):
            self.model.scroll_down()
        elif key in ("c", "C"):
            self.show_comments = not self.show_comments
        elif key in ("q", "Q"):
            self.stop.set()

    def on_new_data(self) -> None:
        """
        Model listener, called on the ingesting source thread.

        New lines are drawn right away only while the lines panel still has
        free rows. Once it is full, the next key or poll redraw shows the
        updated counters.
        """
        if self.screen_filled:
            return
        self.request_redraw()

    def request_redraw(self) -> bool:
        """
        Redraw unless a redraw is already in progress.

        Safe to call from any thread.

        Returns:
            True if this call redrew the screen, False if it was dropped
        """
        if not self._drawing.acquire(blocking=False):
            return False
        try:
            if self._live is None:
                return False
            self._update_layout()
            self._live.refresh()
            return True
        finally:
            self._drawing.release()

    def lines_height(self) -> int:
        """Rows available for lines and comments."""
        height = self.console.size.height - TAB_BAR_SIZE - FOOTER_SIZE - PANEL_CHROME
        return max(height, 0)

    def render_lines(self, height: int) -> list[Text]:
        """
        Run one render pass and return the rows to display.

        Must only be called with the redraw gate held, or from a test with
        no other render pass active.

        Args:
            height: Maximum number of rows

        Returns:
            Up to height rows of lines and comments
        """
        rows: list[Text] = []
        self.model.prepare_lines()
        while len(rows) < height:
            line = self.model.next_line()
            if line is None:
                break
            rows.append(make_line_text(line))
            if line.comment and self.show_comments and len(rows) < height:
                rows.append(make_comment_text(line))
        self.screen_filled = len(rows) >= height
        return rows

    def _update_layout(self) -> None:
        tabs = self.model.get_tabs()
        rows = self.render_lines(self.lines_height())
        self._layout["tabs"].update(
            make_panel(make_tab_bar(tabs, self.settings.tab_name_width), "logalizer", "blue")
        )
        self._layout["lines"].update(make_lines_panel(rows))
        self._layout["footer"].update(
            make_footer(self.model.anchor, self.model.get_line_count(), self.show_comments)
        )
