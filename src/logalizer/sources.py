"""
LineSource: reads one input on its own thread and feeds lines to the model.

Each configured input gets a LineSource. The source reads complete lines,
strips the newline, skips empty lines and hands the text to a callback,
normally a partial of DataModel.add_line bound to the source's tab id.

Behaviour at end of input:
- Default: the source stops, which suits pipes and process substitution
  such as <(journalctl -f)
- follow=True: the source waits poll_interval and tries again, like tail -f.
  A trailing line without newline is held back until it is complete, and a
  regular file that shrinks is re-read from the beginning.

Stopping is cooperative. The stop token is checked between reads; a source
blocked inside a read on a quiet pipe only notices it once the read returns.
"""

import logging
import os
import stat
import threading
from pathlib import Path
from typing import BinaryIO, Callable

logger = logging.getLogger(__name__)


class LineSource:
    """
    Threaded reader for one file or stream.

    Example:
        stop = threading.Event()
        source = LineSource(path, on_line=print, stop=stop)
        source.start()
        ...
        source.stop()
        source.join(timeout=1.0)
    """

    def __init__(
        self,
        path: str | Path,
        on_line: Callable[[str], object],
        stop: threading.Event | None = None,
        follow: bool = False,
        poll_interval: float = 0.25,
    ) -> None:
        """
        Initialize a source. Nothing is opened until start().

        Args:
            path: File, FIFO or /dev/fd path to read
            on_line: Callback invoked with each non-empty line
            stop: Cancellation token, shared with other sources if given
            follow: Keep polling for new data at end of input
            poll_interval: Seconds between polls in follow mode
        """
        self.path = Path(path)
        self.follow = follow
        self.poll_interval = poll_interval
        self.lines_read = 0
        self._on_line = on_line
        self._stop = stop if stop is not None else threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the reader thread."""
        self._thread = threading.Thread(
            target=self._run,
            name=f"source-{self.path.name}",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the reader thread to stop after its current read."""
        self._stop.set()

    def join(self, timeout: float | None = None) -> bool:
        """
        Wait for the reader thread to finish.

        Returns:
            True if the thread is finished (or was never started)
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        try:
            f = self.path.open("rb")
        except OSError as e:
            logger.error(f"Cannot open {self.path}: {e}")
            return

        logger.info(f"Reading {self.path}")
        try:
            with f:
                self._read(f)
        except Exception:
            logger.exception(f"Source {self.path} failed")
        logger.info(f"End of input reached: {self.path} ({self.lines_read} lines)")

    def _read(self, f: BinaryIO) -> None:
        regular = stat.S_ISREG(os.fstat(f.fileno()).st_mode)
        partial = b""

        while not self._stop.is_set():
            data = f.readline()
            if data.endswith(b"\n"):
                self._emit(partial + data)
                partial = b""
                continue

            # Short read: end of input for now
            partial += data
            if not self.follow:
                break

            if regular and os.fstat(f.fileno()).st_size < f.tell():
                logger.info(f"{self.path} was truncated, reading from start")
                f.seek(0)
                partial = b""
            self._stop.wait(self.poll_interval)

        if partial and not self.follow:
            self._emit(partial)

    def _emit(self, data: bytes) -> None:
        text = data.decode("utf-8", errors="replace").rstrip("\r\n")
        if not text:
            return
        self.lines_read += 1
        self._on_line(text)
