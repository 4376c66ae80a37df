"""
KeyReader for single-keypress input in the viewer.

The render loop polls for keys with a short timeout so it can also redraw
and notice the stop token between keypresses:
- cbreak mode is set once on enter and restored on exit
- select() with a timeout keeps every read short
- Arrow keys arrive as escape sequences and are returned whole
"""

import select
import sys
import termios
import tty
from typing import TextIO

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"


def _readkey_with_timeout(stream: TextIO, timeout: float) -> str | None:
    """
    Read a keypress with timeout.

    Uses select() to check if input is available, then reads from the stream.
    Does NOT change terminal modes - caller must ensure cbreak mode is set.

    Args:
        stream: Input stream, normally sys.stdin
        timeout: Maximum seconds to wait for input

    Returns:
        Key pressed, or None if timeout
    """
    if select.select([stream], [], [], timeout)[0]:
        char = stream.read(1)
        # Escape sequences (arrow keys, etc.)
        if char == "\x1b":
            if select.select([stream], [], [], 0.05)[0]:
                char += stream.read(1)
                if char == "\x1b[" and select.select([stream], [], [], 0.05)[0]:
                    char += stream.read(1)
        return char
    return None


class KeyReader:
    """
    Context manager that puts the terminal in cbreak mode while reading keys.

    Example:
        with KeyReader() as keys:
            key = keys.read(timeout=0.25)
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdin
        self._old_settings: list | None = None

    def __enter__(self) -> "KeyReader":
        fd = self._stream.fileno()
        self._old_settings = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._old_settings is not None:
            termios.tcsetattr(
                self._stream.fileno(), termios.TCSADRAIN, self._old_settings
            )
            self._old_settings = None

    def read(self, timeout: float) -> str | None:
        """Return the next key, or None if none arrived within timeout."""
        return _readkey_with_timeout(self._stream, timeout)
