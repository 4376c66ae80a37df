"""
NotificationHub: the single "new data available" listener slot.

The renderer owns the model and registers itself here. Bound methods are
held through weakref.WeakMethod, so the model never keeps the renderer
alive; once the renderer is collected, notifications become no-ops.
"""

import inspect
import logging
import threading
import weakref
from typing import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class NotificationHub:
    """
    Holds at most one listener; registering another replaces it.

    notify() runs the listener inline on the calling thread. Listener
    errors are logged and swallowed.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ref: Callable[[], Listener | None] | None = None

    def register(self, listener: Listener | None) -> None:
        """
        Register the listener, discarding any previous one.

        Args:
            listener: Callable taking no arguments, or None to clear
        """
        if listener is None:
            ref = None
        elif inspect.ismethod(listener):
            ref = weakref.WeakMethod(listener)
        else:
            ref = lambda: listener  # noqa: E731
        with self._lock:
            self._ref = ref

    @property
    def listener(self) -> Listener | None:
        """Return the live listener, or None if unset or collected."""
        with self._lock:
            ref = self._ref
        return ref() if ref is not None else None

    def notify(self) -> None:
        """Invoke the listener, if any."""
        listener = self.listener
        if listener is None:
            return
        try:
            listener()
        except Exception:
            logger.exception("New data listener failed")
