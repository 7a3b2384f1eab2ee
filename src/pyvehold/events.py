"""Change notification for the hold ledger.

The notification is a named, payload-less broadcast: observers are told
*that* the ledger changed and are expected to re-read what they need.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from pyvehold._constants import CHANGE_EVENT

_logger = logging.getLogger(__name__)

ChangeCallback = Callable[[], None]


class ChangeNotifier:
    """Synchronous in-process broadcaster for one named event."""

    def __init__(self, event_name: str = CHANGE_EVENT) -> None:
        self._event_name = event_name
        self._lock = threading.RLock()
        self._callbacks: list[ChangeCallback] = []

    @property
    def event_name(self) -> str:
        return self._event_name

    def subscribe(self, callback: ChangeCallback) -> Callable[[], None]:
        """Register *callback*; returns a function that unregisters it."""
        with self._lock:
            self._callbacks.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        """Remove *callback*. Unknown callbacks are ignored."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def clear(self) -> None:
        """Remove all callbacks. Intended for tests."""
        with self._lock:
            self._callbacks.clear()

    def notify(self) -> None:
        """Invoke every registered callback in subscription order.

        A failing callback is logged and does not prevent the others from
        running.
        """
        with self._lock:
            callbacks = list(self._callbacks)
        _logger.debug("Dispatching %s to %d observer(s)", self._event_name, len(callbacks))
        for cb in callbacks:
            try:
                cb()
            except Exception:
                _logger.exception("%s observer failed", self._event_name)
