"""Pure Python signal with no Qt dependency.

The loading core runs in contexts without a ``QApplication`` (tests, the CLI),
so status notifications use this small observer instead of a Qt signal.  The
Qt layer forwards it into real signals where widgets need them.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Thread-safe observer list.

    Exceptions raised by individual handlers are caught and logged so that one
    failing observer cannot interrupt a status transition.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable) -> None:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)
