"""In-process event bus for loading notifications."""

import logging
import threading
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, Type


@dataclass(kw_only=True)
class Event:
    """Base event class."""
    timestamp: datetime = field(default_factory=datetime.now)


Handler = Callable[[Event], None]


class EventBus:
    """Publish loading events to interested observers.

    Handlers are keyed by the exact event class.  Foreground handlers run
    inline on the publishing thread, which for a loading manager is always
    the owner's thread.  Handlers subscribed with ``background=True`` run on
    a small executor created on first use.
    """

    def __init__(self, logger: logging.Logger = None, max_workers: int = 2):
        self._logger = logger or logging.getLogger(__name__)
        self._handlers: Dict[Type[Event], List[Tuple[Handler, bool]]] = defaultdict(list)
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Event], handler: Handler, *, background: bool = False) -> None:
        with self._lock:
            self._handlers[event_type].append((handler, background))

    def publish(self, event: Event):
        event_type = type(event)
        with self._lock:
            handlers = list(self._handlers.get(event_type, ()))

        for handler, background in handlers:
            if background:
                self._ensure_executor().submit(self._call, handler, event)
            else:
                self._call(handler, event)

    def shutdown(self):
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def _ensure_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="loadstate-events",
                )
            return self._executor

    def _call(self, handler: Handler, event: Event):
        try:
            handler(event)
        except Exception as e:
            self._logger.error("Handler failed for %s: %s", type(event).__name__, e)
