"""LoadingStateMachine holds the current status and applies transitions."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

from ..errors import InvalidTransitionError
from .signal import Signal
from .status import LoadingStatus, is_busy, is_terminal

if TYPE_CHECKING:
    from .hooks import PolicyHooks

_logger = logging.getLogger(__name__)


class LoadingStateMachine:
    """Current :class:`LoadingStatus` plus change notification.

    Every transition is legal apart from re-entering ``PRE_LOADING``; which
    transitions actually happen is decided by the reload coordinator.  Each
    call to :meth:`transition_to` notifies exactly once, even when the new
    status equals the old one.

    ``status_changed`` emits ``(status, previous)``.
    """

    def __init__(
        self,
        hooks_resolver: Optional[Callable[[], Optional["PolicyHooks"]]] = None,
    ) -> None:
        self._status = LoadingStatus.PRE_LOADING
        self._last_terminal: Optional[LoadingStatus] = None
        self._hooks_resolver = hooks_resolver
        self._lock = threading.RLock()
        self.status_changed = Signal()

    @property
    def status(self) -> LoadingStatus:
        with self._lock:
            return self._status

    @property
    def last_terminal_status(self) -> Optional[LoadingStatus]:
        """Most recent terminal status entered, ``None`` before the first."""
        with self._lock:
            return self._last_terminal

    def transition_to(self, status: LoadingStatus) -> None:
        if status is LoadingStatus.PRE_LOADING:
            raise InvalidTransitionError("PRE_LOADING cannot be re-entered")
        with self._lock:
            previous = self._status
            self._status = status
            if is_terminal(status):
                self._last_terminal = status
        _logger.debug("Loading status %s -> %s", previous.name, status.name)

        hooks = self._hooks_resolver() if self._hooks_resolver is not None else None
        if hooks is not None:
            hooks.on_status_changed(status)
        self.status_changed.emit(status, previous)

    def is_loading(self) -> bool:
        return is_busy(self.status)
