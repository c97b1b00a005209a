"""Marshal completion handling onto the thread that owns a widget."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, Qt, QThread, Signal, Slot


class MainThreadDispatcher(QObject):
    """Run callables in the thread this object lives in.

    Calls made from that thread run immediately; calls from any other thread
    are queued through a signal and run by the receiving event loop.  Parent
    the dispatcher to the owning widget so queued work is dropped with it.
    """

    _invoke = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def __call__(self, callback: Callable[[], None]) -> None:
        if QThread.currentThread() == self.thread():
            callback()
        else:
            self._invoke.emit(callback)

    @Slot(object)
    def _run(self, callback: Callable[[], None]) -> None:
        callback()


__all__ = ["MainThreadDispatcher"]
