"""Wire a loading manager to a Qt widget."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QWidget

from ..config import EMPTY_MESSAGE, GENERIC_ERROR_MESSAGE
from ..core.hooks import PolicyHooks
from ..core.manager import LoadingManager, get_loading_manager, loading_manager_for
from ..core.provider import ContentProvider
from ..core.status import LoadingStatus
from .dispatch import MainThreadDispatcher
from .presenter import QtStatusViewPresenter

if TYPE_CHECKING:
    from ..errors.handler import ErrorHandler
    from ..events.bus import EventBus
    from ..settings.manager import SettingsManager

_logger = logging.getLogger(__name__)


class LoadingStatusBridge(QObject):
    """Re-emit a manager's status changes as a Qt signal for widgets and QML.

    ``statusChanged`` carries the status value string (``"loading"``,
    ``"loaded"``...) and ``busyChanged`` follows :meth:`LoadingManager.is_loading`.
    """

    statusChanged = Signal(str)
    busyChanged = Signal(bool)

    def __init__(self, manager: LoadingManager, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._manager = manager
        self._busy = manager.is_loading()
        manager.status_changed.connect(self._on_status_changed)

    def dispose(self) -> None:
        self._manager.status_changed.disconnect(self._on_status_changed)

    def _on_status_changed(self, status: LoadingStatus, _previous: LoadingStatus) -> None:
        self.statusChanged.emit(status.value)
        busy = self._manager.is_loading()
        if busy != self._busy:
            self._busy = busy
            self.busyChanged.emit(busy)


def attach_loading_manager(
    widget: QWidget,
    provider: Optional[ContentProvider] = None,
    hooks: Optional[PolicyHooks] = None,
    *,
    settings: Optional["SettingsManager"] = None,
    event_bus: Optional["EventBus"] = None,
    error_handler: Optional["ErrorHandler"] = None,
) -> LoadingManager:
    """Return *widget*'s loading manager, creating a Qt-backed one if needed.

    The new manager overlays the default status views on *widget*, handles
    completions on the widget's thread and reloads, bypassing the cache, when
    the failed view's retry button is clicked.
    """

    existing = get_loading_manager(widget)
    if existing is not None:
        return existing

    generic_error = GENERIC_ERROR_MESSAGE
    empty_message = EMPTY_MESSAGE
    if settings is not None:
        generic_error = settings.get("messages.generic_error", GENERIC_ERROR_MESSAGE)
        empty_message = settings.get("messages.empty", EMPTY_MESSAGE)

    presenter = QtStatusViewPresenter(widget, settings)
    manager = loading_manager_for(
        widget,
        provider=provider,
        hooks=hooks,
        presenter=presenter,
        dispatch=MainThreadDispatcher(widget),
        event_bus=event_bus,
        error_handler=error_handler,
        generic_error_message=generic_error,
        empty_message=empty_message,
    )
    presenter.retryRequested.connect(lambda: manager.reload_content(force_reload=True))
    _logger.debug("Attached loading manager to %s", widget.objectName() or type(widget).__name__)
    return manager


__all__ = ["LoadingStatusBridge", "attach_loading_manager"]
