"""Qt implementation of the status view presenter."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Optional

from PySide6.QtCore import QEvent, QObject, QRect, Signal
from PySide6.QtWidgets import QAbstractScrollArea, QScrollArea, QWidget

from ..config import EMPTY_MESSAGE, LOADING_MESSAGE
from .status_views import EmptyStatusView, FailedStatusView, LoadingStatusView, StatusView

if TYPE_CHECKING:
    from ..settings.manager import SettingsManager

_logger = logging.getLogger(__name__)


class QtStatusViewPresenter(QObject):
    """Overlay loading, failed and empty views on a host widget.

    The views are created lazily, as children of the host, and kept covering
    its full area.  When a scroll area is registered through
    :meth:`set_automatically_adjusts_for_scroll_view` the views move into it
    and are pinned to the visible part of its content whenever it scrolls.
    Nothing here reads or writes the loading status.
    """

    retryRequested = Signal()

    def __init__(self, host: QWidget, settings: Optional["SettingsManager"] = None) -> None:
        super().__init__(host)
        self._settings = settings
        self._loading_view: Optional[LoadingStatusView] = None
        self._failed_view: Optional[FailedStatusView] = None
        self._empty_view: Optional[EmptyStatusView] = None
        self._scroll_ref: Optional[weakref.ref] = None
        self._filtered: list[QWidget] = []
        self._watch(host)

    # ------------------------------------------------------------------
    # Surfaces
    # ------------------------------------------------------------------
    @property
    def loading_view(self) -> LoadingStatusView:
        if self._loading_view is None:
            message = LOADING_MESSAGE
            if self._settings is not None:
                message = self._settings.get("messages.loading", LOADING_MESSAGE)
                if not self._settings.get("status_views.show_loading_text", True):
                    message = ""
            self._loading_view = self._install(LoadingStatusView(message))
        return self._loading_view

    @property
    def failed_view(self) -> FailedStatusView:
        if self._failed_view is None:
            view = FailedStatusView()
            view.retryRequested.connect(self.retryRequested.emit)
            self._failed_view = self._install(view)
        return self._failed_view

    @property
    def empty_view(self) -> EmptyStatusView:
        if self._empty_view is None:
            message = EMPTY_MESSAGE
            if self._settings is not None:
                message = self._settings.get("messages.empty", EMPTY_MESSAGE)
            self._empty_view = self._install(EmptyStatusView(message))
        return self._empty_view

    @property
    def _host(self) -> QWidget:
        return self.parent()

    def has_status_views(self) -> bool:
        return None not in (self._loading_view, self._failed_view, self._empty_view)

    def add_default_status_views(self) -> None:
        # Property access creates whatever is missing
        self.loading_view
        self.failed_view
        self.empty_view

    # ------------------------------------------------------------------
    # Visibility directives
    # ------------------------------------------------------------------
    def show_loading(self) -> None:
        self._hide(self._failed_view, self._empty_view)
        self._reveal(self.loading_view)

    def hide_loading(self) -> None:
        self._hide(self._loading_view)

    def show_failed(self, message: str) -> None:
        self._hide(self._loading_view, self._empty_view)
        view = self.failed_view
        view.set_message(message)
        self._reveal(view)

    def show_empty(self, message: str) -> None:
        self._hide(self._loading_view, self._failed_view)
        view = self.empty_view
        if message:
            view.set_message(message)
        self._reveal(view)

    def hide_status_views(self) -> None:
        self._hide(self._failed_view, self._empty_view)

    # ------------------------------------------------------------------
    # Scroll views
    # ------------------------------------------------------------------
    def set_automatically_adjusts_for_scroll_view(self, container: QAbstractScrollArea) -> None:
        """Keep the status views pinned to the visible area of *container*."""

        current = self._scroll_container()
        if current is container:
            self.update_frame_for_scroll_view(container)
            return
        if current is not None:
            self._disconnect_scroll(current)

        self._scroll_ref = weakref.ref(container)
        container.horizontalScrollBar().valueChanged.connect(self._on_scrolled)
        container.verticalScrollBar().valueChanged.connect(self._on_scrolled)
        self._watch(container.viewport())

        parent = self._overlay_parent()
        for view in self._views():
            hidden = view.isHidden()
            view.setParent(parent)
            view.setVisible(not hidden)
        self.update_frame_for_scroll_view(container)
        _logger.debug("Status views now follow %s", container.objectName() or type(container).__name__)

    def update_frame_for_scroll_view(self, container: QAbstractScrollArea) -> None:
        """Recompute the status view geometry for *container*'s scroll offset."""

        rect = self._scroll_rect(container)
        for view in self._views():
            view.setGeometry(rect)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt API
        if event.type() == QEvent.Type.Resize:
            self._layout_views()
        return super().eventFilter(watched, event)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _install(self, view: StatusView) -> StatusView:
        if self._scroll_container() is None and self._should_auto_adjust():
            self.set_automatically_adjusts_for_scroll_view(self._host)
        view.setParent(self._overlay_parent())
        view.hide()
        view.setGeometry(self._overlay_rect())
        return view

    def _should_auto_adjust(self) -> bool:
        if not isinstance(self._host, QAbstractScrollArea):
            return False
        if self._settings is None:
            return True
        return bool(self._settings.get("status_views.auto_adjust_scroll_views", True))

    def _scroll_container(self) -> Optional[QAbstractScrollArea]:
        return self._scroll_ref() if self._scroll_ref is not None else None

    def _overlay_parent(self) -> QWidget:
        container = self._scroll_container()
        if container is None:
            return self._host
        if isinstance(container, QScrollArea) and container.widget() is not None:
            return container.widget()
        return container.viewport()

    def _overlay_rect(self) -> QRect:
        container = self._scroll_container()
        if container is None:
            return self._host.rect()
        return self._scroll_rect(container)

    @staticmethod
    def _scroll_rect(container: QAbstractScrollArea) -> QRect:
        viewport = container.viewport()
        rect = QRect(0, 0, viewport.width(), viewport.height())
        if isinstance(container, QScrollArea) and container.widget() is not None:
            # Views live inside the scrolled content widget
            rect.moveTo(container.horizontalScrollBar().value(), container.verticalScrollBar().value())
        return rect

    def _layout_views(self) -> None:
        rect = self._overlay_rect()
        for view in self._views():
            view.setGeometry(rect)

    def _views(self) -> list[StatusView]:
        return [v for v in (self._loading_view, self._failed_view, self._empty_view) if v is not None]

    def _reveal(self, view: StatusView) -> None:
        view.setGeometry(self._overlay_rect())
        view.show()
        view.raise_()

    @staticmethod
    def _hide(*views: Optional[StatusView]) -> None:
        for view in views:
            if view is not None:
                view.hide()

    def _watch(self, widget: QWidget) -> None:
        if widget not in self._filtered:
            widget.installEventFilter(self)
            self._filtered.append(widget)

    def _on_scrolled(self, _value: int) -> None:
        container = self._scroll_container()
        if container is not None:
            self.update_frame_for_scroll_view(container)

    def _disconnect_scroll(self, container: QAbstractScrollArea) -> None:
        container.horizontalScrollBar().valueChanged.disconnect(self._on_scrolled)
        container.verticalScrollBar().valueChanged.disconnect(self._on_scrolled)


__all__ = ["QtStatusViewPresenter"]
