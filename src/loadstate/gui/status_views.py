"""Default loading, failed and empty status views."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QLabel, QProgressBar, QPushButton, QVBoxLayout, QWidget

from ..config import (
    EMPTY_MESSAGE,
    GENERIC_ERROR_MESSAGE,
    LOADING_BAR_HEIGHT,
    LOADING_BAR_WIDTH,
    LOADING_MESSAGE,
    RETRY_BUTTON_TEXT,
    STATUS_VIEW_MESSAGE_MAX_WIDTH,
    STATUS_VIEW_SPACING,
)


class StatusView(QWidget):
    """Opaque overlay with a centred column of content and a message label."""

    def __init__(self, message: str = "", parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setAutoFillBackground(True)

        self._layout = QVBoxLayout(self)
        self._layout.setSpacing(STATUS_VIEW_SPACING)
        self._layout.addStretch(1)

        self.message_label = QLabel(message, self)
        self.message_label.setObjectName("statusMessage")
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setWordWrap(True)
        self.message_label.setMaximumWidth(STATUS_VIEW_MESSAGE_MAX_WIDTH)
        self.message_label.setVisible(bool(message))
        self._layout.addWidget(self.message_label, 0, Qt.AlignmentFlag.AlignHCenter)

        self._layout.addStretch(1)
        self.hide()

    def message(self) -> str:
        return self.message_label.text()

    def set_message(self, message: str) -> None:
        self.message_label.setText(message)
        self.message_label.setVisible(bool(message))

    def _insert_widget(self, widget: QWidget) -> None:
        # Content sits between the two stretches, above the message
        self._layout.insertWidget(self._layout.count() - 2, widget, 0, Qt.AlignmentFlag.AlignHCenter)


class LoadingStatusView(StatusView):
    """Indeterminate progress bar with an optional caption."""

    def __init__(
        self,
        message: str = LOADING_MESSAGE,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(message, parent)
        self.setObjectName("loadingStatusView")
        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 0)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setFixedSize(LOADING_BAR_WIDTH, LOADING_BAR_HEIGHT)
        self._insert_widget(self.progress_bar)


class FailedStatusView(StatusView):
    """Error message with a retry button."""

    retryRequested = Signal()

    def __init__(
        self,
        message: str = GENERIC_ERROR_MESSAGE,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(message, parent)
        self.setObjectName("failedStatusView")
        self.retry_button = QPushButton(RETRY_BUTTON_TEXT, self)
        self.retry_button.setObjectName("retryButton")
        self.retry_button.clicked.connect(self.retryRequested.emit)
        self._layout.insertWidget(self._layout.count() - 1, self.retry_button, 0, Qt.AlignmentFlag.AlignHCenter)


class EmptyStatusView(StatusView):
    def __init__(self, message: str = EMPTY_MESSAGE, parent: QWidget | None = None) -> None:
        super().__init__(message, parent)
        self.setObjectName("emptyStatusView")


__all__ = ["EmptyStatusView", "FailedStatusView", "LoadingStatusView", "StatusView"]
