"""Qt (PySide6) presentation layer for loading managers."""

from .attach import LoadingStatusBridge, attach_loading_manager
from .dispatch import MainThreadDispatcher
from .presenter import QtStatusViewPresenter
from .status_views import EmptyStatusView, FailedStatusView, LoadingStatusView

__all__ = [
    "EmptyStatusView",
    "FailedStatusView",
    "LoadingStatusBridge",
    "LoadingStatusView",
    "MainThreadDispatcher",
    "QtStatusViewPresenter",
    "attach_loading_manager",
]
