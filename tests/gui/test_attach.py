"""Tests for attaching a Qt-backed loading manager to a widget."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtWidgets")
from PySide6.QtCore import Qt  # noqa: E402
from PySide6.QtWidgets import QListWidget, QWidget  # noqa: E402

from loadstate.core.hooks import PolicyHooks  # noqa: E402
from loadstate.core.manager import get_loading_manager  # noqa: E402
from loadstate.core.status import LoadingStatus  # noqa: E402
from loadstate.errors import ContentLoadError  # noqa: E402
from loadstate.gui.attach import LoadingStatusBridge, attach_loading_manager  # noqa: E402
from loadstate.gui.presenter import QtStatusViewPresenter  # noqa: E402
from loadstate.gui.tasks.content_fetch_worker import BackgroundContentProvider  # noqa: E402
from loadstate.settings import SettingsManager  # noqa: E402


class _PhotoList(QListWidget, BackgroundContentProvider, PolicyHooks):
    """List widget that fetches its rows on the pool and fills itself."""

    def __init__(self) -> None:
        QListWidget.__init__(self)
        BackgroundContentProvider.__init__(self)
        self.rows = ["IMG_0001", "IMG_0002"]
        self.fail_with = None
        self.requests = []

    def fetch(self, ignore_cache):
        self.requests.append(ignore_cache)
        if self.fail_with is not None:
            raise self.fail_with
        return list(self.rows)

    def process(self, response):
        self.clear()
        self.addItems(response)
        return True

    def network_operation_queue(self):
        return self.operation_queue


@pytest.fixture()
def photo_list(qtbot) -> _PhotoList:
    widget = _PhotoList()
    widget.resize(320, 240)
    qtbot.addWidget(widget)
    widget.show()
    return widget


def _settle(widget: _PhotoList) -> None:
    widget.operation_queue.wait_for_done(2000)


def test_attach_returns_existing_manager(photo_list):
    manager = attach_loading_manager(photo_list)

    assert attach_loading_manager(photo_list) is manager
    assert get_loading_manager(photo_list) is manager
    assert isinstance(manager.presenter, QtStatusViewPresenter)


def test_background_fetch_completes_on_widget_thread(photo_list, qtbot):
    manager = attach_loading_manager(photo_list)
    main_thread = threading.current_thread()
    seen_threads = []
    manager.status_changed.connect(lambda status, _previous: seen_threads.append(threading.current_thread()))

    assert manager.reload_content()
    assert not manager.presenter.loading_view.isHidden()

    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.LOADED, timeout=3000)
    _settle(photo_list)

    assert photo_list.count() == 2
    assert manager.presenter.loading_view.isHidden()
    assert all(thread is main_thread for thread in seen_threads)


def test_empty_response_shows_empty_view(photo_list, qtbot):
    photo_list.rows = []
    manager = attach_loading_manager(photo_list)

    manager.reload_content()
    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.EMPTY, timeout=3000)

    assert not manager.presenter.empty_view.isHidden()


def test_retry_button_forces_reload(photo_list, qtbot):
    photo_list.fail_with = ContentLoadError("Server unreachable")
    manager = attach_loading_manager(photo_list)
    manager.reload_content()
    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.FAILED, timeout=3000)
    failed_view = manager.presenter.failed_view
    assert not failed_view.isHidden()
    assert failed_view.message() == "Server unreachable"

    photo_list.fail_with = None
    qtbot.mouseClick(failed_view.retry_button, Qt.MouseButton.LeftButton)
    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.LOADED, timeout=3000)
    _settle(photo_list)

    assert photo_list.requests == [False, True]
    assert failed_view.isHidden()


def test_settings_supply_generic_error_message(qtbot, tmp_path: Path):
    settings = SettingsManager(tmp_path / "settings.json")
    settings.load()
    settings.set("messages.generic_error", "Try again later")
    widget = _PhotoList()
    qtbot.addWidget(widget)
    widget.fail_with = RuntimeError()
    manager = attach_loading_manager(widget, settings=settings)

    manager.reload_content()
    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.FAILED, timeout=3000)

    assert manager.presenter.failed_view.message() == "Try again later"


def test_bridge_reemits_status_changes(qtbot):
    host = QWidget()
    qtbot.addWidget(host)
    widget = _PhotoList()
    qtbot.addWidget(widget)
    manager = attach_loading_manager(widget)
    bridge = LoadingStatusBridge(manager, host)
    statuses = []
    busy = []
    bridge.statusChanged.connect(statuses.append)
    bridge.busyChanged.connect(busy.append)

    manager.reload_content()
    qtbot.waitUntil(lambda: manager.loading_status is LoadingStatus.LOADED, timeout=3000)
    bridge.dispose()
    manager.loading_status = LoadingStatus.FAILED

    assert statuses == ["loading", "loaded"]
    assert busy == [True, False]
