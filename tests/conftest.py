"""Shared fakes for the loading tests.

Qt tests run headless; the offscreen platform must be selected before the
first ``QApplication`` is created.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, Optional

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from loadstate.core.hooks import PolicyHooks  # noqa: E402
from loadstate.core.manager import LoadingManager  # noqa: E402
from loadstate.core.provider import ContentProvider  # noqa: E402


@dataclass
class PendingLoad:
    ignore_cache: bool
    completion: Callable[[Optional[BaseException], Any], None]

    def succeed(self, results: Any = ("a", "b")) -> None:
        self.completion(None, list(results))

    def fail(self, error: BaseException) -> None:
        self.completion(error, None)


class DeferredProvider(ContentProvider):
    """Provider whose requests stay outstanding until the test resolves them."""

    def __init__(self) -> None:
        self.loads: list[PendingLoad] = []
        self.processed: list[Any] = []
        self.pending_processing: list[Callable[[bool], None]] = []
        self.process_result = True
        self.defer_processing = False

    def load_content(self, ignore_cache: bool, completion) -> None:
        self.loads.append(PendingLoad(ignore_cache, completion))

    def load_success(self, response: Any, completion) -> None:
        self.processed.append(response)
        if self.defer_processing:
            self.pending_processing.append(completion)
        else:
            completion(self.process_result)

    @property
    def last(self) -> PendingLoad:
        return self.loads[-1]


class RecordingPresenter:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def add_default_status_views(self) -> None:
        self.calls.append(("add_default_status_views",))

    def show_loading(self) -> None:
        self.calls.append(("show_loading",))

    def hide_loading(self) -> None:
        self.calls.append(("hide_loading",))

    def show_failed(self, message: str) -> None:
        self.calls.append(("show_failed", message))

    def show_empty(self, message: str) -> None:
        self.calls.append(("show_empty", message))

    def hide_status_views(self) -> None:
        self.calls.append(("hide_status_views",))

    def set_automatically_adjusts_for_scroll_view(self, container: Any) -> None:
        self.calls.append(("set_automatically_adjusts_for_scroll_view", container))

    def update_frame_for_scroll_view(self, container: Any) -> None:
        self.calls.append(("update_frame_for_scroll_view", container))


class RecordingHooks(PolicyHooks):
    """Policy with switchable answers that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.reload = True
        self.force = False
        self.background = False
        self.show_failed = True
        self.show_empty = True
        self.queue = None
        self.message: Optional[str] = None

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]

    def statuses(self) -> list:
        return [call[1] for call in self.calls if call[0] == "on_status_changed"]

    def on_status_changed(self, status) -> None:
        self.calls.append(("on_status_changed", status))

    def on_load_cancelled(self, error) -> None:
        self.calls.append(("on_load_cancelled", error))

    def on_load_failed(self, error) -> None:
        self.calls.append(("on_load_failed", error))

    def on_paging_failed(self, error) -> None:
        self.calls.append(("on_paging_failed", error))

    def network_operation_queue(self):
        return self.queue

    def should_reload(self) -> bool:
        return self.reload

    def should_force_reload(self) -> bool:
        self.calls.append(("should_force_reload",))
        return self.force

    def should_load_in_background(self) -> bool:
        return self.background

    def should_show_failed_view(self) -> bool:
        return self.show_failed

    def should_show_empty_view(self) -> bool:
        return self.show_empty

    def error_message_for_error(self, error):
        self.calls.append(("error_message_for_error", error))
        if self.message is not None:
            return self.message
        return super().error_message_for_error(error)


class Owner:
    """Stand-in for a view that delegates every role to collaborators."""


@pytest.fixture()
def provider() -> DeferredProvider:
    return DeferredProvider()


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture()
def owner() -> Owner:
    return Owner()


@pytest.fixture()
def manager(owner, provider, hooks, presenter) -> LoadingManager:
    return LoadingManager(owner, provider=provider, hooks=hooks, presenter=presenter)
