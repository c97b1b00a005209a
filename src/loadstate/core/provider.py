"""Collaborator interfaces consumed by the loading core."""

from __future__ import annotations

from collections.abc import Sized
from concurrent.futures import CancelledError
from typing import Any, Callable, Optional, Protocol

from ..config import CANCELLED_ERROR_CODE
from ..errors import LoadCancelledError

LoadCompletion = Callable[[Optional[BaseException], Any], None]
SuccessCompletion = Callable[[bool], None]


class ContentProvider:
    """Supplies content for a loading manager.

    Both methods are completion based: they may return immediately and call
    *completion* later, from any thread.  Kept as a plain mixin: Qt widgets, whose
    metaclass is not ABCMeta, inherit it alongside their Qt base.
    """

    def load_content(self, ignore_cache: bool, completion: LoadCompletion) -> None:
        """Fetch content and call ``completion(error, results)``.

        *ignore_cache* is the caller's ``force_reload`` flag for reloads and
        always ``True`` for paging.
        """
        raise NotImplementedError

    def load_success(self, response: Any, completion: SuccessCompletion) -> None:
        """Post-process *response*, then call ``completion(success)``.

        The loading indicator stays up until *completion* runs, so slow
        work such as saving to disk can finish on a background thread first.
        """
        raise NotImplementedError

    def is_content_empty(self, response: Any) -> bool:
        """Return ``True`` when there is nothing to display after *response*.

        Providers that accumulate pages should override this to inspect their
        accumulated content instead of the latest page.
        """

        if response is None:
            return True
        if isinstance(response, Sized):
            return len(response) == 0
        return False


class OperationQueue(Protocol):
    """Anything holding outstanding requests that can be cancelled together."""

    def cancel_all_operations(self) -> None:
        ...


class StatusViewPresenter(Protocol):
    """Owns the loading, failed and empty surfaces of one view."""

    def add_default_status_views(self) -> None:
        ...

    def show_loading(self) -> None:
        ...

    def hide_loading(self) -> None:
        ...

    def show_failed(self, message: str) -> None:
        ...

    def show_empty(self, message: str) -> None:
        ...

    def hide_status_views(self) -> None:
        ...

    def set_automatically_adjusts_for_scroll_view(self, container: Any) -> None:
        ...

    def update_frame_for_scroll_view(self, container: Any) -> None:
        ...


class NullStatusViewPresenter:
    """Presenter for owners without visible status surfaces."""

    def add_default_status_views(self) -> None:
        pass

    def show_loading(self) -> None:
        pass

    def hide_loading(self) -> None:
        pass

    def show_failed(self, message: str) -> None:
        pass

    def show_empty(self, message: str) -> None:
        pass

    def hide_status_views(self) -> None:
        pass

    def set_automatically_adjusts_for_scroll_view(self, container: Any) -> None:
        pass

    def update_frame_for_scroll_view(self, container: Any) -> None:
        pass


def is_cancellation(error: Optional[BaseException]) -> bool:
    """Return ``True`` if *error* signals a cancelled request."""

    if error is None:
        return False
    if isinstance(error, (LoadCancelledError, CancelledError)):
        return True
    return getattr(error, "code", None) == CANCELLED_ERROR_CODE


__all__ = [
    "ContentProvider",
    "LoadCompletion",
    "NullStatusViewPresenter",
    "OperationQueue",
    "StatusViewPresenter",
    "SuccessCompletion",
    "is_cancellation",
]
