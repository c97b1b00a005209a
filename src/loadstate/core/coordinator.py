"""ReloadCoordinator decides when to load and interprets the results."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..config import EMPTY_MESSAGE, GENERIC_ERROR_MESSAGE
from ..errors import ProcessingFailedError
from ..errors.handler import ErrorSeverity
from ..events.loading_events import (
    LoadCancelledEvent,
    LoadFailedEvent,
    LoadFinishedEvent,
    LoadStartedEvent,
    PagingFailedEvent,
)
from .provider import ContentProvider, StatusViewPresenter, is_cancellation
from .state_machine import LoadingStateMachine
from .status import LoadingStatus
from .tokens import RequestTokenSource

if TYPE_CHECKING:
    from ..errors.handler import ErrorHandler
    from ..events.bus import EventBus
    from .hooks import PolicyHooks

_logger = logging.getLogger(__name__)

Dispatcher = Callable[[Callable[[], None]], None]


def _call_inline(callback: Callable[[], None]) -> None:
    callback()


class ReloadCoordinator:
    """Single-flight reload and paging on top of a :class:`LoadingStateMachine`.

    Every request mints a new token; completions carrying any other token are
    dropped without touching the status or calling a hook.  Completions are
    handed to *dispatch* before anything is mutated so that hosts whose
    providers call back on worker threads can marshal them onto the owner's
    thread.

    *provider_resolver* and *hooks_resolver* return ``None`` once the owner
    behind them is gone; the coordinator then stops issuing requests and
    ignores outstanding completions.
    """

    def __init__(
        self,
        machine: LoadingStateMachine,
        provider_resolver: Callable[[], Optional[ContentProvider]],
        hooks_resolver: Callable[[], Optional["PolicyHooks"]],
        presenter: StatusViewPresenter,
        *,
        dispatch: Optional[Dispatcher] = None,
        event_bus: Optional["EventBus"] = None,
        error_handler: Optional["ErrorHandler"] = None,
        generic_error_message: str = GENERIC_ERROR_MESSAGE,
        empty_message: str = EMPTY_MESSAGE,
        owner_name: str = "",
    ) -> None:
        self._machine = machine
        self._provider = provider_resolver
        self._hooks = hooks_resolver
        self._presenter = presenter
        self._dispatch = dispatch or _call_inline
        self._event_bus = event_bus
        self._error_handler = error_handler
        self.generic_error_message = generic_error_message
        self.empty_message = empty_message
        self._owner_name = owner_name
        self._tokens = RequestTokenSource()
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def reload_content(self, force_reload: bool = False, background: bool = False) -> bool:
        """Start a reload if policy allows it; return whether one started."""

        provider = self._provider()
        hooks = self._hooks()
        if provider is None or hooks is None:
            _logger.debug("Reload skipped for %s: owner is gone", self._owner_name)
            return False

        with self._lock:
            if not hooks.should_reload():
                _logger.debug("Reload vetoed by should_reload() for %s", self._owner_name)
                return False

            status = self._machine.status
            if (
                not force_reload
                and status is LoadingStatus.LOADED
                and not hooks.should_force_reload()
            ):
                _logger.debug("Reload skipped for %s: content already loaded", self._owner_name)
                return False

            in_background = background or hooks.should_load_in_background()

            # Mint first so a cancellation reported synchronously is already stale
            token = self._tokens.mint()
            queue = hooks.network_operation_queue()
            if queue is not None:
                queue.cancel_all_operations()

            if status is LoadingStatus.PRE_LOADING:
                target = LoadingStatus.LOADING
            elif in_background:
                target = LoadingStatus.BACKGROUND_REFRESHING
            else:
                target = LoadingStatus.FOREGROUND_REFRESHING
            self._machine.transition_to(target)
            if target is not LoadingStatus.BACKGROUND_REFRESHING:
                self._presenter.show_loading()

        _logger.info(
            "Reload #%d started for %s (%s, ignore_cache=%s)",
            token, self._owner_name, target.name, force_reload,
        )
        self._publish(LoadStartedEvent, generation=token, ignore_cache=force_reload)
        self._start_request(provider, token, ignore_cache=force_reload, paging=False)
        return True

    def page_content(self) -> bool:
        """Fetch the next page, bypassing the cache, without a loading indicator."""

        provider = self._provider()
        if provider is None or self._hooks() is None:
            _logger.debug("Paging skipped for %s: owner is gone", self._owner_name)
            return False

        with self._lock:
            token = self._tokens.mint()
            self._machine.transition_to(LoadingStatus.PAGING)

        _logger.info("Page #%d requested for %s", token, self._owner_name)
        self._publish(LoadStartedEvent, generation=token, ignore_cache=True, paging=True)
        self._start_request(provider, token, ignore_cache=True, paging=True)
        return True

    def is_loading(self) -> bool:
        return self._machine.is_loading()

    def invalidate(self) -> None:
        """Make any outstanding request stale."""

        self._tokens.retire()

    @property
    def current_token(self) -> Optional[int]:
        return self._tokens.current

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------
    def _start_request(
        self,
        provider: ContentProvider,
        token: int,
        *,
        ignore_cache: bool,
        paging: bool,
    ) -> None:
        def _completion(error: Optional[BaseException], results: Any) -> None:
            self._dispatch(lambda: self._handle_response(token, error, results, paging))

        try:
            provider.load_content(ignore_cache, _completion)
        except Exception as exc:
            _logger.exception("load_content() raised for %s", self._owner_name)
            _completion(exc, None)

    def _handle_response(
        self,
        token: int,
        error: Optional[BaseException],
        results: Any,
        paging: bool,
    ) -> None:
        with self._lock:
            if not self._tokens.is_current(token):
                _logger.debug("Discarding stale response #%d for %s", token, self._owner_name)
                return
            provider = self._provider()
            hooks = self._hooks()
            if provider is None or hooks is None:
                self._tokens.retire(token)
                return

            if error is not None:
                if paging:
                    self._finish_paging_failure(token, hooks, error)
                elif is_cancellation(error):
                    self._finish_cancelled(token, hooks, error)
                else:
                    self._finish_failed(token, hooks, error)
                return

        def _processed(success: bool) -> None:
            self._dispatch(lambda: self._handle_processed(token, results, bool(success), paging))

        try:
            provider.load_success(results, _processed)
        except Exception:
            _logger.exception("load_success() raised for %s", self._owner_name)
            _processed(False)

    def _handle_processed(self, token: int, results: Any, success: bool, paging: bool) -> None:
        with self._lock:
            if not self._tokens.is_current(token):
                _logger.debug("Discarding stale processing result #%d for %s", token, self._owner_name)
                return
            provider = self._provider()
            hooks = self._hooks()
            if provider is None or hooks is None:
                self._tokens.retire(token)
                return

            if not success:
                if paging:
                    self._finish_paging_failure(token, hooks, None)
                else:
                    self._finish_failed(token, hooks, None)
                return

            self._tokens.retire(token)
            self._machine.transition_to(LoadingStatus.LOADED)
            self._presenter.hide_loading()

            empty = hooks.should_show_empty_view() and provider.is_content_empty(results)
            if empty:
                self._machine.transition_to(LoadingStatus.EMPTY)
                self._presenter.show_empty(self.empty_message)
            else:
                self._presenter.hide_status_views()

        _logger.info("Request #%d finished for %s (empty=%s)", token, self._owner_name, empty)
        self._publish(LoadFinishedEvent, generation=token, empty=empty)

    # ------------------------------------------------------------------
    # Terminal outcomes
    # ------------------------------------------------------------------
    def _finish_cancelled(self, token: int, hooks: "PolicyHooks", error: BaseException) -> None:
        self._tokens.retire(token)
        self._machine.transition_to(LoadingStatus.CANCELLED)
        self._presenter.hide_loading()
        _logger.info("Request #%d cancelled for %s", token, self._owner_name)
        hooks.on_load_cancelled(error)
        self._publish(LoadCancelledEvent, generation=token, error=error)

    def _finish_failed(
        self,
        token: int,
        hooks: "PolicyHooks",
        error: Optional[BaseException],
    ) -> None:
        self._tokens.retire(token)
        self._machine.transition_to(LoadingStatus.FAILED)
        self._presenter.hide_loading()
        _logger.warning("Request #%d failed for %s: %s", token, self._owner_name, error)

        hooks.on_load_failed(error)
        message = hooks.error_message_for_error(error) or self.generic_error_message
        self._publish(LoadFailedEvent, generation=token, error=error, message=message)
        self._report(error, "load", token)

        # on_load_failed() may already have started a new request
        if self._tokens.current is not None:
            return
        if hooks.should_show_failed_view():
            self._presenter.show_failed(message)

    def _finish_paging_failure(
        self,
        token: int,
        hooks: "PolicyHooks",
        error: Optional[BaseException],
    ) -> None:
        self._tokens.retire(token)
        previous = self._machine.last_terminal_status
        if previous not in (LoadingStatus.LOADED, LoadingStatus.EMPTY):
            previous = LoadingStatus.EMPTY
        self._machine.transition_to(previous)
        self._presenter.hide_loading()
        _logger.warning("Page #%d failed for %s: %s", token, self._owner_name, error)
        hooks.on_paging_failed(error)
        self._publish(PagingFailedEvent, generation=token, error=error)
        self._report(error, "page", token)

    # ------------------------------------------------------------------
    # Observability
    # ------------------------------------------------------------------
    def _publish(self, event_type: type, **fields: Any) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event_type(owner=self._owner_name, **fields))

    def _report(self, error: Optional[BaseException], operation: str, token: int) -> None:
        if self._error_handler is None:
            return
        if error is None:
            error = ProcessingFailedError(f"load_success() reported failure for {self._owner_name}")
        severity = ErrorSeverity.INFO if operation == "page" else ErrorSeverity.WARNING
        self._error_handler.handle(
            error,
            severity,
            {"owner": self._owner_name, "operation": operation, "generation": token},
        )


__all__ = ["Dispatcher", "ReloadCoordinator"]
