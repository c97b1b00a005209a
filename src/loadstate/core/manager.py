"""LoadingManager: the owner-facing loading surface.

One manager belongs to one owning view.  The owner keeps the manager alive
(it is stored on the owner by :func:`loading_manager_for`); the manager only
holds a weak reference back, so it never extends the owner's lifetime.
"""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Optional

from ..config import EMPTY_MESSAGE, GENERIC_ERROR_MESSAGE
from ..events.loading_events import LoadingStatusChangedEvent
from .coordinator import Dispatcher, ReloadCoordinator
from .hooks import PolicyHooks
from .provider import ContentProvider, NullStatusViewPresenter, StatusViewPresenter
from .state_machine import LoadingStateMachine
from .status import LoadingStatus, is_busy

if TYPE_CHECKING:
    from ..errors.handler import ErrorHandler
    from ..events.bus import EventBus

_logger = logging.getLogger(__name__)

_MANAGER_ATTR = "_loading_manager"


class LoadingManager:
    """Drive the loading status of a single owner.

    Parameters
    ----------
    owner:
        The view the manager works for.  Referenced weakly.
    provider:
        Supplies content.  Defaults to the owner, which must then be a
        :class:`ContentProvider`.
    hooks:
        Policy overrides.  Defaults to the owner when it subclasses
        :class:`PolicyHooks`, otherwise to the default policy.
    presenter:
        Shows the loading, failed and empty surfaces.  Owners without status
        surfaces get a presenter that ignores every directive.
    dispatch:
        Runs completion handling on the owner's thread; inline by default.
    """

    def __init__(
        self,
        owner: Any,
        provider: Optional[ContentProvider] = None,
        hooks: Optional[PolicyHooks] = None,
        presenter: Optional[StatusViewPresenter] = None,
        *,
        dispatch: Optional[Dispatcher] = None,
        event_bus: Optional["EventBus"] = None,
        error_handler: Optional["ErrorHandler"] = None,
        generic_error_message: str = GENERIC_ERROR_MESSAGE,
        empty_message: str = EMPTY_MESSAGE,
    ) -> None:
        self._owner_ref = weakref.ref(owner)
        self._owner_name = type(owner).__name__

        # Roles the owner plays are reached through the weak reference only
        if provider is None or provider is owner:
            if not isinstance(owner, ContentProvider):
                raise TypeError(
                    f"{self._owner_name} is not a ContentProvider and no provider was given"
                )
            self._provider: Optional[ContentProvider] = None
        else:
            self._provider = provider

        if hooks is owner or (hooks is None and isinstance(owner, PolicyHooks)):
            self._hooks: Optional[PolicyHooks] = None
        else:
            self._hooks = hooks if hooks is not None else PolicyHooks()

        self._presenter = presenter if presenter is not None else NullStatusViewPresenter()
        self._event_bus = event_bus

        self._machine = LoadingStateMachine(self._resolve_hooks)
        self._coordinator = ReloadCoordinator(
            self._machine,
            self._resolve_provider,
            self._resolve_hooks,
            self._presenter,
            dispatch=dispatch,
            event_bus=event_bus,
            error_handler=error_handler,
            generic_error_message=generic_error_message,
            empty_message=empty_message,
            owner_name=self._owner_name,
        )
        self.status_changed = self._machine.status_changed
        if event_bus is not None:
            self.status_changed.connect(self._publish_status_change)

    # ------------------------------------------------------------------
    # Owner association
    # ------------------------------------------------------------------
    @property
    def owner(self) -> Any:
        """The owning view, or ``None`` once it has been collected."""
        return self._owner_ref()

    @property
    def presenter(self) -> StatusViewPresenter:
        return self._presenter

    @property
    def coordinator(self) -> ReloadCoordinator:
        return self._coordinator

    def _resolve_provider(self) -> Optional[ContentProvider]:
        owner = self._owner_ref()
        if owner is None:
            return None
        return self._provider if self._provider is not None else owner

    def _resolve_hooks(self) -> Optional[PolicyHooks]:
        owner = self._owner_ref()
        if owner is None:
            return None
        return self._hooks if self._hooks is not None else owner

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    @property
    def loading_status(self) -> LoadingStatus:
        return self._machine.status

    @loading_status.setter
    def loading_status(self, status: LoadingStatus) -> None:
        # A manual override wins over whatever request is outstanding
        self._coordinator.invalidate()
        self._machine.transition_to(status)
        if not is_busy(status):
            self._presenter.hide_loading()

    def is_loading(self) -> bool:
        return self._coordinator.is_loading()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def reload_content(self, force_reload: bool = False, background: bool = False) -> bool:
        """Reload unless content is already loaded.

        Call from the owner's show/appear handler and let the manager decide.
        *force_reload* reloads regardless of status and bypasses the cache;
        *background* refreshes without the loading indicator.
        """
        return self._coordinator.reload_content(force_reload, background)

    def page_content(self) -> bool:
        """Fetch the next page; no loading indicator is shown."""
        return self._coordinator.page_content()

    # ------------------------------------------------------------------
    # Status views
    # ------------------------------------------------------------------
    def add_default_status_views(self) -> None:
        self._presenter.add_default_status_views()

    def set_automatically_adjusts_status_views_for_scroll_view(self, container: Any) -> None:
        self._presenter.set_automatically_adjusts_for_scroll_view(container)

    def update_status_view_frame_for_scroll_view(self, container: Any) -> None:
        self._presenter.update_frame_for_scroll_view(container)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _publish_status_change(self, status: LoadingStatus, previous: LoadingStatus) -> None:
        self._event_bus.publish(
            LoadingStatusChangedEvent(owner=self._owner_name, status=status, previous=previous)
        )

    def __repr__(self) -> str:
        return f"<LoadingManager owner={self._owner_name} status={self.loading_status.name}>"


def get_loading_manager(owner: Any) -> Optional[LoadingManager]:
    """Return the manager stored on *owner* without creating one."""
    return getattr(owner, _MANAGER_ATTR, None)


def loading_manager_for(owner: Any, **kwargs: Any) -> LoadingManager:
    """Return the manager stored on *owner*, creating it on first access.

    *kwargs* are passed to :class:`LoadingManager` when the manager is
    created and ignored afterwards.
    """

    manager = get_loading_manager(owner)
    if manager is None:
        manager = LoadingManager(owner, **kwargs)
        setattr(owner, _MANAGER_ATTR, manager)
        _logger.debug("Created loading manager for %s", type(owner).__name__)
    elif kwargs:
        _logger.debug("Loading manager for %s exists; ignoring %s", type(owner).__name__, sorted(kwargs))
    return manager


__all__ = ["LoadingManager", "get_loading_manager", "loading_manager_for"]
