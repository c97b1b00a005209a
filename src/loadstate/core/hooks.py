"""Owner-overridable policy hooks with documented defaults.

Owners customise the reload coordinator by subclassing :class:`PolicyHooks`
(a view can inherit from it directly and becomes its own hooks object) or by
passing plain callables to :class:`CallbackPolicyHooks`.  Every hook has an
explicit default, so the coordinator never checks for optional methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from .provider import OperationQueue
    from .status import LoadingStatus


def describe_error(error: Optional[BaseException]) -> Optional[str]:
    """Return the error's own user-facing description, if it has one."""

    if error is None:
        return None
    description = str(error).strip()
    return description or None


class PolicyHooks:
    """Default policy: reload whenever content is not loaded, in the foreground.

    Notification hooks
        ``on_status_changed``, ``on_load_cancelled``, ``on_load_failed`` and
        ``on_paging_failed`` do nothing by default.

    Decision hooks
        ``should_reload`` (``True``) gates every reload.
        ``should_force_reload`` (``False``) is consulted only when content is
        already loaded and the caller did not force a reload.
        ``should_load_in_background`` (``False``) is OR'd with the caller's
        ``background`` flag.
        ``should_show_failed_view`` (``True``) and ``should_show_empty_view``
        (``True``) gate the failed and empty surfaces.

    ``network_operation_queue`` returns ``None`` unless the owner has a queue
    whose operations should be cancelled before each new request.
    ``error_message_for_error`` returns the error's description; returning
    ``None`` selects the manager's generic message.
    """

    def on_status_changed(self, status: "LoadingStatus") -> None:
        pass

    def on_load_cancelled(self, error: Optional[BaseException]) -> None:
        pass

    def on_load_failed(self, error: Optional[BaseException]) -> None:
        pass

    def on_paging_failed(self, error: Optional[BaseException]) -> None:
        pass

    def network_operation_queue(self) -> Optional["OperationQueue"]:
        return None

    def should_reload(self) -> bool:
        return True

    def should_force_reload(self) -> bool:
        return False

    def should_load_in_background(self) -> bool:
        return False

    def should_show_failed_view(self) -> bool:
        return True

    def should_show_empty_view(self) -> bool:
        return True

    def error_message_for_error(self, error: Optional[BaseException]) -> Optional[str]:
        return describe_error(error)


class CallbackPolicyHooks(PolicyHooks):
    """Build a hooks object from keyword callables.

    Each keyword matches a :class:`PolicyHooks` method name; hooks that are
    not supplied keep their default::

        hooks = CallbackPolicyHooks(
            should_load_in_background=lambda: bool(self.items),
            on_load_failed=self.log_failure,
        )
    """

    _HOOK_NAMES = frozenset(
        name
        for name in vars(PolicyHooks)
        if not name.startswith("_") and callable(getattr(PolicyHooks, name))
    )

    def __init__(self, **callbacks: Callable[..., Any]) -> None:
        unknown = set(callbacks) - self._HOOK_NAMES
        if unknown:
            raise TypeError(f"Unknown policy hook(s): {', '.join(sorted(unknown))}")
        for name, callback in callbacks.items():
            if not callable(callback):
                raise TypeError(f"Policy hook {name!r} must be callable")
            # Instance attributes shadow the default methods
            setattr(self, name, callback)


__all__ = ["CallbackPolicyHooks", "PolicyHooks", "describe_error"]
