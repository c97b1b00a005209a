"""Loading-status orchestration for views that fetch content asynchronously."""

from .core.coordinator import ReloadCoordinator
from .core.hooks import CallbackPolicyHooks, PolicyHooks
from .core.manager import LoadingManager, get_loading_manager, loading_manager_for
from .core.provider import ContentProvider, OperationQueue, StatusViewPresenter
from .core.state_machine import LoadingStateMachine
from .core.status import LoadingStatus, is_busy, is_terminal

__all__ = [
    "CallbackPolicyHooks",
    "ContentProvider",
    "LoadingManager",
    "LoadingStateMachine",
    "LoadingStatus",
    "OperationQueue",
    "PolicyHooks",
    "ReloadCoordinator",
    "StatusViewPresenter",
    "is_busy",
    "get_loading_manager",
    "is_terminal",
    "loading_manager_for",
]
