"""Loading status values and the predicates derived from them."""

from __future__ import annotations

from enum import Enum


class LoadingStatus(Enum):
    PRE_LOADING = "pre_loading"
    LOADING = "loading"
    FOREGROUND_REFRESHING = "foreground_refreshing"
    BACKGROUND_REFRESHING = "background_refreshing"
    PAGING = "paging"
    LOADED = "loaded"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EMPTY = "empty"


BUSY_STATUSES = frozenset(
    {
        LoadingStatus.LOADING,
        LoadingStatus.FOREGROUND_REFRESHING,
        LoadingStatus.BACKGROUND_REFRESHING,
        LoadingStatus.PAGING,
    }
)

TERMINAL_STATUSES = frozenset(
    {
        LoadingStatus.LOADED,
        LoadingStatus.FAILED,
        LoadingStatus.CANCELLED,
        LoadingStatus.EMPTY,
    }
)


def is_busy(status: LoadingStatus) -> bool:
    """Return ``True`` while a request is outstanding for *status*."""
    return status in BUSY_STATUSES


def is_terminal(status: LoadingStatus) -> bool:
    return status in TERMINAL_STATUSES


__all__ = ["BUSY_STATUSES", "LoadingStatus", "TERMINAL_STATUSES", "is_busy", "is_terminal"]
