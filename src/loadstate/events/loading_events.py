"""Events published by a :class:`~loadstate.core.manager.LoadingManager`."""

from dataclasses import dataclass
from typing import Any, Optional

from .bus import Event


@dataclass(kw_only=True)
class LoadingEvent(Event):
    # Name of the owning view, for log correlation
    owner: str = ""


@dataclass(kw_only=True)
class LoadingStatusChangedEvent(LoadingEvent):
    status: Any = None
    previous: Any = None


@dataclass(kw_only=True)
class LoadStartedEvent(LoadingEvent):
    generation: int = 0
    ignore_cache: bool = False
    paging: bool = False


@dataclass(kw_only=True)
class LoadFinishedEvent(LoadingEvent):
    generation: int = 0
    empty: bool = False


@dataclass(kw_only=True)
class LoadFailedEvent(LoadingEvent):
    generation: int = 0
    error: Optional[BaseException] = None
    message: str = ""


@dataclass(kw_only=True)
class LoadCancelledEvent(LoadingEvent):
    generation: int = 0
    error: Optional[BaseException] = None


@dataclass(kw_only=True)
class PagingFailedEvent(LoadingEvent):
    generation: int = 0
    error: Optional[BaseException] = None
