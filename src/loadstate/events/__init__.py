from .bus import Event, EventBus
from .loading_events import (
    LoadCancelledEvent,
    LoadFailedEvent,
    LoadFinishedEvent,
    LoadingStatusChangedEvent,
    LoadStartedEvent,
    PagingFailedEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "LoadCancelledEvent",
    "LoadFailedEvent",
    "LoadFinishedEvent",
    "LoadStartedEvent",
    "LoadingStatusChangedEvent",
    "PagingFailedEvent",
]
