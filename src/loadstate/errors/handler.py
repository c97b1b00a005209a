import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from loadstate.events.bus import Event, EventBus


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(kw_only=True)
class ErrorOccurredEvent(Event):
    error: Optional[BaseException]
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    def __init__(self, logger: logging.Logger, event_bus: EventBus):
        self._logger = logger
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(
        self,
        error: Optional[BaseException],
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict = None,
    ):
        # Processing failures carry no exception object
        name = error.__class__.__name__ if error is not None else "ProcessingFailure"
        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method(f"{name}: {error}", extra={"context": context or {}})

        self._events.publish(ErrorOccurredEvent(
            error=error,
            severity=severity,
            context=context or {},
        ))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
