"""Custom exception hierarchy for loadstate."""

from __future__ import annotations

from ..config import CANCELLED_ERROR_CODE


class LoadStateError(Exception):
    """Base class for all custom errors raised by loadstate."""


# --- Loading errors ---

class ContentLoadError(LoadStateError):
    """Raised or reported when a content fetch fails.

    ``code`` mirrors the numeric error codes transport layers attach to their
    failures; :data:`~loadstate.config.CANCELLED_ERROR_CODE` marks a
    cancellation.
    """

    def __init__(self, message: str = "", code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class LoadCancelledError(ContentLoadError):
    """Reported when an outstanding fetch was cancelled before completing."""

    def __init__(self, message: str = "Request cancelled") -> None:
        super().__init__(message, code=CANCELLED_ERROR_CODE)


class ProcessingFailedError(LoadStateError):
    """Raised when post-processing of a successful response reports failure."""


class InvalidTransitionError(LoadStateError):
    """Raised when a status transition violates the state machine invariants."""


# --- Settings errors ---

class SettingsError(LoadStateError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
