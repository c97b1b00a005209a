"""Default configuration values for loadstate."""

from __future__ import annotations

from typing import Final

# Transport layers report a user- or system-initiated cancellation with this
# error code (the value Foundation uses for a cancelled URL request).  Any
# error carrying it is classified as a cancellation instead of a failure.
CANCELLED_ERROR_CODE: Final[int] = -999

GENERIC_ERROR_MESSAGE: Final[str] = "Something went wrong. Please try again."
EMPTY_MESSAGE: Final[str] = "Nothing to show yet."
LOADING_MESSAGE: Final[str] = "Loading…"
RETRY_BUTTON_TEXT: Final[str] = "Try Again"

# ---------------------------------------------------------------------------
# Status view constants
# ---------------------------------------------------------------------------

STATUS_VIEW_MESSAGE_MAX_WIDTH: Final[int] = 320
STATUS_VIEW_SPACING: Final[int] = 12
LOADING_BAR_WIDTH: Final[int] = 160
LOADING_BAR_HEIGHT: Final[int] = 6

# Workers started through ``ThreadPoolOperationQueue`` use a dedicated pool so
# that cancelling pending fetches never touches unrelated global work.
FETCH_POOL_MAX_THREADS: Final[int] = 4
