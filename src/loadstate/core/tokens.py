"""Request tokens used to discard stale completions."""

from __future__ import annotations

import itertools
import threading
from typing import Optional


class RequestTokenSource:
    """Mint monotonically increasing request generations.

    Exactly one generation is *current* at a time.  Minting a new one
    supersedes the previous generation; retiring the current one leaves no
    request current, so any late or duplicate completion is recognised as
    stale.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current: Optional[int] = None
        self._lock = threading.Lock()

    def mint(self) -> int:
        with self._lock:
            self._current = next(self._counter)
            return self._current

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._current

    def retire(self, token: int | None = None) -> None:
        """Clear the current generation, or only *token* if given and current."""
        with self._lock:
            if token is None or token == self._current:
                self._current = None

    @property
    def current(self) -> Optional[int]:
        with self._lock:
            return self._current
