"""Tests for request tokens and the pure Python Signal."""

from __future__ import annotations

import pytest

from loadstate.core.signal import Signal
from loadstate.core.tokens import RequestTokenSource


class TestRequestTokenSource:
    def test_tokens_increase_monotonically(self):
        tokens = RequestTokenSource()

        first = tokens.mint()
        second = tokens.mint()

        assert second > first

    def test_only_latest_token_is_current(self):
        tokens = RequestTokenSource()
        first = tokens.mint()
        second = tokens.mint()

        assert not tokens.is_current(first)
        assert tokens.is_current(second)

    def test_no_token_is_current_initially(self):
        tokens = RequestTokenSource()

        assert tokens.current is None

    def test_retire_clears_current(self):
        tokens = RequestTokenSource()
        token = tokens.mint()

        tokens.retire(token)

        assert not tokens.is_current(token)
        assert tokens.current is None

    def test_retire_of_stale_token_keeps_newer_current(self):
        tokens = RequestTokenSource()
        old = tokens.mint()
        new = tokens.mint()

        tokens.retire(old)

        assert tokens.is_current(new)

    def test_retire_without_token_clears_whatever_is_current(self):
        tokens = RequestTokenSource()
        tokens.mint()

        tokens.retire()

        assert tokens.current is None


class TestSignal:
    def test_connect_and_emit(self):
        sig = Signal()
        received = []
        sig.connect(lambda v: received.append(v))

        sig.emit(42)

        assert received == [42]

    def test_connecting_twice_registers_once(self):
        sig = Signal()
        received = []

        def handler(v):
            received.append(v)

        sig.connect(handler)
        sig.connect(handler)
        sig.emit(1)

        assert received == [1]
        assert sig.handler_count == 1

    def test_disconnect_missing_raises(self):
        sig = Signal()
        with pytest.raises(ValueError):
            sig.disconnect(lambda: None)
