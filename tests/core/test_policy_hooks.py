"""Tests for the policy hook defaults."""

from __future__ import annotations

import pytest

from loadstate.core.hooks import CallbackPolicyHooks, PolicyHooks, describe_error
from loadstate.core.provider import ContentProvider, is_cancellation
from loadstate.core.status import LoadingStatus
from loadstate.config import CANCELLED_ERROR_CODE
from loadstate.errors import ContentLoadError, LoadCancelledError


def test_policy_defaults():
    hooks = PolicyHooks()

    assert hooks.should_reload() is True
    assert hooks.should_force_reload() is False
    assert hooks.should_load_in_background() is False
    assert hooks.should_show_failed_view() is True
    assert hooks.should_show_empty_view() is True
    assert hooks.network_operation_queue() is None
    assert hooks.on_status_changed(LoadingStatus.LOADING) is None
    assert hooks.on_load_failed(None) is None


def test_default_error_message_uses_description():
    hooks = PolicyHooks()

    assert hooks.error_message_for_error(ContentLoadError("Offline")) == "Offline"
    assert hooks.error_message_for_error(ContentLoadError("   ")) is None
    assert hooks.error_message_for_error(None) is None


def test_describe_error_strips_whitespace():
    assert describe_error(ValueError("  bad input \n")) == "bad input"


def test_callback_hooks_override_only_given_hooks():
    hooks = CallbackPolicyHooks(should_load_in_background=lambda: True)

    assert hooks.should_load_in_background() is True
    assert hooks.should_reload() is True


def test_callback_hooks_reject_unknown_names():
    with pytest.raises(TypeError, match="should_explode"):
        CallbackPolicyHooks(should_explode=lambda: True)


def test_callback_hooks_reject_non_callables():
    with pytest.raises(TypeError):
        CallbackPolicyHooks(should_reload=False)


@pytest.mark.parametrize(
    "error, expected",
    [
        (None, False),
        (ContentLoadError("boom"), False),
        (ContentLoadError("boom", code=500), False),
        (ContentLoadError("cancelled", code=CANCELLED_ERROR_CODE), True),
        (LoadCancelledError(), True),
    ],
)
def test_is_cancellation(error, expected):
    assert is_cancellation(error) is expected


def test_foreign_error_with_cancel_code_is_cancellation():
    class TransportError(Exception):
        code = CANCELLED_ERROR_CODE

    assert is_cancellation(TransportError())


@pytest.mark.parametrize(
    "response, expected",
    [(None, True), ([], True), ({}, True), (["a"], False), (object(), False)],
)
def test_default_content_emptiness(response, expected):
    assert ContentProvider().is_content_empty(response) is expected


def test_content_provider_methods_must_be_implemented():
    provider = ContentProvider()

    with pytest.raises(NotImplementedError):
        provider.load_content(False, lambda error, results: None)
    with pytest.raises(NotImplementedError):
        provider.load_success([], lambda success: None)
