"""Schema helpers for the loadstate settings file."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import EMPTY_MESSAGE, GENERIC_ERROR_MESSAGE, LOADING_MESSAGE

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "loadstate/settings.schema.json",
    "type": "object",
    "required": ["schema", "messages", "status_views"],
    "properties": {
        "schema": {"const": "loadstate/settings@1"},
        "messages": {
            "type": "object",
            "required": ["generic_error", "empty", "loading"],
            "properties": {
                "generic_error": {"type": "string", "minLength": 1},
                "empty": {"type": "string"},
                "loading": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "status_views": {
            "type": "object",
            "properties": {
                "auto_adjust_scroll_views": {"type": "boolean"},
                "show_loading_text": {"type": "boolean"},
            },
            "additionalProperties": True,
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "loadstate/settings@1",
    "messages": {
        "generic_error": GENERIC_ERROR_MESSAGE,
        "empty": EMPTY_MESSAGE,
        "loading": LOADING_MESSAGE,
    },
    "status_views": {
        "auto_adjust_scroll_views": True,
        "show_loading_text": True,
    },
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)

_SECTIONS = ("messages", "status_views")


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key in _SECTIONS and isinstance(value, dict):
                target = merged.setdefault(key, {})
                for sub_key, sub_value in value.items():
                    target[sub_key] = sub_value
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
