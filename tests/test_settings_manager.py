"""Tests for the settings file."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from jsonschema import ValidationError

from loadstate.config import GENERIC_ERROR_MESSAGE
from loadstate.errors import SettingsLoadError, SettingsValidationError
from loadstate.settings import DEFAULT_SETTINGS, SettingsManager, merge_with_defaults


def test_load_creates_defaults(tmp_path: Path):
    path = tmp_path / "settings.json"
    manager = SettingsManager(path)

    manager.load()

    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_SETTINGS
    assert manager.get("messages.generic_error") == GENERIC_ERROR_MESSAGE


def test_load_merges_partial_sections(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"messages": {"empty": "No photos"}}), encoding="utf-8")
    manager = SettingsManager(path)

    manager.load()

    assert manager.get("messages.empty") == "No photos"
    assert manager.get("messages.generic_error") == GENERIC_ERROR_MESSAGE
    assert manager.get("status_views.auto_adjust_scroll_views") is True


def test_set_persists_and_emits(tmp_path: Path):
    path = tmp_path / "settings.json"
    manager = SettingsManager(path)
    manager.load()
    changes = []
    manager.settingsChanged.connect(lambda key, value: changes.append((key, value)))

    manager.set("status_views.show_loading_text", False)

    assert changes == [("status_views.show_loading_text", False)]
    reloaded = SettingsManager(path)
    reloaded.load()
    assert reloaded.get("status_views.show_loading_text") is False


def test_invalid_value_is_rejected_and_not_applied(tmp_path: Path):
    manager = SettingsManager(tmp_path / "settings.json")
    manager.load()

    with pytest.raises(SettingsValidationError):
        manager.set("messages.generic_error", "")

    assert manager.get("messages.generic_error") == GENERIC_ERROR_MESSAGE


def test_unreadable_file_raises_load_error(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path).load()


def test_non_object_file_raises_load_error(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(SettingsLoadError):
        SettingsManager(path).load()


def test_get_missing_key_returns_default():
    manager = SettingsManager(Path("unused.json"))

    assert manager.get("messages.nope", "fallback") == "fallback"


def test_merge_rejects_unknown_message_keys():
    with pytest.raises(ValidationError):
        merge_with_defaults({"messages": {"bogus": "x"}})
