"""
Tests cho AppSettings dataclass va settings_manager.

Coverage:
- AppSettings.from_dict() voi day du fields, partial fields, extra keys, sai type
- AppSettings.to_dict() roundtrip
- get_excluded_patterns_list() parsing
- load_app_settings() / save_app_settings()
"""

import json
import logging
from unittest.mock import patch

import pytest

from config.app_settings import AppSettings
from services import settings_manager


class TestAppSettings:
    """Test AppSettings dataclass creation va methods."""

    def test_default_values(self):
        settings = AppSettings()
        assert settings.min_word_length == 2
        assert settings.sort_mode == "frequency"
        assert settings.channel_capacity == 0
        assert settings.max_workers == 0
        assert settings.encoding == "utf-8"
        assert settings.use_default_ignores is True

    def test_from_dict_partial(self):
        settings = AppSettings.from_dict({"sort_mode": "alphabetical"})
        assert settings.sort_mode == "alphabetical"
        assert settings.min_word_length == 2

    def test_from_dict_extra_keys_ignored(self):
        settings = AppSettings.from_dict({"unknown_key": 1, "min_word_length": 3})
        assert settings.min_word_length == 3
        assert not hasattr(settings, "unknown_key")

    def test_from_dict_wrong_type_uses_default(self):
        settings = AppSettings.from_dict(
            {"min_word_length": "3", "use_default_ignores": "yes"}
        )
        assert settings.min_word_length == 2
        assert settings.use_default_ignores is True

    def test_from_dict_bool_not_int(self):
        settings = AppSettings.from_dict({"max_workers": True})
        assert settings.max_workers == 0

    def test_from_dict_invalid_values(self):
        settings = AppSettings.from_dict({"sort_mode": "random", "channel_capacity": -4})
        assert settings.sort_mode == "frequency"
        assert settings.channel_capacity == 0

    def test_roundtrip(self):
        original = AppSettings(min_word_length=4, sort_mode="alphabetical")
        assert AppSettings.from_dict(original.to_dict()) == original

    def test_excluded_patterns_list(self):
        settings = AppSettings(excluded_patterns="build/\n\n# comment\n  *.log  \n")
        assert settings.get_excluded_patterns_list() == ["build/", "*.log"]


class TestSettingsManager:
    """Test load/save defaults voi file tam."""

    @pytest.fixture
    def settings_file(self, tmp_path):
        path = tmp_path / "settings.json"
        with patch.object(settings_manager, "SETTINGS_FILE", path):
            yield path

    def test_load_missing_file_defaults(self, settings_file):
        assert settings_manager.load_app_settings() == AppSettings()

    def test_load_malformed_file_defaults(self, settings_file):
        settings_file.write_text("{not json", encoding="utf-8")
        assert settings_manager.load_app_settings() == AppSettings()

    def test_save_then_load(self, settings_file):
        assert settings_manager.save_app_settings(AppSettings(min_word_length=5))
        assert settings_manager.load_app_settings().min_word_length == 5

    def test_save_preserves_extra_keys(self, settings_file):
        settings_file.write_text(json.dumps({"custom": "keep"}), encoding="utf-8")
        settings_manager.save_app_settings(AppSettings())
        data = json.loads(settings_file.read_text(encoding="utf-8"))
        assert data["custom"] == "keep"
        assert data["sort_mode"] == "frequency"

    def test_save_leaves_no_temp_file(self, settings_file):
        settings_manager.save_app_settings(AppSettings())
        assert [p.name for p in settings_file.parent.iterdir()] == ["settings.json"]

    def test_load_non_object_defaults(self, settings_file):
        settings_file.write_text("[1, 2]", encoding="utf-8")
        assert settings_manager.load_app_settings() == AppSettings()

    def test_save_failure_returns_false(self, tmp_path, caplog):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        target = blocker / "settings.json"

        with patch.object(settings_manager, "SETTINGS_FILE", target):
            with caplog.at_level(logging.ERROR, logger="wordtally"):
                assert settings_manager.save_app_settings(AppSettings()) is False
        assert "Cannot save" in caplog.text
