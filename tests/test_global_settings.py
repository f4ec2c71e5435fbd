"""Tests for global settings and the config schema defaults."""

import json

from config.schema import ContentProtectionDefaults, GlobalSettings
from config.settings import ToolSettings
from core.result import ErrorKind


class TestGlobalSettingsStore:
    def test_defaults_when_missing(self, context):
        settings = context.global_settings.load().data
        assert settings.content_protection.default_mode == "strict"
        assert settings.content_protection.default_verbosity == "verbose"
        assert settings.content_protection.apply_to_new_shops is True
        assert settings.version == "1.0.0"

    def test_save_writes_camel_case(self, context):
        settings = GlobalSettings(content_protection=ContentProtectionDefaults(default_mode="warn"))
        assert context.global_settings.save(settings).success

        data = json.loads(context.paths.settings_file.read_text())
        assert data == {
            "contentProtection": {
                "defaultMode": "warn",
                "defaultVerbosity": "verbose",
                "applyToNewShops": True,
            },
            "version": "1.0.0",
        }

    def test_invalid_json(self, context):
        context.paths.settings_file.write_text("nope")
        assert context.global_settings.load().kind is ErrorKind.INVALID_JSON

    def test_invalid_shape(self, context):
        context.paths.settings_file.write_text(json.dumps({"contentProtection": {"defaultMode": "loud"}}))
        assert context.global_settings.load().kind is ErrorKind.INVALID_SHAPE

    def test_default_protection_falls_back(self, context):
        context.paths.settings_file.write_text("nope")
        assert context.global_settings.default_content_protection() == ContentProtectionDefaults()


class TestProtectionDefaults:
    def test_off_mode_disables(self):
        protection = ContentProtectionDefaults(default_mode="off").as_protection()
        assert protection.enabled is False
        assert protection.mode == "off"

    def test_strict_mode_enables(self):
        protection = ContentProtectionDefaults().as_protection()
        assert protection.enabled is True
        assert protection.mode == "strict"


class TestToolSettings:
    def test_defaults(self):
        settings = ToolSettings()
        assert settings.max_config_file_size == 1024 * 1024
        assert settings.min_token_length == 10
        assert settings.max_token_length == 500

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MULTI_SHOP_MAX_CONFIG_SIZE", "2048")
        monkeypatch.setenv("MULTI_SHOP_MIN_TOKEN_LENGTH", "20")
        monkeypatch.setenv("LOG_LEVEL", "WARN")
        settings = ToolSettings.from_env()
        assert settings.max_config_file_size == 2048
        assert settings.min_token_length == 20
        assert settings.log_level == "warning"

    def test_fractional_command_timeout(self, monkeypatch):
        monkeypatch.setenv("MULTI_SHOP_COMMAND_TIMEOUT", "2.5")
        assert ToolSettings.from_env().command_timeout == 2.5

    def test_bad_command_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("MULTI_SHOP_COMMAND_TIMEOUT", "soon")
        assert ToolSettings.from_env().command_timeout == 5.0

    def test_bad_env_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("MULTI_SHOP_MAX_CONFIG_SIZE", "lots")
        monkeypatch.setenv("MULTI_SHOP_MIN_TOKEN_LENGTH", "-3")
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        settings = ToolSettings.from_env()
        assert settings.max_config_file_size == 1024 * 1024
        assert settings.min_token_length == 10
        assert settings.log_level == "warning"
