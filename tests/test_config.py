"""Tests for gamepick.config."""

import pytest

from gamepick.config import Settings, load_env
from gamepick.relay import DEFAULT_RELAY_URL


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.api_key == ""
        assert settings.relay_url == DEFAULT_RELAY_URL
        assert settings.relay_encode is False
        assert settings.timeout == 10.0

    def test_reads_values(self):
        settings = Settings.from_env(
            {
                "STEAM_API_KEY": " abc ",
                "GAMEPICK_RELAY_URL": "https://relay.example/?",
                "GAMEPICK_RELAY_ENCODE": "yes",
                "GAMEPICK_TIMEOUT": "2.5",
            }
        )
        assert settings.api_key == "abc"
        assert settings.relay_url == "https://relay.example/?"
        assert settings.relay_encode is True
        assert settings.timeout == 2.5

    @pytest.mark.parametrize("value", ["0", "false", "", "off"])
    def test_encode_falsy(self, value):
        assert Settings.from_env({"GAMEPICK_RELAY_ENCODE": value}).relay_encode is False

    def test_key_hidden_from_repr(self):
        assert "secret" not in repr(Settings(api_key="secret"))

    def test_uses_os_environ(self, monkeypatch):
        monkeypatch.setenv("STEAM_API_KEY", "fromenv")
        assert Settings.from_env().api_key == "fromenv"


class TestLoadEnv:
    def test_reads_file_without_overriding(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("STEAM_API_KEY=filekey\nGAMEPICK_TIMEOUT=3\n")
        monkeypatch.setenv("STEAM_API_KEY", "already-set")
        monkeypatch.setenv("GAMEPICK_TIMEOUT", "")
        monkeypatch.delenv("GAMEPICK_TIMEOUT")
        assert load_env(env_file) is True
        settings = Settings.from_env()
        assert settings.api_key == "already-set"
        assert settings.timeout == 3.0
