"""Tests for settings loading and saving."""

import logging

import pytest
import yaml

from briefing_canvas.config import CONFIG_ENV_VAR, EngineSettings, load_settings, resolve_config_path, save_settings


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.yaml") == EngineSettings()

    def test_values_override_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("reveal_tick: 0.05\nplanning_notice: Thinking...\n")
        settings = load_settings(path)
        assert settings.reveal_tick == 0.05
        assert settings.planning_notice == "Thinking..."
        assert settings.settle_delay == EngineSettings().settle_delay

    def test_malformed_yaml_warns_and_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.yaml"
        path.write_text("reveal_tick: [unclosed\n")
        with caplog.at_level(logging.WARNING):
            assert load_settings(path) == EngineSettings()
        assert "Failed to read config" in caplog.text

    def test_non_mapping_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        assert load_settings(path) == EngineSettings()

    def test_invalid_value_raises(self, tmp_path):
        """A negative delay names the offending field."""
        path = tmp_path / "config.yaml"
        path.write_text("reveal_tick: -1\n")
        with pytest.raises(ValueError, match="reveal_tick"):
            load_settings(path)

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("thinking_delay: 0\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert resolve_config_path() == path
        assert load_settings().thinking_delay == 0.0


class TestSaveSettings:
    def test_writes_yaml_and_creates_dirs(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        written = save_settings(EngineSettings(chat_tick=0.03), path)
        assert written == path
        data = yaml.safe_load(path.read_text())
        assert data["chat_tick"] == 0.03
        assert load_settings(path).chat_tick == 0.03
