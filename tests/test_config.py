"""Tests for configuration loading."""

from pathlib import Path

import pytest

from gamerules.config import GameRulesConfig, config_path, load_config
from gamerules.errors import ConfigError


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.yaml")
        assert config == GameRulesConfig()
        assert config.log_level == "WARNING"
        assert config.extensions == []

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == GameRulesConfig()

    def test_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "state_path: ~/worlds/rules.json\n"
            "server_name: survival\n"
            "extensions:\n  - mymod.rules\n"
            "log_level: debug\n"
        )
        config = load_config(path)
        assert config.state_path == Path.home() / "worlds" / "rules.json"
        assert config.server_name == "survival"
        assert config.extensions == ["mymod.rules"]
        assert config.log_level == "DEBUG"

    def test_yaml_error_reports_position(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('log_level: "INFO\n')
        with pytest.raises(ConfigError, match="line"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_invalid_log_level(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: LOUD\n")
        with pytest.raises(ConfigError, match="log_level"):
            load_config(path)


class TestConfigPath:
    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("GAMERULES_CONFIG", str(tmp_path / "custom.yaml"))
        assert config_path() == tmp_path / "custom.yaml"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("GAMERULES_CONFIG", raising=False)
        assert config_path() == Path.home() / ".gamerules" / "config.yaml"
