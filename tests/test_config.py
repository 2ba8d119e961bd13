# ABOUTME: Tests for environment-driven application configuration
# ABOUTME: Defaults, CREWBASE_ prefixed overrides and the cached global instance

from pathlib import Path

import pytest
from pydantic import ValidationError

from crewbase.config import Config, get_config, reload_config


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.chdir(Path(__file__).parent)
        config = Config()

        assert config.cache_ttl_seconds == 3600
        assert config.port == 3001
        assert config.cache_dir == Path("cache")
        assert config.video_sheet_gid in config.sheet_gids
        assert len(config.sheet_gids) == 6
        assert config.all_the_roles_pages == ["Roles-Crewmate", "Roles-Impostor", "Roles-Neutral"]

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CREWBASE_CACHE_TTL_SECONDS", "60")
        monkeypatch.setenv("CREWBASE_PORT", "8080")
        monkeypatch.setenv("CREWBASE_SHEET_GIDS", '["1", "2"]')
        monkeypatch.setenv("CREWBASE_YOUTUBE_API_KEY", "secret")

        config = Config()

        assert config.cache_ttl_seconds == 60
        assert config.port == 8080
        assert config.sheet_gids == ["1", "2"]
        assert config.youtube_api_key == "secret"

    def test_invalid_log_level_is_rejected(self, monkeypatch):
        monkeypatch.setenv("CREWBASE_LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Config()


class TestGlobalConfig:
    def test_get_config_is_cached_until_reload(self, monkeypatch):
        monkeypatch.setattr("crewbase.config._config_instance", None)

        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("CREWBASE_PORT", "9999")
        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.port == 9999
        assert get_config() is reloaded
