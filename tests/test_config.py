"""Tests for configuration management."""

from pathlib import Path

import pytest

from clockify_youtrack_sync.config import Config
from clockify_youtrack_sync.exceptions import ConfigurationError


class TestConfig:
    """Test Config functionality."""

    def test_empty_configuration(self, config: Config) -> None:
        """Test that nothing is configured by default."""
        assert config.clockify_api_key is None
        assert config.youtrack_token is None
        assert config.youtrack_url is None
        assert config.clockify_workspace_id is None
        assert config.clockify_user_id is None

    def test_stored_values(self, config: Config, temp_config_dir: Path) -> None:
        """Test values stored in the config directory."""
        config.storage.set_token("clockify", "stored_key")
        config.storage.set_token("youtrack", "stored_token")
        config.update_settings(youtrack_url="https://stored.test/api", clockify_workspace_id="ws_1")

        reloaded = Config(temp_config_dir, environ={})

        assert reloaded.clockify_api_key == "stored_key"
        assert reloaded.youtrack_token == "stored_token"
        assert reloaded.youtrack_url == "https://stored.test/api"
        assert reloaded.clockify_workspace_id == "ws_1"

    def test_environment_wins(self, config: Config, temp_config_dir: Path) -> None:
        """Test that environment variables override stored values."""
        config.storage.set_token("clockify", "stored_key")
        config.update_settings(youtrack_url="https://stored.test/api")

        env_config = Config(
            temp_config_dir,
            environ={
                "CLOCKIFY_API_KEY": "env_key",
                "YOUTRACK_BASE_URL": "https://env.test/api",
                "CLOCKIFY_USER_ID": "user_env",
            },
        )

        assert env_config.clockify_api_key == "env_key"
        assert env_config.youtrack_url == "https://env.test/api"
        assert env_config.clockify_user_id == "user_env"

    def test_empty_settings_are_dropped(self, config: Config) -> None:
        """Test that blank answers remove a stored setting."""
        config.update_settings(clockify_user_id="user_1")
        config.update_settings(clockify_user_id="")

        assert config.clockify_user_id is None
        assert "clockify_user_id" not in config.storage.load_settings()

    @pytest.mark.parametrize(
        "method, env_name",
        [
            ("require_clockify_api_key", "CLOCKIFY_API_KEY"),
            ("require_youtrack_token", "YOUTRACK_API_KEY"),
            ("require_youtrack_url", "YOUTRACK_BASE_URL"),
        ],
    )
    def test_require_missing(self, config: Config, method: str, env_name: str) -> None:
        """Test that missing required settings raise ConfigurationError."""
        with pytest.raises(ConfigurationError, match=env_name):
            getattr(config, method)()

    def test_require_present(self, temp_config_dir: Path) -> None:
        """Test required settings that are present."""
        config = Config(temp_config_dir, environ={"YOUTRACK_API_KEY": "perm:abc"})
        assert config.require_youtrack_token() == "perm:abc"
