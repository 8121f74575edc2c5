"""Configuration management for the synchronizer."""

import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv

from clockify_youtrack_sync.exceptions import ConfigurationError
from clockify_youtrack_sync.utils.storage import StorageManager

ENV_CLOCKIFY_API_KEY = "CLOCKIFY_API_KEY"
ENV_YOUTRACK_API_KEY = "YOUTRACK_API_KEY"
ENV_YOUTRACK_BASE_URL = "YOUTRACK_BASE_URL"
ENV_CLOCKIFY_WORKSPACE_ID = "CLOCKIFY_WORKSPACE_ID"
ENV_CLOCKIFY_USER_ID = "CLOCKIFY_USER_ID"


class Config:
    """Resolves credentials and settings.

    Environment variables win over values stored in the configuration
    directory. A ``.env`` file in the working directory is loaded into the
    environment first, without overriding variables already set.
    """

    def __init__(
        self,
        config_dir: Path | None = None,
        environ: Mapping[str, str] | None = None,
        load_env_file: bool = True,
    ) -> None:
        """Initialize configuration.

        Args:
            config_dir: Directory holding config.yaml and tokens.json.
            environ: Environment to read. Defaults to os.environ.
            load_env_file: Load a .env file before reading os.environ.
        """
        if environ is None:
            if load_env_file:
                load_dotenv()
            environ = os.environ

        self.environ = environ
        self.storage = StorageManager(config_dir)
        self._settings = self.storage.load_settings()

    def _lookup(self, env_name: str, setting: str) -> str | None:
        value = self.environ.get(env_name) or self._settings.get(setting)
        return str(value) if value else None

    @property
    def clockify_api_key(self) -> str | None:
        """Clockify API key."""
        return self.environ.get(ENV_CLOCKIFY_API_KEY) or self.storage.get_token("clockify")

    @property
    def youtrack_token(self) -> str | None:
        """YouTrack permanent token."""
        return self.environ.get(ENV_YOUTRACK_API_KEY) or self.storage.get_token("youtrack")

    @property
    def youtrack_url(self) -> str | None:
        """YouTrack REST API root."""
        return self._lookup(ENV_YOUTRACK_BASE_URL, "youtrack_url")

    @property
    def clockify_workspace_id(self) -> str | None:
        """Clockify workspace, or None to use the user's default workspace."""
        return self._lookup(ENV_CLOCKIFY_WORKSPACE_ID, "clockify_workspace_id")

    @property
    def clockify_user_id(self) -> str | None:
        """Clockify user, or None to use the token's user."""
        return self._lookup(ENV_CLOCKIFY_USER_ID, "clockify_user_id")

    def require_clockify_api_key(self) -> str:
        """Get the Clockify API key or raise ConfigurationError."""
        return self._require(self.clockify_api_key, ENV_CLOCKIFY_API_KEY)

    def require_youtrack_token(self) -> str:
        """Get the YouTrack token or raise ConfigurationError."""
        return self._require(self.youtrack_token, ENV_YOUTRACK_API_KEY)

    def require_youtrack_url(self) -> str:
        """Get the YouTrack URL or raise ConfigurationError."""
        return self._require(self.youtrack_url, ENV_YOUTRACK_BASE_URL)

    @staticmethod
    def _require(value: str | None, env_name: str) -> str:
        if not value:
            raise ConfigurationError(
                f"{env_name} is not set. Export it or run 'clockify-youtrack-sync configure'."
            )
        return value

    def update_settings(self, **settings: str | None) -> None:
        """Store connection settings, dropping empty values.

        Args:
            settings: Setting names and values, e.g. youtrack_url.
        """
        for key, value in settings.items():
            if value:
                self._settings[key] = value
            else:
                self._settings.pop(key, None)
        self.storage.save_settings(self._settings)
