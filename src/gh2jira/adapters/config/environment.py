"""
Environment Config Provider - Load configuration from environment variables.

Supports, lowest precedence first:
- .env files
- YAML config file (~/.config/gh2jira/config.yaml or --config)
- Environment variables (JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN, GITHUB_TOKEN, ...)
- Command line argument overrides
"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from ...core.exceptions import ConfigError
from ...core.ports.config_provider import (
    ConfigProviderPort,
    AppConfig,
    JiraConfig,
    GitHubConfig,
)


DEFAULT_CONFIG_FILE = Path.home() / ".config" / "gh2jira" / "config.yaml"


class EnvironmentConfigProvider(ConfigProviderPort):
    """
    Configuration provider that loads from environment variables, .env
    files and an optional YAML config file.
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        config_file: Optional[Path] = None,
        cli_overrides: Optional[dict[str, Any]] = None,
    ):
        """
        Initialize the config provider.

        Args:
            env_file: Path to .env file (auto-detected if not specified)
            config_file: Path to YAML config file (default location if not specified)
            cli_overrides: Command line argument overrides

        Raises:
            ConfigError: If an explicitly given config file is missing or invalid.
        """
        self._values: dict[str, Any] = {}
        self._env_file = env_file
        self._config_file = config_file
        self._cli_overrides = cli_overrides or {}

        # Load configuration
        self._load_env_file()
        self._load_config_file()
        self._load_environment()
        self._apply_cli_overrides()

    # -------------------------------------------------------------------------
    # ConfigProviderPort Implementation
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Environment"

    def load(self) -> AppConfig:
        """Load complete configuration."""
        jira = JiraConfig(
            url=self._text("jira_url", ""),
            email=self._text("jira_email", ""),
            api_token=self._text("jira_api_token", ""),
            project=self._text("jira_project"),
        )

        github = GitHubConfig(
            token=self._text("github_token", ""),
            api_url=self._text("github_api_url", "https://api.github.com"),
        )

        return AppConfig(
            jira=jira,
            github=github,
            verbose=_as_bool(self.get("verbose", False)),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        # Normalize key
        key = key.lower().replace("-", "_")
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value."""
        key = key.lower().replace("-", "_")
        self._values[key] = value

    def validate(self, require_jira: bool = True) -> list[str]:
        """Validate configuration."""
        errors = []

        if require_jira:
            if not self.get("jira_url"):
                errors.append("Missing JIRA_URL - set in environment, .env or config file")
            if not self.get("jira_email"):
                errors.append("Missing JIRA_EMAIL - set in environment, .env or config file")
            if not self.get("jira_api_token"):
                errors.append("Missing JIRA_API_TOKEN - set in environment, .env or config file")
            if not self.get("github_token"):
                errors.append("Missing GITHUB_TOKEN - set in environment, .env or config file")

        return errors

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _text(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get a value as a string; YAML may have parsed it as a number."""
        value = self.get(key)
        if value is None:
            return default
        return str(value)

    def _load_env_file(self) -> None:
        """Load values from .env file."""
        env_file = self._find_env_file()
        if not env_file:
            return

        for line in env_file.read_text().splitlines():
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip().lower()
            value = value.strip().strip('"').strip("'")

            self._values[key] = value

    def _find_env_file(self) -> Optional[Path]:
        """Find .env file."""
        if self._env_file and self._env_file.exists():
            return self._env_file

        cwd_env = Path.cwd() / ".env"
        if cwd_env.exists():
            return cwd_env

        return None

    def _load_config_file(self) -> None:
        """Load values from the YAML config file."""
        if self._config_file is not None:
            if not self._config_file.exists():
                raise ConfigError(f"Config file not found: {self._config_file}")
            path = self._config_file
        elif DEFAULT_CONFIG_FILE.exists():
            path = DEFAULT_CONFIG_FILE
        else:
            return

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}", cause=e)

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must be a mapping")

        # Nested sections: {jira: {url, email, api_token, project}, github: {token}}
        for section in ("jira", "github"):
            nested = data.pop(section, None)
            if isinstance(nested, dict):
                for key, value in nested.items():
                    data[f"{section}_{key}"] = value

        for key, value in data.items():
            self.set(str(key), value)

    def _load_environment(self) -> None:
        """Load values from environment variables."""
        env_mapping = {
            "JIRA_URL": "jira_url",
            "JIRA_EMAIL": "jira_email",
            "JIRA_API_TOKEN": "jira_api_token",
            "JIRA_PROJECT": "jira_project",
            "GITHUB_TOKEN": "github_token",
            "GITHUB_API_URL": "github_api_url",
            "GH2JIRA_VERBOSE": "verbose",
        }

        for env_key, config_key in env_mapping.items():
            raw_value = os.environ.get(env_key)
            if raw_value is not None:
                self._values[config_key] = raw_value

    def _apply_cli_overrides(self) -> None:
        """Apply CLI argument overrides."""
        cli_mapping = {
            "jira_project": "jira_project",
            "jira_url": "jira_url",
            "verbose": "verbose",
        }

        for cli_key, config_key in cli_mapping.items():
            if cli_key in self._cli_overrides and self._cli_overrides[cli_key] is not None:
                self._values[config_key] = self._cli_overrides[cli_key]


def _as_bool(value: Any) -> bool:
    """Interpret true/1/yes (any case) as True; other strings are False."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)
