"""
Config Provider Port - Abstract interface for configuration sources.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlparse

from ..domain.entities import DEFAULT_GITHUB_HOST


@dataclass
class JiraConfig:
    """Jira connection settings."""

    url: str = ""
    email: str = ""
    api_token: str = ""
    project: Optional[str] = None


@dataclass
class GitHubConfig:
    """GitHub connection settings."""

    token: str = ""
    api_url: str = "https://api.github.com"

    @property
    def web_host(self) -> str:
        """Host serving issue pages: github.com, or the Enterprise host of api_url."""
        host = urlparse(self.api_url).hostname or ""
        if not host or host == "api.github.com":
            return DEFAULT_GITHUB_HOST
        return host


@dataclass
class AppConfig:
    """Complete application configuration."""

    jira: JiraConfig = field(default_factory=JiraConfig)
    github: GitHubConfig = field(default_factory=GitHubConfig)
    verbose: bool = False


class ConfigProviderPort(ABC):
    """Interface for configuration providers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the provider name."""
        ...

    @abstractmethod
    def load(self) -> AppConfig:
        """Load the complete configuration."""
        ...

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a single configuration value."""
        ...

    @abstractmethod
    def validate(self, require_jira: bool = True) -> list[str]:
        """
        Validate the configuration.

        Returns:
            List of problems (empty if valid).
        """
        ...
