"""
Ports - Abstract interfaces for external dependencies.

Ports define the contracts that adapters must implement.
This enables dependency inversion and easy testing.
"""

from .issue_tracker import (
    IssueTrackerPort,
    LinkedIssueTrackerPort,
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)
from .config_provider import ConfigProviderPort, AppConfig, JiraConfig, GitHubConfig

__all__ = [
    "IssueTrackerPort",
    "LinkedIssueTrackerPort",
    "IssueTrackerError",
    "AuthenticationError",
    "NotFoundError",
    "PermissionError",
    "RateLimitError",
    "ConfigProviderPort",
    "AppConfig",
    "JiraConfig",
    "GitHubConfig",
]
