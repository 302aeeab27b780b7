"""
GitHub Adapter - Read-only implementation of IssueTrackerPort for GitHub.
"""

from .adapter import DEFAULT_PROJECT, GitHubAdapter, IssueFilter
from .client import GitHubApiClient

__all__ = [
    "DEFAULT_PROJECT",
    "GitHubAdapter",
    "GitHubApiClient",
    "IssueFilter",
]
