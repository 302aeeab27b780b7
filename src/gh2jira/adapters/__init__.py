"""
Adapters - Concrete implementations of ports.

This module contains implementations for:
- Issue Trackers: Jira, GitHub
- Workflows: YAML rule files
- Config: Environment variables, .env and YAML config files
"""

from .jira import JiraAdapter
from .github import GitHubAdapter, IssueFilter
from .workflows import load_workflow_file, load_workflows
from .config import EnvironmentConfigProvider

__all__ = [
    "JiraAdapter",
    "GitHubAdapter",
    "IssueFilter",
    "load_workflow_file",
    "load_workflows",
    "EnvironmentConfigProvider",
]
