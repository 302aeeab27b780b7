"""
Exceptions - Centralized exception hierarchy for gh2jira.

Every error raised on purpose by gh2jira derives from Gh2JiraError so the
CLI can map it to an exit code at the command boundary.
"""

from typing import Optional


__all__ = ["Gh2JiraError", "ConfigError", "WorkflowError", "ReconcileError"]


class Gh2JiraError(Exception):
    """Base exception for all gh2jira errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ConfigError(Gh2JiraError):
    """Configuration is missing or invalid."""


class WorkflowError(Gh2JiraError):
    """Workflow file could not be opened, parsed or validated."""


class ReconcileError(Gh2JiraError):
    """Reconciliation could not be started or completed."""
