"""
Exit Codes - Process exit statuses for the gh2jira CLI.
"""

from enum import IntEnum

from ..core.exceptions import ConfigError, WorkflowError
from ..core.ports.issue_tracker import AuthenticationError, IssueTrackerError


class ExitCode(IntEnum):
    """Exit codes returned by gh2jira commands."""

    SUCCESS = 0
    ERROR = 1
    USAGE_ERROR = 2  # argparse uses 2 for bad arguments
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 4
    CONNECTION_ERROR = 5
    AUTH_ERROR = 6
    WORKFLOW_ERROR = 7

    @classmethod
    def from_exception(cls, error: Exception) -> "ExitCode":
        """Map an exception to the exit code the CLI reports for it."""
        if isinstance(error, WorkflowError):
            if isinstance(error.cause, FileNotFoundError):
                return cls.FILE_NOT_FOUND
            return cls.WORKFLOW_ERROR
        if isinstance(error, ConfigError):
            return cls.CONFIG_ERROR
        if isinstance(error, AuthenticationError):
            return cls.AUTH_ERROR
        if isinstance(error, IssueTrackerError):
            return cls.CONNECTION_ERROR
        if isinstance(error, FileNotFoundError):
            return cls.FILE_NOT_FOUND
        return cls.ERROR
