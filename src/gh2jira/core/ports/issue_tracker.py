"""
Issue Tracker Port - Abstract interface for issue trackers.

Both trackers gh2jira talks to (Jira and GitHub) implement this port.
It only exposes read operations.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..domain.entities import GitHubIssueRef, IssueRecord
from ..exceptions import Gh2JiraError


class IssueTrackerError(Gh2JiraError):
    """Base exception for issue tracker errors."""

    def __init__(
        self,
        message: str,
        issue_key: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause=cause)
        self.issue_key = issue_key


class AuthenticationError(IssueTrackerError):
    """Authentication failed."""


class NotFoundError(IssueTrackerError):
    """Resource not found."""


class PermissionError(IssueTrackerError):
    """Permission denied."""


class RateLimitError(IssueTrackerError):
    """API rate limit exhausted."""


class IssueTrackerPort(ABC):
    """
    Abstract interface for a read-only issue tracker.

    Implementations return normalized IssueRecord values so the
    reconciler never sees tracker-specific payloads.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the tracker name (e.g., 'Jira', 'GitHub')."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the tracker has been connected successfully."""
        ...

    @abstractmethod
    def connect(self) -> dict[str, Any]:
        """
        Verify credentials against the tracker.

        Returns:
            The authenticated user payload.

        Raises:
            IssueTrackerError: If the tracker cannot be reached or rejects
                the credentials.
        """
        ...

    @abstractmethod
    def test_connection(self) -> bool:
        """Return True if connect() succeeds, False otherwise."""
        ...

    @abstractmethod
    def get_issue(self, issue_key: str) -> IssueRecord:
        """
        Fetch a single issue.

        Raises:
            NotFoundError: If the issue does not exist.
        """
        ...

    @abstractmethod
    def search_issues(self, query: Any) -> list[IssueRecord]:
        """Return every issue matching a tracker-specific query."""
        ...

    def close(self) -> None:
        """Release network resources."""


class LinkedIssueTrackerPort(IssueTrackerPort):
    """
    A tracker whose issues point at GitHub issues.

    The reconciler searches this side and follows each issue's reference
    to the GitHub tracker.
    """

    @abstractmethod
    def find_github_reference(self, record: IssueRecord) -> Optional[GitHubIssueRef]:
        """Return the GitHub issue a record refers to, or None."""
        ...
