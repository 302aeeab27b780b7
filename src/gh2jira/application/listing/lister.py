"""
Lister - Filtered listing of GitHub issues.
"""

import logging
from typing import Any

from ...adapters.github import GitHubAdapter, IssueFilter


class Lister:
    """Lists the issues of one GitHub repository."""

    def __init__(self, github: GitHubAdapter):
        self.github = github
        self.logger = logging.getLogger("Lister")

    def list_issues(self, options: IssueFilter) -> list[dict[str, Any]]:
        """
        Return the issues matching the filter, newest first as GitHub orders them.

        Raises:
            ValueError: If the project is not ORG/REPO.
            IssueTrackerError: On API errors.
        """
        issues = self.github.list_issue_details(options)
        self.logger.info(f"Found {len(issues)} issues in {options.project}")
        return issues
