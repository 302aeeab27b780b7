"""
GitHub Adapter - Implements IssueTrackerPort for GitHub issues.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from ...core.domain.entities import GitHubIssueRef, IssueRecord
from ...core.ports.config_provider import GitHubConfig
from ...core.ports.issue_tracker import IssueTrackerPort
from .client import GitHubApiClient


DEFAULT_PROJECT = "operator-framework/operator-sdk"


@dataclass
class IssueFilter:
    """
    Filters for listing the issues of one repository.

    Attributes:
        project: Repository as ORG/REPO
        milestone: Milestone number from the URL, not the display name
        assignee: Username the issue is assigned to
        labels: Labels the issue must all carry
        state: open, closed or all
    """

    project: str = DEFAULT_PROJECT
    milestone: Optional[str] = None
    assignee: Optional[str] = None
    labels: list[str] = field(default_factory=list)
    state: str = "open"

    def __post_init__(self) -> None:
        owner, sep, repo = self.project.partition("/")
        if not sep or not owner or not repo or "/" in repo:
            raise ValueError(f"project must be ORG/REPO, got {self.project!r}")

    @property
    def owner_repo(self) -> tuple[str, str]:
        owner, _, repo = self.project.partition("/")
        return owner, repo

    def to_params(self) -> dict[str, str]:
        params = {"state": self.state}
        if self.milestone:
            params["milestone"] = self.milestone
        if self.assignee:
            params["assignee"] = self.assignee
        if self.labels:
            params["labels"] = ",".join(self.labels)
        return params


class GitHubAdapter(IssueTrackerPort):
    """GitHub implementation of the IssueTrackerPort."""

    def __init__(
        self,
        config: GitHubConfig,
        client: Optional[GitHubApiClient] = None,
    ):
        self.config = config
        self.logger = logging.getLogger("GitHubAdapter")
        self._client = client or GitHubApiClient(
            token=config.token,
            api_url=config.api_url,
        )

    @property
    def name(self) -> str:
        return "GitHub"

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected

    def connect(self) -> dict[str, Any]:
        user = self._client.get_user()
        self.logger.info(f"Connected to GitHub as {user.get('login', 'unknown')}")
        return user

    def test_connection(self) -> bool:
        return self._client.test_connection()

    def close(self) -> None:
        self._client.close()

    def get_issue(self, issue_key: str) -> IssueRecord:
        """Fetch an issue by owner/repo#number or URL."""
        ref = GitHubIssueRef.parse(issue_key, self.config.web_host)
        data = self._client.get_issue(ref.owner, ref.repo, ref.number)
        return self._parse_issue(data, ref.repository)

    def search_issues(self, query: IssueFilter) -> list[IssueRecord]:
        """List the issues of a repository; pull requests are skipped."""
        owner, repo = query.owner_repo
        items = self._client.list_issues(owner, repo, query.to_params())

        records = []
        for item in items:
            if "pull_request" in item:
                continue
            records.append(self._parse_issue(item, query.project))
        self.logger.debug(f"{query.project}: {len(records)} issues match {query.to_params()}")
        return records

    def list_issue_details(self, query: IssueFilter) -> list[dict[str, Any]]:
        """Like search_issues but keeps labels and milestone for listing."""
        owner, repo = query.owner_repo
        details = []
        for item in self._client.list_issues(owner, repo, query.to_params()):
            if "pull_request" in item:
                continue
            details.append({
                "number": item["number"],
                "title": item.get("title", ""),
                "state": item.get("state", ""),
                "assignee": (item.get("assignee") or {}).get("login", ""),
                "labels": [label.get("name", "") for label in item.get("labels", [])],
                "milestone": (item.get("milestone") or {}).get("title", ""),
                "url": item.get("html_url", ""),
            })
        return details

    def _parse_issue(self, data: dict, repository: str) -> IssueRecord:
        owner, _, repo = repository.partition("/")
        ref = GitHubIssueRef(owner, repo, int(data["number"]))
        return IssueRecord(
            name=str(ref),
            title=data.get("title") or "",
            status=data.get("state", ""),
            assignee=(data.get("assignee") or {}).get("login", ""),
            link=str(ref),
        )
