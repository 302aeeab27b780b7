"""
Jira Adapter - Implements IssueTrackerPort for Atlassian Jira.

Turns Jira issue payloads into IssueRecords and resolves the GitHub issue
each Jira issue refers to.
"""

import logging
from typing import Any, Optional

from ...core.domain.entities import DEFAULT_GITHUB_HOST, GitHubIssueRef, IssueRecord
from ...core.ports.config_provider import JiraConfig
from ...core.ports.issue_tracker import LinkedIssueTrackerPort
from .client import JiraApiClient


class JiraAdapter(LinkedIssueTrackerPort):
    """
    Jira implementation of the LinkedIssueTrackerPort.

    Translates between IssueRecords and Jira's API.
    """

    SEARCH_FIELDS = ["summary", "description", "status", "assignee"]

    def __init__(
        self,
        config: JiraConfig,
        client: Optional[JiraApiClient] = None,
        github_host: str = DEFAULT_GITHUB_HOST,
    ):
        """
        Initialize the Jira adapter.

        Args:
            config: Jira configuration
            client: Optional preconfigured API client
            github_host: Web host of the GitHub instance issues link to
        """
        self.config = config
        self.github_host = github_host
        self.logger = logging.getLogger("JiraAdapter")
        self._client = client or JiraApiClient(
            base_url=config.url,
            email=config.email,
            api_token=config.api_token,
        )

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Properties
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return "Jira"

    @property
    def is_connected(self) -> bool:
        return self._client.is_connected

    def connect(self) -> dict[str, Any]:
        user = self._client.get_myself()
        self.logger.info(
            f"Connected to Jira as {user.get('displayName') or user.get('emailAddress', 'unknown')}"
        )
        return user

    def test_connection(self) -> bool:
        return self._client.test_connection()

    def close(self) -> None:
        self._client.close()

    # -------------------------------------------------------------------------
    # IssueTrackerPort Implementation - Read Operations
    # -------------------------------------------------------------------------

    def get_issue(self, issue_key: str) -> IssueRecord:
        data = self._client.get(
            f"issue/{issue_key}",
            params={"fields": ",".join(self.SEARCH_FIELDS)}
        )
        return self._parse_issue(data)

    def search_issues(self, query: str) -> list[IssueRecord]:
        return [
            self._parse_issue(issue)
            for issue in self._client.search_all(query, self.SEARCH_FIELDS)
        ]

    # -------------------------------------------------------------------------
    # Cross References
    # -------------------------------------------------------------------------

    def find_github_reference(self, record: IssueRecord) -> Optional[GitHubIssueRef]:
        """
        Resolve the GitHub issue a Jira issue refers to.

        The reference found in the description wins; remote links are
        only fetched when the description has none.
        """
        if record.link:
            try:
                return GitHubIssueRef.parse(record.link, self.github_host)
            except ValueError:
                self.logger.debug(f"{record.name}: ignoring unparsable link {record.link!r}")

        for link in self._client.get_remote_links(record.name):
            url = (link.get("object") or {}).get("url", "")
            ref = GitHubIssueRef.find(url, self.github_host)
            if ref:
                return ref
        return None

    # -------------------------------------------------------------------------
    # Private Methods
    # -------------------------------------------------------------------------

    def _parse_issue(self, data: dict) -> IssueRecord:
        """Parse Jira API response into an IssueRecord."""
        fields = data.get("fields", {})

        ref = GitHubIssueRef.find(_description_text(fields.get("description")), self.github_host)

        return IssueRecord(
            name=data["key"],
            title=fields.get("summary") or "",
            status=(fields.get("status") or {}).get("name", ""),
            assignee=_assignee_name(fields.get("assignee")),
            link=str(ref) if ref else None,
        )


def _assignee_name(assignee: Optional[dict]) -> str:
    if not assignee:
        return ""
    return assignee.get("displayName") or assignee.get("emailAddress") or ""


def _description_text(description: Any) -> str:
    """Flatten a plain string or an ADF document into text."""
    if description is None:
        return ""
    if isinstance(description, str):
        return description

    parts: list[str] = []

    def walk(node: Any) -> None:
        if isinstance(node, dict):
            if node.get("type") == "text":
                parts.append(node.get("text", ""))
            for mark in node.get("marks", []) or []:
                href = (mark.get("attrs") or {}).get("href")
                if href:
                    parts.append(href)
            attrs = node.get("attrs") or {}
            if node.get("type") == "inlineCard" and attrs.get("url"):
                parts.append(attrs["url"])
            for child in node.get("content", []) or []:
                walk(child)
        elif isinstance(node, list):
            for child in node:
                walk(child)

    walk(description)
    return " ".join(parts)
