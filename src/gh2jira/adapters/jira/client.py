"""
Jira API Client - Low-level HTTP client for Jira REST API.

This handles the raw HTTP communication with Jira.
The JiraAdapter uses this to implement the IssueTrackerPort.
Only read endpoints are used.
"""

import logging
from typing import Any, Optional

import requests

from ...core.ports.issue_tracker import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
)


class JiraApiClient:
    """
    Low-level Jira REST API client.

    Handles authentication, request/response, and error handling.
    """

    API_VERSION = "3"
    PAGE_SIZE = 100

    def __init__(
        self,
        base_url: str,
        email: str,
        api_token: str,
        timeout: float = 30.0,
    ):
        """
        Initialize the Jira client.

        Args:
            base_url: Jira instance URL (e.g., https://company.atlassian.net)
            email: User email for authentication
            api_token: API token
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/rest/api/{self.API_VERSION}"
        self.auth = (email, api_token)
        self.timeout = timeout
        self.logger = logging.getLogger("JiraApiClient")

        self.headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

        self._session = requests.Session()
        self._session.auth = self.auth
        self._session.headers.update(self.headers)

        self._current_user: Optional[dict] = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> dict[str, Any]:
        """
        Make an authenticated request to Jira API.

        Args:
            method: HTTP method
            endpoint: API endpoint (e.g., 'issue/PROJ-123')
            **kwargs: Additional arguments for requests

        Returns:
            JSON response as dict

        Raises:
            IssueTrackerError: On API errors
        """
        url = f"{self.api_url}/{endpoint}"
        self.logger.debug(f"{method} {url}")

        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.ConnectionError as e:
            raise IssueTrackerError(f"Connection to Jira failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise IssueTrackerError(f"Jira request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise IssueTrackerError(f"Jira request to {url} failed: {e}", cause=e)
        return self._handle_response(response, endpoint)

    def get(self, endpoint: str, **kwargs) -> Any:
        """GET request."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, json: Optional[dict] = None, **kwargs) -> Any:
        """POST request. Only query endpoints may be posted to."""
        if not endpoint.startswith("search"):
            raise IssueTrackerError(f"Refusing to POST to {endpoint}: gh2jira is read-only")
        return self.request("POST", endpoint, json=json, **kwargs)

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _handle_response(
        self,
        response: requests.Response,
        endpoint: str
    ) -> Any:
        """Handle API response and errors."""
        if response.ok:
            if not response.text:
                return {}
            try:
                return response.json()
            except ValueError as e:
                raise IssueTrackerError(
                    f"Jira returned a non-JSON response for {endpoint}; check JIRA_URL",
                    issue_key=endpoint,
                    cause=e,
                )

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "Jira authentication failed. Check JIRA_EMAIL and JIRA_API_TOKEN."
            )

        if status == 403:
            raise PermissionError(
                f"Permission denied for {endpoint}",
                issue_key=endpoint
            )

        if status == 404:
            raise NotFoundError(
                f"Not found: {endpoint}",
                issue_key=endpoint
            )

        raise IssueTrackerError(
            f"Jira API error {status}: {error_body}",
            issue_key=endpoint
        )

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_myself(self) -> dict[str, Any]:
        """Get current authenticated user."""
        if self._current_user is None:
            self._current_user = self.get("myself")
        return self._current_user

    def search_jql(
        self,
        jql: str,
        fields: list[str],
        max_results: int = PAGE_SIZE,
        next_page_token: Optional[str] = None,
    ) -> dict[str, Any]:
        """Execute one page of a JQL search."""
        body: dict[str, Any] = {
            "jql": jql,
            "maxResults": max_results,
            "fields": fields,
        }
        if next_page_token:
            body["nextPageToken"] = next_page_token
        return self.post("search/jql", json=body)

    def search_all(self, jql: str, fields: list[str]) -> list[dict[str, Any]]:
        """Execute a JQL search and follow pagination to the end."""
        issues: list[dict[str, Any]] = []
        token: Optional[str] = None

        while True:
            page = self.search_jql(jql, fields, next_page_token=token)
            issues.extend(page.get("issues", []))
            token = page.get("nextPageToken")
            if not token or page.get("isLast"):
                break

        self.logger.debug(f"JQL {jql!r} returned {len(issues)} issues")
        return issues

    def get_remote_links(self, issue_key: str) -> list[dict[str, Any]]:
        """Get the remote links attached to an issue."""
        data = self.get(f"issue/{issue_key}/remotelink")
        return data if isinstance(data, list) else []

    def test_connection(self) -> bool:
        """Test if connection is valid."""
        try:
            self.get_myself()
            return True
        except IssueTrackerError:
            return False

    @property
    def is_connected(self) -> bool:
        """Check if connected."""
        return self._current_user is not None

    def close(self) -> None:
        self._session.close()
