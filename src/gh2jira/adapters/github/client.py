"""
GitHub API Client - Low-level HTTP client for the GitHub REST API.

Mirrors JiraApiClient: one requests.Session, GET only, status codes
mapped onto the IssueTrackerError hierarchy.
"""

import logging
from typing import Any, Optional

import requests

from ...core.ports.issue_tracker import (
    IssueTrackerError,
    AuthenticationError,
    NotFoundError,
    PermissionError,
    RateLimitError,
)


class GitHubApiClient:
    """
    Low-level GitHub REST API client.

    Handles authentication, pagination and error handling.
    """

    API_VERSION = "2022-11-28"
    PAGE_SIZE = 100

    def __init__(
        self,
        token: str,
        api_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: Personal access token (may be empty for anonymous access)
            api_url: API root, override for GitHub Enterprise
            timeout: Per-request timeout in seconds
        """
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.logger = logging.getLogger("GitHubApiClient")

        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

        self._session = requests.Session()
        self._session.headers.update(self.headers)

        self._current_user: Optional[dict] = None

    # -------------------------------------------------------------------------
    # Core Request Methods
    # -------------------------------------------------------------------------

    def _send(self, url: str, params: Optional[dict] = None) -> requests.Response:
        self.logger.debug(f"GET {url}")
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.ConnectionError as e:
            raise IssueTrackerError(f"Connection to GitHub failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise IssueTrackerError(f"GitHub request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise IssueTrackerError(f"GitHub request to {url} failed: {e}", cause=e)
        self._check_response(response, url)
        return response

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        """
        GET a single resource.

        Args:
            endpoint: Path below the API root (e.g., 'repos/o/r/issues/1')
            params: Query parameters

        Raises:
            IssueTrackerError: On API errors
        """
        response = self._send(f"{self.api_url}/{endpoint}", params)
        if response.text:
            return self._json(response, endpoint)
        return {}

    def get_paginated(self, endpoint: str, params: Optional[dict] = None) -> list[Any]:
        """GET a collection, following Link headers until the last page."""
        params = dict(params or {})
        params.setdefault("per_page", self.PAGE_SIZE)

        items: list[Any] = []
        url: Optional[str] = f"{self.api_url}/{endpoint}"
        while url:
            response = self._send(url, params)
            items.extend(self._json(response, endpoint))
            url = response.links.get("next", {}).get("url")
            # The next URL already carries the query string
            params = None
        return items

    # -------------------------------------------------------------------------
    # Response Handling
    # -------------------------------------------------------------------------

    def _json(self, response: requests.Response, endpoint: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise IssueTrackerError(
                f"GitHub returned a non-JSON response for {endpoint}; check GITHUB_API_URL",
                issue_key=endpoint,
                cause=e,
            )

    def _check_response(self, response: requests.Response, endpoint: str) -> None:
        if response.ok:
            return

        status = response.status_code
        error_body = response.text[:500] if response.text else ""

        if status == 401:
            raise AuthenticationError(
                "GitHub authentication failed. Check GITHUB_TOKEN."
            )

        if status in (403, 429):
            if status == 429 or response.headers.get("X-RateLimit-Remaining") == "0":
                reset = response.headers.get("X-RateLimit-Reset", "unknown")
                raise RateLimitError(
                    f"GitHub rate limit exhausted (resets at {reset})",
                    issue_key=endpoint
                )
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
            f"GitHub API error {status}: {error_body}",
            issue_key=endpoint
        )

    # -------------------------------------------------------------------------
    # Convenience Methods
    # -------------------------------------------------------------------------

    def get_user(self) -> dict[str, Any]:
        """Get the authenticated user."""
        if self._current_user is None:
            self._current_user = self.get("user")
        return self._current_user

    def get_issue(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        return self.get(f"repos/{owner}/{repo}/issues/{number}")

    def list_issues(self, owner: str, repo: str, params: Optional[dict] = None) -> list[dict[str, Any]]:
        return self.get_paginated(f"repos/{owner}/{repo}/issues", params)

    def test_connection(self) -> bool:
        try:
            self.get_user()
            return True
        except IssueTrackerError:
            return False

    @property
    def is_connected(self) -> bool:
        return self._current_user is not None

    def close(self) -> None:
        self._session.close()
