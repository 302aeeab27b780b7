"""
Domain Entities - Issue records and reconciliation results.

IssueRecord is the tracker-neutral view of an issue. Pair and
TypeResults are what the reconciler produces and the renderers consume.
"""

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


DEFAULT_GITHUB_HOST = "github.com"
ISSUE_URL_PATH = r"/(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)/issues/(?P<number>\d+)"
GITHUB_SHORT_REF = re.compile(r"^(?P<owner>[\w.-]+)/(?P<repo>[\w.-]+)#(?P<number>\d+)$")


def issue_url_pattern(host: str = DEFAULT_GITHUB_HOST) -> re.Pattern:
    """Regex for issue URLs on a GitHub (or GitHub Enterprise) web host."""
    return re.compile(r"https?://" + re.escape(host) + ISSUE_URL_PATH, re.IGNORECASE)


GITHUB_ISSUE_URL = issue_url_pattern()


@dataclass(frozen=True)
class GitHubIssueRef:
    """Reference to a GitHub issue: owner/repo#number."""

    owner: str
    repo: str
    number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def parse(cls, value: str, host: str = DEFAULT_GITHUB_HOST) -> "GitHubIssueRef":
        """
        Parse an issue URL or an owner/repo#number reference.

        Raises:
            ValueError: If the value is neither.
        """
        value = value.strip()
        match = GITHUB_SHORT_REF.match(value) or _url_pattern(host).match(value)
        if not match:
            raise ValueError(f"not a GitHub issue reference: {value!r}")
        return cls(match["owner"], match["repo"], int(match["number"]))

    @classmethod
    def find(cls, text: Optional[str], host: str = DEFAULT_GITHUB_HOST) -> Optional["GitHubIssueRef"]:
        """Return the first issue URL on the given web host found in free text, if any."""
        if not text:
            return None
        match = _url_pattern(host).search(text)
        if not match:
            return None
        return cls(match["owner"], match["repo"], int(match["number"]))


def _url_pattern(host: str) -> re.Pattern:
    if host == DEFAULT_GITHUB_HOST:
        return GITHUB_ISSUE_URL
    return issue_url_pattern(host)


@dataclass(frozen=True)
class IssueRecord:
    """
    An issue as seen by one tracker.

    Attributes:
        name: Tracker-local identifier (PROJ-12, owner/repo#34)
        status: Tracker status name
        assignee: Assignee display name or login, empty when unassigned
        link: Cross-reference key linking the issue to the other tracker
        title: Issue summary
    """

    name: str
    status: str
    assignee: str = ""
    link: Optional[str] = None
    title: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Pair:
    """One logical issue: its Jira record and its GitHub record."""

    jira: IssueRecord
    git: IssueRecord

    def to_dict(self) -> dict[str, Any]:
        return {"jira": self.jira.to_dict(), "git": self.git.to_dict()}


@dataclass
class TypeResults:
    """Outcome of a reconciliation run."""

    matches: list[Pair] = field(default_factory=list)
    mismatches: list[Pair] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.matches) + len(self.mismatches)

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def to_dict(self) -> dict[str, Any]:
        """Serializable form shared by the JSON and YAML renderers."""
        return {
            "matches": [pair.to_dict() for pair in self.matches],
            "mismatches": [pair.to_dict() for pair in self.mismatches],
        }
