"""Tests for domain entities."""

import dataclasses

import pytest

from gh2jira.core.domain.entities import GitHubIssueRef, IssueRecord, Pair, TypeResults


class TestGitHubIssueRef:
    """Tests for GitHubIssueRef."""

    def test_parse_short_ref(self):
        ref = GitHubIssueRef.parse("operator-framework/operator-sdk#123")
        assert ref == GitHubIssueRef("operator-framework", "operator-sdk", 123)

    def test_parse_url(self):
        ref = GitHubIssueRef.parse("https://github.com/org/repo.name/issues/7")
        assert str(ref) == "org/repo.name#7"
        assert ref.repository == "org/repo.name"

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            GitHubIssueRef.parse("PROJ-123")

    def test_find_in_text(self):
        text = "Upstream issue: https://github.com/org/repo/issues/42 (see also #1)"
        assert GitHubIssueRef.find(text) == GitHubIssueRef("org", "repo", 42)

    def test_find_ignores_pull_requests(self):
        assert GitHubIssueRef.find("https://github.com/org/repo/pull/42") is None

    def test_find_empty(self):
        assert GitHubIssueRef.find(None) is None
        assert GitHubIssueRef.find("") is None

    def test_find_on_enterprise_host(self):
        text = "See https://ghe.example.com/org/repo/issues/5"
        assert GitHubIssueRef.find(text, "ghe.example.com") == GitHubIssueRef("org", "repo", 5)
        assert GitHubIssueRef.find(text) is None

    def test_parse_enterprise_url(self):
        ref = GitHubIssueRef.parse("https://ghe.example.com/org/repo/issues/5", "ghe.example.com")
        assert ref == GitHubIssueRef("org", "repo", 5)


class TestIssueRecord:
    """Tests for IssueRecord."""

    def test_is_immutable(self):
        record = IssueRecord(name="PROJ-1", status="To Do")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.status = "Done"

    def test_defaults(self):
        record = IssueRecord(name="PROJ-1", status="To Do")
        assert record.assignee == ""
        assert record.link is None


class TestTypeResults:
    """Tests for TypeResults."""

    def test_empty(self):
        results = TypeResults()
        assert results.is_empty
        assert results.to_dict() == {"matches": [], "mismatches": []}

    def test_to_dict(self):
        pair = Pair(
            jira=IssueRecord(name="PROJ-1", status="Done", assignee="Jane", link="o/r#1"),
            git=IssueRecord(name="o/r#1", status="closed", assignee="jane", link="o/r#1"),
        )
        results = TypeResults(matches=[pair])

        data = results.to_dict()

        assert results.total == 1
        assert data["mismatches"] == []
        assert data["matches"][0]["jira"]["name"] == "PROJ-1"
        assert data["matches"][0]["git"]["status"] == "closed"
