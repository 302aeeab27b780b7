"""Tests for the gh2jira command line."""

import json
import logging
from unittest.mock import patch

import pytest

from gh2jira.adapters.config import environment
from gh2jira.cli.app import _split_labels, create_parser, main
from gh2jira.cli.exit_codes import ExitCode
from gh2jira.core.domain.entities import IssueRecord
from gh2jira.core.ports.issue_tracker import AuthenticationError


WORKFLOWS = """
rules:
  - jira: Done
    git: closed
"""


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    for var in (
        "JIRA_URL", "JIRA_EMAIL", "JIRA_API_TOKEN", "JIRA_PROJECT",
        "GITHUB_TOKEN", "GITHUB_API_URL", "GH2JIRA_VERBOSE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(environment, "DEFAULT_CONFIG_FILE", tmp_path / "missing.yaml")


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("JIRA_URL", "https://example.atlassian.net")
    monkeypatch.setenv("JIRA_EMAIL", "me@example.com")
    monkeypatch.setenv("JIRA_API_TOKEN", "jira-token")
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")


@pytest.fixture
def workflow_file(tmp_path):
    path = tmp_path / "workflows.yaml"
    path.write_text(WORKFLOWS)
    return path


class TestParser:
    """Tests for create_parser."""

    def test_reconcile_defaults(self):
        args = create_parser().parse_args(["reconcile"])

        assert args.output == "json"
        assert args.workflow_file == "workflows.yaml"

    def test_invalid_output_is_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["reconcile", "--output", "xml"])

        assert exc_info.value.code == ExitCode.USAGE_ERROR
        assert "invalid choice" in capsys.readouterr().err

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args([])

    def test_list_flags(self):
        args = create_parser().parse_args([
            "list", "--milestone", "12", "--assignee", "jane",
            "--label", "doc,bug", "--label", "help wanted",
        ])

        assert args.project == "operator-framework/operator-sdk"
        assert _split_labels(args.label) == ["doc", "bug", "help wanted"]


class TestReconcileCommand:
    """Tests for the reconcile command."""

    def test_invalid_output_never_touches_network(self, credentials, workflow_file):
        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            with pytest.raises(SystemExit):
                main(["reconcile", "-o", "csv", "--jira-project", "P"])

        jira_cls.assert_not_called()
        github_cls.assert_not_called()

    def test_missing_workflow_file(self, credentials, capsys):
        code = main(["reconcile", "--jira-project", "P", "--no-color"])

        assert code == ExitCode.FILE_NOT_FOUND
        assert "failed to open workflow file 'workflows.yaml'" in capsys.readouterr().err

    def test_missing_project(self, credentials, workflow_file, capsys):
        code = main(["reconcile"])

        assert code == ExitCode.CONFIG_ERROR
        assert "must specify jira project" in capsys.readouterr().err

    def test_missing_credentials(self, workflow_file, capsys):
        code = main(["reconcile", "--jira-project", "P"])

        assert code == ExitCode.CONFIG_ERROR
        assert "JIRA_API_TOKEN" in capsys.readouterr().err

    def test_authentication_failure(self, credentials, workflow_file):
        with patch("gh2jira.cli.app.JiraAdapter"), \
                patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            github_cls.return_value.connect.side_effect = AuthenticationError("bad token")

            code = main(["reconcile", "--jira-project", "P"])

        assert code == ExitCode.AUTH_ERROR
        github_cls.return_value.close.assert_called_once()

    def test_renders_results(self, credentials, workflow_file, capsys):
        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            jira = jira_cls.return_value
            jira.name = "Jira"
            jira.is_connected = True
            jira.search_issues.return_value = [
                IssueRecord(name="P-1", status="Done", link="o/r#1"),
                IssueRecord(name="P-2", status="Done", link="o/r#2"),
            ]
            jira.find_github_reference.side_effect = lambda record: record.link

            github = github_cls.return_value
            github.name = "GitHub"
            github.is_connected = True
            github.get_issue.side_effect = lambda key: IssueRecord(
                name=key, status="closed" if key == "o/r#1" else "open", link=key,
            )

            code = main(["reconcile", "--jira-project", "P"])

        assert code == ExitCode.SUCCESS
        jira.search_issues.assert_called_once_with("project=P and status != Closed")
        data = json.loads(capsys.readouterr().out)
        assert [p["jira"]["name"] for p in data["matches"]] == ["P-1"]
        assert [p["jira"]["name"] for p in data["mismatches"]] == ["P-2"]

    def test_table_output(self, credentials, workflow_file, capsys):
        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            jira_cls.return_value.is_connected = True
            jira_cls.return_value.search_issues.return_value = []
            github_cls.return_value.is_connected = True

            code = main(["reconcile", "--jira-project", "P", "-o", "table"])

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == "no issues found\n"

    def test_project_named_like_a_boolean(self, credentials, workflow_file, monkeypatch):
        monkeypatch.setenv("JIRA_PROJECT", "NO")

        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter"):
            jira_cls.return_value.search_issues.return_value = []

            code = main(["reconcile"])

        assert code == ExitCode.SUCCESS
        jira_cls.return_value.search_issues.assert_called_once_with("project=NO and status != Closed")

    def test_numeric_project_in_config_file(self, credentials, workflow_file, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("jira:\n  project: 1234\n")

        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter"):
            jira_cls.return_value.search_issues.return_value = []

            code = main(["reconcile", "--config", str(config_file)])

        assert code == ExitCode.SUCCESS
        jira_cls.return_value.search_issues.assert_called_once_with("project=1234 and status != Closed")

    def test_jira_url_without_scheme(self, credentials, workflow_file, monkeypatch, capsys):
        monkeypatch.setenv("JIRA_URL", "example.atlassian.net")

        with patch("gh2jira.cli.app.GitHubAdapter"):
            code = main(["reconcile", "--jira-project", "P", "--no-color"])

        assert code == ExitCode.CONNECTION_ERROR
        assert "Jira request to example.atlassian.net" in capsys.readouterr().err

    def test_enterprise_host_reaches_jira_adapter(self, credentials, workflow_file, monkeypatch):
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

        with patch("gh2jira.cli.app.JiraAdapter") as jira_cls, \
                patch("gh2jira.cli.app.GitHubAdapter"):
            jira_cls.return_value.search_issues.return_value = []

            main(["reconcile", "--jira-project", "P"])

        assert jira_cls.call_args.kwargs["github_host"] == "ghe.example.com"


class TestListCommand:
    """Tests for the list command."""

    def test_invalid_project(self, capsys):
        code = main(["list", "--project", "not-a-repo"])

        assert code == ExitCode.USAGE_ERROR
        assert "ORG/REPO" in capsys.readouterr().err

    def test_lists_issues(self, capsys):
        with patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            github_cls.return_value.list_issue_details.return_value = [{
                "number": 3,
                "title": "Fix docs",
                "state": "open",
                "assignee": "",
                "labels": ["doc", "bug"],
                "milestone": "",
                "url": "",
            }]

            code = main(["list", "--project", "o/r", "--label", "doc,bug", "--no-color"])

        assert code == ExitCode.SUCCESS
        options = github_cls.return_value.list_issue_details.call_args.args[0]
        assert options.labels == ["doc", "bug"]
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["ISSUE", "STATE", "ASSIGNEE", "LABELS", "TITLE"]
        assert lines[2].split() == ["#3", "open", "-", "doc,bug", "Fix", "docs"]

    def test_empty_listing(self, capsys):
        with patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            github_cls.return_value.list_issue_details.return_value = []

            assert main(["list", "--project", "o/r"]) == ExitCode.SUCCESS

        assert capsys.readouterr().out == "no issues found\n"

    def test_verbose_from_environment(self, monkeypatch):
        monkeypatch.setenv("GH2JIRA_VERBOSE", "true")

        with patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            github_cls.return_value.list_issue_details.return_value = []

            main(["list", "--project", "o/r"])

        assert logging.getLogger().level == logging.DEBUG

    def test_not_verbose_by_default(self):
        with patch("gh2jira.cli.app.GitHubAdapter") as github_cls:
            github_cls.return_value.list_issue_details.return_value = []

            main(["list", "--project", "o/r"])

        assert logging.getLogger().level == logging.INFO
