"""Tests for workflow rule lookup."""

import pytest

from gh2jira.core.domain.workflow import WorkflowRule, WorkflowRuleSet, normalize_status


@pytest.fixture
def rules():
    return WorkflowRuleSet([
        WorkflowRule("To Do", "open"),
        WorkflowRule("In Progress", "open"),
        WorkflowRule("Done", "closed"),
        WorkflowRule("Done", "open", compatible=False),
    ])


class TestNormalizeStatus:
    """Tests for normalize_status."""

    def test_case_and_whitespace(self):
        assert normalize_status("  In Progress ") == "in progress"

    def test_none(self):
        assert normalize_status(None) == ""


class TestWorkflowRuleSet:
    """Tests for WorkflowRuleSet."""

    def test_compatible_pair(self, rules):
        assert rules.is_compatible("To Do", "open")

    def test_incompatible_rule(self, rules):
        assert rules.lookup("Done", "open") is not None
        assert not rules.is_compatible("Done", "open")

    def test_no_rule_is_incompatible(self, rules):
        assert rules.lookup("To Do", "closed") is None
        assert not rules.is_compatible("To Do", "closed")

    def test_lookup_ignores_case(self, rules):
        assert rules.is_compatible("done", "CLOSED")

    def test_first_matching_rule_wins(self):
        rules = WorkflowRuleSet([
            WorkflowRule("Done", "open", compatible=False),
            WorkflowRule("done", "open", compatible=True),
        ])
        assert not rules.is_compatible("Done", "open")

    def test_empty_rule_set(self):
        assert not WorkflowRuleSet().is_compatible("To Do", "open")

    def test_workflow_names(self):
        rules = WorkflowRuleSet([
            WorkflowRule("A", "open", workflow="one"),
            WorkflowRule("B", "open", workflow="two"),
            WorkflowRule("C", "open", workflow="one"),
        ])
        assert rules.workflow_names == ["one", "two"]

    @pytest.mark.parametrize(
        ("jira_status", "git_status", "compatible"),
        [
            ("To Do", "open", True),
            ("In Progress", "open", True),
            ("Done", "closed", True),
            ("Done", "open", False),
            ("To Do", "closed", False),
            ("Unknown", "open", False),
        ],
    )
    def test_match_iff_rule_marks_compatible(self, rules, jira_status, git_status, compatible):
        rule = rules.lookup(jira_status, git_status)
        expected = rule is not None and rule.compatible
        assert rules.is_compatible(jira_status, git_status) is expected
        assert expected is compatible
