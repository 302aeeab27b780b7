"""
Reconciler - Compares Jira issues with the GitHub issues they reference.

This is the main entry point for reconcile operations.
"""

import logging
from typing import Optional, TextIO, Union

from ...adapters.workflows import load_workflows
from ...core.domain.entities import IssueRecord, Pair, TypeResults
from ...core.domain.workflow import WorkflowRuleSet
from ...core.exceptions import ReconcileError
from ...core.ports.issue_tracker import IssueTrackerPort, LinkedIssueTrackerPort


def project_query(project: Optional[str]) -> str:
    """
    JQL selecting the issues of a project that are not closed.

    Raises:
        ReconcileError: If no project is given.
    """
    if not project or not project.strip():
        raise ReconcileError("must specify jira project")
    return f"project={project.strip()} and status != Closed"


class Reconciler:
    """
    Pairs Jira issues with GitHub issues and classifies each pair.

    Phases:
    1. Search Jira with the given query
    2. Resolve each Jira issue's GitHub cross-reference
    3. Fetch the referenced GitHub issue
    4. Classify the pair with the workflow rules
    """

    def __init__(
        self,
        jira: LinkedIssueTrackerPort,
        github: IssueTrackerPort,
        rules: WorkflowRuleSet,
    ):
        """
        Initialize the reconciler.

        Args:
            jira: Connected Jira tracker
            github: Connected GitHub tracker
            rules: Workflow rules deciding which status pairs are in sync
        """
        self.jira = jira
        self.github = github
        self.rules = rules
        self.logger = logging.getLogger("Reconciler")

    def reconcile(self, query: str) -> TypeResults:
        """
        Run a reconciliation.

        Args:
            query: JQL filter for the Jira side

        Returns:
            TypeResults with matches and mismatches in Jira search order

        Raises:
            ReconcileError: If a tracker is not connected or the query is empty
            IssueTrackerError: On any network or API failure
        """
        if not query or not query.strip():
            raise ReconcileError("must specify a jira query")
        for tracker in (self.jira, self.github):
            if not tracker.is_connected:
                raise ReconcileError(f"{tracker.name} connection is not established")

        results = TypeResults()

        jira_issues = self.jira.search_issues(query)
        self.logger.info(f"Found {len(jira_issues)} Jira issues for {query!r}")

        for jira_issue in jira_issues:
            pair = self._pair(jira_issue)
            if pair is None:
                continue

            if self.classify(pair):
                results.matches.append(pair)
            else:
                results.mismatches.append(pair)

        self.logger.info(
            f"Reconciled {results.total} pairs: "
            f"{len(results.matches)} match, {len(results.mismatches)} mismatch"
        )
        return results

    def classify(self, pair: Pair) -> bool:
        """True if the pair's statuses are compatible under the workflow."""
        return self.rules.is_compatible(pair.jira.status, pair.git.status)

    def _pair(self, jira_issue: IssueRecord) -> Optional[Pair]:
        ref = self.jira.find_github_reference(jira_issue)
        if ref is None:
            self.logger.debug(f"{jira_issue.name}: no GitHub reference, skipping")
            return None

        git_issue = self.github.get_issue(str(ref))
        self.logger.debug(
            f"{jira_issue.name} ({jira_issue.status}) <-> {git_issue.name} ({git_issue.status})"
        )
        return Pair(jira=jira_issue, git=git_issue)


def reconcile(
    query: str,
    jira: LinkedIssueTrackerPort,
    github: IssueTrackerPort,
    workflows: Union[WorkflowRuleSet, str, TextIO],
) -> TypeResults:
    """
    Reconcile Jira and GitHub in one call.

    Args:
        query: JQL filter for the Jira side
        jira: Connected Jira tracker
        github: Connected GitHub tracker
        workflows: Loaded rules, or YAML text / stream to load them from

    Raises:
        WorkflowError: If the workflow source cannot be parsed
    """
    if not isinstance(workflows, WorkflowRuleSet):
        workflows = load_workflows(workflows)
    return Reconciler(jira, github, workflows).reconcile(query)
