"""
Workflow - Status compatibility rules between Jira and GitHub.

A workflow says which (Jira status, GitHub status) combinations count as
"in sync". Lookup is pure; loading from YAML lives in
adapters/workflows.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional


def normalize_status(status: Optional[str]) -> str:
    """Case-fold and trim a status name for comparison."""
    return (status or "").strip().casefold()


@dataclass(frozen=True)
class WorkflowRule:
    """A single status pairing and whether it is considered in sync."""

    jira_status: str
    git_status: str
    compatible: bool = True
    workflow: str = ""

    def matches(self, jira_status: str, git_status: str) -> bool:
        return (
            normalize_status(self.jira_status) == normalize_status(jira_status)
            and normalize_status(self.git_status) == normalize_status(git_status)
        )


@dataclass
class WorkflowRuleSet:
    """
    Ordered collection of workflow rules.

    The first rule matching a status pair decides it. A pair with no
    matching rule is not compatible.
    """

    rules: list[WorkflowRule] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def extend(self, rules: Iterable[WorkflowRule]) -> None:
        self.rules.extend(rules)

    def lookup(self, jira_status: str, git_status: str) -> Optional[WorkflowRule]:
        """Return the first rule matching the pair, or None."""
        for rule in self.rules:
            if rule.matches(jira_status, git_status):
                return rule
        return None

    def is_compatible(self, jira_status: str, git_status: str) -> bool:
        rule = self.lookup(jira_status, git_status)
        return rule is not None and rule.compatible

    @property
    def workflow_names(self) -> list[str]:
        names: list[str] = []
        for rule in self.rules:
            if rule.workflow and rule.workflow not in names:
                names.append(rule.workflow)
        return names
