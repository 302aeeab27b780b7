"""
Domain - Entities and value objects.
"""

from .entities import GitHubIssueRef, IssueRecord, Pair, TypeResults
from .workflow import WorkflowRule, WorkflowRuleSet, normalize_status

__all__ = [
    "GitHubIssueRef",
    "IssueRecord",
    "Pair",
    "TypeResults",
    "WorkflowRule",
    "WorkflowRuleSet",
    "normalize_status",
]
