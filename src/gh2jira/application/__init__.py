"""
Application Layer - Use cases.

This layer contains:
- reconcile/: Jira/GitHub reconciliation
- listing/: Filtered GitHub issue listing
"""

from .reconcile import Reconciler, project_query, reconcile
from .listing import Lister

__all__ = [
    "Reconciler",
    "project_query",
    "reconcile",
    "Lister",
]
