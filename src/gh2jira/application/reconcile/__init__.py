"""
Reconcile Module - Comparison of Jira issues with their GitHub counterparts.
"""

from .reconciler import Reconciler, project_query, reconcile

__all__ = ["Reconciler", "project_query", "reconcile"]
