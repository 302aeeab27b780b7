"""
Workflow Adapters - Load workflow rules from files.
"""

from .yaml_loader import DEFAULT_WORKFLOW_FILE, load_workflow_file, load_workflows

__all__ = ["DEFAULT_WORKFLOW_FILE", "load_workflow_file", "load_workflows"]
