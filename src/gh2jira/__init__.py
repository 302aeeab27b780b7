"""
gh2jira - Compare GitHub issues with their Jira counterparts.

Fetches Jira issues, pairs each with the GitHub issue it references and
reports whether their statuses agree under a configurable workflow.
The tool is read-only: it never changes either tracker.
"""

__version__ = "0.3.0"
