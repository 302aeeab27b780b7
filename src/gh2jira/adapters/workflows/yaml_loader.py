"""
Workflow Loader - Read workflow rules from YAML.

Expected layout:

    workflows:
      - name: default
        rules:
          - jira: To Do
            git: open
          - jira: [Done, Closed]
            git: closed
          - jira: Done
            git: open
            compatible: false

A top-level ``rules:`` list without named workflows is accepted too.
List values expand to every combination of the listed statuses.
"""

import logging
from pathlib import Path
from typing import Any, TextIO, Union

import yaml

from ...core.domain.workflow import WorkflowRule, WorkflowRuleSet
from ...core.exceptions import WorkflowError


DEFAULT_WORKFLOW_FILE = "workflows.yaml"

logger = logging.getLogger("WorkflowLoader")


def load_workflows(source: Union[str, TextIO]) -> WorkflowRuleSet:
    """
    Parse workflow rules from YAML text or a readable stream.

    Raises:
        WorkflowError: If the document is not valid YAML or has the wrong shape.
    """
    try:
        document = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise WorkflowError(f"failed to parse workflow file: {e}", cause=e)

    rule_set = WorkflowRuleSet()

    if document is None:
        raise WorkflowError("workflow file is empty")
    if not isinstance(document, dict):
        raise WorkflowError("workflow file must be a mapping with a 'workflows' or 'rules' key")

    if "workflows" in document:
        workflows = document["workflows"]
        if not isinstance(workflows, list):
            raise WorkflowError("'workflows' must be a list")
        for index, workflow in enumerate(workflows):
            if not isinstance(workflow, dict):
                raise WorkflowError(f"workflow #{index + 1} must be a mapping")
            name = str(workflow.get("name") or f"workflow-{index + 1}")
            rule_set.extend(_parse_rules(workflow.get("rules"), name))
    elif "rules" in document:
        rule_set.extend(_parse_rules(document["rules"], ""))
    else:
        raise WorkflowError("workflow file must contain a 'workflows' or 'rules' key")

    if not rule_set:
        raise WorkflowError("workflow file defines no rules")

    logger.debug(f"Loaded {len(rule_set)} workflow rules")
    return rule_set


def load_workflow_file(path: Union[str, Path]) -> WorkflowRuleSet:
    """
    Open and parse a workflow file.

    Raises:
        WorkflowError: If the file cannot be opened or parsed.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as stream:
            return load_workflows(stream)
    except OSError as e:
        raise WorkflowError(f"failed to open workflow file {str(path)!r}: {e.strerror or e}", cause=e)


def _parse_rules(raw_rules: Any, workflow: str) -> list[WorkflowRule]:
    label = f"workflow {workflow!r}" if workflow else "workflow file"

    if not isinstance(raw_rules, list):
        raise WorkflowError(f"{label}: 'rules' must be a list")

    rules = []
    for index, raw in enumerate(raw_rules):
        where = f"{label}, rule #{index + 1}"
        if not isinstance(raw, dict):
            raise WorkflowError(f"{where}: must be a mapping")

        jira_statuses = _status_list(raw.get("jira"), "jira", where)
        git_statuses = _status_list(raw.get("git"), "git", where)

        compatible = raw.get("compatible", True)
        if not isinstance(compatible, bool):
            raise WorkflowError(f"{where}: 'compatible' must be true or false")

        for jira_status in jira_statuses:
            for git_status in git_statuses:
                rules.append(WorkflowRule(
                    jira_status=jira_status,
                    git_status=git_status,
                    compatible=compatible,
                    workflow=workflow,
                ))

    return rules


def _status_list(value: Any, key: str, where: str) -> list[str]:
    if isinstance(value, str) and value.strip():
        return [value.strip()]
    if isinstance(value, list) and value and all(isinstance(v, str) and v.strip() for v in value):
        return [v.strip() for v in value]
    raise WorkflowError(f"{where}: '{key}' must be a status name or a non-empty list of names")
