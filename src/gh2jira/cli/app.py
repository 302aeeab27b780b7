"""
CLI App - Main entry point for gh2jira command line tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from .. import __version__
from ..adapters import (
    EnvironmentConfigProvider,
    GitHubAdapter,
    IssueFilter,
    JiraAdapter,
    load_workflow_file,
)
from ..adapters.github import DEFAULT_PROJECT
from ..adapters.workflows import DEFAULT_WORKFLOW_FILE
from ..application import Lister, Reconciler, project_query
from ..core.exceptions import ConfigError, Gh2JiraError
from .exit_codes import ExitCode
from .logging import setup_logging
from .output import OUTPUT_FORMATS, Console


def _split_labels(values: Optional[list[str]]) -> list[str]:
    """Accept both --label a,b and --label a --label b."""
    labels: list[str] = []
    for value in values or []:
        labels.extend(part.strip() for part in value.split(",") if part.strip())
    return labels


def create_parser() -> argparse.ArgumentParser:
    """
    Create the command-line argument parser for gh2jira.

    Returns:
        Configured ArgumentParser instance with 'list' and 'reconcile'
        subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="gh2jira",
        description="Compare GitHub issues with their Jira counterparts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List open issues of a milestone
  gh2jira list --project operator-framework/operator-sdk --milestone 42

  # List issues carrying both labels
  gh2jira list --label documentation,bug

  # Reconcile a Jira project against GitHub, as a colored table
  gh2jira reconcile --jira-project OSDK -o table

  # Use a custom workflow definition
  gh2jira reconcile --workflow-file my-workflows.yaml -o yaml

Environment Variables:
  JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN, JIRA_PROJECT, GITHUB_TOKEN
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=str,
        help="YAML config file with credentials (default: ~/.config/gh2jira/config.yaml)",
    )
    common.add_argument(
        "--env-file",
        type=str,
        help="Path to a .env file (default: ./.env)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    list_parser = subparsers.add_parser(
        "list",
        parents=[common],
        help="List GitHub issues",
        description="List GitHub issues filtered by milestone, assignee, or label",
    )
    list_parser.add_argument(
        "--milestone",
        type=str,
        help="the milestone ID from the url, not the display name",
    )
    list_parser.add_argument(
        "--assignee",
        type=str,
        help="username the issue is assigned to",
    )
    list_parser.add_argument(
        "--project",
        type=str,
        default=DEFAULT_PROJECT,
        help="GitHub project to list e.g. ORG/REPO (default: %(default)s)",
    )
    list_parser.add_argument(
        "--label",
        action="append",
        help='label i.e. --label "documentation,bug" or --label doc --label bug',
    )
    list_parser.add_argument(
        "--output", "-o",
        choices=OUTPUT_FORMATS,
        default="table",
        help="output format (default: %(default)s)",
    )
    list_parser.set_defaults(handler=run_list)

    reconcile_parser = subparsers.add_parser(
        "reconcile",
        parents=[common],
        help="Reconcile GitHub and Jira issues",
        description="Pair Jira issues with the GitHub issues they reference and "
                    "report which statuses disagree",
    )
    reconcile_parser.add_argument(
        "--output", "-o",
        choices=OUTPUT_FORMATS,
        default="json",
        help="output format (default: %(default)s)",
    )
    reconcile_parser.add_argument(
        "--workflow-file",
        type=str,
        default=DEFAULT_WORKFLOW_FILE,
        help="file containing the workflow definitions (default: %(default)s)",
    )
    reconcile_parser.add_argument(
        "--jira-project",
        type=str,
        help="Jira project key (or set JIRA_PROJECT env var)",
    )
    reconcile_parser.add_argument(
        "--jira-url",
        type=str,
        help="Jira instance URL (or set JIRA_URL env var)",
    )
    reconcile_parser.set_defaults(handler=run_reconcile)

    return parser


def _config_provider(args: argparse.Namespace) -> EnvironmentConfigProvider:
    overrides = dict(vars(args))
    # An absent --verbose must not mask GH2JIRA_VERBOSE
    overrides["verbose"] = args.verbose or None
    return EnvironmentConfigProvider(
        env_file=Path(args.env_file) if args.env_file else None,
        config_file=Path(args.config) if args.config else None,
        cli_overrides=overrides,
    )


def run_list(args: argparse.Namespace, console: Console) -> int:
    """
    List GitHub issues.

    Args:
        args: Parsed command-line arguments.
        console: Console for output.

    Returns:
        Exit code.
    """
    try:
        options = IssueFilter(
            project=args.project,
            milestone=args.milestone,
            assignee=args.assignee,
            labels=_split_labels(args.label),
        )
    except ValueError as e:
        console.error(str(e))
        return ExitCode.USAGE_ERROR

    config = _config_provider(args).load()
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    github = GitHubAdapter(config.github)
    try:
        issues = Lister(github).list_issues(options)
    finally:
        github.close()

    if args.output != "table":
        console.render(issues, args.output)
        return ExitCode.SUCCESS

    if not issues:
        console.print("no issues found")
        return ExitCode.SUCCESS

    rows = [
        [
            f"#{issue['number']}",
            issue["state"],
            issue["assignee"] or "-",
            ",".join(issue["labels"]),
            issue["title"],
        ]
        for issue in issues
    ]
    console.table(["ISSUE", "STATE", "ASSIGNEE", "LABELS", "TITLE"], rows)
    return ExitCode.SUCCESS


def run_reconcile(args: argparse.Namespace, console: Console) -> int:
    """
    Reconcile Jira issues against the GitHub issues they reference.

    Handles workflow loading, configuration, connecting to both trackers
    and rendering the results.

    Args:
        args: Parsed command-line arguments.
        console: Console for output.

    Returns:
        Exit code.
    """
    logger = logging.getLogger("reconcile")

    rules = load_workflow_file(args.workflow_file)
    logger.info(f"Loaded {len(rules)} workflow rules from {args.workflow_file}")

    provider = _config_provider(args)
    errors = provider.validate(require_jira=True)
    if errors:
        console.config_errors(errors)
        return ExitCode.CONFIG_ERROR

    config = provider.load()
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    if not config.jira.project:
        raise ConfigError("must specify jira project")
    query = project_query(config.jira.project)

    github = GitHubAdapter(config.github)
    jira = JiraAdapter(config.jira, github_host=config.github.web_host)
    try:
        github.connect()
        jira.connect()
        results = Reconciler(jira, github, rules).reconcile(query)
    finally:
        github.close()
        jira.close()

    console.render(results, args.output)
    return ExitCode.SUCCESS


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the gh2jira CLI.

    Parses arguments, sets up logging and runs the selected command.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)
    console = Console(color=not args.no_color)

    try:
        return args.handler(args, console)
    except Gh2JiraError as e:
        logging.getLogger("main").debug("Command failed", exc_info=True)
        console.error(str(e))
        return ExitCode.from_exception(e)
    except KeyboardInterrupt:
        console.error("Interrupted")
        return ExitCode.ERROR


def run() -> None:
    """
    Entry point for the console script.

    Calls main() and exits with its return code.
    """
    sys.exit(main())


if __name__ == "__main__":
    run()
