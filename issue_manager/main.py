"""Issue manager entry point.

Every invocation loads the issues file, runs one subcommand and saves the
file again when the subcommand changed something.

Usage: issue-manager [-c config.yaml] [-f issues.txt] <command> ...
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable

from issue_manager.config import load_config
from issue_manager.errors import IssueManagerError, IssueNotFoundError
from issue_manager.logging import configure_logging
from issue_manager.models import Command, IssueKind, Resolution, Verb
from issue_manager.services.store import IssueManager

LOG = logging.getLogger("issue_manager.main")

KIND_CHOICES = [k.value for k in IssueKind]
RESOLUTION_CHOICES = [r.value for r in Resolution]


def build_parser() -> argparse.ArgumentParser:
    """CLI parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="issue-manager",
        description="Issue manager - track bugs and enhancements through their lifecycle",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=Path("config.yaml"),
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--file",
        "-f",
        type=Path,
        default=None,
        help="Issues file (overrides store.issues_file)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    sub = parser.add_subparsers(dest="command", metavar="command")

    add = sub.add_parser("add", help="Create a new issue")
    add.add_argument("--kind", required=True, choices=KIND_CHOICES)
    add.add_argument("--summary", required=True)
    add.add_argument("--note", required=True)

    list_ = sub.add_parser("list", help="List issues")
    list_.add_argument("--kind", choices=KIND_CHOICES, default=None)

    show = sub.add_parser("show", help="Print one issue record")
    show.add_argument("issue_id", type=int)

    delete = sub.add_parser("delete", help="Delete an issue")
    delete.add_argument("issue_id", type=int)

    assign = sub.add_parser("assign", help="Assign an owner")
    assign.add_argument("issue_id", type=int)
    assign.add_argument("--owner", required=True)
    assign.add_argument("--note", required=True)

    resolve = sub.add_parser("resolve", help="Resolve an issue")
    resolve.add_argument("issue_id", type=int)
    resolve.add_argument("--resolution", required=True, choices=RESOLUTION_CHOICES)
    resolve.add_argument("--note", required=True)

    for name, text in (("confirm", "Confirm a bug"), ("verify", "Verify a fix"), ("reopen", "Reopen an issue")):
        p = sub.add_parser(name, help=text)
        p.add_argument("issue_id", type=int)
        p.add_argument("--note", required=True)

    return parser


def _cmd_add(manager: IssueManager, args: argparse.Namespace) -> bool:
    issue_id = manager.add_issue_to_list(args.kind, args.summary, args.note)
    print(issue_id)
    return True


def _cmd_list(manager: IssueManager, args: argparse.Namespace) -> bool:
    for row in manager.get_issue_list_as_rows(args.kind):
        print(f"{row.issue_id}\t{row.state}\t{row.kind}\t{row.summary}")
    return False


def _cmd_show(manager: IssueManager, args: argparse.Namespace) -> bool:
    issue = manager.get_issue_by_id(args.issue_id)
    if issue is None:
        raise IssueNotFoundError(args.issue_id)
    print(issue.to_record(), end="")
    return False


def _cmd_delete(manager: IssueManager, args: argparse.Namespace) -> bool:
    manager.delete_issue_by_id(args.issue_id)
    return True


def _cmd_transition(manager: IssueManager, args: argparse.Namespace) -> bool:
    command = Command(
        verb=Verb(args.command.capitalize()),
        owner_id=getattr(args, "owner", None),
        resolution=getattr(args, "resolution", None),
        note=args.note,
    )
    issue = manager.execute_command(args.issue_id, command)
    print(f"{issue.issue_id}\t{issue.state.value}")
    return True


HANDLERS: dict[str, Callable[[IssueManager, argparse.Namespace], bool]] = {
    "add": _cmd_add,
    "list": _cmd_list,
    "show": _cmd_show,
    "delete": _cmd_delete,
    "assign": _cmd_transition,
    "confirm": _cmd_transition,
    "resolve": _cmd_transition,
    "verify": _cmd_transition,
    "reopen": _cmd_transition,
}


def main(argv: list[str] | None = None) -> int:
    """Entry point: load issues, run the subcommand, save when changed."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_logging(config.logging)
    issues_file = args.file or config.store.issues_file

    if args.check:
        print("Config OK:", issues_file)
        return 0

    if args.command is None:
        parser.print_help()
        return 2

    manager = IssueManager()
    try:
        if issues_file.is_file():
            manager.load_issues_from_file(issues_file)
        if HANDLERS[args.command](manager, args):
            manager.save_issues_to_file(issues_file)
    except IssueManagerError as e:
        LOG.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
