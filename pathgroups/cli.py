#!/usr/bin/env python3
"""
PathGroups command line

Usage:
  pathgroups add-to-path <group> <path> [--no-system-path]
  pathgroups add-group-to-path [group ...]        # no groups = every group
  pathgroups remove-group-from-path [group ...]   # no groups = every group
  pathgroups list [--json]
  pathgroups remove-from-registry <path>

Global options (before the command):
  --config FILE      registry file (default: per-machine data dir, or $PATHGROUPS_CONFIG)
  --variable NAME    target variable (default: Path on Windows, PATH elsewhere)
  --scope SCOPE      process | user | machine
  --export           print a shell line re-applying a process-scope change
  -v / --verbose     log every change to stderr
  --log-file FILE    also append the log to FILE

Success is silent; failures print "Error: ..." and exit 1.
"""

import argparse
import json
import shlex
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from pathgroups.config import IS_WINDOWS, Scope, Settings
from pathgroups.errors import PathGroupsError
from pathgroups.groups import GroupOperations
from pathgroups.log import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathgroups", description="Manage named groups of PATH entries.")
    parser.add_argument("--config", help="Registry JSON file")
    parser.add_argument("--variable", help="Environment variable to manage")
    parser.add_argument("--scope", choices=[s.value for s in Scope], help="Where the variable lives")
    parser.add_argument("--export", action="store_true",
                        help="Print a shell line applying the new value (process scope)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log changes to stderr")
    parser.add_argument("--log-file", help="Also write the log to this file")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("add-to-path", help="Register a path in a group (and add it to the variable)")
    p.add_argument("group")
    p.add_argument("path")
    p.add_argument("--no-system-path", dest="system_path", action="store_false",
                   help="Only register the path; leave the variable alone")

    p = sub.add_parser("add-group-to-path", help="Add every path of the given groups to the variable")
    p.add_argument("groups", nargs="*", metavar="group")

    p = sub.add_parser("remove-group-from-path", help="Remove every path of the given groups from the variable")
    p.add_argument("groups", nargs="*", metavar="group")

    p = sub.add_parser("list", help="Show registered paths and whether they are active")
    p.add_argument("--json", action="store_true", help="Print JSON instead of a table")

    p = sub.add_parser("remove-from-registry", help="Forget a path (the variable is not touched)")
    p.add_argument("path")

    return parser


# ---- Output -------------------------------------------------------------------

def print_list(console: Console, ops: GroupOperations, as_json: bool) -> None:
    rows = ops.list_groups()
    if as_json:
        data = {
            "config_file": str(ops.registry.config_file),
            "variable": ops.sync.variable,
            "entries": [{"path": e.path, "group": e.group, "active": active} for e, active in rows],
        }
        print(json.dumps(data, indent=2))
        return

    if not rows:
        console.print(f"[dim]No paths registered in {ops.registry.config_file}[/dim]")
        return

    table = Table(title=f"Path groups ({ops.sync.variable})")
    table.add_column("Group", style="bold")
    table.add_column("Path")
    table.add_column("Status")
    for e, active in rows:
        status = Text("active", style="green") if active else Text("inactive", style="yellow")
        table.add_row(e.group, e.path, status)
    console.print(table)


def export_line(variable: str, value: str) -> str:
    if IS_WINDOWS:
        quoted = value.replace("'", "''")
        return f"$env:{variable} = '{quoted}'"
    return f"export {variable}={shlex.quote(value)}"


# ---- Main ---------------------------------------------------------------------

def run(args: argparse.Namespace, console: Console) -> None:
    settings = Settings.from_env().with_overrides(args.config, args.variable, args.scope)
    ops = GroupOperations.from_settings(settings)

    if args.command == "add-to-path":
        ops.add_to_path(args.group, args.path, add_to_system_path=args.system_path)
    elif args.command == "add-group-to-path":
        ops.add_groups_to_path(args.groups)
    elif args.command == "remove-group-from-path":
        ops.remove_groups_from_path(args.groups)
    elif args.command == "list":
        print_list(console, ops, args.json)
        return
    elif args.command == "remove-from-registry":
        if not ops.remove_from_registry(args.path):
            console.print(f"[yellow]Not registered:[/yellow] {args.path}", soft_wrap=True)
        return

    if args.export and settings.scope == Scope.PROCESS:
        print(export_line(settings.variable, ops.sync.store.read()))


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(verbose=args.verbose, log_file=args.log_file)

    err = Console(stderr=True)
    try:
        run(args, Console())
    except PathGroupsError as ex:
        err.print(Text(f"Error: {ex}", style="bold red"), soft_wrap=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
