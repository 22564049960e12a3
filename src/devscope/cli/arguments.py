"""Argument parser construction for the devscope CLI."""

from __future__ import annotations

import argparse
from pathlib import Path

OUTPUT_FORMATS = ("json", "table")


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default="table",
        help="Output format (default: table).",
    )


def _build_scan_parser(subparsers: argparse._SubParsersAction) -> None:
    scan = subparsers.add_parser(
        "scan",
        help="List projects found under all workspace roots.",
        description=(
            "Scan every workspace root for projects. Results are cached; "
            "use --refresh to force a rescan."
        ),
    )
    scan.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the cache and rescan.",
    )
    scan.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Gitignore-style pattern of directories to skip (repeatable).",
    )
    _add_format_argument(scan)


def _build_workspaces_parser(subparsers: argparse._SubParsersAction) -> None:
    workspaces = subparsers.add_parser(
        "workspaces",
        help="Manage workspace roots.",
    )
    actions = workspaces.add_subparsers(dest="workspaces_action", metavar="ACTION")

    actions.add_parser("list", help="List workspace roots.")

    add = actions.add_parser("add", help="Add a workspace root.")
    add.add_argument("path", type=Path, help="Directory to add.")

    remove = actions.add_parser("remove", help="Remove a workspace root.")
    remove.add_argument("path", type=Path, help="Directory to remove.")


def _build_packages_parser(subparsers: argparse._SubParsersAction) -> None:
    packages = subparsers.add_parser(
        "packages",
        help="List the member packages of a monorepo root.",
    )
    packages.add_argument("root", type=Path, help="Monorepo root directory.")
    _add_format_argument(packages)


def _build_git_status_parser(subparsers: argparse._SubParsersAction) -> None:
    git_status = subparsers.add_parser(
        "git-status",
        help="Show git status of one project or of all scanned projects.",
    )
    git_status.add_argument(
        "path",
        nargs="?",
        type=Path,
        default=None,
        help="Project directory (default: every scanned project with git).",
    )
    git_status.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the cache and query git again.",
    )
    _add_format_argument(git_status)


def _build_settings_parser(subparsers: argparse._SubParsersAction) -> None:
    settings = subparsers.add_parser(
        "settings",
        help="Read and write persisted settings.",
        description=(
            "Persisted key/value settings. Keys ttl_projects and ttl_git "
            "override cache lifetimes in seconds."
        ),
    )
    actions = settings.add_subparsers(dest="settings_action", metavar="ACTION")

    actions.add_parser("list", help="List all settings.")

    get = actions.add_parser("get", help="Print one setting.")
    get.add_argument("key")

    set_ = actions.add_parser("set", help="Write one setting.")
    set_.add_argument("key")
    set_.add_argument("value")

    delete = actions.add_parser("delete", help="Delete one setting.")
    delete.add_argument("key")


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="devscope",
        description="devscope - discover and classify the projects on your machine.",
    )

    # Global options
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show devscope version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: ~/.devscope/config/config.yml).",
    )
    parser.add_argument(
        "--git-timeout",
        metavar="SECONDS",
        type=float,
        default=None,
        help="Timeout for each git command.",
    )
    parser.add_argument(
        "--max-workers",
        metavar="N",
        type=int,
        default=None,
        help="Maximum concurrent git probes.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    _build_scan_parser(subparsers)
    _build_workspaces_parser(subparsers)
    _build_packages_parser(subparsers)
    _build_git_status_parser(subparsers)
    subparsers.add_parser(
        "stats",
        help="Show cache statistics for this process.",
        description=(
            "Show cache hit/miss statistics. Counters are kept in memory by "
            "the running process, so a one-off devscope invocation always "
            "starts with zero hits and cold caches."
        ),
    )
    _build_settings_parser(subparsers)

    return parser
