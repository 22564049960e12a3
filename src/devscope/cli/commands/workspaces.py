"""Workspaces command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from devscope.core.logging import get_logger

if TYPE_CHECKING:
    from devscope.state import AppState

LOGGER = get_logger(__name__)


class WorkspacesCommand(Command):
    """Adds, removes and lists workspace roots."""

    @property
    def name(self) -> str:
        return "workspaces"

    def execute(self, args: Namespace, state: "AppState") -> int:
        """Execute the workspaces command.

        ``add`` requires an existing directory and stores its absolute path.
        ``remove`` accepts the path as stored, or one that resolves to it.
        Without an action the roots are listed.
        """
        action = getattr(args, "workspaces_action", None) or "list"

        if action == "add":
            path = args.path.expanduser().resolve()
            if not path.is_dir():
                LOGGER.error(f"Not a directory: {path}")
                return EXIT_INVALID_USAGE
            roots = state.add_workspace(str(path))
        elif action == "remove":
            roots = state.list_workspaces()
            raw = str(args.path)
            resolved = str(args.path.expanduser().resolve())
            target = raw if raw in roots else resolved
            if target not in roots:
                LOGGER.error(f"Not a workspace root: {raw}")
                return EXIT_INVALID_USAGE
            roots = state.remove_workspace(target)
        else:
            roots = state.list_workspaces()

        if not roots:
            print("No workspace roots configured.")
        for root in roots:
            print(root)
        return EXIT_SUCCESS
