"""Git status command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_NOT_FOUND, EXIT_SUCCESS
from devscope.cli.output import write_git_statuses
from devscope.core.logging import get_logger

if TYPE_CHECKING:
    from devscope.state import AppState

LOGGER = get_logger(__name__)


class GitStatusCommand(Command):
    """Shows git working-tree status."""

    @property
    def name(self) -> str:
        return "git-status"

    def execute(self, args: Namespace, state: "AppState") -> int:
        """Execute the git-status command.

        With a path, queries that project directly. Without one, reports
        every scanned project that has a ``.git`` entry, using the cache
        unless ``--refresh`` is given.
        """
        if args.path is not None:
            path = str(args.path.expanduser().resolve())
            status = state.get_git_status(path)
            if status is None:
                LOGGER.error(f"No git status available for {path}")
                return EXIT_NOT_FOUND
            write_git_statuses([status], args.format, sys.stdout)
            return EXIT_SUCCESS

        if args.refresh:
            statuses = state.refresh_git_statuses()
        else:
            statuses = state.get_git_statuses()
        write_git_statuses(statuses, args.format, sys.stdout)
        return EXIT_SUCCESS
