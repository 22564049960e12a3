"""Scan command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_SUCCESS
from devscope.cli.output import write_projects
from devscope.core.logging import get_logger

if TYPE_CHECKING:
    from devscope.state import AppState

LOGGER = get_logger(__name__)


class ScanCommand(Command):
    """Lists projects under every workspace root."""

    @property
    def name(self) -> str:
        return "scan"

    def execute(self, args: Namespace, state: "AppState") -> int:
        if not state.list_workspaces():
            LOGGER.warning("No workspace roots configured; add one with 'devscope workspaces add PATH'")

        if args.refresh:
            projects = state.refresh_projects()
        else:
            projects = state.get_projects()

        write_projects(projects, args.format, sys.stdout)
        return EXIT_SUCCESS
