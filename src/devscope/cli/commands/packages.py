"""Packages command implementation."""

from __future__ import annotations

import sys
from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from devscope.cli.output import write_projects
from devscope.core.logging import get_logger

if TYPE_CHECKING:
    from devscope.state import AppState

LOGGER = get_logger(__name__)


class PackagesCommand(Command):
    """Lists the member packages of one monorepo root."""

    @property
    def name(self) -> str:
        return "packages"

    def execute(self, args: Namespace, state: "AppState") -> int:
        root = args.root.expanduser().resolve()
        if not root.is_dir():
            LOGGER.error(f"Not a directory: {root}")
            return EXIT_INVALID_USAGE

        packages = state.get_monorepo_packages(str(root))
        if not packages:
            LOGGER.info(f"{root} declares no workspace packages")
        write_projects(packages, args.format, sys.stdout)
        return EXIT_SUCCESS
