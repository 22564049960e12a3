"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from devscope.state import AppState


class Command(ABC):
    """Base class for CLI commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier as typed on the command line."""

    @abstractmethod
    def execute(self, args: Namespace, state: "AppState") -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            state: Application state backed by the configured database.

        Returns:
            Exit code (0 for success, non-zero for error).
        """


# ruff: noqa: E402
from devscope.cli.commands.scan import ScanCommand
from devscope.cli.commands.workspaces import WorkspacesCommand
from devscope.cli.commands.packages import PackagesCommand
from devscope.cli.commands.git_status import GitStatusCommand
from devscope.cli.commands.stats import StatsCommand
from devscope.cli.commands.settings import SettingsCommand

__all__ = [
    "Command",
    "ScanCommand",
    "WorkspacesCommand",
    "PackagesCommand",
    "GitStatusCommand",
    "StatsCommand",
    "SettingsCommand",
]
