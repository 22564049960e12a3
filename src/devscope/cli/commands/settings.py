"""Settings command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_NOT_FOUND, EXIT_SUCCESS
from devscope.core.logging import get_logger

if TYPE_CHECKING:
    from devscope.state import AppState

LOGGER = get_logger(__name__)


class SettingsCommand(Command):
    """Lists, reads, writes and deletes persisted settings."""

    @property
    def name(self) -> str:
        return "settings"

    def execute(self, args: Namespace, state: "AppState") -> int:
        action = getattr(args, "settings_action", None) or "list"

        if action == "get":
            value = state.get_setting(args.key)
            if value is None:
                LOGGER.error(f"Setting not found: {args.key}")
                return EXIT_NOT_FOUND
            print(value)
        elif action == "set":
            state.set_setting(args.key, args.value)
        elif action == "delete":
            state.delete_setting(args.key)
        else:
            for key, value in state.get_settings().items():
                print(f"{key}={value}")

        return EXIT_SUCCESS
