"""CLI runner: parses arguments, loads config and dispatches commands."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Callable, Dict, Iterable, Optional

from devscope.cli.arguments import build_parser
from devscope.cli.commands import (
    Command,
    GitStatusCommand,
    PackagesCommand,
    ScanCommand,
    SettingsCommand,
    StatsCommand,
    WorkspacesCommand,
)
from devscope.cli.config_bridge import ConfigBridge
from devscope.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SCAN_ERROR, EXIT_SUCCESS
from devscope.config import ConfigError, DevscopeConfig, load_config
from devscope.core.logging import configure_logging, get_logger
from devscope.core.paths import DevscopePaths
from devscope.state import AppState
from devscope.storage import StorageError

LOGGER = get_logger(__name__)

StateFactory = Callable[[DevscopeConfig, DevscopePaths], AppState]


def get_version() -> str:
    try:
        return version("devscope")
    except PackageNotFoundError:
        # Fallback for source checkouts without installed metadata
        from devscope import __version__

        return __version__


def _open_state(config: DevscopeConfig, paths: DevscopePaths) -> AppState:
    return AppState.open(config, paths)


class CLIRunner:
    """Runs one devscope invocation."""

    def __init__(
        self,
        paths: Optional[DevscopePaths] = None,
        state_factory: StateFactory = _open_state,
    ) -> None:
        """Initialize the runner.

        Args:
            paths: Devscope home layout. Defaults to the resolved home.
            state_factory: Builds the application state for a command.
        """
        self._paths = paths
        self._state_factory = state_factory
        self._commands: Dict[str, Command] = {
            command.name: command
            for command in (
                ScanCommand(),
                WorkspacesCommand(),
                PackagesCommand(),
                GitStatusCommand(),
                StatsCommand(),
                SettingsCommand(),
            )
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Parse ``argv`` and execute the selected command.

        Returns:
            Exit code.
        """
        parser = build_parser()
        argv_list = list(argv) if argv is not None else None
        args = parser.parse_args(argv_list)

        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

        if args.version:
            print(get_version())
            return EXIT_SUCCESS

        command = self._commands.get(args.command or "")
        if command is None:
            parser.print_help()
            return EXIT_SUCCESS

        paths = self._paths or DevscopePaths.default()
        try:
            config = load_config(
                cli_config_path=args.config,
                cli_overrides=ConfigBridge.args_to_overrides(args),
                paths=paths,
            )
            state = self._state_factory(config, paths)
        except (ConfigError, StorageError) as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE

        try:
            return command.execute(args, state)
        except StorageError as e:
            LOGGER.error(str(e))
            return EXIT_INVALID_USAGE
        except Exception as e:
            LOGGER.error(f"{command.name} failed: {e}")
            if args.debug:
                import traceback

                traceback.print_exc()
            return EXIT_SCAN_ERROR
        finally:
            state.close()
