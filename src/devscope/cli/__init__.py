"""devscope CLI package.

This package provides the command-line interface for devscope.
"""

from __future__ import annotations

from typing import Iterable, Optional

from devscope.cli.arguments import build_parser
from devscope.cli.exit_codes import (
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SCAN_ERROR,
    EXIT_SUCCESS,
)
from devscope.cli.runner import CLIRunner, get_version


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code suitable for use as a console script.
    """
    runner = CLIRunner()
    return runner.run(argv)


__all__ = [
    "main",
    "build_parser",
    "get_version",
    "CLIRunner",
    "EXIT_SUCCESS",
    "EXIT_NOT_FOUND",
    "EXIT_SCAN_ERROR",
    "EXIT_INVALID_USAGE",
]


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
