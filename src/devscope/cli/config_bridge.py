"""Bridge between CLI arguments and configuration overrides."""

from __future__ import annotations

import argparse
from typing import Any, Dict


class ConfigBridge:
    """Translates CLI arguments to configuration overrides."""

    @staticmethod
    def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
        """Convert CLI arguments to a config override dict.

        Only options given explicitly on the command line appear in the
        result, so config file values survive otherwise.

        Args:
            args: Parsed CLI arguments.

        Returns:
            Overrides in config.yml layout.
        """
        overrides: Dict[str, Any] = {}

        scan: Dict[str, Any] = {}
        exclude = getattr(args, "exclude", None)
        if exclude:
            scan["exclude"] = list(exclude)
        max_workers = getattr(args, "max_workers", None)
        if max_workers is not None:
            scan["max_workers"] = max_workers
        if scan:
            overrides["scan"] = scan

        git_timeout = getattr(args, "git_timeout", None)
        if git_timeout is not None:
            overrides["git"] = {"timeout": git_timeout}

        return overrides
