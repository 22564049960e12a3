"""Logging configuration for devscope.

All modules obtain their logger through ``get_logger(__name__)`` so that a
single call to ``configure_logging`` controls the verbosity of the whole
package.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "devscope"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the devscope root logger.

    Args:
        name: Usually the caller's ``__name__``.

    Returns:
        Logger instance.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure the devscope root logger.

    Precedence: ``debug`` > ``quiet`` > ``verbose`` > default (warnings).

    Args:
        debug: Enable debug-level output with timestamps and thread names.
        verbose: Enable info-level output.
        quiet: Only show errors.
        stream: Output stream (default: stderr).
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)

    # Replace handlers so repeated configuration does not duplicate output
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_LOG_FORMAT if debug else LOG_FORMAT))
    root.addHandler(handler)
    root.propagate = False
