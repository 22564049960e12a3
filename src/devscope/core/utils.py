"""Small shared helpers."""

from __future__ import annotations

from types import ModuleType
from typing import Optional


def get_tomllib() -> Optional[ModuleType]:
    """Return a TOML parser module.

    Uses the standard library ``tomllib`` on Python 3.11+ and the ``tomli``
    backport on older interpreters.

    Returns:
        The parser module, or None if neither is importable.
    """
    try:
        import tomllib

        return tomllib
    except ImportError:
        pass
    try:
        import tomli

        return tomli
    except ImportError:
        return None
