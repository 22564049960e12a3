"""Path management for the devscope home directory.

Handles the ~/.devscope directory structure and path resolution.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".devscope"

# Environment variable to override home directory
DEVSCOPE_HOME_ENV = "DEVSCOPE_HOME"


def get_devscope_home() -> Path:
    """Get the devscope home directory path.

    Resolution order:
    1. DEVSCOPE_HOME environment variable (if set)
    2. ~/.devscope (default)

    Returns:
        Path to the devscope home directory.
    """
    env_home = os.environ.get(DEVSCOPE_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class DevscopePaths:
    """Manages paths within the devscope home directory.

    Directory structure:
        ~/.devscope/
            devscope.db     - Workspace roots and settings
            config/         - Configuration files
    """

    home: Path

    _CONFIG_DIR: ClassVar[str] = "config"
    _DATABASE_NAME: ClassVar[str] = "devscope.db"

    @classmethod
    def default(cls) -> "DevscopePaths":
        """Create paths from the default devscope home."""
        return cls(get_devscope_home())

    @property
    def config_dir(self) -> Path:
        """Directory for configuration files."""
        return self.home / self._CONFIG_DIR

    @property
    def database_path(self) -> Path:
        """SQLite database holding workspace roots and settings."""
        return self.home / self._DATABASE_NAME
