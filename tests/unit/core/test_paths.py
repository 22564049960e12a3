"""Tests for devscope.core.paths."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from devscope.core.paths import DEVSCOPE_HOME_ENV, DevscopePaths, get_devscope_home


class TestGetDevscopeHome:
    """Tests for get_devscope_home."""

    def test_env_override(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {DEVSCOPE_HOME_ENV: str(tmp_path)}):
            assert get_devscope_home() == tmp_path

    def test_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            with patch("pathlib.Path.home", return_value=Path("/home/dev")):
                assert get_devscope_home() == Path("/home/dev/.devscope")


class TestDevscopePaths:
    """Tests for DevscopePaths layout."""

    def test_layout(self, tmp_path: Path) -> None:
        paths = DevscopePaths(tmp_path)

        assert paths.config_dir == tmp_path / "config"
        assert paths.database_path == tmp_path / "devscope.db"
