"""Shared pytest fixtures for devscope tests."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict

import pytest


@pytest.fixture
def write_package_json() -> Callable[[Path, Dict[str, Any]], Path]:
    """Write a package.json into a directory, creating it if needed."""

    def _write(directory: Path, data: Dict[str, Any]) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "package.json"
        path.write_text(json.dumps(data))
        return path

    return _write


@pytest.fixture
def git_repo() -> Callable[[Path], Path]:
    """Initialize a git repository with one commit."""

    def _init(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        run = lambda *args: subprocess.run(  # noqa: E731
            ["git", *args], cwd=path, capture_output=True, check=True
        )
        run("init", "-q")
        run("config", "user.email", "test@test.com")
        run("config", "user.name", "Test")
        run("config", "commit.gpgsign", "false")
        (path / "README.md").write_text("readme\n")
        run("add", "README.md")
        run("commit", "-q", "-m", "initial commit")
        return path

    return _init
