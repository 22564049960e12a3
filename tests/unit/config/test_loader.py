"""Tests for devscope.config.loader."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from devscope.config.loader import (
    ConfigError,
    dict_to_config,
    expand_env_vars,
    find_global_config,
    load_config,
    load_yaml_file,
    merge_configs,
)
from devscope.config.models import DevscopeConfig
from devscope.core.paths import DevscopePaths


@pytest.fixture
def paths(tmp_path: Path) -> DevscopePaths:
    paths = DevscopePaths(tmp_path / "home")
    paths.config_dir.mkdir(parents=True)
    return paths


class TestExpandEnvVars:
    """Tests for expand_env_vars."""

    def test_simple(self) -> None:
        with patch.dict(os.environ, {"CODE_DIR": "/code"}):
            assert expand_env_vars("${CODE_DIR}/db") == "/code/db"

    def test_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("${UNSET_VAR:-fallback}") == "fallback"

    def test_unset_without_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("${UNSET_VAR}") == ""

    def test_nested(self) -> None:
        with patch.dict(os.environ, {"PATTERN": "archive/"}):
            result = expand_env_vars({"scan": {"exclude": ["${PATTERN}", 5]}})

        assert result == {"scan": {"exclude": ["archive/", 5]}}


class TestMergeConfigs:
    """Tests for merge_configs."""

    def test_deep_merge(self) -> None:
        base = {"cache": {"ttl": {"projects": 300, "git": 60}}}
        overlay = {"cache": {"ttl": {"git": 5}}}

        assert merge_configs(base, overlay) == {"cache": {"ttl": {"projects": 300, "git": 5}}}

    def test_lists_replace(self) -> None:
        merged = merge_configs({"scan": {"exclude": ["a"]}}, {"scan": {"exclude": ["b"]}})

        assert merged == {"scan": {"exclude": ["b"]}}

    def test_base_not_modified(self) -> None:
        base = {"git": {"timeout": 10}}
        merge_configs(base, {"git": {"timeout": 1}})

        assert base == {"git": {"timeout": 10}}


class TestDictToConfig:
    """Tests for dict_to_config."""

    def test_defaults(self) -> None:
        config = dict_to_config({})

        assert config.cache.ttl_for("projects") == 300
        assert config.cache.ttl_for("git") == 60
        assert config.scan.exclude == []
        assert config.scan.max_workers == 8
        assert config.git.timeout == 10
        assert config.storage.database == ""

    def test_values(self) -> None:
        config = dict_to_config(
            {
                "cache": {"ttl": {"projects": 30}},
                "scan": {"exclude": ["archive/"], "max_workers": 2},
                "git": {"timeout": 2.5},
                "storage": {"database": "~/data/devscope.db"},
            }
        )

        assert config.cache.ttl_for("projects") == 30
        assert config.cache.ttl_for("git") == 60
        assert config.scan.exclude == ["archive/"]
        assert config.scan.max_workers == 2
        assert config.git.timeout == 2.5
        assert config.storage.database_path(Path("/default")) == Path("~/data/devscope.db").expanduser()

    def test_invalid_values_fall_back(self) -> None:
        config = dict_to_config(
            {
                "cache": {"ttl": {"projects": "soon", "git": -1, "unknown": 5}},
                "scan": {"exclude": "archive/", "max_workers": 0},
                "git": {"timeout": True},
            }
        )

        assert config.cache.ttl == {"projects": 300, "git": 60}
        assert config.scan.exclude == []
        assert config.scan.max_workers == 8
        assert config.git.timeout == 10


class TestLoadYamlFile:
    """Tests for load_yaml_file."""

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("")

        assert load_yaml_file(path) == {}

    def test_non_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigError):
            load_yaml_file(path)


class TestLoadConfig:
    """Tests for load_config precedence."""

    def test_no_files(self, paths: DevscopePaths) -> None:
        config = load_config(paths=paths)

        assert isinstance(config, DevscopeConfig)
        assert config.sources == []

    def test_global_config(self, paths: DevscopePaths) -> None:
        (paths.config_dir / "config.yml").write_text("git:\n  timeout: 3\n")

        config = load_config(paths=paths)

        assert find_global_config(paths) == paths.config_dir / "config.yml"
        assert config.git.timeout == 3
        assert config.sources == [f"global:{paths.config_dir / 'config.yml'}"]

    def test_custom_overrides_global(self, paths: DevscopePaths, tmp_path: Path) -> None:
        (paths.config_dir / "config.yml").write_text(
            "git:\n  timeout: 3\nscan:\n  max_workers: 2\n"
        )
        custom = tmp_path / "custom.yml"
        custom.write_text("git:\n  timeout: 7\n")

        config = load_config(cli_config_path=custom, paths=paths)

        assert config.git.timeout == 7
        assert config.scan.max_workers == 2

    def test_cli_overrides_win(self, paths: DevscopePaths, tmp_path: Path) -> None:
        custom = tmp_path / "custom.yml"
        custom.write_text("scan:\n  exclude: ['a/']\n")

        config = load_config(
            cli_config_path=custom,
            cli_overrides={"scan": {"exclude": ["b/"]}},
            paths=paths,
        )

        assert config.scan.exclude == ["b/"]
        assert config.sources[-1] == "cli"

    def test_missing_custom_file(self, paths: DevscopePaths, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(cli_config_path=tmp_path / "missing.yml", paths=paths)

    def test_invalid_custom_yaml(self, paths: DevscopePaths, tmp_path: Path) -> None:
        custom = tmp_path / "custom.yml"
        custom.write_text("git: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(cli_config_path=custom, paths=paths)

    def test_broken_global_config_is_skipped(self, paths: DevscopePaths) -> None:
        (paths.config_dir / "config.yml").write_text("git: [unclosed\n")

        config = load_config(paths=paths)

        assert config.git.timeout == 10
        assert config.sources == []
