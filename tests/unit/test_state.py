"""Tests for devscope.state."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import List
from unittest.mock import MagicMock, patch

import pytest

from devscope.config.models import DevscopeConfig
from devscope.core.models import GitStatus, ProjectRecord
from devscope.core.paths import DevscopePaths
from devscope.pipeline.executor import PipelineExecutor, ScanMetadata, ScanOutcome
from devscope.state import AppState
from devscope.storage import Database


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 500.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, secs: float) -> None:
        self.now += secs


def _outcome(projects: List[ProjectRecord]) -> ScanOutcome:
    metadata = ScanMetadata(
        scan_started_at="2026-01-01T00:00:00+00:00",
        scan_finished_at="2026-01-01T00:00:00+00:00",
        duration_ms=0,
        project_count=len(projects),
    )
    return ScanOutcome(projects=projects, metadata=metadata)


PROJECTS = [
    ProjectRecord(path="/code/api", name="api", has_git=True),
    ProjectRecord(path="/code/notes", name="notes"),
]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db():
    database = Database.open(":memory:")
    yield database
    database.close()


@pytest.fixture
def pipeline() -> MagicMock:
    mock = MagicMock(spec=PipelineExecutor)
    mock.execute.side_effect = lambda roots: _outcome(copy.deepcopy(PROJECTS))
    return mock


@pytest.fixture
def state(db: Database, pipeline: MagicMock, clock: FakeClock) -> AppState:
    return AppState(db, pipeline=pipeline, clock=clock)


class TestWorkspaces:
    """Tests for workspace root management."""

    def test_hydrated_from_database(self, db: Database, pipeline: MagicMock) -> None:
        db.add_workspace("/code")
        db.add_workspace("/src")

        state = AppState(db, pipeline=pipeline)

        assert state.list_workspaces() == ["/code", "/src"]

    def test_add_is_idempotent(self, state: AppState, db: Database) -> None:
        assert state.add_workspace("/code") == ["/code"]
        assert state.add_workspace("/code") == ["/code"]
        assert db.get_workspaces() == ["/code"]

    def test_remove_persists(self, state: AppState, db: Database) -> None:
        state.add_workspace("/a")
        state.add_workspace("/b")

        assert state.remove_workspace("/a") == ["/b"]
        assert db.get_workspaces() == ["/b"]

    def test_remove_invalidates_caches(self, state: AppState) -> None:
        state.add_workspace("/code")
        with patch("devscope.core.git.get_statuses", return_value=[]):
            state.get_git_statuses()
        assert state.cache("projects").is_warm()
        assert state.cache("git").is_warm()

        state.remove_workspace("/code")

        assert not state.cache("projects").is_warm()
        assert not state.cache("git").is_warm()


class TestProjects:
    """Tests for cached project scans."""

    def test_miss_then_hit(self, state: AppState, pipeline: MagicMock) -> None:
        state.add_workspace("/code")

        first = state.get_projects()
        second = state.get_projects()

        assert first == PROJECTS
        assert second == PROJECTS
        pipeline.execute.assert_called_once_with(["/code"])
        stats = state.stats_snapshot().scanners[0]
        assert stats.name == "Projects"
        assert stats.cache_hits == 1
        assert stats.cache_misses == 1
        assert stats.total_scans == 1
        assert stats.is_warm is True

    def test_rescan_after_ttl(self, state: AppState, pipeline: MagicMock, clock: FakeClock) -> None:
        state.get_projects()
        clock.advance(299)
        state.get_projects()
        clock.advance(2)
        state.get_projects()

        assert pipeline.execute.call_count == 2

    def test_refresh_always_rescans(self, state: AppState, pipeline: MagicMock) -> None:
        state.get_projects()
        state.refresh_projects()

        assert pipeline.execute.call_count == 2

    def test_returned_records_are_copies(self, state: AppState) -> None:
        refreshed = state.refresh_projects()
        refreshed[0].name = "renamed"
        cached = state.get_projects()
        cached[1].name = "edited"
        cached.clear()

        assert state.get_projects() == PROJECTS

    def test_monorepo_packages_use_scanner(self, state: AppState, pipeline: MagicMock) -> None:
        pipeline.scanner.scan_monorepo_packages.return_value = [PROJECTS[0]]

        assert state.get_monorepo_packages("/code/api") == [PROJECTS[0]]
        pipeline.scanner.scan_monorepo_packages.assert_called_once_with(Path("/code/api"))


class TestGitStatuses:
    """Tests for cached git statuses."""

    def test_only_git_projects_are_queried(self, state: AppState) -> None:
        status = GitStatus(project_path="/code/api", branch="main")
        with patch("devscope.core.git.get_statuses", return_value=[status]) as mock_statuses:
            assert state.get_git_statuses() == [status]
            assert state.get_git_statuses() == [status]

        mock_statuses.assert_called_once()
        assert mock_statuses.call_args.args[0] == ["/code/api"]
        git_stats = state.stats_snapshot().scanners[1]
        assert git_stats.name == "Git Status"
        assert git_stats.cache_hits == 1
        assert git_stats.cache_misses == 1

    def test_timeout_and_workers_from_config(self, db: Database, pipeline: MagicMock) -> None:
        config = DevscopeConfig()
        config.git.timeout = 3.0
        config.scan.max_workers = 2
        state = AppState(db, config=config, pipeline=pipeline)

        with patch("devscope.core.git.get_statuses", return_value=[]) as mock_statuses:
            state.refresh_git_statuses()

        assert mock_statuses.call_args.kwargs == {"timeout": 3.0, "max_workers": 2}

    def test_single_status_bypasses_cache(self, state: AppState) -> None:
        with patch("devscope.core.git.get_status", return_value=None) as mock_status:
            assert state.get_git_status("/code/notes") is None

        mock_status.assert_called_once_with("/code/notes", timeout=10.0)
        assert not state.cache("git").is_warm()


class TestTtlSettings:
    """Tests for ttl_<kind> settings."""

    def test_config_ttl(self, db: Database, pipeline: MagicMock) -> None:
        config = DevscopeConfig()
        config.cache.ttl["git"] = 15

        state = AppState(db, config=config, pipeline=pipeline)

        assert state.cache("git").ttl_secs == 15

    def test_persisted_setting_wins_at_startup(self, db: Database, pipeline: MagicMock) -> None:
        db.set_setting("ttl_projects", "42")
        config = DevscopeConfig()
        config.cache.ttl["projects"] = 15

        state = AppState(db, config=config, pipeline=pipeline)

        assert state.cache("projects").ttl_secs == 42

    def test_set_setting_applies_live(self, state: AppState, db: Database) -> None:
        state.set_setting("ttl_git", "5")

        assert state.cache("git").ttl_secs == 5
        assert db.get_setting("ttl_git") == "5"

    def test_invalid_values_ignored(self, state: AppState) -> None:
        state.set_setting("ttl_git", "soon")
        state.set_setting("ttl_projects", "-3")

        assert state.cache("git").ttl_secs == 60
        assert state.cache("projects").ttl_secs == 300
        assert state.get_setting("ttl_git") == "soon"

    def test_other_keys_are_plain_settings(self, state: AppState) -> None:
        state.set_setting("ttl_unknown", "1")
        state.set_setting("editor", "vim")

        assert state.get_settings() == {"editor": "vim", "ttl_unknown": "1"}
        assert state.cache("projects").ttl_secs == 300

    def test_deleted_setting_stays_in_effect(self, state: AppState) -> None:
        state.set_setting("ttl_git", "5")
        state.delete_setting("ttl_git")

        assert state.get_setting("ttl_git") is None
        assert state.cache("git").ttl_secs == 5

    def test_shorter_ttl_expires_warm_value(self, state: AppState, clock: FakeClock) -> None:
        state.get_projects()
        clock.advance(10)

        state.set_setting("ttl_projects", "5")

        assert not state.cache("projects").is_warm()


class TestStatsSnapshot:
    """Tests for stats_snapshot."""

    def test_cold_state(self, state: AppState, clock: FakeClock) -> None:
        clock.advance(12.7)

        snapshot = state.stats_snapshot()

        assert [s.name for s in snapshot.scanners] == ["Projects", "Git Status"]
        assert all(s.last_scan_duration_ms is None for s in snapshot.scanners)
        assert snapshot.uptime_secs == 12
        assert snapshot.pid > 0
        assert snapshot.to_dict()["scanners"][0]["ttl_secs"] == 300


class TestOpen:
    """Tests for AppState.open."""

    def test_default_database_location(self, tmp_path: Path) -> None:
        paths = DevscopePaths(tmp_path / "home")

        state = AppState.open(DevscopeConfig(), paths)
        state.add_workspace("/code")
        state.close()

        assert paths.database_path.exists()

    def test_configured_database_location(self, tmp_path: Path) -> None:
        config = DevscopeConfig()
        config.storage.database = str(tmp_path / "elsewhere" / "db.sqlite")

        state = AppState.open(config, DevscopePaths(tmp_path / "home"))
        state.close()

        assert (tmp_path / "elsewhere" / "db.sqlite").exists()
