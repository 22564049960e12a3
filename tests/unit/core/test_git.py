"""Tests for devscope.core.git."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from devscope.core.git import (
    GitCommandError,
    get_status,
    get_statuses,
    has_git_dir,
    list_worktrees,
    parse_git_log_line,
    parse_status_porcelain,
    parse_worktree_list,
    run_git,
)

WORKTREE_OUTPUT = """worktree /code/app
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /code/app-feature
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature

"""

STATUS_OUTPUT = """# branch.oid abcdef
# branch.head feature/login
# branch.upstream origin/feature/login
# branch.ab +3 -1
1 .M N... 100644 100644 100644 aaa bbb src/app.py
1 M. N... 100644 100644 100644 aaa bbb src/db.py
1 MM N... 100644 100644 100644 aaa bbb src/both.py
2 R. N... 100644 100644 100644 aaa bbb R100 new.py\told.py
? notes.txt
? scratch/
"""


def _completed(stdout: str = "", returncode: int = 0, stderr: str = "") -> MagicMock:
    result = MagicMock()
    result.stdout = stdout
    result.stderr = stderr
    result.returncode = returncode
    return result


class TestRunGit:
    """Tests for run_git."""

    def test_returns_stdout(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed("ok\n")) as mock_run:
            assert run_git(["status"], cwd=tmp_path, timeout=3) == "ok\n"

        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "status"]
        assert kwargs["timeout"] == 3
        assert kwargs["cwd"] == tmp_path

    def test_non_zero_exit(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(returncode=128, stderr="fatal")):
            with pytest.raises(GitCommandError, match="fatal"):
                run_git(["status"], cwd=tmp_path)

    def test_timeout(self, tmp_path: Path) -> None:
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("git", 1)):
            with pytest.raises(GitCommandError, match="timed out"):
                run_git(["status"], cwd=tmp_path, timeout=1)

    def test_git_not_found(self, tmp_path: Path) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(GitCommandError):
                run_git(["status"], cwd=tmp_path)


class TestParsers:
    """Tests for git output parsers."""

    def test_parse_worktree_list(self) -> None:
        assert parse_worktree_list(WORKTREE_OUTPUT) == ["/code/app", "/code/app-feature"]

    def test_parse_worktree_list_empty(self) -> None:
        assert parse_worktree_list("") == []

    def test_list_worktrees(self, tmp_path: Path) -> None:
        with patch("subprocess.run", return_value=_completed(WORKTREE_OUTPUT)):
            assert list_worktrees(tmp_path) == ["/code/app", "/code/app-feature"]

    def test_parse_status_porcelain(self) -> None:
        branch, ahead, behind, modified, untracked, staged = parse_status_porcelain(STATUS_OUTPUT)

        assert branch == "feature/login"
        assert (ahead, behind) == (3, 1)
        assert modified == 2
        assert staged == 3
        assert untracked == 2

    def test_parse_status_clean(self) -> None:
        output = "# branch.oid abc\n# branch.head main\n"

        assert parse_status_porcelain(output) == ("main", 0, 0, 0, 0, 0)

    def test_parse_git_log_line(self) -> None:
        assert parse_git_log_line("fix something|2 days ago|1707600000") == (
            "fix something",
            "2 days ago",
            1707600000,
        )

    def test_parse_git_log_line_pipe_in_message(self) -> None:
        message, date, epoch = parse_git_log_line("a|b|c|d")

        assert message == "a"
        assert date == "b"
        assert epoch is None

    def test_parse_git_log_line_empty(self) -> None:
        assert parse_git_log_line("") == ("", "", None)

    def test_parse_git_log_line_without_epoch(self) -> None:
        assert parse_git_log_line("msg|now") == ("msg", "now", None)


class TestHasGitDir:
    """Tests for has_git_dir."""

    def test_directory(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        assert has_git_dir(tmp_path) is True

    def test_file(self, tmp_path: Path) -> None:
        (tmp_path / ".git").write_text("gitdir: /elsewhere")
        assert has_git_dir(tmp_path) is True

    def test_missing(self, tmp_path: Path) -> None:
        assert has_git_dir(tmp_path) is False


class TestGetStatus:
    """Tests for get_status with subprocess mocked."""

    def test_not_a_checkout(self, tmp_path: Path) -> None:
        with patch("subprocess.run") as mock_run:
            assert get_status(str(tmp_path)) is None
        mock_run.assert_not_called()

    def test_full_status(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        responses = [
            _completed(STATUS_OUTPUT),
            _completed("add login|3 hours ago|1700000000\n"),
            _completed("git@github.com:acme/app.git\n"),
        ]

        with patch("subprocess.run", side_effect=responses):
            status = get_status(str(tmp_path))

        assert status is not None
        assert status.project_path == str(tmp_path)
        assert status.branch == "feature/login"
        assert status.is_dirty is True
        assert status.modified_count == 2
        assert status.staged_count == 3
        assert status.untracked_count == 2
        assert status.ahead == 3
        assert status.behind == 1
        assert status.last_commit_message == "add login"
        assert status.last_commit_date == "3 hours ago"
        assert status.last_commit_epoch == 1700000000
        assert status.remote_url == "git@github.com:acme/app.git"

    def test_no_commits_and_no_remote(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()
        responses = [
            _completed("# branch.oid (initial)\n# branch.head main\n"),
            _completed(returncode=128, stderr="does not have any commits"),
            _completed(returncode=2, stderr="No such remote"),
        ]

        with patch("subprocess.run", side_effect=responses):
            status = get_status(str(tmp_path))

        assert status is not None
        assert status.is_dirty is False
        assert status.last_commit_message == ""
        assert status.last_commit_epoch is None
        assert status.remote_url == ""

    def test_status_failure(self, tmp_path: Path) -> None:
        (tmp_path / ".git").mkdir()

        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("git", 10)):
            assert get_status(str(tmp_path)) is None


class TestGetStatuses:
    """Tests for get_statuses."""

    def test_order_and_filtering(self) -> None:
        def fake_status(path: str, timeout: float):
            if path == "/skip":
                return None
            return MagicMock(project_path=path)

        with patch("devscope.core.git.get_status", side_effect=fake_status):
            statuses = get_statuses(["/a", "/skip", "/b", "/c"], max_workers=3)

        assert [s.project_path for s in statuses] == ["/a", "/b", "/c"]

    def test_empty(self) -> None:
        assert get_statuses([]) == []


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
class TestRealGit:
    """Tests against a real repository."""

    def test_status_of_fresh_repo(self, tmp_path: Path, git_repo) -> None:
        repo = git_repo(tmp_path / "repo")
        (repo / "new.txt").write_text("x")

        status = get_status(str(repo))

        assert status is not None
        assert status.untracked_count == 1
        assert status.is_dirty is True
        assert status.last_commit_message == "initial commit"
        assert status.last_commit_epoch is not None

    def test_single_worktree(self, tmp_path: Path, git_repo) -> None:
        repo = git_repo(tmp_path / "repo")

        assert len(list_worktrees(repo)) == 1
