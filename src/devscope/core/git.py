"""Git utilities for worktree discovery and working-tree status.

Every git invocation carries a timeout so that a single hung repository
cannot stall a workspace scan.
"""

from __future__ import annotations

import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from devscope.core.logging import get_logger
from devscope.core.models import GitStatus

LOGGER = get_logger(__name__)

DEFAULT_GIT_TIMEOUT = 10.0
DEFAULT_MAX_WORKERS = 8


class GitCommandError(Exception):
    """A git command failed, timed out, or git is not installed."""


def run_git(args: Sequence[str], cwd: Path, timeout: float = DEFAULT_GIT_TIMEOUT) -> str:
    """Run a git command and return its stdout.

    Args:
        args: Arguments after ``git``.
        cwd: Working directory.
        timeout: Seconds before the process is killed.

    Returns:
        Captured stdout.

    Raises:
        GitCommandError: On non-zero exit, timeout, or missing binary.
    """
    command = ["git", *args]
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise GitCommandError(f"{' '.join(command)} timed out after {timeout}s in {cwd}") from e
    except (subprocess.SubprocessError, FileNotFoundError, OSError) as e:
        raise GitCommandError(f"{' '.join(command)} failed in {cwd}: {e}") from e

    if result.returncode != 0:
        raise GitCommandError(
            f"{' '.join(command)} exited with {result.returncode} in {cwd}: "
            f"{result.stderr.strip()}"
        )
    return result.stdout


def has_git_dir(path: Path) -> bool:
    """Check for a ``.git`` entry.

    Linked worktrees carry a ``.git`` file rather than a directory, so any
    entry counts.
    """
    return (path / ".git").exists()


def parse_worktree_list(output: str) -> List[str]:
    """Extract worktree paths from ``git worktree list --porcelain`` output.

    The main worktree is always listed first.
    """
    return [
        line[len("worktree "):]
        for line in output.splitlines()
        if line.startswith("worktree ")
    ]


def list_worktrees(path: Path, timeout: float = DEFAULT_GIT_TIMEOUT) -> List[str]:
    """List all worktrees of the repository containing ``path``.

    Raises:
        GitCommandError: If git fails.
    """
    output = run_git(["worktree", "list", "--porcelain"], cwd=path, timeout=timeout)
    return parse_worktree_list(output)


def parse_status_porcelain(output: str) -> Tuple[str, int, int, int, int, int]:
    """Parse ``git status --porcelain=v2 --branch`` output.

    Returns:
        Tuple of (branch, ahead, behind, modified, untracked, staged).
    """
    branch = ""
    ahead = behind = modified = untracked = staged = 0

    for line in output.splitlines():
        if line.startswith("# branch.head "):
            branch = line[len("# branch.head "):]
        elif line.startswith("# branch.ab "):
            for part in line[len("# branch.ab "):].split():
                if part.startswith("+"):
                    ahead = _parse_int(part[1:])
                elif part.startswith("-"):
                    behind = _parse_int(part[1:])
        elif line.startswith(("1 ", "2 ")):
            fields = line.split()
            xy = fields[1] if len(fields) > 1 else ".."
            if xy[:1] not in ("", "."):
                staged += 1
            if xy[1:2] not in ("", "."):
                modified += 1
        elif line.startswith("? "):
            untracked += 1

    return branch, ahead, behind, modified, untracked, staged


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def parse_git_log_line(line: str) -> Tuple[str, str, Optional[int]]:
    """Parse a ``message|relative date|epoch`` log line.

    Returns:
        Tuple of (message, relative date, epoch or None).
    """
    parts = line.split("|", 2)
    message = parts[0] if parts else ""
    date = parts[1] if len(parts) > 1 else ""
    epoch: Optional[int] = None
    if len(parts) > 2:
        try:
            epoch = int(parts[2])
        except ValueError:
            epoch = None
    return message, date, epoch


def get_status(project_path: str, timeout: float = DEFAULT_GIT_TIMEOUT) -> Optional[GitStatus]:
    """Get the working-tree status of a project.

    Args:
        project_path: Project directory.
        timeout: Per-command timeout in seconds.

    Returns:
        GitStatus, or None if the path is not a git checkout or git fails.
    """
    path = Path(project_path)
    if not has_git_dir(path):
        return None

    try:
        status_output = run_git(["status", "--porcelain=v2", "--branch"], cwd=path, timeout=timeout)
    except GitCommandError as e:
        LOGGER.warning(f"Git status failed: {e}")
        return None

    branch, ahead, behind, modified, untracked, staged = parse_status_porcelain(status_output)

    # A repository without commits has no log; treat it as empty
    try:
        log_line = run_git(["log", "-1", "--format=%s|%ar|%ct"], cwd=path, timeout=timeout).strip()
    except GitCommandError as e:
        LOGGER.debug(f"Git log unavailable: {e}")
        log_line = ""
    message, date, epoch = parse_git_log_line(log_line)

    try:
        remote_url = run_git(["remote", "get-url", "origin"], cwd=path, timeout=timeout).strip()
    except GitCommandError:
        remote_url = ""

    return GitStatus(
        project_path=project_path,
        branch=branch,
        is_dirty=(modified + untracked + staged) > 0,
        modified_count=modified,
        untracked_count=untracked,
        staged_count=staged,
        ahead=ahead,
        behind=behind,
        last_commit_message=message,
        last_commit_date=date,
        last_commit_epoch=epoch,
        remote_url=remote_url,
    )


def get_statuses(
    project_paths: Sequence[str],
    timeout: float = DEFAULT_GIT_TIMEOUT,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[GitStatus]:
    """Get statuses for many projects concurrently.

    Results follow the order of ``project_paths``; paths that are not git
    checkouts are omitted.
    """
    if not project_paths:
        return []

    with ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="git-status") as pool:
        results = list(pool.map(lambda p: get_status(p, timeout=timeout), project_paths))

    return [status for status in results if status is not None]
