"""Git worktree correlation.

Finds projects that are linked worktrees of one another and regroups them
so that every checkout of the same repository is displayed together.
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from devscope.core.git import (
    DEFAULT_GIT_TIMEOUT,
    DEFAULT_MAX_WORKERS,
    GitCommandError,
    list_worktrees,
)
from devscope.core.logging import get_logger
from devscope.core.models import GroupType, ProjectRecord, worktree_group_name
from devscope.workspace.scanner import sort_projects

LOGGER = get_logger(__name__)


@dataclass
class WorktreeProbe:
    """Result of querying one project for its worktrees.

    Attributes:
        path: Project path that was probed.
        main_worktree: Main worktree path when the repository has linked
            worktrees, otherwise None.
        error: Failure description when the probe failed.
    """

    path: str
    main_worktree: Optional[str] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class WorktreeCorrelator:
    """Probes git repositories concurrently for linked worktrees."""

    def __init__(
        self,
        timeout: float = DEFAULT_GIT_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._timeout = timeout
        self._max_workers = max(1, max_workers)

    def probe(self, path: str) -> WorktreeProbe:
        """Query a single project.

        Never raises; failures are reported on the returned probe.
        """
        try:
            worktrees = list_worktrees(Path(path), timeout=self._timeout)
        except GitCommandError as e:
            return WorktreeProbe(path=path, error=str(e))

        if len(worktrees) > 1:
            return WorktreeProbe(path=path, main_worktree=worktrees[0])
        return WorktreeProbe(path=path)

    def probe_all(self, paths: Sequence[str]) -> List[WorktreeProbe]:
        """Probe every path on a thread pool and wait for all of them.

        Returns:
            One probe per path, in input order.
        """
        if not paths:
            return []

        results: Dict[int, WorktreeProbe] = {}
        workers = min(self._max_workers, len(paths))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="worktree") as pool:
            futures = {pool.submit(self.probe, path): i for i, path in enumerate(paths)}
            for future in as_completed(futures):
                index = futures[future]
                try:
                    results[index] = future.result()
                except Exception as e:
                    results[index] = WorktreeProbe(path=paths[index], error=str(e))

        return [results[i] for i in range(len(paths))]

    def detect_worktree_groups(self, paths: Sequence[str]) -> Dict[str, str]:
        """Map each project path that has sibling worktrees to its main worktree.

        Args:
            paths: Project paths, normally only those with a ``.git`` entry.

        Returns:
            Mapping of project path to main worktree path. Projects whose
            repository has a single worktree, and failed probes, are absent.
        """
        worktree_map: Dict[str, str] = {}
        failures = 0
        for probe in self.probe_all(paths):
            if probe.failed:
                failures += 1
                LOGGER.warning(f"Worktree query failed for {probe.path}: {probe.error}")
            elif probe.main_worktree is not None:
                worktree_map[probe.path] = probe.main_worktree

        LOGGER.debug(
            f"Worktree probes: {len(paths)} total, {len(worktree_map)} linked, "
            f"{failures} failed"
        )
        return worktree_map


def _folder_name(path: str) -> str:
    return Path(path).name or path


def apply_worktree_groups(
    projects: Sequence[ProjectRecord],
    worktree_map: Mapping[str, str],
) -> List[ProjectRecord]:
    """Regroup projects that share a main worktree.

    Non-monorepo projects found in ``worktree_map`` move to the
    ``"<main> (worktrees)"`` group. Monorepo roots that are worktrees of the
    same repository collapse into one worktree group: their member packages
    are dropped and each root is kept as a single entry named after its
    folder. A monorepo with no sibling worktree root keeps its members.

    Args:
        projects: Records from a scan. They are not modified.
        worktree_map: Output of ``WorktreeCorrelator.detect_worktree_groups``.

    Returns:
        New list ordered by (group, name), case-insensitively.
    """
    result: List[ProjectRecord] = []
    for project in projects:
        main = worktree_map.get(project.path)
        if main is not None and project.group_type != GroupType.MONOREPO:
            project = dataclasses.replace(
                project,
                group=worktree_group_name(main),
                group_type=GroupType.WORKTREE,
                worktree_id=main,
            )
        result.append(project)

    roots_by_main: Dict[str, List[ProjectRecord]] = {}
    for project in result:
        if project.is_monorepo_root and project.path in worktree_map:
            roots_by_main.setdefault(worktree_map[project.path], []).append(project)

    consolidated: Dict[str, str] = {}
    for main, roots in roots_by_main.items():
        if len(roots) < 2:
            continue
        for root in roots:
            consolidated[root.path] = main

    if not consolidated:
        return sort_projects(result)

    collapsed: List[ProjectRecord] = []
    for project in result:
        if (
            project.group_type == GroupType.MONOREPO
            and not project.is_monorepo_root
            and project.monorepo_root in consolidated
        ):
            continue
        main = consolidated.get(project.path)
        if main is not None:
            project = dataclasses.replace(
                project,
                name=_folder_name(project.path),
                group=worktree_group_name(main),
                group_type=GroupType.WORKTREE,
                worktree_id=main,
            )
        collapsed.append(project)

    LOGGER.debug(
        f"Consolidated {len(consolidated)} monorepo worktree root(s) "
        f"and dropped {len(result) - len(collapsed)} member record(s)"
    )
    return sort_projects(collapsed)
