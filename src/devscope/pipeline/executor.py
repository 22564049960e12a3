"""Pipeline executor for orchestrating workspace scan stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from devscope.core.logging import get_logger
from devscope.core.models import ProjectRecord
from devscope.workspace.scanner import WorkspaceScanner
from devscope.workspace.worktrees import WorktreeCorrelator, apply_worktree_groups

if TYPE_CHECKING:
    from devscope.config.models import DevscopeConfig

LOGGER = get_logger(__name__)


@dataclass
class ScanMetadata:
    """Timing and volume information about one pipeline run."""

    scan_started_at: str
    scan_finished_at: str
    duration_ms: int
    workspace_roots: List[str] = field(default_factory=list)
    project_count: int = 0
    worktree_linked: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scan_started_at": self.scan_started_at,
            "scan_finished_at": self.scan_finished_at,
            "duration_ms": self.duration_ms,
            "workspace_roots": list(self.workspace_roots),
            "project_count": self.project_count,
            "worktree_linked": self.worktree_linked,
        }


@dataclass
class ScanOutcome:
    """Projects produced by a pipeline run plus its metadata."""

    projects: List[ProjectRecord]
    metadata: ScanMetadata


class PipelineExecutor:
    """Orchestrates the workspace scan stages.

    Pipeline stages:
    1. Filesystem scan of every workspace root (no git)
    2. Worktree correlation of projects that have a ``.git`` entry
    3. Regrouping and final ordering
    """

    def __init__(
        self,
        config: Optional["DevscopeConfig"] = None,
        scanner: Optional[WorkspaceScanner] = None,
        correlator: Optional[WorktreeCorrelator] = None,
    ) -> None:
        """Initialize the pipeline executor.

        Args:
            config: Devscope configuration. Supplies exclude patterns, the
                git timeout and the worker count when collaborators are not
                given explicitly.
            scanner: Workspace scanner override.
            correlator: Worktree correlator override.
        """
        if config is None:
            from devscope.config.models import DevscopeConfig

            config = DevscopeConfig()
        self._config = config
        self._scanner = scanner or WorkspaceScanner(exclude=config.scan.exclude)
        self._correlator = correlator or WorktreeCorrelator(
            timeout=config.git.timeout,
            max_workers=config.scan.max_workers,
        )

    @property
    def scanner(self) -> WorkspaceScanner:
        return self._scanner

    def execute(self, workspace_roots: Sequence[str]) -> ScanOutcome:
        """Execute the full pipeline over the given roots."""
        start_time = datetime.now(timezone.utc)

        # Stage 1: Filesystem scan
        projects = self._scan_roots(workspace_roots)

        # Stage 2: Worktree correlation
        git_paths = [p.path for p in projects if p.has_git]
        worktree_map = self._correlator.detect_worktree_groups(git_paths)

        # Stage 3: Regroup and sort
        projects = apply_worktree_groups(projects, worktree_map)

        end_time = datetime.now(timezone.utc)
        duration_ms = int((end_time - start_time).total_seconds() * 1000)

        metadata = ScanMetadata(
            scan_started_at=start_time.isoformat(),
            scan_finished_at=end_time.isoformat(),
            duration_ms=duration_ms,
            workspace_roots=list(workspace_roots),
            project_count=len(projects),
            worktree_linked=len(worktree_map),
        )
        LOGGER.info(
            f"Scanned {len(workspace_roots)} workspace root(s): "
            f"{len(projects)} project(s) in {duration_ms}ms"
        )
        return ScanOutcome(projects=projects, metadata=metadata)

    def _scan_roots(self, workspace_roots: Sequence[str]) -> List[ProjectRecord]:
        projects: List[ProjectRecord] = []
        seen = set()
        for root in workspace_roots:
            found = self._scanner.scan_directory(Path(root))
            LOGGER.debug(f"{root}: {len(found)} project(s)")
            # Overlapping roots must not yield the same project twice
            for project in found:
                if project.path not in seen:
                    seen.add(project.path)
                    projects.append(project)
        return projects
