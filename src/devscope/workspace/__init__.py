"""Workspace discovery: scanning, monorepo resolution and worktree grouping."""

from devscope.workspace.monorepo import MonorepoResolver, detect_monorepo_packages
from devscope.workspace.scanner import WorkspaceScanner, scan_directory, sort_projects
from devscope.workspace.worktrees import (
    WorktreeCorrelator,
    WorktreeProbe,
    apply_worktree_groups,
)

__all__ = [
    "MonorepoResolver",
    "WorkspaceScanner",
    "WorktreeCorrelator",
    "WorktreeProbe",
    "apply_worktree_groups",
    "detect_monorepo_packages",
    "scan_directory",
    "sort_projects",
]
