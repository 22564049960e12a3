"""Core data models shared by the scanner, correlator and state layers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class GroupType(str, Enum):
    """How a project is clustered for display."""

    NONE = "none"
    FOLDER = "folder"
    MONOREPO = "monorepo"
    WORKTREE = "worktree"


def worktree_group_name(main_worktree: str) -> str:
    """Build the display group for projects sharing a main worktree.

    Args:
        main_worktree: Path of the main worktree.

    Returns:
        Group label such as ``"app (worktrees)"``.
    """
    basename = main_worktree.rstrip("/\\").replace("\\", "/").rsplit("/", 1)[-1]
    return f"{basename or main_worktree} (worktrees)"


@dataclass
class ProjectRecord:
    """A project discovered during a single scan.

    Records are built fresh on every scan. Post-processing steps replace
    records rather than mutating records owned by a previous scan.
    """

    path: str
    name: str
    language: str = ""
    category: str = "Unknown"
    framework: str = ""
    package_manager: str = "unknown"
    description: str = ""
    has_git: bool = False
    group: str = ""
    group_type: GroupType = GroupType.NONE
    is_monorepo_root: bool = False
    # Path of the monorepo root that emitted this record, set on the root too
    monorepo_root: str = ""
    worktree_id: str = ""

    def sort_key(self) -> tuple[str, str]:
        """Case-insensitive (group, name) ordering key."""
        return self.group.lower(), self.name.lower()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["group_type"] = self.group_type.value
        return data


@dataclass
class GitStatus:
    """Working-tree status of a single git repository."""

    project_path: str
    branch: str = ""
    is_dirty: bool = False
    modified_count: int = 0
    untracked_count: int = 0
    staged_count: int = 0
    ahead: int = 0
    behind: int = 0
    last_commit_message: str = ""
    last_commit_date: str = ""
    last_commit_epoch: Optional[int] = None
    remote_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)
