"""Workspace scanning.

Walks the immediate children of a workspace root and classifies each one:

- a project directory becomes a standalone record, or a monorepo root plus
  one record per resolved member;
- any other directory is a group folder whose immediate children are
  scanned once (never deeper).

The scanner reads the filesystem only; it runs no git commands.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Set

import pathspec

from devscope.core.git import has_git_dir
from devscope.core.logging import get_logger
from devscope.core.models import GroupType, ProjectRecord
from devscope.detection.detector import ProjectDetector
from devscope.detection.manifests import read_description, read_project_name
from devscope.workspace.monorepo import MonorepoResolver

LOGGER = get_logger(__name__)


def sort_projects(projects: Iterable[ProjectRecord]) -> List[ProjectRecord]:
    """Order records by (group, name), case-insensitively."""
    return sorted(projects, key=ProjectRecord.sort_key)


class WorkspaceScanner:
    """Discovers and classifies projects below workspace roots."""

    def __init__(
        self,
        detector: Optional[ProjectDetector] = None,
        resolver: Optional[MonorepoResolver] = None,
        exclude: Iterable[str] = (),
    ) -> None:
        """Initialize the scanner.

        Args:
            detector: Project detector. Defaults to the built-in registry.
            resolver: Monorepo resolver. Defaults to one sharing ``detector``.
            exclude: Gitignore-style patterns, relative to the workspace
                root, for directories that should be skipped.
        """
        self._detector = detector or ProjectDetector()
        self._resolver = resolver or MonorepoResolver(self._detector)
        self._skip_dirs = self._detector.registry.skip_dirs
        patterns = list(exclude)
        self._exclude_spec = (
            pathspec.PathSpec.from_lines("gitignore", patterns) if patterns else None
        )

    def scan_directory(self, root: Path) -> List[ProjectRecord]:
        """Scan one workspace root.

        Args:
            root: Workspace root directory.

        Returns:
            Records ordered by (group, name), case-insensitively. Empty if
            the root does not exist or cannot be read.
        """
        root = Path(root)
        if not root.is_dir():
            LOGGER.debug(f"Workspace root is not a directory: {root}")
            return []

        projects: List[ProjectRecord] = []
        seen: Set[str] = set()

        for child in self._child_dirs(root, relative_to=root):
            try:
                if self._detector.is_project_dir(child):
                    self._add_project_tree(child, projects, seen)
                else:
                    self._scan_group(child, root, projects, seen)
            except OSError as e:
                LOGGER.debug(f"Skipping {child}: {e}")

        return sort_projects(projects)

    def scan_monorepo_packages(self, root: Path) -> List[ProjectRecord]:
        """Return only the member records of a monorepo root.

        Args:
            root: Monorepo root directory.

        Returns:
            Member records sharing the root's group, or an empty list when
            the directory is not a monorepo.
        """
        root = Path(root)
        members = self._resolver.detect_monorepo_packages(root)
        if not members:
            return []
        packages = []
        for member in members:
            record = self.make_project(member, root.name, GroupType.MONOREPO)
            if record is not None:
                record.monorepo_root = str(root)
                packages.append(record)
        return packages

    def make_project(
        self,
        path: Path,
        group: str,
        group_type: GroupType,
    ) -> Optional[ProjectRecord]:
        """Build a record for a directory, or None if it is not a project."""
        detection = self._detector.detect(path)
        if detection is None:
            return None

        return ProjectRecord(
            path=str(path),
            name=read_project_name(path) or path.name,
            language=detection.language_display,
            category=detection.category_display,
            framework=detection.framework,
            package_manager=detection.package_manager.value,
            description=read_description(path),
            has_git=has_git_dir(path),
            group=group,
            group_type=group_type,
        )

    def _add_project_tree(
        self,
        path: Path,
        projects: List[ProjectRecord],
        seen: Set[str],
    ) -> None:
        members = self._resolver.detect_monorepo_packages(path)
        if not members:
            self._append(self.make_project(path, "", GroupType.NONE), projects, seen)
            return

        group = path.name
        root_record = self.make_project(path, group, GroupType.MONOREPO)
        if root_record is not None:
            root_record.is_monorepo_root = True
            root_record.monorepo_root = str(path)
            self._append(root_record, projects, seen)

        for member in members:
            record = self.make_project(member, group, GroupType.MONOREPO)
            if record is not None:
                record.monorepo_root = str(path)
            self._append(record, projects, seen)

    def _scan_group(
        self,
        folder: Path,
        root: Path,
        projects: List[ProjectRecord],
        seen: Set[str],
    ) -> None:
        for child in self._child_dirs(folder, relative_to=root):
            try:
                record = self.make_project(child, folder.name, GroupType.FOLDER)
            except OSError as e:
                LOGGER.debug(f"Skipping {child}: {e}")
                continue
            self._append(record, projects, seen)

    @staticmethod
    def _append(
        record: Optional[ProjectRecord],
        projects: List[ProjectRecord],
        seen: Set[str],
    ) -> None:
        if record is None or record.path in seen:
            return
        seen.add(record.path)
        projects.append(record)

    def _child_dirs(self, directory: Path, relative_to: Path) -> List[Path]:
        """List visible, non-excluded child directories.

        Permission errors and entries removed mid-scan are skipped.
        """
        try:
            entries = sorted(os.scandir(directory), key=lambda e: e.name)
        except OSError as e:
            LOGGER.debug(f"Cannot read {directory}: {e}")
            return []

        children = []
        for entry in entries:
            name = entry.name
            if name.startswith(".") or name in self._skip_dirs:
                continue
            try:
                if not entry.is_dir():
                    continue
            except OSError:
                continue
            path = Path(entry.path)
            if self._is_excluded(path, relative_to):
                continue
            children.append(path)
        return children

    def _is_excluded(self, path: Path, root: Path) -> bool:
        if self._exclude_spec is None:
            return False
        relative = path.relative_to(root).as_posix()
        return self._exclude_spec.match_file(f"{relative}/")


def scan_directory(root: Path) -> List[ProjectRecord]:
    """Scan a workspace root with the built-in registry."""
    return WorkspaceScanner().scan_directory(root)
