"""Monorepo workspace resolution.

Detects workspace-member declarations in a root manifest and expands them
into concrete project directories. Strategies are tried in order and only
the first one that yields any pattern is used:

1. ``pnpm-workspace.yaml`` ``packages`` list
2. ``package.json`` ``workspaces`` (array or ``{"packages": [...]}``)
3. ``Cargo.toml`` ``[workspace] members``
"""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import yaml

from devscope.core.logging import get_logger
from devscope.detection.detector import ProjectDetector
from devscope.detection.manifests import load_json, load_toml, read_text

LOGGER = get_logger(__name__)

PatternStrategy = Callable[[Path], Optional[List[str]]]


def _string_patterns(values: Any) -> List[str]:
    """Keep string patterns, dropping negations such as ``!packages/legacy``."""
    if not isinstance(values, list):
        return []
    return [v for v in values if isinstance(v, str) and v and not v.startswith("!")]


def detect_pnpm_workspace(root: Path) -> Optional[List[str]]:
    """Read package patterns from ``pnpm-workspace.yaml``."""
    content = read_text(root / "pnpm-workspace.yaml")
    if content is None:
        return None
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        LOGGER.debug(f"Invalid pnpm-workspace.yaml in {root}: {e}")
        return None
    if not isinstance(data, dict):
        return None
    return _string_patterns(data.get("packages")) or None


def detect_npm_workspaces(root: Path) -> Optional[List[str]]:
    """Read package patterns from the ``workspaces`` field of package.json."""
    data = load_json(root / "package.json")
    if data is None:
        return None
    workspaces = data.get("workspaces")
    if isinstance(workspaces, dict):
        # Yarn classic object form
        workspaces = workspaces.get("packages")
    return _string_patterns(workspaces) or None


def detect_cargo_workspace(root: Path) -> Optional[List[str]]:
    """Read member patterns from ``[workspace] members`` in Cargo.toml."""
    data = load_toml(root / "Cargo.toml")
    if data is None:
        return None
    workspace = data.get("workspace")
    if not isinstance(workspace, dict):
        return None
    return _string_patterns(workspace.get("members")) or None


STRATEGIES: Tuple[PatternStrategy, ...] = (
    detect_pnpm_workspace,
    detect_npm_workspaces,
    detect_cargo_workspace,
)


def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/")


def _child_dirs(directory: Path) -> List[Path]:
    try:
        return [child for child in directory.iterdir() if child.is_dir()]
    except OSError:
        return []


class MonorepoResolver:
    """Resolves workspace members of a monorepo root."""

    def __init__(
        self,
        detector: Optional[ProjectDetector] = None,
        strategies: Tuple[PatternStrategy, ...] = STRATEGIES,
    ) -> None:
        self._detector = detector or ProjectDetector()
        self._strategies = strategies

    def find_patterns(self, root: Path) -> Optional[List[str]]:
        """Return the member patterns of the first matching strategy."""
        for strategy in self._strategies:
            patterns = strategy(root)
            if patterns:
                LOGGER.debug(f"{strategy.__name__} found {len(patterns)} pattern(s) in {root}")
                return patterns
        return None

    def expand_pattern(self, root: Path, pattern: str) -> List[Path]:
        """Expand one member pattern into candidate directories.

        ``dir/*`` and ``dir/**`` list the immediate children of ``dir``.
        Other wildcard patterns list the parent of the last segment and
        keep names matching that segment. Literal patterns are taken as is.
        """
        pattern = _normalize_pattern(pattern)
        if pattern in ("", "."):
            return []

        if pattern.endswith("/**") or pattern.endswith("/*"):
            parent = pattern.rsplit("/", 1)[0]
            return _child_dirs(root / parent)

        if "*" in pattern or "?" in pattern or "[" in pattern:
            parent, _, last = pattern.rpartition("/")
            if any(ch in parent for ch in "*?["):
                return [p for p in root.glob(pattern) if p.is_dir()]
            base = root / parent if parent else root
            return [child for child in _child_dirs(base) if fnmatch(child.name, last)]

        candidate = root / pattern
        return [candidate] if candidate.is_dir() else []

    def resolve(self, root: Path, patterns: List[str]) -> List[Path]:
        """Expand patterns and keep only recognized project directories.

        Returns:
            Sorted, de-duplicated member paths.
        """
        resolved = set()
        for pattern in patterns:
            for candidate in self.expand_pattern(root, pattern):
                if candidate == root:
                    continue
                if self._detector.is_project_dir(candidate):
                    resolved.add(candidate)
        return sorted(resolved)

    def detect_monorepo_packages(self, root: Path) -> Optional[List[Path]]:
        """Detect the member packages of a monorepo root.

        Args:
            root: Candidate monorepo root.

        Returns:
            Member paths, or None when the root declares no members or none
            of the declared members is a project.
        """
        patterns = self.find_patterns(root)
        if not patterns:
            return None
        members = self.resolve(root, patterns)
        return members or None


def detect_monorepo_packages(
    root: Path,
    detector: Optional[ProjectDetector] = None,
) -> Optional[List[Path]]:
    """Detect monorepo members of ``root`` using the built-in strategies."""
    return MonorepoResolver(detector).detect_monorepo_packages(root)
