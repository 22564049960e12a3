"""Project detection: registry, manifest probing and classification."""

from __future__ import annotations

from devscope.detection.detector import MARKER_OVERRIDES, ProjectDetector, detect
from devscope.detection.registry import SKIP_DIRS, default_registry
from devscope.detection.types import (
    AppCategory,
    DetectionRegistry,
    DetectionResult,
    FrameworkRule,
    Language,
    LanguageEntry,
    LockfileEntry,
    PackageManager,
)

__all__ = [
    "MARKER_OVERRIDES",
    "ProjectDetector",
    "detect",
    "SKIP_DIRS",
    "default_registry",
    "AppCategory",
    "DetectionRegistry",
    "DetectionResult",
    "FrameworkRule",
    "Language",
    "LanguageEntry",
    "LockfileEntry",
    "PackageManager",
]
