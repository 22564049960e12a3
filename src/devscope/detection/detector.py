"""Detection engine for language, framework, category and package manager.

The engine is driven entirely by a ``DetectionRegistry``. The only
hard-coded knowledge lives in ``MARKER_OVERRIDES``: a fixed, ordered list of
marker-file checks per language that run before the generic rule matching.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from devscope.core.logging import get_logger
from devscope.detection.manifests import (
    manifest_exists,
    read_manifest_content,
    read_text,
)
from devscope.detection.registry import default_registry
from devscope.detection.types import (
    AppCategory,
    DetectionRegistry,
    DetectionResult,
    Language,
    LanguageEntry,
    PackageManager,
)

LOGGER = get_logger(__name__)

FrameworkMatch = Tuple[str, AppCategory]

# A marker override inspects the directory and the lowercased manifest
# content and either claims the project or returns None.
MarkerOverride = Callable[[Path, str], Optional[FrameworkMatch]]

# Maximum number of entries inspected per directory when looking for
# SwiftUI sources.
SWIFT_SOURCE_SCAN_LIMIT = 20

# Extra files whose content is appended to the manifest before rule matching.
# Languages whose marker overrides are the only classification: when none
# matches, the entry defaults apply and generic rules are skipped.
OVERRIDE_ONLY_LANGUAGES = frozenset({Language.DART, Language.SWIFT})

SUPPLEMENTARY_MANIFESTS: Dict[Language, Tuple[str, ...]] = {
    Language.PYTHON: ("requirements.txt",),
}


def _tauri_directory(path: Path, content: str) -> Optional[FrameworkMatch]:
    if (path / "src-tauri").exists():
        return "Tauri", AppCategory.DESKTOP_APP
    return None


def _django_manage_py(path: Path, content: str) -> Optional[FrameworkMatch]:
    if (path / "manage.py").exists():
        return "Django", AppCategory.BACKEND
    return None


def _android_project(path: Path, content: str) -> Optional[FrameworkMatch]:
    has_gradle = (path / "build.gradle").exists() or (path / "build.gradle.kts").exists()
    has_app = (path / "app").exists() or (path / "src" / "main" / "AndroidManifest.xml").exists()
    if has_gradle and has_app:
        return "Android", AppCategory.MOBILE_APP
    return None


def _flutter_platforms(path: Path, content: str) -> Optional[FrameworkMatch]:
    if "flutter" not in content:
        return None

    has_mobile = (path / "android").exists() or (path / "ios").exists()
    has_desktop = any((path / name).exists() for name in ("macos", "linux", "windows"))

    if has_mobile:
        # Cross-platform apps are classified mobile-first
        category = AppCategory.MOBILE_APP
    elif has_desktop:
        category = AppCategory.DESKTOP_APP
    elif (path / "web").exists():
        category = AppCategory.WEB_APP
    else:
        category = AppCategory.LIBRARY
    return "Flutter", category


def _swiftui_sources(path: Path, content: str) -> Optional[FrameworkMatch]:
    for directory in (path / "Sources", path / "src", path):
        try:
            children = sorted(directory.iterdir())[:SWIFT_SOURCE_SCAN_LIMIT]
        except OSError:
            continue
        for child in children:
            if child.suffix != ".swift":
                continue
            source = read_text(child)
            if source and "SwiftUI" in source:
                return "SwiftUI", AppCategory.MOBILE_APP
    return None


def _vapor_package(path: Path, content: str) -> Optional[FrameworkMatch]:
    if "vapor" in content:
        return "Vapor", AppCategory.BACKEND
    return None


def _xcode_layout(path: Path, content: str) -> Optional[FrameworkMatch]:
    try:
        names = [child.name for child in path.iterdir()]
    except OSError:
        return None

    has_xcode = (path / "Package.swift").exists() or any(
        name.endswith((".xcodeproj", ".xcworkspace")) for name in names
    )
    if not has_xcode:
        return None

    has_ios = (path / "ios").exists()
    has_macos = (path / "macos").exists() or (path / "macOS").exists()
    has_app_plist = any(
        (path / plist).exists()
        for plist in ("Info.plist", "iOS/Info.plist", "macOS/Info.plist")
    )

    if has_ios or has_app_plist:
        if has_macos:
            return "Swift", AppCategory.DESKTOP_APP
        return "Swift", AppCategory.MOBILE_APP
    if has_macos:
        return "Swift", AppCategory.DESKTOP_APP
    return None


MARKER_OVERRIDES: Mapping[Language, Tuple[MarkerOverride, ...]] = {
    Language.JAVASCRIPT: (_tauri_directory,),
    Language.PYTHON: (_django_manage_py,),
    Language.JAVA: (_android_project,),
    Language.DART: (_flutter_platforms,),
    Language.SWIFT: (_swiftui_sources, _vapor_package, _xcode_layout),
}


class ProjectDetector:
    """Classifies directories using an immutable detection registry."""

    def __init__(
        self,
        registry: Optional[DetectionRegistry] = None,
        overrides: Optional[Mapping[Language, Sequence[MarkerOverride]]] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            registry: Registry to use. Defaults to the built-in registry.
            overrides: Marker overrides per language. Defaults to
                ``MARKER_OVERRIDES``; pass an empty mapping to disable them.
        """
        self._registry = registry if registry is not None else default_registry()
        self._overrides = MARKER_OVERRIDES if overrides is None else overrides

    @property
    def registry(self) -> DetectionRegistry:
        """The registry driving this detector."""
        return self._registry

    def detect(self, path: Path) -> Optional[DetectionResult]:
        """Detect language, framework, category and package manager.

        Args:
            path: Directory to classify.

        Returns:
            DetectionResult, or None if no manifest is recognized.
        """
        entry = self.detect_language_entry(path)
        if entry is None:
            return None

        content = read_manifest_content(path, entry)
        framework, category = self.detect_framework(path, entry, content)
        package_manager = self.detect_package_manager_for_entry(path, entry)

        return DetectionResult(
            language=entry.language,
            language_display=entry.display_name,
            framework=framework,
            category=category,
            package_manager=package_manager,
        )

    def is_project_dir(self, path: Path) -> bool:
        """Check if a directory contains any registered manifest."""
        return any(
            manifest_exists(path, manifest)
            for entry in self._registry
            for manifest in entry.all_manifests
        )

    def detect_language_entry(self, path: Path) -> Optional[LanguageEntry]:
        """Find the registry entry matching a directory.

        Primary manifests are checked across all entries before any
        alternate manifest, so a ``pyproject.toml`` beats a stray
        ``build.gradle`` regardless of registry order.
        """
        for entry in self._registry:
            if manifest_exists(path, entry.manifest):
                return entry

        for entry in self._registry:
            for manifest in entry.alt_manifests:
                if manifest_exists(path, manifest):
                    return entry

        return None

    def detect_framework(
        self,
        path: Path,
        entry: LanguageEntry,
        content: str,
    ) -> FrameworkMatch:
        """Resolve framework and category for a matched entry.

        Args:
            path: Project directory.
            entry: Matched language entry.
            content: Raw manifest content.

        Returns:
            Tuple of (framework name, category).
        """
        content_lower = content.lower()

        overrides = self._overrides.get(entry.language, ())
        for override in overrides:
            match = override(path, content_lower)
            if match is not None:
                return match
        if overrides and entry.language in OVERRIDE_ONLY_LANGUAGES:
            return entry.default_framework, entry.default_category

        for extra in SUPPLEMENTARY_MANIFESTS.get(entry.language, ()):
            extra_content = read_text(path / extra)
            if extra_content:
                content_lower = f"{content_lower}\n{extra_content.lower()}"

        for rule in entry.rules_by_priority():
            if rule.matches(content_lower):
                return rule.name, rule.category

        return entry.default_framework, entry.default_category

    def detect_package_manager_for_entry(
        self,
        path: Path,
        entry: LanguageEntry,
    ) -> PackageManager:
        """Detect the package manager, preferring the entry's own lockfiles."""
        for lockfile in entry.lockfiles:
            if (path / lockfile.file).exists():
                return lockfile.manager

        for other in self._registry:
            if other.language == entry.language:
                continue
            for lockfile in other.lockfiles:
                if (path / lockfile.file).exists():
                    return lockfile.manager

        return entry.default_manager

    def detect_package_manager(self, path: Path) -> PackageManager:
        """Detect a package manager from any registered lockfile."""
        for entry in self._registry:
            for lockfile in entry.lockfiles:
                if (path / lockfile.file).exists():
                    return lockfile.manager
        return PackageManager.UNKNOWN


def detect(path: Path) -> Optional[DetectionResult]:
    """Classify a directory with the built-in registry.

    Args:
        path: Directory to classify.

    Returns:
        DetectionResult, or None if the directory is not a project.
    """
    return ProjectDetector().detect(path)
