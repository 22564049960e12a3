"""Type definitions for the project detection registry.

All registry types are frozen dataclasses or string enums so that a
registry, once built, can be shared between threads without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class AppCategory(str, Enum):
    """Application category used for classification."""

    DESKTOP_APP = "desktop_app"
    MOBILE_APP = "mobile_app"
    WEB_APP = "web_app"
    BACKEND = "backend"
    LIBRARY = "library"
    CLI = "cli"
    UNKNOWN = "unknown"

    @property
    def display_name(self) -> str:
        """Human-readable category name."""
        return _CATEGORY_DISPLAY[self]


_CATEGORY_DISPLAY: Dict[AppCategory, str] = {
    AppCategory.DESKTOP_APP: "Desktop App",
    AppCategory.MOBILE_APP: "Mobile App",
    AppCategory.WEB_APP: "Web App",
    AppCategory.BACKEND: "Backend",
    AppCategory.LIBRARY: "Library",
    AppCategory.CLI: "CLI",
    AppCategory.UNKNOWN: "Unknown",
}


class Language(str, Enum):
    """Primary language or ecosystem of a project."""

    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUST = "rust"
    GO = "go"
    JAVA = "java"
    SWIFT = "swift"
    RUBY = "ruby"
    PHP = "php"
    CSHARP = "csharp"
    DART = "dart"
    ELIXIR = "elixir"
    UNKNOWN = "unknown"


class PackageManager(str, Enum):
    """Package manager identifier. Values are the display names."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"
    CARGO = "cargo"
    GO_MOD = "go mod"
    PIP = "pip"
    UV = "uv"
    POETRY = "poetry"
    PIPENV = "pipenv"
    BUNDLER = "bundler"
    COMPOSER = "composer"
    MAVEN = "maven"
    GRADLE = "gradle"
    PUB = "pub"
    SWIFT = "swift"
    NUGET = "nuget"
    DOTNET = "dotnet"
    MIX = "mix"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FrameworkRule:
    """Framework detection rule matched against manifest content.

    Patterns are matched as case-insensitive substrings. With ``match_all``
    every pattern must be present, otherwise any single one suffices.
    """

    name: str
    patterns: Tuple[str, ...]
    category: AppCategory
    priority: int
    match_all: bool = False

    def matches(self, content_lower: str) -> bool:
        """Check the rule against already lowercased manifest content."""
        if not self.patterns:
            return False
        hits = (pattern.lower() in content_lower for pattern in self.patterns)
        return all(hits) if self.match_all else any(hits)


@dataclass(frozen=True)
class LockfileEntry:
    """Lockfile name mapped to the package manager that writes it."""

    file: str
    manager: PackageManager


@dataclass(frozen=True)
class LanguageEntry:
    """One language ecosystem in the registry."""

    language: Language
    display_name: str
    manifest: str
    alt_manifests: Tuple[str, ...] = ()
    frameworks: Tuple[FrameworkRule, ...] = ()
    lockfiles: Tuple[LockfileEntry, ...] = ()
    default_manager: PackageManager = PackageManager.UNKNOWN
    default_category: AppCategory = AppCategory.LIBRARY
    default_framework: str = ""

    @property
    def all_manifests(self) -> Tuple[str, ...]:
        """Primary manifest followed by the alternates."""
        return (self.manifest,) + self.alt_manifests

    def rules_by_priority(self) -> Tuple[FrameworkRule, ...]:
        """Framework rules, highest priority first.

        The sort is stable, so rules with equal priority keep their
        declaration order.
        """
        return tuple(sorted(self.frameworks, key=lambda rule: -rule.priority))


@dataclass(frozen=True)
class DetectionResult:
    """Result of classifying a single directory."""

    language: Language
    language_display: str
    framework: str
    category: AppCategory
    package_manager: PackageManager

    @property
    def category_display(self) -> str:
        """Human-readable category."""
        return self.category.display_name


@dataclass(frozen=True)
class DetectionRegistry:
    """Immutable, ordered collection of language entries.

    Entry order is significant: the first entry whose primary manifest is
    present wins, so more specific ecosystems must be declared first.
    """

    entries: Tuple[LanguageEntry, ...]
    skip_dirs: frozenset = field(default_factory=frozenset)

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, language: Language) -> LanguageEntry:
        """Look up the entry for a language.

        Raises:
            KeyError: If the language is not registered.
        """
        for entry in self.entries:
            if entry.language == language:
                return entry
        raise KeyError(f"Language not registered: {language.value}")
