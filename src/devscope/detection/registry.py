"""Registry data for all supported languages and frameworks.

This is the single source of truth for project detection. Frameworks are
declared with their content patterns, category and priority; the detector
never hard-codes a framework name outside this module except for the
marker-file overrides in ``detector.py``.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from devscope.detection.types import (
    AppCategory,
    DetectionRegistry,
    FrameworkRule,
    Language,
    LanguageEntry,
    LockfileEntry,
    PackageManager,
)

_DESKTOP = AppCategory.DESKTOP_APP
_MOBILE = AppCategory.MOBILE_APP
_WEB = AppCategory.WEB_APP
_BACKEND = AppCategory.BACKEND


def _rule(
    name: str,
    patterns: Tuple[str, ...],
    category: AppCategory,
    priority: int,
    match_all: bool = False,
) -> FrameworkRule:
    return FrameworkRule(
        name=name,
        patterns=patterns,
        category=category,
        priority=priority,
        match_all=match_all,
    )


# JavaScript/TypeScript frameworks. Patterns include the JSON quotes so that
# "react" does not match "react-native" or "preact".
JS_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    # Desktop
    _rule("Tauri", ('"tauri"', '"@tauri-apps'), _DESKTOP, 100),
    _rule("Electron", ('"electron"', '"electron-builder"'), _DESKTOP, 99),
    # Mobile
    _rule("Expo", ('"expo"',), _MOBILE, 95),
    _rule("React Native", ('"react-native"',), _MOBILE, 94),
    _rule("Capacitor", ('"@capacitor/core"', '"@capacitor/cli"'), _MOBILE, 93),
    _rule("Cordova", ('"cordova"',), _MOBILE, 92),
    _rule("NativeScript", ('"nativescript"', '"@nativescript'), _MOBILE, 91),
    # Meta-frameworks
    _rule("Next.js", ('"next"',), _WEB, 85),
    _rule("Nuxt", ('"nuxt"', '"@nuxt'), _WEB, 84),
    _rule("SvelteKit", ('"@sveltejs/kit"',), _WEB, 83),
    _rule("Remix", ('"remix"', '"@remix-run'), _WEB, 82),
    _rule("Astro", ('"astro"',), _WEB, 81),
    _rule("Gatsby", ('"gatsby"',), _WEB, 80),
    # UI libraries
    _rule("React + Vite", ('"react"', '"vite"'), _WEB, 75, match_all=True),
    _rule("React", ('"react"',), _WEB, 70),
    _rule("Vue", ('"vue"',), _WEB, 69),
    _rule("Svelte", ('"svelte"',), _WEB, 68),
    _rule("Angular", ('"angular"', '"@angular'), _WEB, 67),
    _rule("SolidJS", ('"solid-js"',), _WEB, 66),
    _rule("Qwik", ('"qwik"', '"@builder.io/qwik"'), _WEB, 65),
    _rule("Preact", ('"preact"',), _WEB, 64),
    # Backend
    _rule("NestJS", ('"@nestjs/core"', '"@nestjs'), _BACKEND, 60),
    _rule("Express", ('"express"',), _BACKEND, 55),
    _rule("Fastify", ('"fastify"',), _BACKEND, 54),
    _rule("Hono", ('"hono"',), _BACKEND, 53),
    _rule("Koa", ('"koa"',), _BACKEND, 52),
    _rule("Elysia", ('"elysia"',), _BACKEND, 51),
)

JS_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("pnpm-lock.yaml", PackageManager.PNPM),
    LockfileEntry("yarn.lock", PackageManager.YARN),
    LockfileEntry("bun.lock", PackageManager.BUN),
    LockfileEntry("bun.lockb", PackageManager.BUN),
    LockfileEntry("package-lock.json", PackageManager.NPM),
)

RUST_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Tauri", ("tauri",), _DESKTOP, 100),
    _rule("Iced", ("iced",), _DESKTOP, 95),
    _rule("egui", ("egui", "eframe"), _DESKTOP, 94),
    _rule("Slint", ("slint",), _DESKTOP, 93),
    _rule("Druid", ("druid",), _DESKTOP, 92),
    _rule("Dioxus Desktop", ("dioxus-desktop",), _DESKTOP, 90),
    _rule("Dioxus Mobile", ("dioxus-mobile",), _MOBILE, 89),
    _rule("Dioxus", ("dioxus",), _WEB, 85),
    _rule("Leptos", ("leptos",), _WEB, 80),
    _rule("Yew", ("yew",), _WEB, 79),
    _rule("Sycamore", ("sycamore",), _WEB, 78),
    _rule("Axum", ("axum",), _BACKEND, 70),
    _rule("Actix", ("actix", "actix-web"), _BACKEND, 69),
    _rule("Rocket", ("rocket",), _BACKEND, 68),
    _rule("Warp", ("warp",), _BACKEND, 67),
    _rule("Tide", ("tide",), _BACKEND, 66),
    _rule("Poem", ("poem",), _BACKEND, 65),
)

RUST_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("Cargo.lock", PackageManager.CARGO),
)

PYTHON_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("PyQt", ("pyqt", "pyside"), _DESKTOP, 90),
    _rule("Tkinter", ("tkinter", "customtkinter"), _DESKTOP, 85),
    _rule("Kivy", ("kivy",), _MOBILE, 80),
    _rule("Flet", ("flet",), _WEB, 75),
    _rule("Textual", ("textual",), AppCategory.CLI, 74),
    _rule("Django", ("django",), _BACKEND, 70),
    _rule("FastAPI", ("fastapi",), _BACKEND, 69),
    _rule("Flask", ("flask",), _BACKEND, 68),
    _rule("Starlette", ("starlette",), _BACKEND, 67),
    _rule("Litestar", ("litestar",), _BACKEND, 66),
    _rule("Sanic", ("sanic",), _BACKEND, 65),
)

PYTHON_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("uv.lock", PackageManager.UV),
    LockfileEntry("poetry.lock", PackageManager.POETRY),
    LockfileEntry("Pipfile.lock", PackageManager.PIPENV),
)

GO_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Fyne", ("fyne.io/fyne",), _DESKTOP, 90),
    _rule("Wails", ("github.com/wailsapp/wails",), _DESKTOP, 89),
    _rule("Gin", ("gin-gonic",), _BACKEND, 70),
    _rule("Fiber", ("gofiber/fiber",), _BACKEND, 69),
    _rule("Echo", ("labstack/echo",), _BACKEND, 68),
    _rule("Chi", ("go-chi/chi",), _BACKEND, 67),
    _rule("Gorilla", ("gorilla/mux",), _BACKEND, 66),
    _rule("Buffalo", ("gobuffalo/buffalo",), _BACKEND, 65),
)

GO_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("go.sum", PackageManager.GO_MOD),
)

JAVA_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Android", ("com.android.application", "AndroidManifest.xml"), _MOBILE, 95),
    _rule("Spring Boot", ("org.springframework.boot", "spring-boot"), _BACKEND, 70),
    _rule("Quarkus", ("io.quarkus", "quarkus"), _BACKEND, 69),
    _rule("Micronaut", ("io.micronaut", "micronaut"), _BACKEND, 68),
    _rule("Ktor", ("io.ktor", "ktor"), _BACKEND, 67),
    _rule("Vert.x", ("io.vertx", "vertx"), _BACKEND, 66),
)

CSHARP_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("MAUI", ("Microsoft.Maui", "UseMaui"), _DESKTOP, 95),
    _rule("WPF", ("UseWPF", "PresentationFramework"), _DESKTOP, 94),
    _rule("WinForms", ("UseWindowsForms", "System.Windows.Forms"), _DESKTOP, 93),
    _rule("Avalonia", ("Avalonia",), _DESKTOP, 92),
    _rule("Blazor", ("Microsoft.AspNetCore.Components", "Blazor"), _WEB, 85),
    _rule("ASP.NET Core", ("Microsoft.AspNetCore", "WebApplication"), _BACKEND, 70),
)

CSHARP_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("packages.lock.json", PackageManager.NUGET),
)

PHP_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Laravel", ("laravel/framework", "laravel/laravel"), _BACKEND, 70),
    _rule("Symfony", ("symfony/framework-bundle", "symfony/symfony"), _BACKEND, 69),
    _rule("CodeIgniter", ("codeigniter4/framework", "codeigniter"), _BACKEND, 68),
    _rule("CakePHP", ("cakephp/cakephp",), _BACKEND, 67),
    _rule("Slim", ("slim/slim",), _BACKEND, 66),
)

PHP_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("composer.lock", PackageManager.COMPOSER),
)

RUBY_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Rails", ("rails", "railties"), _BACKEND, 70),
    _rule("Sinatra", ("sinatra",), _BACKEND, 69),
    _rule("Hanami", ("hanami",), _BACKEND, 68),
    _rule("Grape", ("grape",), _BACKEND, 67),
)

RUBY_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("Gemfile.lock", PackageManager.BUNDLER),
)

SWIFT_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("SwiftUI", ("SwiftUI",), _MOBILE, 90),
    _rule("UIKit", ("UIKit",), _MOBILE, 85),
    _rule("Vapor", ("vapor/vapor", "Vapor"), _BACKEND, 70),
    _rule("Hummingbird", ("hummingbird-project/hummingbird",), _BACKEND, 69),
)

SWIFT_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("Package.resolved", PackageManager.SWIFT),
    LockfileEntry("Podfile.lock", PackageManager.SWIFT),
)

DART_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Flutter", ("flutter",), _MOBILE, 90),
    _rule("Shelf", ("shelf",), _BACKEND, 70),
    _rule("Serverpod", ("serverpod",), _BACKEND, 69),
)

DART_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("pubspec.lock", PackageManager.PUB),
)

ELIXIR_FRAMEWORKS: Tuple[FrameworkRule, ...] = (
    _rule("Phoenix", ("phoenix", ":phoenix"), _BACKEND, 70),
    _rule("Phoenix LiveView", ("phoenix_live_view",), _WEB, 75),
    _rule("Nerves", ("nerves",), _DESKTOP, 80),
)

ELIXIR_LOCKFILES: Tuple[LockfileEntry, ...] = (
    LockfileEntry("mix.lock", PackageManager.MIX),
)

# Registry order is detection order for primary manifests.
LANGUAGE_ENTRIES: Tuple[LanguageEntry, ...] = (
    LanguageEntry(
        language=Language.JAVASCRIPT,
        display_name="JavaScript/TypeScript",
        manifest="package.json",
        frameworks=JS_FRAMEWORKS,
        lockfiles=JS_LOCKFILES,
        default_manager=PackageManager.NPM,
        default_category=AppCategory.LIBRARY,
        default_framework="Node.js",
    ),
    LanguageEntry(
        language=Language.PYTHON,
        display_name="Python",
        manifest="pyproject.toml",
        alt_manifests=("requirements.txt", "setup.py"),
        frameworks=PYTHON_FRAMEWORKS,
        lockfiles=PYTHON_LOCKFILES,
        default_manager=PackageManager.PIP,
        default_category=AppCategory.LIBRARY,
        default_framework="Python",
    ),
    LanguageEntry(
        language=Language.JAVA,
        display_name="Java",
        manifest="pom.xml",
        alt_manifests=("build.gradle", "build.gradle.kts"),
        frameworks=JAVA_FRAMEWORKS,
        default_manager=PackageManager.MAVEN,
        default_category=AppCategory.LIBRARY,
        default_framework="Java",
    ),
    LanguageEntry(
        language=Language.CSHARP,
        display_name="C#",
        manifest="*.csproj",
        alt_manifests=("*.sln", "*.fsproj"),
        frameworks=CSHARP_FRAMEWORKS,
        lockfiles=CSHARP_LOCKFILES,
        default_manager=PackageManager.DOTNET,
        default_category=AppCategory.LIBRARY,
        default_framework=".NET",
    ),
    LanguageEntry(
        language=Language.PHP,
        display_name="PHP",
        manifest="composer.json",
        frameworks=PHP_FRAMEWORKS,
        lockfiles=PHP_LOCKFILES,
        default_manager=PackageManager.COMPOSER,
        default_category=AppCategory.BACKEND,
        default_framework="PHP",
    ),
    LanguageEntry(
        language=Language.GO,
        display_name="Go",
        manifest="go.mod",
        frameworks=GO_FRAMEWORKS,
        lockfiles=GO_LOCKFILES,
        default_manager=PackageManager.GO_MOD,
        default_category=AppCategory.LIBRARY,
        default_framework="Go",
    ),
    LanguageEntry(
        language=Language.RUST,
        display_name="Rust",
        manifest="Cargo.toml",
        frameworks=RUST_FRAMEWORKS,
        lockfiles=RUST_LOCKFILES,
        default_manager=PackageManager.CARGO,
        default_category=AppCategory.LIBRARY,
        default_framework="Rust",
    ),
    LanguageEntry(
        language=Language.RUBY,
        display_name="Ruby",
        manifest="Gemfile",
        frameworks=RUBY_FRAMEWORKS,
        lockfiles=RUBY_LOCKFILES,
        default_manager=PackageManager.BUNDLER,
        default_category=AppCategory.BACKEND,
        default_framework="Ruby",
    ),
    LanguageEntry(
        language=Language.SWIFT,
        display_name="Swift",
        manifest="Package.swift",
        frameworks=SWIFT_FRAMEWORKS,
        lockfiles=SWIFT_LOCKFILES,
        default_manager=PackageManager.SWIFT,
        default_category=AppCategory.MOBILE_APP,
        default_framework="Swift",
    ),
    LanguageEntry(
        language=Language.DART,
        display_name="Dart",
        manifest="pubspec.yaml",
        frameworks=DART_FRAMEWORKS,
        lockfiles=DART_LOCKFILES,
        default_manager=PackageManager.PUB,
        default_category=AppCategory.MOBILE_APP,
        default_framework="Dart",
    ),
    LanguageEntry(
        language=Language.ELIXIR,
        display_name="Elixir",
        manifest="mix.exs",
        frameworks=ELIXIR_FRAMEWORKS,
        lockfiles=ELIXIR_LOCKFILES,
        default_manager=PackageManager.MIX,
        default_category=AppCategory.BACKEND,
        default_framework="Elixir",
    ),
)

# Directories that are never descended into during project scanning
SKIP_DIRS = frozenset(
    {
        "node_modules",
        "target",
        "dist",
        "build",
        ".git",
        "__pycache__",
        "vendor",
        ".next",
        ".nuxt",
        "venv",
        ".venv",
        "_build",
        "deps",
        ".dart_tool",
        "Pods",
        "DerivedData",
        ".gradle",
        "bin",
        "obj",
    }
)


@lru_cache(maxsize=1)
def default_registry() -> DetectionRegistry:
    """Build the built-in registry.

    The registry is immutable, so the same instance is returned on every
    call.
    """
    return DetectionRegistry(entries=LANGUAGE_ENTRIES, skip_dirs=SKIP_DIRS)
