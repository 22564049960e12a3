"""Manifest probing helpers.

Locates and reads manifest files for a directory. Every reader here is
forgiving: a missing, unreadable or malformed file yields an empty result
rather than an exception.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from devscope.core.logging import get_logger
from devscope.core.utils import get_tomllib
from devscope.detection.types import LanguageEntry

LOGGER = get_logger(__name__)

_tomllib = get_tomllib()


def is_glob(manifest: str) -> bool:
    """Check whether a manifest name is a ``*.ext`` style pattern."""
    return "*" in manifest


def manifest_exists(directory: Path, manifest: str) -> bool:
    """Check if a manifest file exists in a directory.

    Glob manifests such as ``*.csproj`` match any entry whose name ends with
    the part after the wildcard.

    Args:
        directory: Directory to check.
        manifest: Manifest file name or ``*.ext`` pattern.

    Returns:
        True if the manifest is present.
    """
    if not is_glob(manifest):
        return (directory / manifest).exists()

    suffix = manifest.lstrip("*")
    try:
        return any(child.name.endswith(suffix) for child in directory.iterdir())
    except OSError:
        return False


def read_text(path: Path) -> Optional[str]:
    """Read a file as UTF-8 text.

    Args:
        path: File to read.

    Returns:
        File content, or None if the file is missing or unreadable.
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None


def read_manifest_content(directory: Path, entry: LanguageEntry) -> str:
    """Read the content of the best manifest for a language entry.

    The primary manifest is tried first, then each non-glob alternate.
    The first successful read wins.

    Args:
        directory: Project directory.
        entry: Matched language entry.

    Returns:
        Manifest content, or an empty string.
    """
    for manifest in entry.all_manifests:
        if is_glob(manifest):
            continue
        content = read_text(directory / manifest)
        if content is not None:
            return content
    return ""


def load_json(path: Path) -> Optional[Dict[str, Any]]:
    """Parse a JSON object file, returning None on any failure."""
    content = read_text(path)
    if content is None:
        return None
    try:
        data = json.loads(content)
    except ValueError as e:
        LOGGER.debug(f"Malformed JSON in {path}: {e}")
        return None
    return data if isinstance(data, dict) else None


def load_toml(path: Path) -> Optional[Dict[str, Any]]:
    """Parse a TOML file, returning None if it is missing or malformed."""
    if _tomllib is None:
        return None
    content = read_text(path)
    if content is None:
        return None
    try:
        return _tomllib.loads(content)
    except _tomllib.TOMLDecodeError as e:
        LOGGER.debug(f"Malformed TOML in {path}: {e}")
        return None


def _cargo_package(directory: Path) -> Dict[str, Any]:
    data = load_toml(directory / "Cargo.toml") or {}
    package = data.get("package")
    return package if isinstance(package, dict) else {}


def read_project_name(directory: Path) -> Optional[str]:
    """Read the declared project name.

    Checks ``package.json`` ``name`` and then ``[package] name`` in
    ``Cargo.toml``.

    Args:
        directory: Project directory.

    Returns:
        Declared name, or None if none is declared.
    """
    package_json = load_json(directory / "package.json")
    if package_json:
        name = package_json.get("name")
        if isinstance(name, str) and name:
            return name

    name = _cargo_package(directory).get("name")
    if isinstance(name, str) and name:
        return name
    return None


def read_description(directory: Path) -> str:
    """Read the declared project description, or an empty string."""
    package_json = load_json(directory / "package.json")
    if package_json:
        description = package_json.get("description")
        if isinstance(description, str) and description:
            return description

    description = _cargo_package(directory).get("description")
    if isinstance(description, str):
        return description
    return ""
