"""Configuration validation for devscope.

Checks known keys and value types and warns on anything unknown. Validation
never raises; problems are returned as warnings and logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from devscope.config.models import CACHE_KINDS
from devscope.core.logging import get_logger

LOGGER = get_logger(__name__)

VALID_TOP_LEVEL_KEYS: Set[str] = {"cache", "scan", "git", "storage"}

VALID_SECTION_KEYS: Dict[str, Set[str]] = {
    "cache": {"ttl"},
    "scan": {"exclude", "max_workers"},
    "git": {"timeout"},
    "storage": {"database"},
}


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(data: Dict[str, Any], source: str) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for warning messages.

    Returns:
        List of validation warnings.
    """
    warnings: List[ConfigValidationWarning] = []

    if not isinstance(data, dict):
        _add(warnings, f"Config must be a mapping, got {type(data).__name__}", source)
        return warnings

    for key in data:
        if key not in VALID_TOP_LEVEL_KEYS:
            _add(
                warnings,
                f"Unknown top-level key '{key}'",
                source,
                key=key,
                suggestion=_suggest_key(key, VALID_TOP_LEVEL_KEYS),
            )

    for section, valid_keys in VALID_SECTION_KEYS.items():
        value = data.get(section)
        if value is None:
            continue
        if not isinstance(value, dict):
            _add(
                warnings,
                f"'{section}' must be a mapping, got {type(value).__name__}",
                source,
                key=section,
            )
            continue
        for key in value:
            if key not in valid_keys:
                _add(
                    warnings,
                    f"Unknown key '{section}.{key}'",
                    source,
                    key=f"{section}.{key}",
                    suggestion=_suggest_key(key, valid_keys),
                )

    _validate_cache(data.get("cache"), source, warnings)
    _validate_scan(data.get("scan"), source, warnings)

    git = data.get("git")
    if isinstance(git, dict) and "timeout" in git and not _is_positive_number(git["timeout"]):
        _add(warnings, "'git.timeout' must be a positive number", source, key="git.timeout")

    storage = data.get("storage")
    if isinstance(storage, dict):
        database = storage.get("database")
        if database is not None and not isinstance(database, str):
            _add(warnings, "'storage.database' must be a string", source, key="storage.database")

    return warnings


def _validate_cache(cache: Any, source: str, warnings: List[ConfigValidationWarning]) -> None:
    if not isinstance(cache, dict) or "ttl" not in cache:
        return
    ttl = cache["ttl"]
    if not isinstance(ttl, dict):
        _add(warnings, "'cache.ttl' must be a mapping of kind to seconds", source, key="cache.ttl")
        return
    for kind, secs in ttl.items():
        if kind not in CACHE_KINDS:
            _add(
                warnings,
                f"Unknown cache kind '{kind}'",
                source,
                key=f"cache.ttl.{kind}",
                suggestion=_suggest_key(str(kind), set(CACHE_KINDS)),
            )
        elif not _is_non_negative_number(secs):
            _add(
                warnings,
                f"'cache.ttl.{kind}' must be a non-negative number",
                source,
                key=f"cache.ttl.{kind}",
            )


def _validate_scan(scan: Any, source: str, warnings: List[ConfigValidationWarning]) -> None:
    if not isinstance(scan, dict):
        return
    exclude = scan.get("exclude")
    if exclude is not None and not (
        isinstance(exclude, list) and all(isinstance(p, str) for p in exclude)
    ):
        _add(warnings, "'scan.exclude' must be a list of strings", source, key="scan.exclude")
    max_workers = scan.get("max_workers")
    if max_workers is not None and (
        isinstance(max_workers, bool) or not isinstance(max_workers, int) or max_workers < 1
    ):
        _add(warnings, "'scan.max_workers' must be a positive integer", source, key="scan.max_workers")


def _is_non_negative_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _is_positive_number(value: Any) -> bool:
    return _is_non_negative_number(value) and value > 0


def _add(
    warnings: List[ConfigValidationWarning],
    message: str,
    source: str,
    key: Optional[str] = None,
    suggestion: Optional[str] = None,
) -> None:
    warning = ConfigValidationWarning(
        message=message,
        source=source,
        key=key,
        suggestion=suggestion,
    )
    warnings.append(warning)
    _log_warning(warning)


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo."""
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)
