"""Rendering of command results as JSON or aligned text tables."""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Sequence, TextIO, Tuple

from devscope.core.models import GitStatus, ProjectRecord

# (header, attribute) pairs
PROJECT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("GROUP", "group"),
    ("NAME", "name"),
    ("LANGUAGE", "language"),
    ("CATEGORY", "category"),
    ("FRAMEWORK", "framework"),
    ("PM", "package_manager"),
    ("PATH", "path"),
)

GIT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("PATH", "project_path"),
    ("BRANCH", "branch"),
    ("DIRTY", "is_dirty"),
    ("M", "modified_count"),
    ("U", "untracked_count"),
    ("S", "staged_count"),
    ("AHEAD", "ahead"),
    ("BEHIND", "behind"),
    ("LAST COMMIT", "last_commit_date"),
)


def write_json(data: Any, stream: TextIO) -> None:
    json.dump(data, stream, indent=2)
    stream.write("\n")


def format_table(headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
    """Format rows as left-aligned columns separated by two spaces."""
    text_rows: List[List[str]] = [[_cell(v) for v in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in text_rows:
        for i, value in enumerate(row):
            widths[i] = max(widths[i], len(value))

    lines = ["  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)).rstrip()]
    for row in text_rows:
        lines.append("  ".join(v.ljust(widths[i]) for i, v in enumerate(row)).rstrip())
    return "\n".join(lines)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else ""
    if hasattr(value, "value"):
        return str(value.value)
    return "" if value is None else str(value)


def write_projects(projects: Sequence[ProjectRecord], fmt: str, stream: TextIO) -> None:
    if fmt == "json":
        write_json([p.to_dict() for p in projects], stream)
        return
    if not projects:
        stream.write("No projects found.\n")
        return
    headers = [h for h, _ in PROJECT_COLUMNS]
    rows = [[getattr(p, attr) for _, attr in PROJECT_COLUMNS] for p in projects]
    stream.write(format_table(headers, rows) + "\n")


def write_git_statuses(statuses: Sequence[GitStatus], fmt: str, stream: TextIO) -> None:
    if fmt == "json":
        write_json([s.to_dict() for s in statuses], stream)
        return
    if not statuses:
        stream.write("No git repositories found.\n")
        return
    headers = [h for h, _ in GIT_COLUMNS]
    rows = [[getattr(s, attr) for _, attr in GIT_COLUMNS] for s in statuses]
    stream.write(format_table(headers, rows) + "\n")
