"""Stats command implementation."""

from __future__ import annotations

from argparse import Namespace
from typing import TYPE_CHECKING

from devscope.cli.commands import Command
from devscope.cli.exit_codes import EXIT_SUCCESS
from devscope.cli.output import format_table

if TYPE_CHECKING:
    from devscope.state import AppState


class StatsCommand(Command):
    """Shows per-cache hit/miss statistics.

    Counters live in memory, so they describe the current process only.
    """

    @property
    def name(self) -> str:
        return "stats"

    def execute(self, args: Namespace, state: "AppState") -> int:
        snapshot = state.stats_snapshot()
        rows = [
            [
                s.name,
                s.cache_hits,
                s.cache_misses,
                s.total_scans,
                "-" if s.last_scan_duration_ms is None else f"{s.last_scan_duration_ms}ms",
                f"{s.ttl_secs:g}s",
                "warm" if s.is_warm else "cold",
            ]
            for s in snapshot.scanners
        ]
        print(format_table(["SCANNER", "HITS", "MISSES", "SCANS", "LAST", "TTL", "CACHE"], rows))
        print()
        print(
            f"pid {snapshot.pid}, uptime {snapshot.uptime_secs}s "
            "(counters cover this process only)"
        )
        return EXIT_SUCCESS
