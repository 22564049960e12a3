"""Exit codes for the devscope CLI.

- 0: Success
- 1: Nothing found (unknown setting, path without git status)
- 2: Scan error (unexpected failure while scanning or querying git)
- 3: Invalid usage (bad arguments, unreadable config or database)
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_NOT_FOUND = 1
EXIT_SCAN_ERROR = 2
EXIT_INVALID_USAGE = 3
