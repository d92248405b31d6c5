"""Execution context for testability."""

import os
import time
from pathlib import Path


class Context:
    """
    Wraps filesystem and clock access for testability.

    In production: touches the real filesystem
    In tests: can be replaced with MockContext
    """

    def read_file(self, path: str) -> str:
        """Read file contents, keeping line endings as stored."""
        with open(path, newline="") as f:
            return f.read()

    def is_readable(self, path: str) -> bool:
        """Check if path is a regular file the current user can read."""
        return Path(path).is_file() and os.access(path, os.R_OK)

    def monotonic(self) -> float:
        """Seconds from a monotonic clock, for timing reads."""
        return time.perf_counter()
