"""Leveled console logging with an optional JSONL mirror."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO


# Log level ordering
LOG_LEVELS = {"debug": 0, "info": 1, "warning": 2, "error": 3}

DEFAULT_LOG_LEVEL = "info"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConsoleLogger:
    """
    Logger writing "timestamp - LEVEL - message" lines.

    ERROR goes to stderr, every other level to stdout. Messages below the
    threshold are dropped. When log_path is set, each emitted entry is also
    appended to that file as one JSON object per line.
    """

    def __init__(
        self,
        name: str = "sockstat",
        min_level: str = DEFAULT_LOG_LEVEL,
        log_path: Path | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        """
        Initialize logger.

        Args:
            name: Logger name recorded in JSONL entries
            min_level: Lowest level to emit (case-insensitive)
            log_path: Optional JSONL mirror file
            stdout: Stream for non-error levels (default: sys.stdout)
            stderr: Stream for errors (default: sys.stderr)
        """
        level = min_level.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {min_level}")

        self.name = name
        self.min_level = level
        self.log_path = log_path
        self._stdout = stdout
        self._stderr = stderr
        self._file = None

    def enabled_for(self, level: str) -> bool:
        """Whether a message at level would be emitted."""
        return LOG_LEVELS[level] >= LOG_LEVELS[self.min_level]

    def open(self) -> None:
        """
        Open the JSONL mirror now rather than on the first message.

        Raises:
            OSError: If the log file or its directory can't be created
        """
        if self.log_path is not None:
            self._ensure_file()

    def _ensure_file(self) -> None:
        """Ensure log file is open."""
        if self._file is None:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(self.log_path, "a")

    def _stream(self, level: str) -> TextIO:
        # Resolved per call so redirected sys streams are honoured
        if level == "error":
            return self._stderr or sys.stderr
        return self._stdout or sys.stdout

    def _log(self, level: str, message: str, **extra: Any) -> None:
        """Write a log entry."""
        if not self.enabled_for(level):
            return

        now = datetime.now()
        print(
            f"{now.strftime(TIMESTAMP_FORMAT)} - {level.upper()} - {message}",
            file=self._stream(level),
        )

        if self.log_path is not None:
            self._ensure_file()
            entry = {
                "timestamp": now.astimezone(timezone.utc).isoformat(),
                "level": level,
                "logger": self.name,
                "message": message,
                **extra,
            }
            self._file.write(json.dumps(entry) + "\n")
            self._file.flush()

    def debug(self, message: str, **extra: Any) -> None:
        """Log debug message."""
        self._log("debug", message, **extra)

    def info(self, message: str, **extra: Any) -> None:
        """Log info message."""
        self._log("info", message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Log warning message."""
        self._log("warning", message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Log error message."""
        self._log("error", message, **extra)

    def close(self) -> None:
        """Close the log file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "ConsoleLogger":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
