"""Report output in raw or structured form."""

import json
import sys
from typing import Any, TextIO


OUTPUT_FORMATS = ("raw", "json")


class Output:
    """Collects the report and renders it once."""

    def __init__(self):
        self.raw: str | None = None
        self.data: dict[str, Any] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self._summary: str | None = None
        self._printed: bool = False

    def emit_raw(self, text: str) -> None:
        """Store the untouched source text."""
        self.raw = text

    def emit(self, data: dict[str, Any]) -> None:
        """Store structured output data."""
        self.data.update(data)

    def error(self, message: str) -> None:
        """Record an error message."""
        self.errors.append(message)

    def warning(self, message: str) -> None:
        """Record a warning message."""
        self.warnings.append(message)

    def set_summary(self, summary: str) -> None:
        """Set a one-line summary."""
        self._summary = summary

    @property
    def summary(self) -> str:
        """Get summary or generate from errors and warnings."""
        if self._summary:
            return self._summary
        if self.errors:
            return f"Error: {self.errors[0]}"
        if self.warnings:
            return f"Warning: {self.warnings[0]}"
        return "ok"

    def to_json(self) -> str:
        """Return data as JSON string."""
        return json.dumps(self.data, indent=2)

    def to_raw(self) -> str:
        """Return the source text exactly as read."""
        return self.raw or ""

    def format(self, mode: str = "raw") -> str:
        """
        Return the report text for a mode.

        Args:
            mode: "raw" for pass-through, "json" for the structured document

        Returns:
            Formatted text
        """
        if mode not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {mode} (expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        if mode == "json":
            return self.to_json()
        return self.to_raw()

    def render(self, mode: str = "raw", stream: TextIO | None = None) -> None:
        """Write the report to stdout (or stream); only the first call prints.

        Args:
            mode: "raw" or "json"
            stream: Destination (default: sys.stdout)
        """
        if self._printed:
            return
        self._printed = True

        stream = stream or sys.stdout

        if mode == "json":
            if not self.data:
                return
            stream.write(self.to_json() + "\n")
        else:
            # Pass-through: no trailing newline added
            stream.write(self.format(mode))
        stream.flush()
