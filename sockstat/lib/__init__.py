"""Shared utility library for sockstat."""

from sockstat.lib.filesystem import (
    DEFAULT_SOCKSTAT_PATH,
    EmptySource,
    ReadFailure,
    SourceError,
    SourceUnavailable,
    check_source,
    read_source,
)

__all__ = [
    "DEFAULT_SOCKSTAT_PATH",
    "EmptySource",
    "ReadFailure",
    "SourceError",
    "SourceUnavailable",
    "check_source",
    "read_source",
]
