"""Reading the socket statistics source."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sockstat.core.context import Context


DEFAULT_SOCKSTAT_PATH = "/proc/net/sockstat"


class SourceError(Exception):
    """Error acquiring the statistics source."""

    pass


class SourceUnavailable(SourceError):
    """Source is missing, not a regular file, or not readable."""

    pass


class EmptySource(SourceError):
    """Source was read but held no data."""

    pass


class ReadFailure(SourceError):
    """Reading the source failed after the pre-flight check passed."""

    pass


def check_source(
    path: str,
    context: "Context | None" = None,
) -> None:
    """
    Verify the statistics source can be read.

    Args:
        path: Path to the statistics source
        context: Execution context (for testing)

    Raises:
        SourceUnavailable: If the path is missing or unreadable
    """
    if context is None:
        from sockstat.core.context import Context
        context = Context()

    if not context.is_readable(path):
        raise SourceUnavailable(
            f"'{path}' not found or not readable. Ensure you are running "
            "on a Linux system with appropriate permissions."
        )


def read_source(
    path: str,
    context: "Context | None" = None,
) -> str:
    """
    Read the whole statistics source in one call.

    Args:
        path: Path to the statistics source
        context: Execution context (for testing)

    Returns:
        Raw file contents, unmodified

    Raises:
        EmptySource: If the content is blank
        ReadFailure: On any I/O or decode error
    """
    if context is None:
        from sockstat.core.context import Context
        context = Context()

    try:
        content = context.read_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(f"Failed to read {path}: {e}") from e

    if not content.strip():
        raise EmptySource(f"No data received from {path}")

    return content
