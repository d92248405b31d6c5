"""Parsing of /proc/net/sockstat content into a structured report."""

from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sockstat.core.logging import ConsoleLogger


# Placeholder for fields the kernel did not report
SENTINEL = "N/A"


@dataclass(frozen=True)
class SocketsStats:
    used: str = SENTINEL


@dataclass(frozen=True)
class TcpStats:
    inuse: str = SENTINEL
    orphan: str = SENTINEL
    time_wait: str = SENTINEL
    allocated: str = SENTINEL
    memory: str = SENTINEL


@dataclass(frozen=True)
class UdpStats:
    inuse: str = SENTINEL
    memory: str = SENTINEL


@dataclass(frozen=True)
class UdpLiteStats:
    inuse: str = SENTINEL


@dataclass(frozen=True)
class RawStats:
    inuse: str = SENTINEL


@dataclass(frozen=True)
class FragStats:
    inuse: str = SENTINEL
    memory: str = SENTINEL


# Line label -> ordered (field, token index) pairs.
# Lines interleave "<name> <value>" pairs after the label, so values sit at
# even indices once the line is split on whitespace.
CATEGORY_FIELDS: dict[str, tuple[tuple[str, int], ...]] = {
    "sockets": (("used", 2),),
    "TCP": (
        ("inuse", 2),
        ("orphan", 4),
        ("time_wait", 6),
        ("allocated", 8),
        ("memory", 10),
    ),
    "UDP": (("inuse", 2), ("memory", 4)),
    "UDPLITE": (("inuse", 2),),
    "RAW": (("inuse", 2),),
    "FRAG": (("inuse", 2), ("memory", 4)),
}

CATEGORY_TYPES = {
    "sockets": SocketsStats,
    "TCP": TcpStats,
    "UDP": UdpStats,
    "UDPLITE": UdpLiteStats,
    "RAW": RawStats,
    "FRAG": FragStats,
}


@dataclass(frozen=True)
class SocketStatisticsReport:
    """Immutable snapshot of one read of the statistics source."""

    sockets: SocketsStats = SocketsStats()
    tcp: TcpStats = TcpStats()
    udp: UdpStats = UdpStats()
    udplite: UdpLiteStats = UdpLiteStats()
    raw: RawStats = RawStats()
    frag: FragStats = FragStats()
    present: frozenset[str] = frozenset()

    def missing_categories(self) -> list[str]:
        """Categories that had no line in the source."""
        return [label for label in CATEGORY_FIELDS if label not in self.present]

    def to_dict(self) -> dict[str, Any]:
        """Return the report in its published JSON shape."""
        return {
            "SocketsUsed": self.sockets.used,
            "TCP": asdict(self.tcp),
            "UDP": asdict(self.udp),
            "UDPLITE": asdict(self.udplite),
            "RAW": asdict(self.raw),
            "FRAG": asdict(self.frag),
        }


def split_label(line: str) -> str | None:
    """
    Return the category label of a line, or None if it has none.

    The label is everything before the first colon and must start at the
    beginning of the line.
    """
    label, sep, _ = line.partition(":")
    if not sep or not label or label != label.strip() or " " in label:
        return None
    return label


def categorize_lines(
    content: str,
    logger: "ConsoleLogger | None" = None,
) -> dict[str, list[str]]:
    """
    Map each known category label to the tokens of its line.

    The first line carrying a label wins; later duplicates are ignored.

    Args:
        content: Raw statistics text
        logger: Optional logger for diagnostics

    Returns:
        Dict of label -> whitespace-split tokens (label token included)
    """
    matched: dict[str, list[str]] = {}

    for line in content.splitlines():
        if not line.strip():
            continue

        label = split_label(line)
        if label is None:
            if logger:
                logger.debug(f"Skipping unlabelled line: {line!r}")
            continue

        if label not in CATEGORY_FIELDS:
            if logger:
                logger.debug(f"Unknown section: {label}")
            continue

        if label in matched:
            if logger:
                logger.debug(f"Ignoring duplicate {label} line")
            continue

        matched[label] = line.split()

    return matched


def extract_fields(
    label: str,
    tokens: list[str] | None,
    logger: "ConsoleLogger | None" = None,
) -> dict[str, str]:
    """
    Pull the values for one category out of its tokens.

    Args:
        label: Category label (key of CATEGORY_FIELDS)
        tokens: Tokens of the category line, or None if the line is absent
        logger: Optional logger for diagnostics

    Returns:
        Dict of field name -> value text or SENTINEL
    """
    values = {}
    for field_name, index in CATEGORY_FIELDS[label]:
        if tokens is not None and index < len(tokens):
            values[field_name] = tokens[index]
        else:
            if tokens is not None and logger:
                logger.debug(
                    f"{label} line has {len(tokens)} tokens, "
                    f"no value for {field_name} at index {index}"
                )
            values[field_name] = SENTINEL
    return values


def parse_sockstat(
    content: str,
    logger: "ConsoleLogger | None" = None,
) -> SocketStatisticsReport:
    """
    Parse sockstat text into a report.

    Never raises for missing categories or short lines; unavailable fields
    are set to SENTINEL.

    Args:
        content: Raw statistics text
        logger: Optional logger for diagnostics

    Returns:
        SocketStatisticsReport
    """
    matched = categorize_lines(content, logger)

    groups = {
        label: CATEGORY_TYPES[label](**extract_fields(label, matched.get(label), logger))
        for label in CATEGORY_FIELDS
    }

    return SocketStatisticsReport(
        sockets=groups["sockets"],
        tcp=groups["TCP"],
        udp=groups["UDP"],
        udplite=groups["UDPLITE"],
        raw=groups["RAW"],
        frag=groups["FRAG"],
        present=frozenset(matched),
    )
