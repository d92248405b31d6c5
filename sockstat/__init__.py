"""Socket statistics reporter for /proc/net/sockstat."""

__version__ = "0.1.0"
