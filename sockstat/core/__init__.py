"""Core sockstat functionality."""

from sockstat.core.config import Config, ConfigError, build_config, load_settings
from sockstat.core.context import Context
from sockstat.core.logging import ConsoleLogger
from sockstat.core.output import Output
from sockstat.core.parser import SENTINEL, SocketStatisticsReport, parse_sockstat

__all__ = [
    "Config",
    "ConfigError",
    "ConsoleLogger",
    "Context",
    "Output",
    "SENTINEL",
    "SocketStatisticsReport",
    "build_config",
    "load_settings",
    "parse_sockstat",
]
