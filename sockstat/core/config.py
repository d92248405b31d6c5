"""Configuration loading with layered overrides."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from sockstat.lib.filesystem import DEFAULT_SOCKSTAT_PATH


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "INFO"

PROJECT_CONFIG = Path(".sockstat.yaml")

# Keys accepted in YAML config files, with their value type
CONFIG_KEYS = {"log_level": str, "json": bool, "path": str, "log_file": str}


class ConfigError(Exception):
    """Error loading a config file."""

    pass


@dataclass(frozen=True)
class Config:
    """Settings for one invocation, fixed once built."""

    log_level: str = DEFAULT_LOG_LEVEL
    json_output: bool = False
    path: str = DEFAULT_SOCKSTAT_PATH
    log_file: Path | None = None
    warnings: tuple[str, ...] = field(default=(), compare=False)

    @property
    def output_format(self) -> str:
        """Formatter mode: "json" or "raw"."""
        return "json" if self.json_output else "raw"


def user_config_path() -> Path:
    """Location of the per-user config file."""
    return Path.home() / ".config" / "sockstat" / "config.yaml"


def load_config_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML config file if it exists.

    Args:
        path: Path to the config file

    Returns:
        Parsed mapping, or {} if the file is absent or empty

    Raises:
        ConfigError: If the file can't be read or isn't a YAML mapping
    """
    if not path.exists():
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read config {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a YAML mapping: {path}")
    return data


def load_settings(
    paths: list[Path] | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Merge config files, later paths overriding earlier ones.

    Args:
        paths: Files to layer (default: user config, then project config)

    Returns:
        Tuple of (merged settings, warning messages)
    """
    if paths is None:
        paths = [user_config_path(), PROJECT_CONFIG]

    settings: dict[str, Any] = {}
    warnings = []

    for path in paths:
        try:
            data = load_config_file(path)
        except ConfigError as e:
            warnings.append(f"{e}. Ignoring it.")
            continue

        for key, value in data.items():
            if key not in CONFIG_KEYS:
                warnings.append(f"Unknown config key '{key}' in {path}")
                continue
            expected = CONFIG_KEYS[key]
            if not isinstance(value, expected):
                warnings.append(
                    f"Config key '{key}' in {path} must be a {expected.__name__}, "
                    f"got {value!r}. Ignoring it."
                )
                continue
            settings[key] = value

    return settings, warnings


def resolve_log_level(value: Any) -> tuple[str, str | None]:
    """
    Normalize a log level, falling back to INFO if it's not recognized.

    Returns:
        Tuple of (level, warning message or None)
    """
    if value is None:
        return DEFAULT_LOG_LEVEL, None

    level = str(value).upper()
    if level in VALID_LOG_LEVELS:
        return level, None

    return DEFAULT_LOG_LEVEL, (
        f"Invalid log level: {value}. Using default: {DEFAULT_LOG_LEVEL}"
    )


def build_config(
    settings: dict[str, Any] | None = None,
    log_level: str | None = None,
    json_output: bool = False,
    path: str | None = None,
    log_file: str | Path | None = None,
    warnings: list[str] | None = None,
) -> Config:
    """
    Build a Config from file settings overlaid with command-line values.

    Command-line values win when given; json_output can only be switched on.

    Args:
        settings: Merged config-file settings
        log_level: --log-level value
        json_output: --json flag
        path: --path value
        log_file: --log-file value
        warnings: Warnings already collected while loading settings

    Returns:
        Config
    """
    settings = settings or {}
    collected = list(warnings or [])

    level, warning = resolve_log_level(
        log_level if log_level is not None else settings.get("log_level")
    )
    if warning:
        collected.append(warning)

    config = Config(
        log_level=level,
        json_output=json_output or settings.get("json") is True,
        path=str(path or settings.get("path") or DEFAULT_SOCKSTAT_PATH),
    )

    log_file = log_file or settings.get("log_file")
    if log_file:
        config = replace(config, log_file=Path(log_file).expanduser())

    return replace(config, warnings=tuple(collected))
