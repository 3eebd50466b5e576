"""Typed configuration loading and access.

This module provides dataclasses for the buck.toml structure. Values the
audit depends on (check lists, verbosity) are validated strictly: a typo in
the config must not silently change which checks run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .setup_errors import ConfigError
from .structured import StrDict, as_str_dict, get_bool, get_int, get_str, get_str_list, get_table

__all__ = [
    "Config",
    "ChecksConfig",
    "LoggingConfig",
    "ChecksumConfig",
    "ConfigError",
    "load_config",
    "load_config_or_default",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_LOG_DIR",
    "DEFAULT_CHECKSUM_FILE",
    "DEFAULT_VERBOSITY",
]

DEFAULT_CONFIG_PATH = Path("/etc/buck/buck.toml")
DEFAULT_LOG_DIR = "/var/log/buck"
DEFAULT_CHECKSUM_FILE = "/var/lib/buck/checksums.sha256"
DEFAULT_VERBOSITY = 2


def _empty_settings() -> dict[str, StrDict]:
    return {}


@dataclass(frozen=True, slots=True)
class ChecksConfig:
    """Which checks run, in which order.

    Attributes:
        enabled: Ordered check ids; None means every built-in check.
        disabled: Ids removed from `enabled` before resolution.
        settings: Per-check settings tables, keyed by check id.
    """

    enabled: tuple[str, ...] | None = None
    disabled: tuple[str, ...] = ()
    settings: dict[str, StrDict] = field(default_factory=_empty_settings)


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Log-mode settings."""

    enabled: bool = False
    directory: str = DEFAULT_LOG_DIR
    file: str | None = None


@dataclass(frozen=True, slots=True)
class ChecksumConfig:
    """Location of the checksum baseline consumed by the checksum check."""

    file: str = DEFAULT_CHECKSUM_FILE


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    sysroot: str = "/"
    verbosity: int = DEFAULT_VERBOSITY
    checks: ChecksConfig = field(default_factory=ChecksConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    checksum: ChecksumConfig = field(default_factory=ChecksumConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If a value has the wrong type or is out of range.
        """
        checks: StrDict = get_table(data, "checks") or {}
        logging: StrDict = get_table(data, "logging") or {}
        checksum: StrDict = get_table(data, "checksum") or {}

        verbosity = DEFAULT_VERBOSITY
        if "verbosity" in data:
            parsed = get_int(data, "verbosity")
            if parsed not in (1, 2):
                raise ValueError(f"verbosity must be 1 or 2, got {data['verbosity']!r}")
            verbosity = parsed

        enabled: tuple[str, ...] | None = None
        if "enabled" in checks:
            enabled = _require_str_list(checks, "checks.enabled", "enabled")

        disabled: tuple[str, ...] = ()
        if "disabled" in checks:
            disabled = _require_str_list(checks, "checks.disabled", "disabled")

        return cls(
            sysroot=get_str(data, "sysroot") or "/",
            verbosity=verbosity,
            checks=ChecksConfig(
                enabled=enabled,
                disabled=disabled,
                settings=_extract_settings(get_table(checks, "settings") or {}),
            ),
            logging=LoggingConfig(
                enabled=bool(get_bool(logging, "enabled")),
                directory=get_str(logging, "directory") or DEFAULT_LOG_DIR,
                file=get_str(logging, "file"),
            ),
            checksum=ChecksumConfig(
                file=get_str(checksum, "file") or DEFAULT_CHECKSUM_FILE,
            ),
        )


def _require_str_list(table: Mapping[str, object], name: str, key: str) -> tuple[str, ...]:
    values = get_str_list(table, key)
    if values is None:
        raise ValueError(f"{name} must be a list of check ids")
    return tuple(values)


def _extract_settings(raw: Mapping[str, object]) -> dict[str, StrDict]:
    """Keep only well-formed `[checks.settings.<id>]` tables."""
    settings: dict[str, StrDict] = {}
    for check_id, value in raw.items():
        table = as_str_dict(value)
        if table is not None:
            settings[check_id] = table
    return settings


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to buck.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load the config if the file exists, otherwise return defaults.

    Used for the default location, which is optional. A file that exists but
    cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
