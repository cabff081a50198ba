"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass

import yaml

from tailer.errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


def _parse_int(value) -> int:
    """Whole numbers only: YAML booleans and fractional floats are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


@dataclass(frozen=True)
class TailConfig:
    line_count: int = 10
    follow: bool = False
    chunk_size: int = 8192
    use_polling: bool = False     # PollingObserver instead of native events
    poll_interval: float = 1.0    # seconds, polling backend only
    log_level: str = "WARNING"

    def validate(self) -> "TailConfig":
        """Reject values no reader could work with. Returns self."""
        if isinstance(self.line_count, bool) or not isinstance(self.line_count, int):
            raise ConfigError(f"invalid number of lines: {self.line_count!r}")
        if self.line_count <= 0:
            raise ConfigError(f"invalid number of lines: {self.line_count} (must be positive)")
        if self.chunk_size <= 0:
            raise ConfigError(f"invalid chunk size: {self.chunk_size} (must be positive)")
        if self.poll_interval <= 0:
            raise ConfigError(f"invalid poll interval: {self.poll_interval} (must be positive)")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"invalid log level: {self.log_level}")
        return self


# field name -> (environment variable, converter)
_SETTINGS = {
    "line_count": ("TAIL_LINES", _parse_int),
    "follow": ("TAIL_FOLLOW", _parse_bool),
    "chunk_size": ("TAIL_CHUNK_SIZE", _parse_int),
    "use_polling": ("TAIL_USE_POLLING", _parse_bool),
    "poll_interval": ("TAIL_POLL_INTERVAL", float),
    "log_level": ("TAIL_LOG_LEVEL", lambda v: str(v).strip().upper()),
}


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(cli_args=None, yaml_data: dict | None = None) -> TailConfig:
    """Build a validated TailConfig.

    Precedence, highest first: CLI args, env vars, YAML data, defaults.
    CLI attributes that are missing or None are treated as not given.
    """
    yaml_data = yaml_data or {}
    values = {}
    for name, (env_var, convert) in _SETTINGS.items():
        raw = getattr(cli_args, name, None)
        if raw is None:
            raw = os.environ.get(env_var)
        if raw is None:
            raw = yaml_data.get(name)
        if raw is None:
            continue
        try:
            values[name] = convert(raw)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"invalid value for {name}: {raw!r}") from e

    return TailConfig(**values).validate()
