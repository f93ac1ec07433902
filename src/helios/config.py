"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from helios.logging.structured import LOG_LEVELS

CONFIG_FILE_NAME = "helios.toml"

DEFAULT_POLL_INTERVAL_MS = 250
MAX_POLL_INTERVAL_MS = 5_000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
MAX_PORT = 65_535
DEFAULT_SERVER_ROOT = "./"


@dataclass(slots=True, frozen=True)
class IndexConfig:
    """Index build settings."""

    exclude_globs: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class TuiConfig:
    """Interactive loop settings."""

    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    @property
    def poll_interval_seconds(self) -> float:
        """Return the poll timeout in seconds."""
        return self.poll_interval_ms / 1000.0


@dataclass(slots=True, frozen=True)
class HttpConfig:
    """HTTP listener settings."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


@dataclass(slots=True, frozen=True)
class LoggingConfig:
    """Diagnostic output settings."""

    level: str = "info"
    json_output: bool = False


@dataclass(slots=True, frozen=True)
class AppConfig:
    """Fully merged configuration."""

    root: str
    index: IndexConfig
    tui: TuiConfig
    http: HttpConfig
    logging: LoggingConfig

    def to_public_dict(self) -> dict[str, object]:
        """Return a serializable config snapshot."""
        return {
            "root": self.root,
            "index": {"exclude_globs": list(self.index.exclude_globs)},
            "tui": {"poll_interval_ms": self.tui.poll_interval_ms},
            "server": {"host": self.http.host, "port": self.http.port},
            "logging": {"level": self.logging.level, "json": self.logging.json_output},
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    poll_interval_ms: int | None = None
    host: str | None = None
    port: int | None = None
    log_level: str | None = None
    json_logs: bool | None = None


def default_config(root: str) -> AppConfig:
    """Build default config for an index root, kept exactly as given."""
    return AppConfig(
        root=root,
        index=IndexConfig(),
        tui=TuiConfig(),
        http=HttpConfig(),
        logging=LoggingConfig(),
    )


def load_config_file(config_path: Path) -> dict[str, object]:
    """Load an optional TOML config file; a missing file means no settings."""
    if not config_path.exists():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{config_path.name} must contain a top-level table.")
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _tuple_of_strings(value: object, section: str, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(f"Config field '{section}.{field}' must be a list of strings.")
    output: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError(f"Config field '{section}.{field}' must contain only strings.")
        output.append(item)
    return tuple(output)


def merge_config(
    base: AppConfig, file_payload: dict[str, object], overrides: CliOverrides
) -> AppConfig:
    """Merge defaults, config file, then CLI/startup overrides."""
    index_payload = _get_table(file_payload, "index")
    tui_payload = _get_table(file_payload, "tui")
    server_payload = _get_table(file_payload, "server")
    logging_payload = _get_table(file_payload, "logging")

    exclude_globs = base.index.exclude_globs
    if "exclude_globs" in index_payload:
        exclude_globs = _tuple_of_strings(index_payload["exclude_globs"], "index", "exclude_globs")

    poll_interval_ms = _optional_positive_int_with_cap(
        tui_payload.get("poll_interval_ms"),
        "tui.poll_interval_ms",
        base.tui.poll_interval_ms,
        MAX_POLL_INTERVAL_MS,
    )
    host = _optional_non_empty_str(server_payload.get("host"), "server.host", base.http.host)
    port = _optional_positive_int_with_cap(
        server_payload.get("port"), "server.port", base.http.port, MAX_PORT
    )
    level = _optional_log_level(logging_payload.get("level"), "logging.level", base.logging.level)
    json_output = base.logging.json_output
    if "json" in logging_payload:
        raw_json = logging_payload["json"]
        if not isinstance(raw_json, bool):
            raise ValueError("Config field 'logging.json' must be a boolean.")
        json_output = raw_json

    merged = AppConfig(
        root=base.root,
        index=IndexConfig(exclude_globs=exclude_globs),
        tui=TuiConfig(poll_interval_ms=poll_interval_ms),
        http=HttpConfig(host=host, port=port),
        logging=LoggingConfig(level=level, json_output=json_output),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: AppConfig, overrides: CliOverrides) -> AppConfig:
    """Apply startup overrides at highest precedence."""
    poll_interval_ms = _optional_positive_int_with_cap(
        overrides.poll_interval_ms,
        "overrides.poll_interval_ms",
        config.tui.poll_interval_ms,
        MAX_POLL_INTERVAL_MS,
    )
    host = _optional_non_empty_str(overrides.host, "overrides.host", config.http.host)
    port = _optional_positive_int_with_cap(
        overrides.port, "overrides.port", config.http.port, MAX_PORT
    )
    level = _optional_log_level(overrides.log_level, "overrides.log_level", config.logging.level)
    json_output = (
        overrides.json_logs if overrides.json_logs is not None else config.logging.json_output
    )
    return AppConfig(
        root=config.root,
        index=config.index,
        tui=TuiConfig(poll_interval_ms=poll_interval_ms),
        http=HttpConfig(host=host, port=port),
        logging=LoggingConfig(level=level, json_output=json_output),
    )


def load_effective_config(
    root: str,
    overrides: CliOverrides | None = None,
    config_path: Path | None = None,
) -> AppConfig:
    """Load effective config using merge order defaults -> config file -> overrides."""
    base = default_config(root)
    payload = load_config_file(config_path or Path(CONFIG_FILE_NAME))
    return merge_config(base, payload, overrides or CliOverrides())


def _optional_positive_int_with_cap(
    value: object,
    name: str,
    default: int,
    cap: int | None,
) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if cap is not None and value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def _optional_non_empty_str(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Config field '{name}' must be a non-empty string.")
    return value


def _optional_log_level(value: object, name: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or value.lower() not in LOG_LEVELS:
        raise ValueError(f"Config field '{name}' must be one of: {', '.join(LOG_LEVELS)}.")
    return value.lower()
