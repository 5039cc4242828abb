"""Configuration loading for the snaplru command line.

Reads `snaplru.toml` and validates it into frozen dataclasses. The cache core
never reads configuration; only the CLI does.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from snaplru.cache import TRIGGERS, Trigger
from snaplru.errors import SnapLRUConfigError

CONFIG_FILENAME = "snaplru.toml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

DEFAULT_CONFIG_TOML = """\
version = 1

[cache]
capacity = 128
trigger = "count"

[logging]
level = "WARNING"
"""


@dataclass(frozen=True)
class CacheConfig:
    capacity: int
    trigger: Trigger


@dataclass(frozen=True)
class LoggingConfig:
    level: str


@dataclass(frozen=True)
class SnapLRUConfig:
    version: int
    cache: CacheConfig
    logging: LoggingConfig


def default_config() -> SnapLRUConfig:
    return SnapLRUConfig(
        version=1,
        cache=CacheConfig(capacity=128, trigger="count"),
        logging=LoggingConfig(level="WARNING"),
    )


def find_project_root(start: Path) -> Path:
    """Walk upward from `start` (file or directory) looking for `snaplru.toml`."""

    cur = start
    try:
        if cur.is_file():
            cur = cur.parent
    except OSError:
        cur = cur.parent

    cur = cur.resolve()
    while True:
        if (cur / CONFIG_FILENAME).is_file():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent

    raise SnapLRUConfigError("Could not find snaplru.toml by walking upward from start path.")


def _as_table(value: Any, *, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SnapLRUConfigError(f"Expected [{name}] to be a table.")
    return value


def _as_int(value: Any, *, name: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise SnapLRUConfigError(f"Expected {name} to be an integer.")
    return value


def _as_str(value: Any, *, name: str) -> str:
    if not isinstance(value, str):
        raise SnapLRUConfigError(f"Expected {name} to be a string.")
    return value


def load_config(*, root: Path | None = None, config_path: Path | None = None) -> SnapLRUConfig:
    """Load and validate `snaplru.toml`.

    If neither `root` nor `config_path` are provided, the project root is
    discovered by walking upward from the current working directory.
    """

    if config_path is None:
        if root is None:
            root = find_project_root(Path.cwd())
        config_path = root / CONFIG_FILENAME

    try:
        raw = config_path.read_bytes()
    except FileNotFoundError as e:
        raise SnapLRUConfigError(f"Missing snaplru.toml at: {config_path}") from e
    except OSError as e:
        raise SnapLRUConfigError(f"Failed reading config file: {config_path}") from e

    try:
        data = tomllib.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise SnapLRUConfigError(f"Config is not valid UTF-8: {config_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise SnapLRUConfigError(f"Invalid TOML in {config_path}: {e}") from e

    version = data.get("version", None)
    if version is None:
        raise SnapLRUConfigError("Missing required `version = 1` in snaplru.toml.")
    version_i = _as_int(version, name="version")
    if version_i != 1:
        raise SnapLRUConfigError(f"Unsupported config version: {version_i} (expected 1).")

    cache_tbl = _as_table(data.get("cache"), name="cache")
    logging_tbl = _as_table(data.get("logging"), name="logging")
    defaults = default_config()

    if "capacity" in cache_tbl:
        capacity = _as_int(cache_tbl["capacity"], name="cache.capacity")
    else:
        capacity = defaults.cache.capacity

    if "trigger" in cache_tbl:
        trigger = _as_str(cache_tbl["trigger"], name="cache.trigger")
    else:
        trigger = defaults.cache.trigger

    if "level" in logging_tbl:
        level = _as_str(logging_tbl["level"], name="logging.level").upper()
    else:
        level = defaults.logging.level

    # Validation
    if trigger not in TRIGGERS:
        raise SnapLRUConfigError(
            f"Invalid config: cache.trigger must be one of {', '.join(TRIGGERS)} (got {trigger!r})."
        )

    if level not in LOG_LEVELS:
        raise SnapLRUConfigError(
            f"Invalid config: logging.level must be one of {', '.join(LOG_LEVELS)} (got {level!r})."
        )

    return SnapLRUConfig(
        version=version_i,
        cache=CacheConfig(capacity=capacity, trigger=trigger),  # type: ignore[arg-type]
        logging=LoggingConfig(level=level),
    )
