"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.hubdown/config.yaml)
  3. Project config   (./hubdown.yaml, searched upward)
  4. Environment variables (HUBDOWN_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from hubdown.config.defaults import get_defaults
from hubdown.errors.exceptions import ConfigError
from hubdown.types import StageName

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".hubdown" / "config.yaml"
_PROJECT_CONFIG_NAME = "hubdown.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "HUBDOWN_FRONTMATTER": "frontmatter",
    "HUBDOWN_IGNORE": "ignore",
    "HUBDOWN_CACHE_DISABLED": "cache_disabled",
    "HUBDOWN_CACHE_DB_PATH": "cache_db_path",
    "HUBDOWN_CACHE_DISK_MB": "cache_disk_mb",
    "HUBDOWN_MAX_WORKERS": "max_workers",
    "HUBDOWN_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "cache_disk_mb": float,
    "max_workers": int,
}

_BOOL_KEYS = {"frontmatter", "cache_disabled"}
_LIST_KEYS = {"ignore"}

# Boolean env var values
_TRUTHY = {"1", "true", "yes", "on"}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    # Layer 2: Global config
    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    # Layer 3: Project config (search from cwd upward)
    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments (highest priority)
    # None means "not set on the command line"
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return validate_config(config)


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Check merged values, normalizing the ones YAML may give loosely.

    Raises ConfigError naming the offending key.
    """
    ignore = config.get("ignore") or []
    if isinstance(ignore, str):
        ignore = [item.strip() for item in ignore.split(",") if item.strip()]
    valid = {name.value for name in StageName}
    unknown = [name for name in ignore if name not in valid]
    if unknown:
        raise ConfigError(f"ignore: unknown stage(s) {', '.join(map(str, unknown))}")
    config["ignore"] = list(ignore)

    workers = config.get("max_workers")
    if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ConfigError(f"max_workers must be a positive integer, got {workers!r}")

    disk_mb = config.get("cache_disk_mb")
    if isinstance(disk_mb, bool) or not isinstance(disk_mb, (int, float)) or disk_mb <= 0:
        raise ConfigError(f"cache_disk_mb must be a positive number, got {disk_mb!r}")

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for hubdown.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Read HUBDOWN_* environment variables."""
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    if key in _BOOL_KEYS:
        return value.strip().lower() in _TRUTHY
    if key in _LIST_KEYS:
        return [item.strip() for item in value.split(",") if item.strip()]

    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
