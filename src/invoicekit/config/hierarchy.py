"""Configuration hierarchy — merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.invoicekit/config.yaml)
  3. Project config   (./invoicekit.yaml, searched upward)
  4. Environment variables (INVOICEKIT_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from invoicekit.config.defaults import get_defaults
from invoicekit.errors.exceptions import ConfigError

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".invoicekit" / "config.yaml"
_PROJECT_CONFIG_NAME = "invoicekit.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "INVOICEKIT_CACHE_MAX_SIZE_BYTES": "cache_max_size_bytes",
    "INVOICEKIT_CACHE_MAX_ENTRIES": "cache_max_entries",
    "INVOICEKIT_CACHE_MIN_EVICTION_BATCH": "cache_min_eviction_batch",
    "INVOICEKIT_CACHE_EVICTION_SIZE_FRACTION": "cache_eviction_size_fraction",
    "INVOICEKIT_BYTES_PER_PAGE": "bytes_per_page",
    "INVOICEKIT_OVERSIZED_PAGE_AREA": "oversized_page_area",
    "INVOICEKIT_OVERSIZED_MULTIPLIER": "oversized_multiplier",
    "INVOICEKIT_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "cache_max_size_bytes": int,
    "cache_max_entries": int,
    "cache_min_eviction_batch": int,
    "cache_eviction_size_fraction": float,
    "bytes_per_page": int,
    "oversized_page_area": float,
    "oversized_multiplier": float,
}


def load_config_hierarchy(
    config_path: str | Path | None = None, **runtime_overrides: Any
) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    ``config_path`` replaces the project-config search with an explicit file,
    which must exist and contain a mapping. Returns the merged flat dict.
    """
    config = get_defaults()

    # Layers 2-3: global config, then explicit path or nearest project config
    if config_path is not None:
        sources = [(_GLOBAL_CONFIG_PATH, False), (Path(config_path), True)]
    else:
        sources = [(_GLOBAL_CONFIG_PATH, False), (_find_project_config(), False)]
    for path, strict in sources:
        if path is not None:
            config.update(_load_yaml_config(path, strict=strict) or {})

    # Layer 4: Environment variables
    config.update(_load_env_vars())

    # Layer 5: Runtime arguments; None means "not set"
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def _load_yaml_config(path: Path, strict: bool = False) -> dict[str, Any] | None:
    """Read a YAML mapping from ``path``.

    Discovered files that are missing or malformed are logged and skipped;
    with ``strict`` (a path the caller named) they raise ConfigError instead.
    """
    try:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        with open(path) as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ConfigError(f"Expected YAML mapping, got {type(data).__name__} in {path}")
    except (OSError, yaml.YAMLError) as e:
        if strict:
            raise ConfigError(f"Failed to load config {path}: {e}", original=e) from e
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    except ConfigError as e:
        if strict:
            raise
        if path.exists():
            logger.warning("Ignoring config %s: %s", path, e.message)
        return None
    return data


def _find_project_config() -> Path | None:
    """Nearest invoicekit.yaml in cwd or any parent."""
    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        candidate = directory / _PROJECT_CONFIG_NAME
        if candidate.is_file():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    """Collect INVOICEKIT_* variables that are set, keyed by config name."""
    return {
        config_key: _coerce_env_value(config_key, os.environ[env_key])
        for env_key, config_key in _ENV_MAP.items()
        if env_key in os.environ
    }


def _coerce_env_value(key: str, value: str) -> Any:
    """Parse numeric settings; leave anything unparseable for schema validation."""
    target_type = _TYPE_MAP.get(key, str)
    try:
        return target_type(value)
    except ValueError:
        logger.warning(
            "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
        )
        return value
