"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set in Docker at deploy time
#
# load_config() starts from the Settings defaults, deep-merges the YAML
# file on top, then merges only the Settings fields that were explicitly
# set (env, .env or constructor).  A value in config.yaml survives unless
# the environment sets that field.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from bandje.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built Settings; a fresh instance is read from the
            environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    explicit = settings.model_fields_set
    defaults = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "dataset": {
            "path": settings.dataset_path,
        },
        "sampling": {
            "min_count": settings.sample_min_count,
            "max_count": settings.sample_max_count,
        },
        "cors": {
            "allowed_origins": settings.cors_allowed_origins,
        },
        "logging": {
            "level": settings.log_level,
        },
    }
    env_overrides = {
        "app": _pick(settings, explicit, host="app_host", port="app_port", env="app_env"),
        "dataset": _pick(settings, explicit, path="dataset_path"),
        "sampling": _pick(
            settings, explicit, min_count="sample_min_count", max_count="sample_max_count"
        ),
        "cors": _pick(settings, explicit, allowed_origins="cors_allowed_origins"),
        "logging": _pick(settings, explicit, level="log_level"),
    }

    _deep_merge(defaults, yaml_config)
    _deep_merge(defaults, env_overrides)
    return defaults


def _pick(settings: Settings, explicit: set[str], **keys: str) -> dict:
    """Map config keys to Settings fields, keeping only explicitly set fields."""
    return {key: getattr(settings, field) for key, field in keys.items() if field in explicit}


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
