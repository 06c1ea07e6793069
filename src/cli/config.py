"""Configuration loading: YAML file, then environment overrides."""

import os
from pathlib import Path
from typing import Optional

import yaml

from .config_models import ServiceConfig

# env var -> (section, key)
ENV_OVERRIDES = {
    "MODEL_URL": ("model", "url"),
    "HOST": ("server", "host"),
    "PORT": ("server", "port"),
    "STORE_BACKEND": ("store", "backend"),
    "GOOGLE_CLOUD_PROJECT": ("store", "project"),
    "FIRESTORE_DATABASE": ("store", "database"),
    "MAX_UPLOAD_BYTES": ("limits", "max_upload_bytes"),
    "LOG_LEVEL": ("logging", "level"),
    "LOG_JSON": ("logging", "json"),
}


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".screening" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def _env_overrides(environ: dict) -> dict:
    """Collect config overrides from environment variables."""
    overrides: dict = {}
    for var, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value is None or value == "":
            continue
        overrides.setdefault(section, {})[key] = value
    return overrides


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config_model(
    config_path: Optional[Path] = None,
    environ: Optional[dict] = None,
) -> ServiceConfig:
    """Load configuration as Pydantic model with validation.

    Values from the YAML file are overridden by environment variables
    (see ENV_OVERRIDES).
    """
    if environ is None:
        environ = dict(os.environ)

    base_config = {}
    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    merged = _deep_merge(base_config, _env_overrides(environ))
    try:
        return ServiceConfig.from_dict(merged)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
