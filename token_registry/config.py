"""Configuration loader for the token registry

Configurable values come from config/config.yaml. When no path is given and
the default file is absent, the schema defaults are used.

Configuration is validated at load time using Pydantic.
Typos and invalid values fail fast with clear error messages.

Usage:
    from token_registry.config import load_config, get, get_validated_config

    # Load and validate (call once at startup)
    load_config("config/config.yaml")

    # Get values by dot-path
    symbol = get("registry.symbol")

    # Or use the typed config object (preferred)
    config = get_validated_config()
    symbol = config.registry.symbol
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .config_schema import AppConfig, load_validated_config, validate_config_dict


# Global config instances
_config: dict[str, Any] | None = None
_validated_config: AppConfig | None = None

# Default config path
DEFAULT_CONFIG_PATH: Path = Path(__file__).parent.parent / "config" / "config.yaml"


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to config file. Defaults to config/config.yaml,
                     falling back to schema defaults if that file is missing.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If an explicit config_path doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    global _config, _validated_config

    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        _validated_config = AppConfig()
        _config = _validated_config.model_dump()
        return _config

    path: Path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _validated_config = load_validated_config(path)

    # Keep the raw dict too, for dot-path lookups
    with open(path) as f:
        loaded: Any = yaml.safe_load(f)
        if not isinstance(loaded, dict):
            loaded = {}
        _config = loaded

    return _config


def get_config() -> dict[str, Any]:
    """Get the loaded configuration dict. Loads default if not already loaded."""
    global _config
    if _config is None:
        load_config()
    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")
    return _config


def get_validated_config() -> AppConfig:
    """Get the validated configuration object.

    Loads default config if not already loaded.
    """
    global _validated_config
    if _validated_config is None:
        load_config()
    if _validated_config is None:
        raise RuntimeError("Validated config failed to load. Call load_config() first.")
    return _validated_config


def get(key: str, default: Any = None) -> Any:
    """Get a config value by dot-separated key path.

    Values missing from the raw YAML fall back to the validated defaults.

    Examples:
        get("registry.name")
        get("logging.default_recent")
    """
    for source in (get_config(), get_validated_config().model_dump()):
        value: Any = source
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                break
        else:
            return value
    return default


def set_config_value(key: str, value: Any) -> None:
    """Set a config value by dot-separated key path and re-validate.

    Used for runtime overrides (e.g., CLI args).

    Args:
        key: Dot-separated key path (e.g., "registry.owner")
        value: Value to set
    """
    global _config, _validated_config

    if _config is None:
        load_config()

    if _config is None:
        raise RuntimeError("Config failed to load. Call load_config() first.")

    keys = key.split(".")
    target = _config

    for k in keys[:-1]:
        if k not in target:
            target[k] = {}
        target = target[k]

    target[keys[-1]] = value

    _validated_config = validate_config_dict(_config)


def reset_config() -> None:
    """Forget the loaded config (next access reloads)."""
    global _config, _validated_config
    _config = None
    _validated_config = None


def configure_logging(level: str | None = None) -> None:
    """Set up stdlib logging at the configured level."""
    resolved = level or get_validated_config().logging.level
    logging.basicConfig(
        level=getattr(logging, resolved),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
