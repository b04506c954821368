"""Simple settings management for the GUI endpoint resolver.

This module provides a lightweight settings system that supports:
- TOML configuration file (~/.goobits/config.toml, [gui_endpoint] section)
- Environment variable overrides (GUI_ENDPOINT_<KEY>)
- Simple function-based access pattern

These are settings of the resolver itself (which environment variables carry
overrides, record defaults, log level), not the endpoint record.

Usage:
    from .config import get_config_value
    env_name = get_config_value('address_env')  # Returns "STGUIADDRESS" or env override
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

SECTION = "gui_endpoint"
ENV_PREFIX = "GUI_ENDPOINT_"

# All settings defaults in one flat dictionary
CONFIG_DEFAULTS = {
    # Override variables
    "address_env": "STGUIADDRESS",
    "api_key_env": "STGUIAPIKEY",
    # Record defaults
    "default_address": "127.0.0.1:8384",
    "default_theme": "default",
    # Diagnostics
    "log_level": "warning",
}

VALID_LOG_LEVELS = ("debug", "info", "warning", "error")

_config_cache = None


def load_toml_config() -> Dict[str, Any]:
    """Load settings from TOML file and environment variables."""
    global _config_cache
    if _config_cache is not None:
        return _config_cache

    config = CONFIG_DEFAULTS.copy()

    config_file = get_config_path()
    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                full_config = tomllib.load(f)
            file_config = full_config.get(SECTION, {})
            if not isinstance(file_config, dict):
                logger.warning(f"Ignoring [{SECTION}] in {config_file}: expected a table")
                file_config = {}
            for key, value in file_config.items():
                if key not in config:
                    logger.debug(f"Ignoring unknown setting {key!r} in {config_file}")
                elif not isinstance(value, type(CONFIG_DEFAULTS[key])):
                    expected = type(CONFIG_DEFAULTS[key]).__name__
                    logger.warning(f"Ignoring setting {key!r} in {config_file}: expected {expected}")
                else:
                    config[key] = value

            logger.debug(f"Loaded TOML config from {config_file}")
        except (OSError, tomllib.TOMLDecodeError):
            logger.exception(f"Failed to load TOML config from {config_file}")

    # Environment variable overrides (highest precedence)
    for key in config:
        env_value = os.environ.get(f"{ENV_PREFIX}{key.upper()}")
        if env_value is not None:
            config[key] = _parse_env_value(env_value, type(config[key]))
            logger.debug(f"Override from env: {key} = {config[key]}")

    config["log_level"] = validate_log_level(config["log_level"])

    _config_cache = config
    return config


def _parse_env_value(value: str, expected_type: type) -> Any:
    """Parse environment variable value to appropriate type."""
    if expected_type is bool:
        return value.lower() in ("true", "1", "yes", "on")
    elif expected_type is int:
        try:
            return int(value)
        except ValueError:
            return value
    return value


def validate_log_level(level: Any) -> str:
    level = str(level).lower()
    if level not in VALID_LOG_LEVELS:
        return "warning"
    return level


def get_config_value(key: str, default: Any = None) -> Any:
    """Get a settings value. Simple function - no classes needed."""
    config = load_toml_config()
    return config.get(key, default)


def reload_config() -> None:
    """Reload settings from files (useful for testing)."""
    global _config_cache
    _config_cache = None


def get_config_path() -> Path:
    """Get the settings file path, honouring GUI_ENDPOINT_CONFIG."""
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        return Path(env_path)
    return Path.home() / ".goobits" / "config.toml"
