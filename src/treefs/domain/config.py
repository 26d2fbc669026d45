from __future__ import annotations

"""
Configuration Domain Management.

Persists user preferences for the shell in a JSON file inside the user data
directory, merges them over built-in defaults and validates untrusted values
coming from disk or the command line.
"""

import json
import logging
import os
from typing import Any, Dict, List, Tuple

from treefs.domain.constants import CURRENT_CONFIG_VERSION, DEFAULT_PROMPT, DEFAULT_SNAPSHOT_FILE
from treefs.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"

_BOOL_FIELDS = ["autosave_on_quit", "sort_listing"]
_STRING_FIELDS = ["snapshot_path", "prompt", "log_level", "log_file", "locale"]
_VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default session configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Persistence
        "snapshot_path": DEFAULT_SNAPSHOT_FILE,
        "autosave_on_quit": True,

        # Shell behaviour
        "sort_listing": True,
        "prompt": DEFAULT_PROMPT,
        "locale": "en",

        # Diagnostics
        "log_level": "WARNING",
        "log_file": "",
    }


def get_config_file() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILENAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """
    Load the stored configuration merged over the defaults.

    Unknown keys are dropped; a missing or corrupted file yields defaults.

    Returns:
        Dict[str, Any]: The effective configuration.
    """
    config = get_default_config()
    path = get_config_file()

    if not os.path.exists(path):
        logger.debug("Config file not found. Returning defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    settings = data.get("settings", {})
    if isinstance(settings, dict):
        config.update({k: v for k, v in settings.items() if k in config})
    return config


def save_config(config: Dict[str, Any]) -> None:
    """
    Persist the configuration to disk. Failures are logged, not raised.

    Args:
        config: The configuration dictionary to save.
    """
    path = get_config_file()
    state = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_config(config: Any, *, strict: bool = False) -> Tuple[Dict[str, Any], List[str]]:
    """
    Coerce an untrusted configuration into the expected schema.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise TypeError/ValueError instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if k in defaults})

    for key in _STRING_FIELDS:
        value = merged[key]
        if value is None:
            merged[key] = defaults[key]
        elif not isinstance(value, str):
            msg = f"Invalid type for '{key}': expected str, received {type(value).__name__}."
            if strict:
                raise TypeError(msg)
            warnings.append(msg)
            merged[key] = str(value)

    for key in _BOOL_FIELDS:
        value = merged[key]
        if not isinstance(value, bool):
            msg = f"Invalid type for '{key}': expected bool, received {type(value).__name__}."
            if strict:
                raise TypeError(msg)
            warnings.append(msg)
            merged[key] = _to_bool(value, defaults[key])

    if not merged["snapshot_path"].strip():
        warnings.append("Empty 'snapshot_path'. Using default.")
        merged["snapshot_path"] = defaults["snapshot_path"]

    level = merged["log_level"].strip().upper()
    if level not in _VALID_LEVELS:
        msg = f"Unknown log level '{merged['log_level']}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using {defaults['log_level']}.")
        level = defaults["log_level"]
    merged["log_level"] = level

    return merged, warnings


def _to_bool(value: Any, fallback: bool) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        return fallback
    if isinstance(value, (int, float)):
        return bool(value)
    return fallback
