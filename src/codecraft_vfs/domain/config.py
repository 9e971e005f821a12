from __future__ import annotations

"""
Configuration Domain Management.

Reads application settings from a JSON file, merges environment
overrides on top and validates the result. Also derives the
signed-in identity that decides whether cloud sync is active.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from codecraft_vfs.domain.constants import REMOTE_SAVE_DEBOUNCE_SECONDS
from codecraft_vfs.infra.fs import get_user_data_dir
from codecraft_vfs.infra.logging.config import get_default_log_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILENAME = "config.json"

ENV_OVERRIDES: Dict[str, str] = {
    "CODECRAFT_REMOTE_URL": "remote_url",
    "CODECRAFT_API_KEY": "api_key",
    "CODECRAFT_ACCESS_TOKEN": "access_token",
    "CODECRAFT_USER_ID": "user_id",
}


@dataclass(frozen=True)
class Identity:
    """
    Authenticated user attached to the session.

    Attributes:
        user_id: Backend identifier of the user.
        access_token: Bearer token for remote calls.
    """
    user_id: str
    access_token: str


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILENAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Remote store
        "remote_url": "",
        "api_key": "",
        "access_token": "",
        "user_id": "",
        "remote_timeout": 10.0,

        # Synchronization
        "save_debounce_seconds": REMOTE_SAVE_DEBOUNCE_SECONDS,
        "cache_path": os.path.join(get_user_data_dir(), "workspace.db"),

        # Diagnostics
        "log_level": "INFO",
        "log_file": get_default_log_path(),
    }


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """
    Load configuration from disk and apply environment overrides.

    A missing or corrupted file yields the defaults.

    Args:
        path: Config file location; defaults to the user data dir.
        environ: Environment mapping; defaults to os.environ.

    Returns:
        Dict[str, Any]: The validated configuration.
    """
    config_path = path or get_config_path()
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}

    if os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                raw.update(data)
            else:
                logger.warning("Corrupted config file. Using defaults.")
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config: {e}. Using defaults.")
    else:
        logger.debug("Config file not found. Using defaults.")

    for env_key, cfg_key in ENV_OVERRIDES.items():
        value = env.get(env_key)
        if value:
            raw[cfg_key] = value

    cfg, warnings = validate_config(raw)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return cfg


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------
def validate_config(config: Any) -> Tuple[Dict[str, Any], List[str]]:
    """
    Coerce a raw configuration into the expected schema.

    Unknown keys are dropped; values of the wrong type are replaced by
    defaults and reported as warnings.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized config and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        warnings.append(f"Invalid config type: expected dict, received {type(config).__name__}.")
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)

    for key in ("remote_url", "api_key", "access_token", "user_id", "cache_path", "log_level", "log_file"):
        if key not in config:
            continue
        value = config[key]
        if isinstance(value, str):
            merged[key] = value.strip()
        else:
            warnings.append(f"'{key}' must be a string. Using default.")

    for key in ("remote_timeout", "save_debounce_seconds"):
        if key not in config:
            continue
        try:
            number = float(config[key])
            if number < 0:
                raise ValueError(key)
            merged[key] = number
        except (TypeError, ValueError):
            warnings.append(f"'{key}' must be a non-negative number. Using default.")

    if not merged["cache_path"]:
        merged["cache_path"] = defaults["cache_path"]
    if not merged["log_file"]:
        merged["log_file"] = defaults["log_file"]

    return merged, warnings


def identity_from_config(config: Mapping[str, Any]) -> Optional[Identity]:
    """Build the session identity, or None when the user is signed out."""
    user_id = config.get("user_id") or ""
    token = config.get("access_token") or ""
    if user_id and token:
        return Identity(user_id=user_id, access_token=token)
    return None
