from __future__ import annotations

"""
Configuration Domain Management.

Holds the default session settings and persists user preferences as JSON in
the user data directory. Missing or corrupted files fall back to defaults;
a legacy flat file (settings at the top level) is wrapped into the current
schema on load.
"""

import json
import logging
import os
from typing import Any, Dict

from duvis.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_INDENT_WIDTH,
    ORDER_POSTORDER,
    OUTPUT_TREE,
)
from duvis.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Input
        "order": ORDER_POSTORDER,
        "zero_terminated": False,

        # Output
        "output_mode": OUTPUT_TREE,
        "indent_width": DEFAULT_INDENT_WIDTH,
        "max_levels": 0,

        # Viewer
        "gui_width": 1000,
        "gui_height": 700,

        # Diagnostics
        "log_level": "INFO",
        "show_status": True,
    }


def get_config_path() -> str:
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config(path: str = "") -> Dict[str, Any]:
    """
    Load saved settings merged over the defaults.

    Args:
        path: Config file to read (default: the user data directory's file).

    Returns:
        Dict[str, Any]: The effective configuration. Unvalidated.
    """
    path = path or get_config_path()
    config = get_default_config()

    if not os.path.exists(path):
        logger.debug("Config file not found. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Using defaults.")
        return config

    settings = data.get("settings")
    if isinstance(settings, dict):
        config.update(settings)
    else:
        logger.info("Reading legacy flat config schema.")
        config.update({k: v for k, v in data.items() if k in config})

    return config


def save_config(config: Dict[str, Any], path: str = "") -> None:
    """
    Persist settings as the current schema version.

    Args:
        config: Settings to save.
        path: Target file (default: the user data directory's file).
    """
    path = path or get_config_path()
    state = {"version": CURRENT_CONFIG_VERSION, "settings": config}
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")
