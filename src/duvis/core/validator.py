from __future__ import annotations

"""
Configuration Validation Service.

Normalizes configuration coming from the JSON file and CLI overrides into
strictly typed values before a run. Unknown or mistyped values either raise
(strict mode) or fall back to the defaults with a warning.
"""

import logging
from typing import Any, Dict, List, Sequence, Tuple

from duvis.domain.config import get_default_config
from duvis.domain.constants import BUILD_ORDERS, OUTPUT_MODES
from duvis.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a configuration dictionary.

    Args:
        config: Raw configuration data.
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.

    Raises:
        TypeError: Strict mode and a value has the wrong type.
        ValueError: Strict mode and a value is out of range.
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

    for field in ("zero_terminated", "show_status"):
        merged[field] = _as_bool(merged[field], defaults[field], field, warnings, strict)

    for field, minimum in (("indent_width", 0), ("max_levels", 0), ("gui_width", 1), ("gui_height", 1)):
        merged[field] = _as_int(merged[field], defaults[field], minimum, field, warnings, strict)

    merged["order"] = _as_choice(merged["order"], defaults["order"], BUILD_ORDERS, "order", warnings, strict)
    merged["output_mode"] = _as_choice(
        merged["output_mode"], defaults["output_mode"], OUTPUT_MODES, "output_mode", warnings, strict
    )
    merged["log_level"] = _as_choice(
        str(merged["log_level"]).upper(), defaults["log_level"], tuple(_LEVEL_MAP), "log_level", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, exc: type, warnings: List[str], strict: bool) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce booleans and their common string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off"):
        return False
    _reject(f"Invalid field '{field}': expected bool, received {value!r}.", TypeError, warnings, strict)
    return fallback


def _as_int(value: Any, fallback: int, minimum: int, field: str, warnings: List[str], strict: bool) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        _reject(f"Invalid field '{field}': expected int, received {type(value).__name__}.",
                TypeError, warnings, strict)
        return fallback
    try:
        number = int(value)
    except ValueError:
        _reject(f"Invalid field '{field}': '{value}' is not an integer.", ValueError, warnings, strict)
        return fallback
    if number < minimum:
        _reject(f"Invalid field '{field}': {number} is below {minimum}.", ValueError, warnings, strict)
        return fallback
    return number


def _as_choice(
        value: Any,
        fallback: str,
        choices: Sequence[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    if isinstance(value, str) and value in choices:
        return value
    _reject(f"Invalid field '{field}': {value!r} not in {', '.join(choices)}.", ValueError, warnings, strict)
    return fallback
