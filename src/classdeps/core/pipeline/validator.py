from __future__ import annotations

"""
Configuration Validation Service.

Normalizes the configuration dictionary handed to the analysis engine:
injects defaults for missing keys, coerces loosely typed values coming from
the CLI or from callers, and reports every correction as a warning.
"""

import logging
from typing import Any, Dict, List, Tuple

from classdeps.domain.config import get_default_config
from classdeps.infra.logging.config import _LEVEL_MAP

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
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on invalid values instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.

    Raises:
        TypeError: In strict mode, on a value of the wrong type.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if config is None:
        return defaults, warnings

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    merged["input_path"] = _as_str(
        merged.get("input_path"), defaults["input_path"], "input_path", warnings, strict
    )
    merged["skip_malformed"] = _as_bool(
        merged.get("skip_malformed"), defaults["skip_malformed"], "skip_malformed", warnings, strict
    )
    merged["decode_workers"] = _as_positive_int(
        merged.get("decode_workers"), defaults["decode_workers"], "decode_workers", warnings, strict
    )
    merged["log_level"] = _as_level(
        merged.get("log_level"), defaults["log_level"], warnings, strict
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    """Coerce worker counts and similar settings into integers >= 1."""
    if value is None:
        return fallback

    number = value
    if isinstance(value, str) and not strict:
        try:
            number = int(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
        except ValueError:
            number = value

    if isinstance(number, bool) or not isinstance(number, int):
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < 1:
        msg = f"Invalid field '{field}': {number} is below 1."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using 1.")
        return 1

    return number


def _as_level(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Normalize a logging level name to its canonical upper-case form."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip().upper() in _LEVEL_MAP:
        return value.strip().upper()

    msg = f"Invalid field 'log_level': {value!r} is not a known level."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using {fallback}.")
    return fallback
