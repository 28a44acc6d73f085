from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper for the scan engine: ensures the configuration dictionary
conforms to the expected schema, coercing loose inputs and injecting
defaults so the engine always runs on a complete configuration.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from dirstats.domain.config import get_default_config
from dirstats.domain.constants import KEY_MODES, LOG_LEVELS

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
        config: Raw configuration data (usually a dictionary or None).
        strict: If True, raises exceptions on invalid values instead of
                falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
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

    unknown = sorted(k for k in config if k not in defaults)
    for key in unknown:
        warnings.append(f"Unknown field '{key}' ignored.")
        merged.pop(key)

    merged["key_mode"] = _as_choice(
        merged.get("key_mode"), defaults["key_mode"], KEY_MODES, "key_mode", warnings, strict
    )
    merged["log_level"] = _as_choice(
        _upper(merged.get("log_level")), defaults["log_level"], LOG_LEVELS,
        "log_level", warnings, strict
    )
    merged["hardware_concurrency"] = _as_positive_int_or_none(
        merged.get("hardware_concurrency"), "hardware_concurrency", warnings, strict
    )

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def _as_choice(
        value: Any,
        fallback: str,
        choices: Tuple[str, ...],
        field: str,
        warnings: List[str],
        strict: bool,
) -> str:
    """Accept one of a fixed set of string identifiers."""
    if value is None:
        return fallback
    if isinstance(value, str) and value.strip() in choices:
        return value.strip()

    msg = f"Invalid field '{field}': {value!r} is not one of {', '.join(choices)}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_positive_int_or_none(
        value: Any,
        field: str,
        warnings: List[str],
        strict: bool,
) -> Optional[int]:
    """Coerce to a positive int; None means auto-detect."""
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    if isinstance(value, str) and not strict:
        s = value.strip()
        if s.isdigit() and int(s) > 0:
            warnings.append(f"Field '{field}' converted from '{value}' to int.")
            return int(s)

    msg = f"Invalid field '{field}': expected positive int, received {value!r}."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using auto-detection.")
    return None
