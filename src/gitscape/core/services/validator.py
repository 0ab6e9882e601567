from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between untrusted configuration sources (JSON file, CLI flags)
and the diagram engine. Coerces numeric fields, enforces positivity and
range ordering, and falls back to domain defaults for anything unusable.
"""

import logging
from typing import Any, Dict, List, Tuple

from gitscape.domain.config import get_default_config

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
        strict: If True, raises exceptions instead of falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: A tuple containing the normalized
                                          configuration and a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition
    positive_float_fields = [
        "node_spacing", "min_level_spacing", "initial_scale",
        "scale_min", "scale_max",
    ]
    non_negative_float_fields = [
        "margin_top", "margin_right", "margin_bottom", "margin_left",
        "initial_offset_x", "transition_ms",
    ]
    positive_int_fields = ["label_max_chars", "label_keep_chars"]
    non_negative_int_fields = ["level_slack", "file_weight", "directory_weight"]
    string_fields = ["github_base_url", "theme"]

    # 3. Field Processing
    for field in positive_float_fields:
        merged[field] = _as_float(merged.get(field), defaults[field], field, warnings, strict, allow_zero=False)

    for field in non_negative_float_fields:
        merged[field] = _as_float(merged.get(field), defaults[field], field, warnings, strict, allow_zero=True)

    for field in positive_int_fields:
        merged[field] = _as_int(merged.get(field), defaults[field], field, warnings, strict, allow_zero=False)

    for field in non_negative_int_fields:
        merged[field] = _as_int(merged.get(field), defaults[field], field, warnings, strict, allow_zero=True)

    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    # 4. Cross-field Rules
    _check_scale_extent(merged, defaults, warnings, strict)
    _check_label_bounds(merged, defaults, warnings, strict)
    merged["github_base_url"] = merged["github_base_url"].rstrip("/")

    for w in warnings:
        logger.debug(f"Config validation: {w}")

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_float(
        value: Any,
        fallback: float,
        field: str,
        warnings: List[str],
        strict: bool,
        allow_zero: bool,
) -> float:
    """Coerce numbers and numeric strings into floats within the allowed sign."""
    if value is None:
        return float(fallback)

    number = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    elif isinstance(value, str) and not strict:
        try:
            number = float(value.strip())
            warnings.append(f"Field '{field}' converted from '{value}' to {number}.")
        except ValueError:
            number = None

    if number is None:
        msg = f"Invalid field '{field}': expected number, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return float(fallback)

    if number < 0 or (number == 0 and not allow_zero) or number != number:
        msg = f"Invalid field '{field}': {number} is out of range."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return float(fallback)

    return number


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        warnings: List[str],
        strict: bool,
        allow_zero: bool,
) -> int:
    """Coerce integral values; floats are accepted only when whole."""
    if value is None:
        return int(fallback)

    number = None
    if isinstance(value, int) and not isinstance(value, bool):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str) and not strict and value.strip().lstrip("-").isdigit():
        number = int(value.strip())
        warnings.append(f"Field '{field}' converted from '{value}' to {number}.")

    if number is None:
        msg = f"Invalid field '{field}': expected int, received {type(value).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return int(fallback)

    if number < 0 or (number == 0 and not allow_zero):
        msg = f"Invalid field '{field}': {number} is out of range."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return int(fallback)

    return number


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


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN RULES
# -----------------------------------------------------------------------------

def _check_scale_extent(
        merged: Dict[str, Any],
        defaults: Dict[str, Any],
        warnings: List[str],
        strict: bool,
) -> None:
    """The zoom extent must be a proper range containing the initial scale."""
    if merged["scale_min"] >= merged["scale_max"]:
        msg = f"Invalid scale extent [{merged['scale_min']}, {merged['scale_max']}]."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using default extent.")
        merged["scale_min"] = float(defaults["scale_min"])
        merged["scale_max"] = float(defaults["scale_max"])

    if not merged["scale_min"] <= merged["initial_scale"] <= merged["scale_max"]:
        clamped = max(merged["scale_min"], min(merged["scale_max"], merged["initial_scale"]))
        msg = f"Initial scale {merged['initial_scale']} outside the zoom extent."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped to {clamped}.")
        merged["initial_scale"] = clamped


def _check_label_bounds(
        merged: Dict[str, Any],
        defaults: Dict[str, Any],
        warnings: List[str],
        strict: bool,
) -> None:
    """Truncated labels keep fewer characters than the truncation threshold."""
    if merged["label_keep_chars"] > merged["label_max_chars"]:
        msg = (
            f"label_keep_chars ({merged['label_keep_chars']}) exceeds "
            f"label_max_chars ({merged['label_max_chars']})."
        )
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using defaults.")
        merged["label_max_chars"] = int(defaults["label_max_chars"])
        merged["label_keep_chars"] = int(defaults["label_keep_chars"])
