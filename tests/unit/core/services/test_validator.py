from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Default value injection.
2. Numeric coercion and range checks.
3. Cross-field rules (zoom extent, label bounds).
4. Strict mode validation.
"""

import pytest

from gitscape.core.services.validator import validate_config
from gitscape.domain.config import get_default_config


def test_validate_none_returns_defaults() -> None:
    """Passing None should return the full default configuration."""
    cfg, warnings = validate_config(None)

    assert cfg == get_default_config()
    assert len(warnings) == 1


def test_validate_empty_dict_returns_defaults() -> None:
    cfg, warnings = validate_config({})

    assert cfg["node_spacing"] == 28.0
    assert cfg["initial_scale"] == 0.85
    assert cfg["github_base_url"] == "https://github.com"
    assert warnings == []


def test_validate_converts_numeric_strings() -> None:
    """CLI/GUI string inputs are coerced and each conversion is reported."""
    raw = {
        "node_spacing": "32",
        "transition_ms": " 500 ",
        "label_max_chars": "40",
    }
    cfg, warnings = validate_config(raw, strict=False)

    assert cfg["node_spacing"] == 32.0
    assert cfg["transition_ms"] == 500.0
    assert cfg["label_max_chars"] == 40
    assert len(warnings) == 3


def test_validate_rejects_out_of_range_values() -> None:
    raw = {
        "node_spacing": 0,
        "margin_left": -5,
        "label_keep_chars": -1,
        "transition_ms": 0,
    }
    cfg, warnings = validate_config(raw)

    assert cfg["node_spacing"] == 28.0
    assert cfg["margin_left"] == 100.0
    assert cfg["label_keep_chars"] == 20
    # Zero-length transitions are allowed (instant updates)
    assert cfg["transition_ms"] == 0.0
    assert len(warnings) == 3


def test_validate_rejects_bad_types() -> None:
    raw = {"node_spacing": [1, 2], "file_weight": True, "theme": 42}
    cfg, warnings = validate_config(raw)

    assert cfg["node_spacing"] == 28.0
    assert cfg["file_weight"] == 100
    assert cfg["theme"] == "dark"
    assert len(warnings) == 3


def test_validate_whole_floats_accepted_for_ints() -> None:
    cfg, warnings = validate_config({"level_slack": 4.0, "directory_weight": 2.5})

    assert cfg["level_slack"] == 4
    assert cfg["directory_weight"] == 1000
    assert len(warnings) == 1


def test_validate_scale_extent_rules() -> None:
    """An inverted extent resets; an initial scale outside it is clamped."""
    cfg, warnings = validate_config({"scale_min": 3, "scale_max": 2})
    assert (cfg["scale_min"], cfg["scale_max"]) == (0.05, 5.0)
    assert len(warnings) == 1

    cfg, warnings = validate_config({"initial_scale": 9})
    assert cfg["initial_scale"] == 5.0
    assert "Clamped" in warnings[0]


def test_validate_label_bounds() -> None:
    cfg, warnings = validate_config({"label_max_chars": 10, "label_keep_chars": 20})

    assert cfg["label_max_chars"] == 22
    assert cfg["label_keep_chars"] == 20
    assert len(warnings) == 1


def test_validate_strips_trailing_slash_from_base_url() -> None:
    cfg, _ = validate_config({"github_base_url": "https://git.example.com/ "})
    assert cfg["github_base_url"] == "https://git.example.com"


def test_validate_unknown_keys_are_kept() -> None:
    cfg, warnings = validate_config({"custom_key": "value"})
    assert cfg["custom_key"] == "value"
    assert warnings == []


def test_validate_strict_mode_raises() -> None:
    """Strict mode must raise exceptions instead of returning warnings."""
    with pytest.raises(TypeError):
        validate_config("not a dict", strict=True)

    with pytest.raises(TypeError):
        validate_config({"node_spacing": "28"}, strict=True)

    with pytest.raises(ValueError):
        validate_config({"node_spacing": -1}, strict=True)

    with pytest.raises(ValueError):
        validate_config({"scale_min": 5, "scale_max": 1}, strict=True)
