from __future__ import annotations

"""
Configuration Domain Management.

Holds the tunable parameters of the diagram engine as a plain dictionary
(the shape read from and written to JSON), and the immutable settings
object the engine consumes once a configuration has been validated.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from gitscape.domain import constants as const
from gitscape.domain.layout_models import Margin
from gitscape.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_FILE_NAME = "config.json"


def get_config_file_path() -> str:
    """Resolve the default configuration file inside the user data directory."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default engine configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Layout
        "node_spacing": const.NODE_SPACING,
        "min_level_spacing": const.MIN_LEVEL_SPACING,
        "level_slack": const.LEVEL_SLACK,
        "margin_top": const.MARGIN_TOP,
        "margin_right": const.MARGIN_RIGHT,
        "margin_bottom": const.MARGIN_BOTTOM,
        "margin_left": const.MARGIN_LEFT,

        # Initial view
        "initial_offset_x": const.INITIAL_OFFSET_X,
        "initial_scale": const.INITIAL_SCALE,

        # Animation & Zoom
        "transition_ms": const.TRANSITION_DURATION_MS,
        "scale_min": const.SCALE_EXTENT[0],
        "scale_max": const.SCALE_EXTENT[1],

        # Labels
        "label_max_chars": const.LABEL_MAX_CHARS,
        "label_keep_chars": const.LABEL_KEEP_CHARS,

        # Builder weights
        "file_weight": const.DEFAULT_FILE_WEIGHT,
        "directory_weight": const.DEFAULT_DIRECTORY_WEIGHT,

        # Linking
        "github_base_url": const.GITHUB_WEB_BASE_URL,

        # Appearance
        "theme": "dark",
    }

# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration overrides from disk and merge them over the defaults.

    Missing or corrupted files are not an error: the defaults are returned.

    Args:
        path: Explicit JSON file. Defaults to the user data directory file.

    Returns:
        Dict[str, Any]: The merged configuration.
    """
    config = get_default_config()
    config_path = path or get_config_file_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Returning defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return config

    config.update(data)
    return config


def save_config(config: Dict[str, Any], path: Optional[str] = None) -> None:
    """
    Persist the configuration as JSON.

    Args:
        config: The configuration dictionary to save.
        path: Explicit destination. Defaults to the user data directory file.
    """
    config_path = path or get_config_file_path()
    try:
        os.makedirs(os.path.dirname(os.path.abspath(config_path)), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(config, f, ensure_ascii=False, indent=4)
        logger.debug(f"Configuration saved to {config_path}")
    except OSError as e:
        logger.error(f"Failed to save configuration: {e}")

# -----------------------------------------------------------------------------
# Engine Settings
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DiagramSettings:
    """
    Immutable parameters consumed by the renderer and the tree builder.

    Build it through `from_config()` with a dictionary that already went
    through `validate_config()`.
    """
    node_spacing: float = const.NODE_SPACING
    min_level_spacing: float = const.MIN_LEVEL_SPACING
    level_slack: int = const.LEVEL_SLACK
    margin: Margin = field(default_factory=Margin)
    initial_offset_x: float = const.INITIAL_OFFSET_X
    initial_scale: float = const.INITIAL_SCALE
    transition_ms: float = const.TRANSITION_DURATION_MS
    scale_extent: Tuple[float, float] = const.SCALE_EXTENT
    label_max_chars: int = const.LABEL_MAX_CHARS
    label_keep_chars: int = const.LABEL_KEEP_CHARS
    file_weight: int = const.DEFAULT_FILE_WEIGHT
    directory_weight: int = const.DEFAULT_DIRECTORY_WEIGHT
    github_base_url: str = const.GITHUB_WEB_BASE_URL

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DiagramSettings":
        return cls(
            node_spacing=float(config["node_spacing"]),
            min_level_spacing=float(config["min_level_spacing"]),
            level_slack=int(config["level_slack"]),
            margin=Margin(
                top=float(config["margin_top"]),
                right=float(config["margin_right"]),
                bottom=float(config["margin_bottom"]),
                left=float(config["margin_left"]),
            ),
            initial_offset_x=float(config["initial_offset_x"]),
            initial_scale=float(config["initial_scale"]),
            transition_ms=float(config["transition_ms"]),
            scale_extent=(float(config["scale_min"]), float(config["scale_max"])),
            label_max_chars=int(config["label_max_chars"]),
            label_keep_chars=int(config["label_keep_chars"]),
            file_weight=int(config["file_weight"]),
            directory_weight=int(config["directory_weight"]),
            github_base_url=str(config["github_base_url"]).rstrip("/"),
        )
