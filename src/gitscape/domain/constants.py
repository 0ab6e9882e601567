from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes layout metrics, transition timing, zoom limits, label budgets
and the colour palette shared by the diagram engine and its surfaces.
"""

from typing import Dict, Tuple

APP_NAME = "GitScape"
CURRENT_CONFIG_VERSION = "1.0.0"

GITHUB_WEB_BASE_URL = "https://github.com"
DEFAULT_BRANCH = "main"

# -----------------------------------------------------------------------------
# TREE BUILDER
# -----------------------------------------------------------------------------

DEFAULT_FILE_WEIGHT = 100
DEFAULT_DIRECTORY_WEIGHT = 1000

# -----------------------------------------------------------------------------
# LAYOUT
# -----------------------------------------------------------------------------

NODE_SPACING = 28.0
MIN_LEVEL_SPACING = 150.0
LEVEL_SLACK = 3

MARGIN_TOP = 30.0
MARGIN_RIGHT = 150.0
MARGIN_BOTTOM = 30.0
MARGIN_LEFT = 100.0

# Root offset from the left margin in the initial view
INITIAL_OFFSET_X = 60.0
INITIAL_SCALE = 0.85

TRANSITION_DURATION_MS = 750.0

# Resize notifications within this many pixels are ignored
RESIZE_TOLERANCE = 1.0

# -----------------------------------------------------------------------------
# ZOOM
# -----------------------------------------------------------------------------

SCALE_EXTENT: Tuple[float, float] = (0.05, 5.0)
WHEEL_PIXEL_FACTOR = 0.002
WHEEL_LINE_FACTOR = 0.05

# -----------------------------------------------------------------------------
# PRESENTATION
# -----------------------------------------------------------------------------

LABEL_MAX_CHARS = 22
LABEL_KEEP_CHARS = 20
LABEL_ELLIPSIS = "..."
LABEL_OFFSET = 12.0

DIRECTORY_RADIUS = 7.0
FILE_RADIUS = 5.0

PALETTE: Dict[str, str] = {
    "accent": "#22c55e",
    "muted": "#c7ccd8",
    "hollow": "#1e293b",
    "label": "#cbd5e1",
    "halo": "#0f172a",
    "link": "#475569",
    "background": "#0f172a",
    "overlay_text": "#94a3b8",
}
