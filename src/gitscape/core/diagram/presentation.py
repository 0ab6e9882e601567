from __future__ import annotations

"""
Node and Link Presentation.

Visual rules of the diagram that do not depend on a particular drawing
surface: marker shape and colour per node state, label truncation and
placement, hover text, the horizontal connector curve, and the external
URL opened when a file node is clicked.
"""

from typing import Tuple

from gitscape.domain import constants as const
from gitscape.domain.layout_models import LayoutNode, Point
from gitscape.domain.scene_models import LinkGeometry, NodeStyle

# -----------------------------------------------------------------------------
# LABELS
# -----------------------------------------------------------------------------

def truncate_label(
        name: str,
        max_chars: int = const.LABEL_MAX_CHARS,
        keep_chars: int = const.LABEL_KEEP_CHARS,
) -> str:
    """
    Bound the label width.

    Names longer than `max_chars` keep their first `keep_chars` characters
    followed by an ellipsis.
    """
    if len(name) > max_chars:
        return name[:keep_chars] + const.LABEL_ELLIPSIS
    return name


def tooltip_for(layout_node: LayoutNode) -> str:
    node = layout_node.node
    if node.path:
        return f"{node.kind}: {node.path}"
    return node.name

# -----------------------------------------------------------------------------
# MARKERS
# -----------------------------------------------------------------------------

def marker_colours(layout_node: LayoutNode) -> Tuple[str, str]:
    """
    Return (fill, stroke) for a node marker.

    Directories showing children are solid accent, collapsed directories
    with hidden children get an accent ring, everything else is muted.
    """
    palette = const.PALETTE
    if not layout_node.is_directory:
        return palette["muted"], palette["muted"]
    if layout_node.children:
        return palette["accent"], palette["accent"]
    if layout_node.hidden_children:
        return palette["hollow"], palette["accent"]
    return palette["muted"], palette["accent"]


def node_style(
        layout_node: LayoutNode,
        max_chars: int = const.LABEL_MAX_CHARS,
        keep_chars: int = const.LABEL_KEEP_CHARS,
) -> NodeStyle:
    """Compute the full visual description of a node in its current state."""
    fill, stroke = marker_colours(layout_node)
    has_content = layout_node.is_directory and layout_node.has_content

    return NodeStyle(
        kind=layout_node.node.kind,
        label=truncate_label(layout_node.node.name, max_chars, keep_chars),
        tooltip=tooltip_for(layout_node),
        radius=const.DIRECTORY_RADIUS if layout_node.is_directory else const.FILE_RADIUS,
        fill=fill,
        stroke=stroke,
        label_dx=-const.LABEL_OFFSET if has_content else const.LABEL_OFFSET,
        label_anchor="end" if has_content else "start",
        clickable=has_content or layout_node.node.is_file,
    )

# -----------------------------------------------------------------------------
# LINKS
# -----------------------------------------------------------------------------

def link_control_points(geometry: LinkGeometry) -> Tuple[Point, Point, Point, Point]:
    """
    Cubic Bezier points of the horizontal connector.

    Both control points sit at the horizontal midpoint, the first at the
    source height and the second at the target height.
    """
    s, t = geometry.source, geometry.target
    mid_x = (s.x + t.x) / 2
    return s, Point(mid_x, s.y), Point(mid_x, t.y), t


def link_path(geometry: LinkGeometry) -> str:
    """SVG path data for the horizontal connector."""
    s, c1, c2, t = link_control_points(geometry)
    return f"M{s.x},{s.y}C{c1.x},{c1.y},{c2.x},{c2.y},{t.x},{t.y}"


def flatten_link(geometry: LinkGeometry, segments: int = 12) -> Tuple[float, ...]:
    """
    Sample the connector as a flat coordinate sequence (x0, y0, x1, y1, ...).

    Used by surfaces that only draw polylines.
    """
    p0, p1, p2, p3 = link_control_points(geometry)
    coords = []
    for i in range(segments + 1):
        t = i / segments
        u = 1 - t
        a, b, c, d = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
        coords.append(a * p0.x + b * p1.x + c * p2.x + d * p3.x)
        coords.append(a * p0.y + b * p1.y + c * p2.y + d * p3.y)
    return tuple(coords)

# -----------------------------------------------------------------------------
# EXTERNAL LINKS
# -----------------------------------------------------------------------------

def build_file_url(
        display_name: str,
        branch_name: str,
        path: str,
        base_url: str = const.GITHUB_WEB_BASE_URL,
) -> str:
    """
    URL of a file in the repository web view.

    The path is appended verbatim so separators are never percent-encoded.
    """
    return f"{base_url}/{display_name}/blob/{branch_name}/{path}"
