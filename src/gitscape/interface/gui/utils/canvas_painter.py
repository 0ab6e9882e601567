from __future__ import annotations

"""
Scene Painting on a Tk Canvas.

Draws a SceneSnapshot through a ViewTransform: links as flattened Bezier
polylines underneath, node markers and labels on top. Everything the view
draws carries one tag so a repaint is a single delete plus redraw.
"""

from typing import Dict, Optional

from gitscape.core.diagram.presentation import flatten_link
from gitscape.domain import constants as const
from gitscape.domain.layout_models import Point, ViewTransform
from gitscape.domain.scene_models import SceneSnapshot
from gitscape.interface.gui.utils.tk_helpers import blend_colour

SCENE_TAG = "scene"
LABEL_FONT_FAMILY = "Helvetica"
LABEL_FONT_SIZE = 11
MIN_LABEL_FONT_SIZE = 4
LINK_WIDTH = 1.5
HIT_SLOP = 3


def paint_scene(
        canvas,
        snapshot: SceneSnapshot,
        transform: ViewTransform,
        background: str = const.PALETTE["background"],
) -> Dict[int, str]:
    """
    Replace the drawn scene with `snapshot`.

    Args:
        canvas: tkinter Canvas (or anything with the same drawing API).
        snapshot: Interpolated items to draw.
        transform: Current pan/zoom transform.
        background: Canvas colour, used to emulate opacity.

    Returns:
        Dict[int, str]: Canvas item id to node id, for hit testing.
    """
    palette = const.PALETTE
    scale = transform.scale
    canvas.delete(SCENE_TAG)

    line_width = max(1.0, LINK_WIDTH * scale)
    for link in snapshot.links:
        coords = flatten_link(link.geometry)
        screen = []
        for i in range(0, len(coords), 2):
            p = transform.apply(Point(coords[i], coords[i + 1]))
            screen.extend((p.x, p.y))
        canvas.create_line(*screen, fill=palette["link"], width=line_width, tags=(SCENE_TAG,))

    item_nodes: Dict[int, str] = {}
    font_size = int(round(LABEL_FONT_SIZE * scale))

    for sample in snapshot.nodes:
        style = sample.style
        center = transform.apply(sample.position)
        r = style.radius * scale
        circle = canvas.create_oval(
            center.x - r, center.y - r, center.x + r, center.y + r,
            fill=blend_colour(style.fill, background, sample.opacity),
            outline=blend_colour(style.stroke, background, sample.opacity),
            width=line_width,
            tags=(SCENE_TAG,),
        )
        item_nodes[circle] = sample.key

        if font_size < MIN_LABEL_FONT_SIZE:
            continue

        anchor = "e" if style.label_anchor == "end" else "w"
        x = center.x + style.label_dx * scale
        font = (LABEL_FONT_FAMILY, font_size)
        # Halo
        canvas.create_text(
            x + 1, center.y + 1, text=style.label, anchor=anchor, font=font,
            fill=blend_colour(palette["halo"], background, sample.opacity),
            tags=(SCENE_TAG,),
        )
        label = canvas.create_text(
            x, center.y, text=style.label, anchor=anchor, font=font,
            fill=blend_colour(palette["label"], background, sample.opacity),
            tags=(SCENE_TAG,),
        )
        item_nodes[label] = sample.key

    return item_nodes


def hit_test(canvas, item_nodes: Dict[int, str], x: float, y: float) -> Optional[str]:
    """Topmost node under a surface point, or None."""
    items = canvas.find_overlapping(x - HIT_SLOP, y - HIT_SLOP, x + HIT_SLOP, y + HIT_SLOP)
    for item in reversed(items):
        node_id = item_nodes.get(item)
        if node_id is not None:
            return node_id
    return None
