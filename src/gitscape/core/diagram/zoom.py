from __future__ import annotations

"""
Pan and Zoom Composition.

Pure functions over ViewTransform values. Interactive gestures compose with
the current transform and never touch node layout positions; the scale is
always clamped to the configured extent.
"""

from typing import Tuple

from gitscape.domain import constants as const
from gitscape.domain.layout_models import Point, ViewportSize, ViewTransform

ScaleExtent = Tuple[float, float]


def clamp_scale(scale: float, extent: ScaleExtent = const.SCALE_EXTENT) -> float:
    low, high = extent
    return max(low, min(high, scale))


def pan(transform: ViewTransform, dx: float, dy: float) -> ViewTransform:
    """Shift the view by a surface-space delta."""
    return ViewTransform(transform.translate_x + dx, transform.translate_y + dy, transform.scale)


def zoom_at(
        transform: ViewTransform,
        factor: float,
        focal: Point,
        extent: ScaleExtent = const.SCALE_EXTENT,
) -> ViewTransform:
    """
    Multiply the scale by `factor`, keeping the surface point `focal` fixed.

    Args:
        transform: Current transform.
        factor: Relative scale change (>1 zooms in).
        focal: Surface point that must not move, usually the pointer.
        extent: Allowed scale range.

    Returns:
        ViewTransform: The composed transform.
    """
    if factor <= 0:
        raise ValueError(f"Zoom factor must be positive, received {factor}.")

    scale = clamp_scale(transform.scale * factor, extent)
    anchor = transform.invert(focal)
    return ViewTransform(focal.x - anchor.x * scale, focal.y - anchor.y * scale, scale)


def scale_to(
        transform: ViewTransform,
        scale: float,
        focal: Point,
        extent: ScaleExtent = const.SCALE_EXTENT,
) -> ViewTransform:
    """Set an absolute scale around a surface point."""
    return zoom_at(transform, clamp_scale(scale, extent) / transform.scale, focal, extent)


def wheel_factor(delta_y: float, line_mode: bool = False, fine: bool = False) -> float:
    """
    Convert a wheel delta into a zoom factor.

    Negative deltas (wheel up) zoom in. `line_mode` is for devices that
    report lines instead of pixels; `fine` amplifies trackpad pinches.
    """
    rate = const.WHEEL_LINE_FACTOR if line_mode else const.WHEEL_PIXEL_FACTOR
    if fine:
        rate *= 10
    return 2 ** (-delta_y * rate)


def initial_transform(
        viewport: ViewportSize,
        root_position: Point,
        offset_x: float,
        scale: float,
        extent: ScaleExtent = const.SCALE_EXTENT,
) -> ViewTransform:
    """
    Transform used right after a full rebuild.

    Places the root `offset_x` pixels from the left edge, vertically
    centred, at a fixed scale.
    """
    k = clamp_scale(scale, extent)
    return ViewTransform(
        offset_x - root_position.x * k,
        viewport.height / 2 - root_position.y * k,
        k,
    )
