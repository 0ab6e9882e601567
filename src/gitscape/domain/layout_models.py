from __future__ import annotations

"""
Layout and View Data Models.

Defines the render-time structures owned by the interactive renderer:
pixel coordinates, viewport dimensions, the per-directory expansion state
and the pan/zoom transform applied to the whole drawing.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from gitscape.domain.diagram_models import DiagramNode

# -----------------------------------------------------------------------------
# GEOMETRY PRIMITIVES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Point:
    """Screen-oriented coordinates: x grows with depth, y is the cross axis."""
    x: float
    y: float


@dataclass(frozen=True)
class ViewportSize:
    """Device-independent pixel extent of the drawing surface."""
    width: float
    height: float

    @property
    def is_usable(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class Margin:
    top: float = 30.0
    right: float = 150.0
    bottom: float = 30.0
    left: float = 100.0

# -----------------------------------------------------------------------------
# EXPANSION STATE (TAGGED VARIANT)
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Expanded:
    """Directory whose children are attached to the visible hierarchy."""
    children: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Collapsed:
    """Directory whose children are detached and held aside."""
    hidden_children: Tuple[str, ...] = ()


ExpansionState = Union[Expanded, Collapsed]

# -----------------------------------------------------------------------------
# LAYOUT NODE
# -----------------------------------------------------------------------------

@dataclass(eq=False)
class LayoutNode:
    """
    The renderer's mutable view of a DiagramNode.

    Children are referenced by id; the owning arena resolves them. File
    nodes carry no expansion state.

    Attributes:
        node: The wrapped hierarchy node.
        depth: Distance from the root.
        parent_id: Id of the parent node, None for the root.
        state: Expanded/Collapsed for directories, None for files.
        position: Coordinates after the latest layout pass.
        previous_position: Coordinates before the latest layout pass.
    """
    node: DiagramNode
    depth: int
    parent_id: Optional[str] = None
    state: Optional[ExpansionState] = None
    position: Optional[Point] = None
    previous_position: Optional[Point] = field(default=None)

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_directory(self) -> bool:
        return self.node.is_directory

    @property
    def expanded(self) -> bool:
        return isinstance(self.state, Expanded)

    @property
    def children(self) -> Tuple[str, ...]:
        """Ids of the currently attached (visible) children."""
        if isinstance(self.state, Expanded):
            return self.state.children
        return ()

    @property
    def hidden_children(self) -> Tuple[str, ...]:
        if isinstance(self.state, Collapsed):
            return self.state.hidden_children
        return ()

    @property
    def has_content(self) -> bool:
        """True for directories owning at least one child, visible or not."""
        return bool(self.children or self.hidden_children)

# -----------------------------------------------------------------------------
# PAN / ZOOM TRANSFORM
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ViewTransform:
    """
    Uniform scale followed by translation, applied to the whole layout.

    A layout point p maps to the surface at (p.x * scale + translate_x,
    p.y * scale + translate_y).
    """
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    def apply(self, point: Point) -> Point:
        return Point(point.x * self.scale + self.translate_x, point.y * self.scale + self.translate_y)

    def invert(self, point: Point) -> Point:
        return Point((point.x - self.translate_x) / self.scale, (point.y - self.translate_y) / self.scale)

    def __str__(self) -> str:
        return f"translate({self.translate_x},{self.translate_y}) scale({self.scale})"


IDENTITY_TRANSFORM = ViewTransform()
