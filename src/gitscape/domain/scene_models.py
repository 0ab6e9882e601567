from __future__ import annotations

"""
Scene Data Models.

Describes what a rendering surface must draw after a layout pass: the
reconciled node and link transitions, their visual styling, and the
interpolated samples produced while a transition is playing.
"""

from dataclasses import dataclass
from typing import Generic, Tuple, TypeVar

from gitscape.domain.layout_models import Point

K = TypeVar("K")

PHASE_ENTER = "enter"
PHASE_UPDATE = "update"
PHASE_EXIT = "exit"

# -----------------------------------------------------------------------------
# RECONCILIATION RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Reconciliation(Generic[K]):
    """
    Keyed three-way diff between two successive visible sets.

    Attributes:
        enter: Keys visible now but not before (current order).
        update: Keys visible in both (current order).
        exit: Keys visible before but not now (previous order).
    """
    enter: Tuple[K, ...] = ()
    update: Tuple[K, ...] = ()
    exit: Tuple[K, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.enter or self.update or self.exit)

# -----------------------------------------------------------------------------
# VISUAL STYLING
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeStyle:
    """
    Presentation attributes of a node marker and its label.

    Attributes:
        kind: "directory" or "file".
        label: Display text, truncated to the label budget.
        tooltip: Hover text carrying the full path.
        radius: Marker radius in layout pixels.
        fill: Marker fill colour.
        stroke: Marker outline colour.
        label_dx: Horizontal label offset from the marker centre.
        label_anchor: "start" or "end".
        clickable: Whether a click on the node does something.
    """
    kind: str
    label: str
    tooltip: str
    radius: float
    fill: str
    stroke: str
    label_dx: float
    label_anchor: str
    clickable: bool


@dataclass(frozen=True)
class LinkGeometry:
    source: Point
    target: Point

# -----------------------------------------------------------------------------
# TRANSITIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeTransition:
    key: str
    phase: str
    start: Point
    end: Point
    start_opacity: float
    end_opacity: float
    style: NodeStyle

    @property
    def removes(self) -> bool:
        return self.phase == PHASE_EXIT


@dataclass(frozen=True)
class LinkTransition:
    key: str
    source_id: str
    target_id: str
    phase: str
    start: LinkGeometry
    end: LinkGeometry

    @property
    def removes(self) -> bool:
        return self.phase == PHASE_EXIT


@dataclass(frozen=True)
class RenderFrame:
    """
    Output of one layout pass.

    Attributes:
        source_id: Node anchoring entering and exiting items.
        duration_ms: Transition duration.
        nodes: Node transitions: entering, then updating, then exiting.
        links: Link transitions in the same order.
    """
    source_id: str
    duration_ms: float
    nodes: Tuple[NodeTransition, ...] = ()
    links: Tuple[LinkTransition, ...] = ()

# -----------------------------------------------------------------------------
# INTERPOLATED SAMPLES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class NodeSample:
    key: str
    position: Point
    opacity: float
    style: NodeStyle


@dataclass(frozen=True)
class LinkSample:
    key: str
    geometry: LinkGeometry


@dataclass(frozen=True)
class SceneSnapshot:
    """Everything a surface needs to paint one animation tick."""
    nodes: Tuple[NodeSample, ...] = ()
    links: Tuple[LinkSample, ...] = ()
    finished: bool = True
