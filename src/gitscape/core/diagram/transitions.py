from __future__ import annotations

"""
Transition Planning and Playback.

Turns a reconciliation into per-item start/end states (enter from the
anchor, update in place, exit into the anchor) and plays them back with
time-based cubic easing. A plan started while another one is still running
re-bases every surviving item on the value currently on screen, so
interrupted animations continue smoothly instead of jumping.
"""

import logging
import time
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from gitscape.core.diagram.reconcile import link_key
from gitscape.domain.layout_models import Point
from gitscape.domain.scene_models import (
    PHASE_ENTER,
    PHASE_EXIT,
    PHASE_UPDATE,
    LinkGeometry,
    LinkSample,
    LinkTransition,
    NodeSample,
    NodeStyle,
    NodeTransition,
    Reconciliation,
    RenderFrame,
    SceneSnapshot,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# -----------------------------------------------------------------------------
# EASING & INTERPOLATION
# -----------------------------------------------------------------------------

def ease_cubic_in_out(t: float) -> float:
    t = max(0.0, min(1.0, t))
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))

# -----------------------------------------------------------------------------
# PLANNING
# -----------------------------------------------------------------------------

def plan_frame(
        source_id: str,
        anchor_previous: Point,
        anchor_current: Point,
        nodes: Reconciliation[str],
        links: Reconciliation[Tuple[str, str]],
        previous_positions: Mapping[str, Point],
        current_positions: Mapping[str, Point],
        styles: Mapping[str, NodeStyle],
        duration_ms: float,
) -> RenderFrame:
    """
    Build the transitions of one layout pass.

    Args:
        source_id: Node the pass was triggered from.
        anchor_previous: Source position before the pass (enter origin).
        anchor_current: Source position after the pass (exit target).
        nodes: Node reconciliation keyed by id.
        links: Link reconciliation keyed by (parent_id, child_id).
        previous_positions: Positions from the last pass, by node id.
        current_positions: Positions from this pass, by node id.
        styles: Node styles by id (visible and exiting nodes).
        duration_ms: Transition duration.

    Returns:
        RenderFrame: Entering, then updating, then exiting transitions.
    """
    node_items: List[NodeTransition] = []
    entering_nodes = set(nodes.enter)
    for node_id in nodes.enter + nodes.update:
        entering = node_id in entering_nodes
        node_items.append(NodeTransition(
            key=node_id,
            phase=PHASE_ENTER if entering else PHASE_UPDATE,
            start=anchor_previous if entering else previous_positions.get(node_id, anchor_previous),
            end=current_positions[node_id],
            start_opacity=0.0 if entering else 1.0,
            end_opacity=1.0,
            style=styles[node_id],
        ))
    for node_id in nodes.exit:
        node_items.append(NodeTransition(
            key=node_id,
            phase=PHASE_EXIT,
            start=previous_positions.get(node_id, anchor_current),
            end=anchor_current,
            start_opacity=1.0,
            end_opacity=0.0,
            style=styles[node_id],
        ))

    collapsed_before = LinkGeometry(anchor_previous, anchor_previous)
    collapsed_after = LinkGeometry(anchor_current, anchor_current)

    link_items: List[LinkTransition] = []
    entering_links = set(links.enter)
    for parent_id, child_id in links.enter + links.update:
        end = LinkGeometry(current_positions[parent_id], current_positions[child_id])
        if (parent_id, child_id) in entering_links:
            phase, start = PHASE_ENTER, collapsed_before
        else:
            phase = PHASE_UPDATE
            start = LinkGeometry(
                previous_positions.get(parent_id, anchor_previous),
                previous_positions.get(child_id, anchor_previous),
            )
        link_items.append(LinkTransition(link_key(parent_id, child_id), parent_id, child_id, phase, start, end))
    for parent_id, child_id in links.exit:
        start = LinkGeometry(
            previous_positions.get(parent_id, anchor_current),
            previous_positions.get(child_id, anchor_current),
        )
        link_items.append(LinkTransition(
            link_key(parent_id, child_id), parent_id, child_id, PHASE_EXIT, start, collapsed_after,
        ))

    return RenderFrame(
        source_id=source_id,
        duration_ms=duration_ms,
        nodes=tuple(node_items),
        links=tuple(link_items),
    )

# -----------------------------------------------------------------------------
# PLAYBACK
# -----------------------------------------------------------------------------

class TransitionPlayer:
    """
    Time-based interpolation of the latest RenderFrame.

    The surface calls `sample()` on every animation tick and paints the
    returned snapshot; exiting items disappear once the frame finishes.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock: Clock = clock or time.monotonic
        self._frame: Optional[RenderFrame] = None
        self._started_at: float = 0.0

    @property
    def frame(self) -> Optional[RenderFrame]:
        return self._frame

    @property
    def is_running(self) -> bool:
        return self._frame is not None and self._progress(self._clock()) < 1.0

    def start(self, frame: RenderFrame) -> RenderFrame:
        """
        Play a new frame, interrupting the current one.

        Items of the new frame that are on screen right now start from their
        displayed position and opacity.

        Returns:
            RenderFrame: The frame actually played (re-based if interrupted).
        """
        now = self._clock()
        if self._frame is not None and self._progress(now) < 1.0:
            frame = self._rebase(frame, self.sample(now))
            logger.debug(f"Transition interrupted by a new pass from '{frame.source_id}'.")
        self._frame = frame
        self._started_at = now
        return frame

    def cancel(self) -> None:
        """Drop the current frame and everything it displays."""
        self._frame = None

    def sample(self, now: Optional[float] = None) -> SceneSnapshot:
        """
        Interpolated scene at time `now`.

        Args:
            now: Clock reading. Defaults to the player's clock.

        Returns:
            SceneSnapshot: Visible items; exits are dropped once finished.
        """
        if self._frame is None:
            return SceneSnapshot()

        progress = self._progress(self._clock() if now is None else now)
        finished = progress >= 1.0
        t = ease_cubic_in_out(progress)

        nodes = tuple(
            NodeSample(
                key=item.key,
                position=lerp_point(item.start, item.end, t),
                opacity=lerp(item.start_opacity, item.end_opacity, t),
                style=item.style,
            )
            for item in self._frame.nodes
            if not (finished and item.removes)
        )
        links = tuple(
            LinkSample(
                key=item.key,
                geometry=LinkGeometry(
                    lerp_point(item.start.source, item.end.source, t),
                    lerp_point(item.start.target, item.end.target, t),
                ),
            )
            for item in self._frame.links
            if not (finished and item.removes)
        )
        return SceneSnapshot(nodes=nodes, links=links, finished=finished)

    def _progress(self, now: float) -> float:
        if self._frame is None:
            return 1.0
        if self._frame.duration_ms <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self._started_at) * 1000.0 / self._frame.duration_ms))

    @staticmethod
    def _rebase(frame: RenderFrame, current: SceneSnapshot) -> RenderFrame:
        shown_nodes: Dict[str, NodeSample] = {s.key: s for s in current.nodes}
        shown_links: Dict[str, LinkSample] = {s.key: s for s in current.links}

        nodes = []
        for item in frame.nodes:
            shown = shown_nodes.get(item.key)
            if shown is not None:
                # Items still fading out of the last pass resume instead of re-entering
                phase = PHASE_UPDATE if item.phase == PHASE_ENTER else item.phase
                item = NodeTransition(
                    item.key, phase, shown.position, item.end,
                    shown.opacity, item.end_opacity, item.style,
                )
            nodes.append(item)

        links = []
        for link in frame.links:
            shown_link = shown_links.get(link.key)
            if shown_link is not None:
                phase = PHASE_UPDATE if link.phase == PHASE_ENTER else link.phase
                link = LinkTransition(
                    link.key, link.source_id, link.target_id, phase, shown_link.geometry, link.end,
                )
            links.append(link)

        return RenderFrame(frame.source_id, frame.duration_ms, tuple(nodes), tuple(links))
