from __future__ import annotations

"""
Interactive Diagram Renderer.

Owns everything mutable about a displayed diagram: the expansion state,
node positions, the reconciled transitions between successive layouts and
the pan/zoom transform. Surfaces (the GUI canvas, the CLI exporter) feed it
interaction events and read back frames and snapshots; it never draws.

The renderer stays uninitialized, and every view control is disabled,
until it has a root, a display name, a branch and a non-empty viewport.
"""

import logging
from typing import Callable, Dict, List, Optional, Set, Tuple

from gitscape.core.diagram import zoom
from gitscape.core.diagram.layout import level_spacing, tidy_tree_layout
from gitscape.core.diagram.presentation import build_file_url, node_style
from gitscape.core.diagram.reconcile import reconcile
from gitscape.core.diagram.state import DiagramState
from gitscape.core.diagram.transitions import Clock, TransitionPlayer, plan_frame
from gitscape.domain import constants as const
from gitscape.domain.config import DiagramSettings
from gitscape.domain.diagram_models import DiagramNode
from gitscape.domain.layout_models import (
    IDENTITY_TRANSFORM,
    Point,
    ViewportSize,
    ViewTransform,
)
from gitscape.domain.scene_models import NodeStyle, RenderFrame, SceneSnapshot

logger = logging.getLogger(__name__)

OpenExternalCallback = Callable[[str], None]
FullscreenCallback = Callable[[DiagramNode, str, str], None]

CLICK_TOGGLED = "toggled"
CLICK_OPENED = "opened"
CLICK_IGNORED = "ignored"

# ==============================================================================
# RENDERER
# ==============================================================================

class DiagramRenderer:
    """
    Stateful engine behind one diagram view.

    Typical lifecycle: `set_data()` when a new listing is available,
    `resize()` whenever the surface changes size, then interaction events
    (`click_node`, `expand_all`, `collapse_all`, `pan`, `zoom`, `wheel`).
    """

    def __init__(
            self,
            settings: Optional[DiagramSettings] = None,
            *,
            on_open_external: Optional[OpenExternalCallback] = None,
            on_request_fullscreen: Optional[FullscreenCallback] = None,
            fullscreen: bool = False,
            clock: Optional[Clock] = None,
    ):
        """
        Args:
            settings: Layout, zoom and label parameters.
            on_open_external: Receives the URL of a clicked file.
            on_request_fullscreen: Receives (root, display_name, branch_name)
                when the maximize control is used.
            fullscreen: Whether this instance already lives in the enlarged view.
            clock: Monotonic time source in seconds, for the transitions.
        """
        self.settings = settings or DiagramSettings()
        self.on_open_external = on_open_external
        self.on_request_fullscreen = on_request_fullscreen
        self.is_fullscreen = fullscreen

        self._player = TransitionPlayer(clock)
        self._root: Optional[DiagramNode] = None
        self._display_name = ""
        self._branch_name = ""
        self._viewport = ViewportSize(0, 0)
        self._state: Optional[DiagramState] = None
        self._transform: ViewTransform = IDENTITY_TRANSFORM
        self._frame: Optional[RenderFrame] = None
        self._initialized = False

    # -------------------------------------------------------------------------
    # READ-ONLY VIEW
    # -------------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def controls_enabled(self) -> bool:
        """Expand-all, collapse-all and maximize are usable."""
        return self._initialized

    @property
    def root(self) -> Optional[DiagramNode]:
        return self._root

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def branch_name(self) -> str:
        return self._branch_name

    @property
    def viewport(self) -> ViewportSize:
        return self._viewport

    @property
    def state(self) -> Optional[DiagramState]:
        return self._state

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def frame(self) -> Optional[RenderFrame]:
        """Transitions of the latest layout pass (None while uninitialized)."""
        return self._frame if self._initialized else None

    @property
    def is_animating(self) -> bool:
        return self._initialized and self._player.is_running

    def visible_node_ids(self) -> List[str]:
        if not self._initialized or self._state is None:
            return []
        return self._state.visible_ids()

    def sample(self, now: Optional[float] = None) -> SceneSnapshot:
        """Interpolated scene for the surface to paint."""
        if not self._initialized:
            return SceneSnapshot()
        return self._player.sample(now)

    # -------------------------------------------------------------------------
    # INPUTS
    # -------------------------------------------------------------------------

    def set_data(self, root: Optional[DiagramNode], display_name: str, branch_name: str) -> bool:
        """
        Replace the displayed hierarchy.

        In-flight transitions and previous visual items are discarded and the
        expansion state is reset to its default.

        Returns:
            bool: Whether the renderer is initialized afterwards.
        """
        self._teardown()
        self._root = root
        self._display_name = display_name or ""
        self._branch_name = branch_name or ""
        self._state = DiagramState(root) if root is not None else None
        return self._try_initialize()

    def initialize(
            self,
            root: Optional[DiagramNode],
            viewport: ViewportSize,
            display_name: str,
            branch_name: str,
    ) -> bool:
        """Set the viewport and the data in one call."""
        self._viewport = viewport
        return self.set_data(root, display_name, branch_name)

    def resize(self, viewport: ViewportSize) -> bool:
        """
        React to a new surface size.

        A zero-extent viewport tears the drawing down but keeps the expansion
        state, so growing back re-initializes from the current state.

        Returns:
            bool: Whether a layout pass ran.
        """
        previous = self._viewport
        if (
            self._initialized
            and abs(previous.width - viewport.width) <= const.RESIZE_TOLERANCE
            and abs(previous.height - viewport.height) <= const.RESIZE_TOLERANCE
        ):
            return False

        self._viewport = viewport

        if not viewport.is_usable:
            if self._initialized:
                logger.debug("Viewport collapsed to zero. Diagram uninitialized.")
            self._teardown()
            return False

        if not self._initialized:
            return self._try_initialize()

        self._update(self._state.root_id)  # type: ignore[union-attr]
        return True

    # -------------------------------------------------------------------------
    # INTERACTION
    # -------------------------------------------------------------------------

    def toggle_node(self, node_id: str) -> bool:
        """
        Flip a directory between collapsed and expanded and re-layout.

        Returns:
            bool: True if the node changed state.
        """
        if not self._initialized or self._state is None:
            return False
        if not self._state.toggle(node_id):
            return False
        self._update(node_id)
        return True

    def click_node(self, node_id: str) -> str:
        """
        Handle a click on a rendered node.

        Directories toggle, files request an external browser tab, anything
        else is ignored.

        Returns:
            str: One of CLICK_TOGGLED, CLICK_OPENED, CLICK_IGNORED.
        """
        if not self._initialized or self._state is None:
            return CLICK_IGNORED

        layout_node = self._state.get(node_id)
        if layout_node is None:
            return CLICK_IGNORED

        node = layout_node.node
        if node.is_directory:
            return CLICK_TOGGLED if self.toggle_node(node_id) else CLICK_IGNORED

        if node.is_file and node.path:
            url = build_file_url(self._display_name, self._branch_name, node.path, self.settings.github_base_url)
            logger.info(f"Opening external file view: {url}")
            if self.on_open_external is not None:
                self.on_open_external(url)
            return CLICK_OPENED

        return CLICK_IGNORED

    def expand_all(self) -> bool:
        if not self._initialized or self._state is None:
            return False
        self._state.expand_all()
        self._update(self._state.root_id)
        return True

    def collapse_all(self) -> bool:
        if not self._initialized or self._state is None:
            return False
        self._state.collapse_all()
        self._update(self._state.root_id)
        return True

    def maximize(self) -> bool:
        """
        Ask the host for the enlarged view.

        Returns:
            bool: True if the request was emitted.
        """
        if self.is_fullscreen or not self._initialized or self.on_request_fullscreen is None:
            return False
        assert self._root is not None
        self.on_request_fullscreen(self._root, self._display_name, self._branch_name)
        return True

    def pan(self, dx: float, dy: float) -> ViewTransform:
        if self._initialized:
            self._transform = zoom.pan(self._transform, dx, dy)
        return self._transform

    def zoom(self, factor: float, focal: Point) -> ViewTransform:
        if self._initialized:
            self._transform = zoom.zoom_at(self._transform, factor, focal, self.settings.scale_extent)
        return self._transform

    def wheel(self, delta_y: float, focal: Point, *, line_mode: bool = False, fine: bool = False) -> ViewTransform:
        return self.zoom(zoom.wheel_factor(delta_y, line_mode, fine), focal)

    def reset_view(self) -> ViewTransform:
        """Return to the initial transform without touching the layout."""
        if self._initialized and self._state is not None and self._state.root.position is not None:
            self._transform = self._initial_transform()
        return self._transform

    # -------------------------------------------------------------------------
    # LAYOUT PASS
    # -------------------------------------------------------------------------

    def _try_initialize(self) -> bool:
        if (
            self._state is None
            or not self._viewport.is_usable
            or not self._display_name
            or not self._branch_name
        ):
            self._initialized = False
            return False

        root = self._state.root
        root.previous_position = Point(self.settings.margin.left, self._viewport.height / 2)

        self._initialized = True
        self._update(self._state.root_id)
        self._transform = self._initial_transform()

        logger.info(
            f"Diagram initialized for {self._display_name}@{self._branch_name} "
            f"({len(self._state)} nodes, viewport {self._viewport.width:.0f}x{self._viewport.height:.0f})."
        )
        return True

    def _initial_transform(self) -> ViewTransform:
        assert self._state is not None and self._state.root.position is not None
        return zoom.initial_transform(
            self._viewport,
            self._state.root.position,
            self.settings.margin.left + self.settings.initial_offset_x,
            self.settings.initial_scale,
            self.settings.scale_extent,
        )

    def _teardown(self) -> None:
        self._player.cancel()
        self._frame = None
        self._initialized = False

    def _update(self, source_id: str) -> None:
        """Re-layout the visible hierarchy and start the reconciled transition."""
        state = self._state
        assert state is not None
        settings = self.settings

        # Items on screen right now, including those still fading out
        shown = self._player.sample()
        rendered_nodes = [sample.key for sample in shown.nodes if sample.key in state]
        rendered_links = self._rendered_links({sample.key for sample in shown.links})

        state.snapshot_positions(rendered_nodes)
        source = state.node(source_id)
        anchor_previous = source.previous_position or source.position or Point(0, 0)

        spacing = level_spacing(
            self._viewport.width,
            settings.margin,
            state.visible_height(),
            settings.min_level_spacing,
            settings.level_slack,
        )
        positions = tidy_tree_layout(state.root_id, state.visible_children, settings.node_spacing, spacing)
        state.apply_positions(positions)
        anchor_current = source.position or anchor_previous

        visible = state.visible_ids()
        node_diff = reconcile(rendered_nodes, visible)
        link_diff = reconcile(rendered_links, state.visible_links())

        previous_positions: Dict[str, Point] = {}
        for node_id in rendered_nodes:
            previous = state.node(node_id).previous_position
            if previous is not None:
                previous_positions[node_id] = previous

        styles: Dict[str, NodeStyle] = {
            node_id: node_style(state.node(node_id), settings.label_max_chars, settings.label_keep_chars)
            for node_id in visible + list(node_diff.exit)
        }

        frame = plan_frame(
            source_id=source_id,
            anchor_previous=anchor_previous,
            anchor_current=anchor_current,
            nodes=node_diff,
            links=link_diff,
            previous_positions=previous_positions,
            current_positions=positions,
            styles=styles,
            duration_ms=settings.transition_ms,
        )
        self._frame = self._player.start(frame)

        logger.debug(
            f"Layout pass from '{source_id}': +{len(node_diff.enter)} ~{len(node_diff.update)} "
            f"-{len(node_diff.exit)} nodes (shown before: {len(shown.nodes)})."
        )

    def _rendered_links(self, shown_keys: Set[str]) -> List[Tuple[str, str]]:
        frame = self._player.frame
        if frame is None:
            return []
        return [(link.source_id, link.target_id) for link in frame.links if link.key in shown_keys]
