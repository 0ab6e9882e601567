from __future__ import annotations

"""
Interactive Diagram View Component.

CustomTkinter frame hosting one DiagramRenderer: a header with the
maximize / expand all / collapse all controls, a Tk canvas the scene is
painted on, and the pointer bindings that drive the renderer (click to
toggle or open, drag to pan, wheel to zoom). Size changes are coalesced
through `after_idle` and transitions are played with an `after` loop.
"""

import logging
import tkinter as tk
from typing import Callable, Dict, Optional

import customtkinter as ctk

from gitscape.core.diagram.engine import DiagramRenderer, FullscreenCallback
from gitscape.domain import constants as const
from gitscape.domain.config import DiagramSettings
from gitscape.domain.diagram_models import DiagramNode
from gitscape.domain.layout_models import Point, ViewportSize
from gitscape.interface.gui.utils.canvas_painter import hit_test, paint_scene
from gitscape.interface.gui.utils.tk_helpers import open_external_url
from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16
DRAG_THRESHOLD = 3
WHEEL_LINES_PER_NOTCH = 3

# -----------------------------------------------------------------------------
# VIEW COMPONENT
# -----------------------------------------------------------------------------

class DiagramView(ctk.CTkFrame):
    """
    Visual surface of the diagram.

    The view owns no diagram state of its own: every interaction is
    forwarded to the renderer, and the canvas is repainted from the
    renderer's snapshot.
    """

    def __init__(
            self,
            master,
            settings: Optional[DiagramSettings] = None,
            *,
            fullscreen: bool = False,
            on_request_fullscreen: Optional[FullscreenCallback] = None,
            open_url: Callable[[str], object] = open_external_url,
            **kwargs,
    ):
        """
        Args:
            master: Parent widget.
            settings: Engine parameters.
            fullscreen: Hide the maximize control (already enlarged).
            on_request_fullscreen: Receives (root, display_name, branch_name).
            open_url: Browser launcher for file links.
        """
        super().__init__(master, **kwargs)

        self.renderer = DiagramRenderer(
            settings,
            on_open_external=open_url,
            on_request_fullscreen=on_request_fullscreen,
            fullscreen=fullscreen,
        )

        self._item_nodes: Dict[int, str] = {}
        self._resize_job: Optional[str] = None
        self._frame_job: Optional[str] = None
        self._press: Optional[Point] = None
        self._last_drag: Optional[Point] = None
        self._dragging = False

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._build_header(fullscreen)
        self._build_canvas()
        self._sync_controls()

    # -------------------------------------------------------------------------
    # CONSTRUCTION
    # -------------------------------------------------------------------------

    def _build_header(self, fullscreen: bool) -> None:
        header = ctk.CTkFrame(self, fg_color="transparent")
        header.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 5))
        header.grid_columnconfigure(0, weight=1)

        self.lbl_title = ctk.CTkLabel(
            header,
            text=i18n.t("gui.diagram.title"),
            font=ctk.CTkFont(size=16, weight="bold"),
            anchor="w",
        )
        self.lbl_title.grid(row=0, column=0, sticky="w")

        self.btn_maximize: Optional[ctk.CTkButton] = None
        column = 1
        if not fullscreen:
            self.btn_maximize = ctk.CTkButton(
                header, text="⛶", width=36, command=self.renderer.maximize,
            )
            self.btn_maximize.grid(row=0, column=column, padx=(5, 0))
            column += 1

        self.btn_expand = ctk.CTkButton(
            header, text="+", width=36, command=self._on_expand_all,
        )
        self.btn_expand.grid(row=0, column=column, padx=(5, 0))

        self.btn_collapse = ctk.CTkButton(
            header, text="−", width=36, command=self._on_collapse_all,
        )
        self.btn_collapse.grid(row=0, column=column + 1, padx=(5, 0))

        self.btn_reset = ctk.CTkButton(
            header, text="⟲", width=36, command=self._on_reset_view,
        )
        self.btn_reset.grid(row=0, column=column + 2, padx=(5, 0))

        self.lbl_hint = ctk.CTkLabel(header, text="", anchor="w", text_color=const.PALETTE["overlay_text"])
        self.lbl_hint.grid(row=1, column=0, columnspan=column + 3, sticky="w")

        self._tooltips = {
            self.btn_expand: i18n.t("gui.diagram.expand_all"),
            self.btn_collapse: i18n.t("gui.diagram.collapse_all"),
            self.btn_reset: i18n.t("gui.diagram.reset_view"),
        }
        if self.btn_maximize is not None:
            self._tooltips[self.btn_maximize] = i18n.t("gui.diagram.maximize")
        for button, text in self._tooltips.items():
            button.bind("<Enter>", lambda e, t=text: self.lbl_hint.configure(text=t), add="+")
            button.bind("<Leave>", lambda e: self.lbl_hint.configure(text=""), add="+")

    def _build_canvas(self) -> None:
        self.canvas = tk.Canvas(
            self,
            background=const.PALETTE["background"],
            highlightthickness=0,
            borderwidth=0,
        )
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=10, pady=(0, 10))

        self.canvas.bind("<Configure>", self._on_configure)
        self.canvas.bind("<ButtonPress-1>", self._on_press)
        self.canvas.bind("<B1-Motion>", self._on_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_release)
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<MouseWheel>", self._on_wheel)
        self.canvas.bind("<Button-4>", lambda e: self._on_wheel_lines(e, -WHEEL_LINES_PER_NOTCH))
        self.canvas.bind("<Button-5>", lambda e: self._on_wheel_lines(e, WHEEL_LINES_PER_NOTCH))

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def set_data(self, root: Optional[DiagramNode], display_name: str, branch_name: str) -> None:
        """Show a new hierarchy; the diagram appears once the canvas has a size."""
        self.renderer.set_data(root, display_name, branch_name)
        if not self.renderer.is_initialized:
            self.renderer.resize(self._canvas_size())
        self._sync_controls()
        self._request_frame()

    def destroy(self) -> None:
        for job in (self._resize_job, self._frame_job):
            if job is not None:
                self.after_cancel(job)
        self._resize_job = self._frame_job = None
        super().destroy()

    # -------------------------------------------------------------------------
    # TOOLBAR ACTIONS
    # -------------------------------------------------------------------------

    def _on_expand_all(self) -> None:
        if self.renderer.expand_all():
            self._request_frame()

    def _on_collapse_all(self) -> None:
        if self.renderer.collapse_all():
            self._request_frame()

    def _on_reset_view(self) -> None:
        self.renderer.reset_view()
        self._paint()

    def _sync_controls(self) -> None:
        state = "normal" if self.renderer.controls_enabled else "disabled"
        for button in (self.btn_maximize, self.btn_expand, self.btn_collapse, self.btn_reset):
            if button is not None:
                button.configure(state=state)

    # -------------------------------------------------------------------------
    # RESIZE
    # -------------------------------------------------------------------------

    def _canvas_size(self) -> ViewportSize:
        # Unmapped widgets report 1x1
        if not self.canvas.winfo_ismapped():
            return ViewportSize(0, 0)
        return ViewportSize(self.canvas.winfo_width(), self.canvas.winfo_height())

    def _on_configure(self, _event: tk.Event) -> None:
        # A burst of <Configure> events produces a single layout pass
        if self._resize_job is None:
            self._resize_job = self.after_idle(self._apply_resize)

    def _apply_resize(self) -> None:
        self._resize_job = None
        was_initialized = self.renderer.is_initialized
        self.renderer.resize(self._canvas_size())
        if was_initialized != self.renderer.is_initialized:
            self._sync_controls()
        self._request_frame()

    # -------------------------------------------------------------------------
    # POINTER INTERACTION
    # -------------------------------------------------------------------------

    def _on_press(self, event: tk.Event) -> None:
        self._press = Point(event.x, event.y)
        self._last_drag = self._press
        self._dragging = False

    def _on_drag(self, event: tk.Event) -> None:
        if self._press is None or self._last_drag is None:
            return
        if not self._dragging:
            if abs(event.x - self._press.x) < DRAG_THRESHOLD and abs(event.y - self._press.y) < DRAG_THRESHOLD:
                return
            self._dragging = True
            self.canvas.configure(cursor="fleur")

        self.renderer.pan(event.x - self._last_drag.x, event.y - self._last_drag.y)
        self._last_drag = Point(event.x, event.y)
        self._paint()

    def _on_release(self, event: tk.Event) -> None:
        dragged = self._dragging
        self._press = self._last_drag = None
        self._dragging = False
        if dragged:
            self.canvas.configure(cursor="")
            return

        node_id = hit_test(self.canvas, self._item_nodes, event.x, event.y)
        if node_id is None:
            return
        self.renderer.click_node(node_id)
        self._request_frame()

    def _on_motion(self, event: tk.Event) -> None:
        if self._dragging:
            return
        node_id = hit_test(self.canvas, self._item_nodes, event.x, event.y)
        layout_node = self.renderer.state.get(node_id) if node_id is not None and self.renderer.state else None
        if layout_node is None:
            self.canvas.configure(cursor="")
            self.lbl_hint.configure(text="")
            return

        frame = self.renderer.frame
        style = next((n.style for n in frame.nodes if n.key == node_id), None) if frame else None
        self.canvas.configure(cursor="hand2" if style is not None and style.clickable else "")
        self.lbl_hint.configure(text=style.tooltip if style is not None else "")

    def _on_wheel(self, event: tk.Event) -> None:
        # Tk reports +/-120 per notch on Windows and small steps on macOS
        self.renderer.wheel(-event.delta, Point(event.x, event.y))
        self._paint()

    def _on_wheel_lines(self, event: tk.Event, lines: int) -> None:
        self.renderer.wheel(lines, Point(event.x, event.y), line_mode=True)
        self._paint()

    # -------------------------------------------------------------------------
    # ANIMATION LOOP
    # -------------------------------------------------------------------------

    def _request_frame(self) -> None:
        if self._frame_job is None:
            self._frame_job = self.after(0, self._tick)

    def _tick(self) -> None:
        self._frame_job = None
        self._paint()
        if self.renderer.is_animating:
            self._frame_job = self.after(FRAME_INTERVAL_MS, self._tick)

    def _paint(self) -> None:
        if not self.renderer.is_initialized:
            self._item_nodes = {}
            self.canvas.delete("all")
            size = self._canvas_size()
            self.canvas.create_text(
                size.width / 2, size.height / 2,
                text=i18n.t("gui.diagram.initializing"),
                fill=const.PALETTE["overlay_text"],
            )
            return

        self.canvas.delete("all")
        self._item_nodes = paint_scene(self.canvas, self.renderer.sample(), self.renderer.transform)
