from __future__ import annotations

"""
Fullscreen Diagram Modal.

Enlarged, screen-sized view of the current hierarchy. It hosts a fresh
DiagramView, so its expansion state starts from the default and is
independent from the embedded view. Escape or the close button dismisses it.
"""

import logging
from typing import Callable, Optional

import customtkinter as ctk

from gitscape.domain.config import DiagramSettings
from gitscape.domain.diagram_models import DiagramNode
from gitscape.interface.gui.components.diagram_view import DiagramView
from gitscape.interface.gui.utils.tk_helpers import open_external_url
from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)


class FullscreenDiagramModal(ctk.CTkToplevel):
    """Screen-sized toplevel wrapping a DiagramView in fullscreen mode."""

    def __init__(
            self,
            parent: ctk.CTk,
            root: DiagramNode,
            display_name: str,
            branch_name: str,
            settings: Optional[DiagramSettings] = None,
            open_url: Callable[[str], object] = open_external_url,
    ):
        super().__init__(parent)
        self.title(i18n.t("gui.fullscreen.title", repo=display_name))
        width, height = self.winfo_screenwidth(), self.winfo_screenheight()
        self.geometry(f"{width}x{height}+0+0")
        self.transient(parent)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.diagram_view = DiagramView(self, settings, fullscreen=True, open_url=open_url)
        self.diagram_view.grid(row=0, column=0, sticky="nsew")
        self.diagram_view.lbl_title.configure(text=i18n.t("gui.fullscreen.title", repo=display_name))

        self.btn_close = ctk.CTkButton(self, text=i18n.t("gui.fullscreen.close"), width=120, command=self.close)
        self.btn_close.grid(row=1, column=0, pady=(0, 10))

        self.bind("<Escape>", lambda e: self.close())
        self.protocol("WM_DELETE_WINDOW", self.close)

        self.diagram_view.set_data(root, display_name, branch_name)
        self.after(10, self.focus_force)
        logger.info(f"Fullscreen diagram opened for {display_name}@{branch_name}")

    def close(self) -> None:
        logger.debug("Fullscreen diagram closed.")
        self.destroy()


def show_fullscreen_diagram(
        parent: ctk.CTk,
        root: DiagramNode,
        display_name: str,
        branch_name: str,
        settings: Optional[DiagramSettings] = None,
) -> FullscreenDiagramModal:
    """Open the enlarged view for a hierarchy and return the modal."""
    return FullscreenDiagramModal(parent, root, display_name, branch_name, settings)
