from __future__ import annotations

"""
Diagram Application Controller.

Bridges the listing toolbar, the embedded diagram view and the core
builder: loads tree listings from disk, rebuilds the hierarchy when the
repository name changes, and opens the fullscreen view on request.
"""

import logging
import os
import tkinter.messagebox as mb
from typing import Any, Dict, List, Optional, Tuple

import customtkinter as ctk

from gitscape.core.analysis.tree_builder import build_diagram_tree, parse_path_entries
from gitscape.domain import constants as const
from gitscape.domain.config import DiagramSettings
from gitscape.domain.diagram_models import DiagramNode
from gitscape.infra.fs import load_entries_file
from gitscape.interface.gui.dialogs import fullscreen_modal
from gitscape.interface.gui.utils import tk_helpers
from gitscape.utils.i18n import i18n

logger = logging.getLogger(__name__)

# ==============================================================================
# DIAGRAM CONTROLLER
# ==============================================================================

class DiagramController:
    """
    Coordinates listing input and diagram output for the main window.

    Views are registered after construction so the controller can be
    exercised with mocks.
    """

    def __init__(self, app: ctk.CTk, settings: DiagramSettings):
        self.app = app
        self.settings = settings

        self.toolbar_view: Any = None
        self.diagram_view: Any = None

        self.items: List[Dict[str, Any]] = []
        self.listing_path: Optional[str] = None
        self.root: Optional[DiagramNode] = None

    def register_views(self, toolbar_view: Any, diagram_view: Any) -> None:
        self.toolbar_view = toolbar_view
        self.diagram_view = diagram_view

    # -------------------------------------------------------------------------
    # LISTING LIFECYCLE
    # -------------------------------------------------------------------------

    def on_open_clicked(self) -> None:
        path = tk_helpers.ask_listing_file(self.app)
        if path:
            self.load_listing(path)

    def load_listing(self, path: str) -> bool:
        """
        Read a listing file and display it.

        Returns:
            bool: True if the listing was loaded.
        """
        try:
            items = load_entries_file(path)
        except (OSError, ValueError) as e:
            logger.error(f"Listing load failed for {path}: {e}")
            mb.showerror(i18n.t("gui.dialogs.error_title"), i18n.t("gui.dialogs.load_error", error=str(e)))
            return False

        self.items = items
        self.listing_path = path
        logger.info(f"Listing loaded: {os.path.basename(path)} ({len(items)} items)")
        self.refresh()
        return True

    def refresh(self) -> None:
        """Rebuild the hierarchy from the current listing and source fields."""
        display_name, branch_name = self.read_source()
        self.root = build_diagram_tree(
            parse_path_entries(self.items),
            display_name,
            self.settings.file_weight,
            self.settings.directory_weight,
        )
        self.diagram_view.set_data(self.root, display_name, branch_name)
        self.app.title(i18n.t("gui.window.title", repo=display_name or const.APP_NAME))

    def on_source_changed(self) -> None:
        """Repository or branch edited: redraw if a listing is loaded."""
        if self.listing_path is not None:
            self.refresh()

    def read_source(self) -> Tuple[str, str]:
        """Current (display_name, branch_name) from the toolbar."""
        display_name = self.toolbar_view.entry_repo.get().strip()
        branch_name = self.toolbar_view.entry_branch.get().strip()
        return display_name, branch_name

    # -------------------------------------------------------------------------
    # FULLSCREEN
    # -------------------------------------------------------------------------

    def open_fullscreen(self, root: DiagramNode, display_name: str, branch_name: str) -> None:
        fullscreen_modal.show_fullscreen_diagram(self.app, root, display_name, branch_name, self.settings)
